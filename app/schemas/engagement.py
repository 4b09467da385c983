from typing import Annotated, Any, Dict, Optional

from pydantic import BaseModel, Field, StringConstraints, field_validator

from models.message import MessageType
from models.notification import NotificationType


class FavoriteRequest(BaseModel):
    productId: int


class SendMessageRequest(BaseModel):
    receiverId: int
    subject: Optional[str] = Field(default=None, max_length=200)
    contentAr: str = Field(min_length=1)
    contentEn: str = Field(min_length=1)
    type: MessageType = MessageType.GENERAL


class NotificationSettingsRequest(BaseModel):
    orderEnabled: Optional[bool] = None
    offerEnabled: Optional[bool] = None
    messageEnabled: Optional[bool] = None


class CreateNotificationRequest(BaseModel):
    userId: int
    type: NotificationType
    titleAr: str = Field(min_length=1, max_length=200)
    titleEn: str = Field(min_length=1, max_length=200)
    messageAr: str = Field(min_length=1)
    messageEn: str = Field(min_length=1)
    data: Optional[Dict[str, Any]] = None


class StatusRequest(BaseModel):
    image: str = Field(min_length=1, max_length=255)
    vendorId: Optional[int] = None
    productId: Optional[int] = None
    price: Optional[float] = Field(default=None, ge=0)
    icon: Optional[str] = Field(default=None, max_length=255)
    titleAr: Optional[str] = Field(default=None, max_length=200)
    titleEn: Optional[str] = Field(default=None, max_length=200)
    descriptionAr: Optional[str] = None
    descriptionEn: Optional[str] = None


class StatusUpdateRequest(BaseModel):
    image: Optional[str] = Field(default=None, min_length=1, max_length=255)
    productId: Optional[int] = None
    price: Optional[float] = Field(default=None, ge=0)
    icon: Optional[str] = Field(default=None, max_length=255)
    titleAr: Optional[str] = Field(default=None, max_length=200)
    titleEn: Optional[str] = Field(default=None, max_length=200)
    descriptionAr: Optional[str] = None
    descriptionEn: Optional[str] = None
    isActive: Optional[bool] = None


TicketText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
TICKET_TYPES = (MessageType.SUPPORT, MessageType.COMPLAINT, MessageType.INQUIRY)


class SupportTicketRequest(BaseModel):
    subject: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
    contentAr: TicketText
    contentEn: TicketText
    type: MessageType = MessageType.SUPPORT

    @field_validator("type")
    @classmethod
    def _ticket_type(cls, value):
        if value not in TICKET_TYPES:
            raise ValueError("type must be one of: SUPPORT, COMPLAINT, INQUIRY")
        return value
