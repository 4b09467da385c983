from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from models.vendor import ApplicationStatus
from .common import OptionalPlaceName, PersonName, PlaceName, StoreName, blank_to_none, phone_field


def _unique_ids(value):
    if len(set(value)) != len(value):
        raise ValueError("category ids must be unique")
    return value


class VendorApplicationRequest(BaseModel):
    fullName: PersonName
    phone: str
    email: EmailStr
    storeName: StoreName
    specialization: List[int] = Field(min_length=1)
    city: PlaceName
    region: PlaceName
    yearsOfExperience: int = Field(ge=0, le=100)
    whatsappNumber: str
    callNumber: str

    normalize_phones = phone_field("phone", "whatsappNumber", "callNumber")

    @field_validator("specialization")
    @classmethod
    def _specialization_unique(cls, value):
        return _unique_ids(value)


class ReviewApplicationRequest(BaseModel):
    status: ApplicationStatus
    rejectionReason: Optional[str] = None

    @model_validator(mode="after")
    def _reason_for_rejection(self):
        if self.status is ApplicationStatus.PENDING:
            raise ValueError("status must be APPROVED or REJECTED")
        if self.status is ApplicationStatus.REJECTED and not (self.rejectionReason or "").strip():
            raise ValueError("rejectionReason is required when rejecting an application")
        return self


class MobileVendorRegisterRequest(BaseModel):
    fullName: PersonName
    phone: str
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    repeatPassword: str
    shop_or_farm_name: StoreName
    categories: List[int] = Field(min_length=1)
    locationText: PlaceName
    region: OptionalPlaceName = None
    experienceYears: int = Field(ge=0, le=100)
    whatsappNumber: Optional[str] = None
    callNumber: Optional[str] = None

    normalize_phones = phone_field("phone", "whatsappNumber", "callNumber")
    optional_blanks = blank_to_none("region", "whatsappNumber", "callNumber")

    @field_validator("categories")
    @classmethod
    def _categories_unique(cls, value):
        return _unique_ids(value)

    @model_validator(mode="after")
    def _passwords_match(self):
        if self.password != self.repeatPassword:
            raise ValueError("Passwords do not match")
        return self


class VendorProfileUpdateRequest(BaseModel):
    storeName: Optional[StoreName] = None
    city: Optional[PlaceName] = None
    region: OptionalPlaceName = None
    yearsOfExperience: Optional[int] = Field(default=None, ge=0, le=100)
    whatsappNumber: Optional[str] = None
    callNumber: Optional[str] = None

    normalize_phones = phone_field("whatsappNumber", "callNumber")


class DeleteVendorAccountRequest(BaseModel):
    password: str = Field(min_length=1)
