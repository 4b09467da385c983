from typing import Optional

from pydantic import BaseModel, EmailStr, Field, model_validator

from .common import PersonName, phone_field


class RegisterRequest(BaseModel):
    fullName: PersonName
    email: EmailStr
    phone: str
    password: str = Field(min_length=6, max_length=128)

    normalize_phone = phone_field("phone")


class LoginRequest(BaseModel):
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    password: str = Field(min_length=1)

    normalize_phone = phone_field("phone")

    @model_validator(mode="after")
    def _one_identifier(self):
        if not self.email and not self.phone:
            raise ValueError("email or phone is required")
        return self


class ChangePasswordRequest(BaseModel):
    currentPassword: str = Field(min_length=1)
    newPassword: str = Field(min_length=6, max_length=128)


class RefreshRequest(BaseModel):
    refreshToken: str = Field(min_length=1)
