from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from models.user import Role
from .common import PersonName, phone_field


class ProfileUpdateRequest(BaseModel):
    fullName: Optional[PersonName] = None
    phone: Optional[str] = None
    profileImage: Optional[str] = Field(default=None, max_length=255)

    normalize_phone = phone_field("phone")


class UserStatusRequest(BaseModel):
    isActive: bool


class AdminCreateUserRequest(BaseModel):
    fullName: PersonName
    email: EmailStr
    phone: str
    password: str = Field(min_length=6, max_length=128)
    role: Role = Role.USER

    normalize_phone = phone_field("phone")


class RoleUpdateRequest(BaseModel):
    role: Role


class AccountDeleteRequest(BaseModel):
    password: str = Field(min_length=1)
