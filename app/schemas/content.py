from typing import Optional

from pydantic import BaseModel, Field


class SliderRequest(BaseModel):
    image: str = Field(min_length=1, max_length=255)
    titleAr: str = Field(min_length=1, max_length=200)
    titleEn: str = Field(min_length=1, max_length=200)
    descriptionAr: Optional[str] = None
    descriptionEn: Optional[str] = None
    icon: Optional[str] = Field(default=None, max_length=255)
    link: Optional[str] = Field(default=None, max_length=255)
    order: int = 0


class SliderUpdateRequest(BaseModel):
    image: Optional[str] = Field(default=None, min_length=1, max_length=255)
    titleAr: Optional[str] = Field(default=None, min_length=1, max_length=200)
    titleEn: Optional[str] = Field(default=None, min_length=1, max_length=200)
    descriptionAr: Optional[str] = None
    descriptionEn: Optional[str] = None
    icon: Optional[str] = Field(default=None, max_length=255)
    link: Optional[str] = Field(default=None, max_length=255)
    order: Optional[int] = None
    isActive: Optional[bool] = None


class AppContentRequest(BaseModel):
    contentAr: str = Field(min_length=1)
    contentEn: str = Field(min_length=1)
