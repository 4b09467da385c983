from typing import List, Optional

from pydantic import BaseModel, Field


class CategoryRequest(BaseModel):
    nameAr: str = Field(min_length=1, max_length=100)
    nameEn: str = Field(min_length=1, max_length=100)
    icon: Optional[str] = Field(default=None, max_length=255)
    image: Optional[str] = Field(default=None, max_length=255)


class CategoryUpdateRequest(BaseModel):
    nameAr: Optional[str] = Field(default=None, min_length=1, max_length=100)
    nameEn: Optional[str] = Field(default=None, min_length=1, max_length=100)
    icon: Optional[str] = Field(default=None, max_length=255)
    image: Optional[str] = Field(default=None, max_length=255)
    isActive: Optional[bool] = None


class Specification(BaseModel):
    key: str = Field(min_length=1, max_length=100)
    valueAr: str = Field(min_length=1, max_length=255)
    valueEn: str = Field(min_length=1, max_length=255)


class ProductRequest(BaseModel):
    categoryId: int
    nameAr: str = Field(min_length=1, max_length=200)
    nameEn: str = Field(min_length=1, max_length=200)
    price: float = Field(ge=0)
    age: Optional[str] = Field(default=None, max_length=50)
    weight: Optional[str] = Field(default=None, max_length=50)
    images: List[str] = Field(default_factory=list)
    descriptionAr: Optional[str] = None
    descriptionEn: Optional[str] = None
    isBestProduct: bool = False
    specifications: List[Specification] = Field(default_factory=list)


class ProductUpdateRequest(BaseModel):
    categoryId: Optional[int] = None
    nameAr: Optional[str] = Field(default=None, min_length=1, max_length=200)
    nameEn: Optional[str] = Field(default=None, min_length=1, max_length=200)
    price: Optional[float] = Field(default=None, ge=0)
    age: Optional[str] = Field(default=None, max_length=50)
    weight: Optional[str] = Field(default=None, max_length=50)
    images: Optional[List[str]] = None
    descriptionAr: Optional[str] = None
    descriptionEn: Optional[str] = None
    isBestProduct: Optional[bool] = None
    specifications: Optional[List[Specification]] = None


class ProductApprovalRequest(BaseModel):
    isApproved: bool


class AdminProductRequest(ProductRequest):
    vendorId: int
