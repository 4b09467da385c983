from datetime import datetime

from models import db, BIGINT, isoformat


class Product(db.Model):
    __tablename__ = "product"
    __table_args__ = (
        db.Index("ix_product_vendor_category", "vendor_id", "category_id"),
        db.Index("ix_product_active_approved", "is_active", "is_approved"),
    )

    id = db.Column(BIGINT, primary_key=True)
    vendor_id = db.Column(BIGINT, db.ForeignKey("vendor.id", ondelete="CASCADE"), nullable=False)
    category_id = db.Column(BIGINT, db.ForeignKey("category.id"), nullable=False)
    name_ar = db.Column(db.String(200), nullable=False)
    name_en = db.Column(db.String(200), nullable=False)
    age = db.Column(db.String(50), nullable=True)
    weight = db.Column(db.String(50), nullable=True)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    images = db.Column(db.JSON, nullable=False, default=list)
    description_ar = db.Column(db.Text, nullable=True)
    description_en = db.Column(db.Text, nullable=True)
    rating = db.Column(db.Float, nullable=False, default=0)
    is_best_product = db.Column(db.Boolean, nullable=False, default=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    is_approved = db.Column(db.Boolean, nullable=False, default=False)
    approved_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    vendor = db.relationship("Vendor", back_populates="products")
    category = db.relationship("Category", lazy="joined")
    specifications = db.relationship(
        "ProductSpecification",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ProductSpecification.id",
    )

    def to_dict(self):
        return {
            "id": self.id,
            "vendorId": self.vendor_id,
            "categoryId": self.category_id,
            "nameAr": self.name_ar,
            "nameEn": self.name_en,
            "age": self.age,
            "weight": self.weight,
            "price": float(self.price),
            "images": list(self.images or []),
            "descriptionAr": self.description_ar,
            "descriptionEn": self.description_en,
            "rating": self.rating,
            "isBestProduct": self.is_best_product,
            "isActive": self.is_active,
            "isApproved": self.is_approved,
            "approvedAt": isoformat(self.approved_at),
            "specifications": [s.to_dict() for s in self.specifications],
            "vendor": {"id": self.vendor.id, "storeName": self.vendor.store_name} if self.vendor else None,
            "category": self.category.to_dict() if self.category else None,
            "createdAt": isoformat(self.created_at),
        }


class ProductSpecification(db.Model):
    __tablename__ = "product_specification"

    id = db.Column(BIGINT, primary_key=True)
    product_id = db.Column(BIGINT, db.ForeignKey("product.id", ondelete="CASCADE"), nullable=False, index=True)
    key = db.Column(db.String(100), nullable=False)
    value_ar = db.Column(db.String(255), nullable=False)
    value_en = db.Column(db.String(255), nullable=False)

    def to_dict(self):
        return {"key": self.key, "valueAr": self.value_ar, "valueEn": self.value_en}
