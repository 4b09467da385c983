from datetime import datetime

from models import db, BIGINT, isoformat


class Status(db.Model):
    """A promotional offer a vendor publishes."""

    __tablename__ = "status"

    id = db.Column(BIGINT, primary_key=True)
    vendor_id = db.Column(BIGINT, db.ForeignKey("vendor.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = db.Column(BIGINT, db.ForeignKey("product.id", ondelete="SET NULL"), nullable=True)
    image = db.Column(db.String(255), nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=True)
    icon = db.Column(db.String(255), nullable=True)
    title_ar = db.Column(db.String(200), nullable=True)
    title_en = db.Column(db.String(200), nullable=True)
    description_ar = db.Column(db.Text, nullable=True)
    description_en = db.Column(db.Text, nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    vendor = db.relationship("Vendor", back_populates="statuses")

    def to_dict(self):
        return {
            "id": self.id,
            "vendorId": self.vendor_id,
            "productId": self.product_id,
            "image": self.image,
            "price": float(self.price) if self.price is not None else None,
            "icon": self.icon,
            "titleAr": self.title_ar,
            "titleEn": self.title_en,
            "descriptionAr": self.description_ar,
            "descriptionEn": self.description_en,
            "isActive": self.is_active,
            "vendor": {"id": self.vendor.id, "storeName": self.vendor.store_name} if self.vendor else None,
            "createdAt": isoformat(self.created_at),
        }
