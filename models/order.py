import enum

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Numeric, Integer
from sqlalchemy.sql import func

from models import db, BIGINT, isoformat


class OrderStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Order(db.Model):
    __tablename__ = "order"
    __table_args__ = (
        db.Index("ix_order_vendor_status", "vendor_id", "status"),
    )
    id = Column(BIGINT, primary_key=True)
    user_id = Column(BIGINT, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    vendor_id = Column(BIGINT, ForeignKey("vendor.id", ondelete="CASCADE"), nullable=False)
    status = Column(
        db.Enum(OrderStatus, native_enum=False, length=20),
        nullable=False,
        default=OrderStatus.PENDING,
    )
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    user = db.relationship("User", lazy=True)
    vendor = db.relationship("Vendor", lazy=True)
    items = db.relationship("OrderItem", backref="order", cascade="all, delete-orphan", lazy="selectin")

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "vendorId": self.vendor_id,
            "status": self.status.value,
            "totalAmount": float(self.total_amount or 0),
            "notes": self.notes,
            "items": [item.to_dict() for item in self.items],
            "vendor": {"id": self.vendor.id, "storeName": self.vendor.store_name} if self.vendor else None,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }


class OrderItem(db.Model):
    __tablename__ = "order_item"
    id = db.Column(BIGINT, primary_key=True)
    order_id = db.Column(BIGINT, db.ForeignKey("order.id", ondelete="CASCADE"), nullable=False)
    product_id = db.Column(BIGINT, db.ForeignKey("product.id", ondelete="SET NULL"), nullable=True)
    name_en = db.Column(db.String(200))
    quantity = db.Column(Integer, nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)

    def to_dict(self):
        return {
            "productId": self.product_id,
            "nameEn": self.name_en,
            "quantity": self.quantity,
            "price": float(self.price),
            "subtotal": float(self.price * self.quantity),
        }


class OrderStatusLog(db.Model):
    __tablename__ = "order_status_log"
    id = Column(BIGINT, primary_key=True)
    order_id = Column(BIGINT, ForeignKey("order.id", ondelete="CASCADE"), nullable=False)
    status = Column(String(30), nullable=False)
    updated_by = Column(BIGINT, nullable=False)
    timestamp = Column(DateTime, default=func.now())

    def to_dict(self):
        return {
            "orderId": self.order_id,
            "status": self.status,
            "updatedBy": self.updated_by,
            "timestamp": isoformat(self.timestamp),
        }
