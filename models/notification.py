import enum
from datetime import datetime

from models import db, BIGINT, isoformat


class NotificationType(str, enum.Enum):
    ORDER = "ORDER"
    OFFER = "OFFER"
    MESSAGE = "MESSAGE"


class Notification(db.Model):
    __tablename__ = "notification"
    __table_args__ = (
        db.Index("ix_notification_user_read", "user_id", "is_read"),
    )

    id = db.Column(BIGINT, primary_key=True)
    user_id = db.Column(BIGINT, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    type = db.Column(db.Enum(NotificationType, native_enum=False, length=20), nullable=False)
    title_ar = db.Column(db.String(200), nullable=False)
    title_en = db.Column(db.String(200), nullable=False)
    message_ar = db.Column(db.Text, nullable=False)
    message_en = db.Column(db.Text, nullable=False)
    data = db.Column(db.JSON, nullable=True)
    is_read = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    user = db.relationship("User", lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "type": self.type.value,
            "titleAr": self.title_ar,
            "titleEn": self.title_en,
            "messageAr": self.message_ar,
            "messageEn": self.message_en,
            "data": self.data,
            "isRead": self.is_read,
            "createdAt": isoformat(self.created_at),
        }


class NotificationSettings(db.Model):
    __tablename__ = "notification_settings"

    id = db.Column(BIGINT, primary_key=True)
    user_id = db.Column(BIGINT, db.ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    order_enabled = db.Column(db.Boolean, nullable=False, default=True)
    offer_enabled = db.Column(db.Boolean, nullable=False, default=True)
    message_enabled = db.Column(db.Boolean, nullable=False, default=True)

    def allows(self, notification_type):
        return {
            NotificationType.ORDER: self.order_enabled,
            NotificationType.OFFER: self.offer_enabled,
            NotificationType.MESSAGE: self.message_enabled,
        }[NotificationType(notification_type)]

    def to_dict(self):
        return {
            "orderEnabled": self.order_enabled,
            "offerEnabled": self.offer_enabled,
            "messageEnabled": self.message_enabled,
        }
