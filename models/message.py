import enum
from datetime import datetime

from models import db, BIGINT, isoformat


class MessageType(str, enum.Enum):
    SUPPORT = "SUPPORT"
    COMPLAINT = "COMPLAINT"
    INQUIRY = "INQUIRY"
    GENERAL = "GENERAL"


class Message(db.Model):
    __tablename__ = "message"
    __table_args__ = (
        db.Index("ix_message_receiver_read", "receiver_id", "is_read"),
    )

    id = db.Column(BIGINT, primary_key=True)
    sender_id = db.Column(BIGINT, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = db.Column(BIGINT, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    subject = db.Column(db.String(200), nullable=True)
    content_ar = db.Column(db.Text, nullable=False)
    content_en = db.Column(db.Text, nullable=False)
    type = db.Column(
        db.Enum(MessageType, native_enum=False, length=20),
        nullable=False,
        default=MessageType.GENERAL,
    )
    is_read = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    sender = db.relationship("User", foreign_keys=[sender_id], lazy="joined")
    receiver = db.relationship("User", foreign_keys=[receiver_id], lazy="joined")

    def to_dict(self):
        return {
            "id": self.id,
            "senderId": self.sender_id,
            "receiverId": self.receiver_id,
            "subject": self.subject,
            "contentAr": self.content_ar,
            "contentEn": self.content_en,
            "type": self.type.value,
            "isRead": self.is_read,
            "sender": self.sender.to_summary() if self.sender else None,
            "receiver": self.receiver.to_summary() if self.receiver else None,
            "createdAt": isoformat(self.created_at),
        }
