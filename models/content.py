import enum
from datetime import datetime

from models import db, BIGINT, isoformat


class ContentType(str, enum.Enum):
    ABOUT = "ABOUT"
    PRIVACY_POLICY = "PRIVACY_POLICY"
    TERMS_CONDITIONS = "TERMS_CONDITIONS"


class Slider(db.Model):
    __tablename__ = "slider"

    id = db.Column(BIGINT, primary_key=True)
    image = db.Column(db.String(255), nullable=False)
    title_ar = db.Column(db.String(200), nullable=False)
    title_en = db.Column(db.String(200), nullable=False)
    description_ar = db.Column(db.Text, nullable=True)
    description_en = db.Column(db.Text, nullable=True)
    icon = db.Column(db.String(255), nullable=True)
    link = db.Column(db.String(255), nullable=True)
    order = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "image": self.image,
            "titleAr": self.title_ar,
            "titleEn": self.title_en,
            "descriptionAr": self.description_ar,
            "descriptionEn": self.description_en,
            "icon": self.icon,
            "link": self.link,
            "order": self.order,
            "isActive": self.is_active,
        }


class AppContent(db.Model):
    __tablename__ = "app_content"

    id = db.Column(BIGINT, primary_key=True)
    type = db.Column(db.Enum(ContentType, native_enum=False, length=30), unique=True, nullable=False)
    content_ar = db.Column(db.Text, nullable=False)
    content_en = db.Column(db.Text, nullable=False)
    updated_by = db.Column(BIGINT, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "type": self.type.value,
            "contentAr": self.content_ar,
            "contentEn": self.content_en,
            "updatedBy": self.updated_by,
            "updatedAt": isoformat(self.updated_at),
        }
