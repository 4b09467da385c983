from datetime import datetime

from models import db, BIGINT, isoformat


class Category(db.Model):
    __tablename__ = "category"

    id = db.Column(BIGINT, primary_key=True)
    name_ar = db.Column(db.String(100), nullable=False)
    name_en = db.Column(db.String(100), nullable=False)
    icon = db.Column(db.String(255), nullable=True)
    image = db.Column(db.String(255), nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self, counts=None):
        data = {
            "id": self.id,
            "nameAr": self.name_ar,
            "nameEn": self.name_en,
            "icon": self.icon,
            "image": self.image,
            "isActive": self.is_active,
            "createdAt": isoformat(self.created_at),
        }
        if counts is not None:
            data["_count"] = counts
        return data
