import enum
from datetime import datetime

from models import db, BIGINT, isoformat


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    USER = "USER"
    VENDOR = "VENDOR"


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(BIGINT, primary_key=True)
    full_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    phone = db.Column(db.String(20), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(
        db.Enum(Role, native_enum=False, length=20),
        nullable=False,
        default=Role.USER,
    )
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    profile_image = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    vendor_profile = db.relationship(
        "Vendor", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<User id={self.id} role={self.role}>"

    def to_dict(self):
        vendor = self.vendor_profile
        return {
            "id": self.id,
            "fullName": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "role": self.role.value,
            "isActive": self.is_active,
            "profileImage": self.profile_image,
            "isVendor": vendor is not None,
            "vendorApproved": bool(vendor and vendor.is_approved),
            "createdAt": isoformat(self.created_at),
        }

    def to_summary(self):
        return {
            "id": self.id,
            "fullName": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "role": self.role.value,
        }


class RoleChangeLog(db.Model):
    """Audit trail of every role change applied to a user."""

    __tablename__ = "role_change_log"

    id = db.Column(BIGINT, primary_key=True)
    user_id = db.Column(BIGINT, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    old_role = db.Column(db.String(20), nullable=False)
    new_role = db.Column(db.String(20), nullable=False)
    reason = db.Column(db.String(100), nullable=False)
    actor_id = db.Column(BIGINT, nullable=True)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "userId": self.user_id,
            "oldRole": self.old_role,
            "newRole": self.new_role,
            "reason": self.reason,
            "actorId": self.actor_id,
            "timestamp": isoformat(self.timestamp),
        }
