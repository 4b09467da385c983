import enum
from datetime import datetime

from sqlalchemy import text

from models import db, BIGINT, isoformat


class ApplicationStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


# Statuses that block a user from submitting another application
ACTIVE_APPLICATION_STATUSES = (ApplicationStatus.PENDING, ApplicationStatus.APPROVED)
_ACTIVE_STATUS_PREDICATE = text("status IN ('PENDING', 'APPROVED')")


class VendorApplication(db.Model):
    __tablename__ = "vendor_application"
    __table_args__ = (
        db.Index(
            "uq_vendor_application_active_user",
            "user_id",
            unique=True,
            sqlite_where=_ACTIVE_STATUS_PREDICATE,
            postgresql_where=_ACTIVE_STATUS_PREDICATE,
        ),
        db.Index("ix_vendor_application_status_created", "status", "created_at"),
    )

    id = db.Column(BIGINT, primary_key=True)
    user_id = db.Column(BIGINT, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # applicant snapshot, independent of later profile edits
    full_name = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(20), nullable=False)
    email = db.Column(db.String(120), nullable=False)

    store_name = db.Column(db.String(150), nullable=False)
    city = db.Column(db.String(100), nullable=False)
    region = db.Column(db.String(100), nullable=True)
    years_of_experience = db.Column(db.Integer, nullable=False, default=0)
    whatsapp_number = db.Column(db.String(20), nullable=True)
    call_number = db.Column(db.String(20), nullable=True)

    status = db.Column(
        db.Enum(ApplicationStatus, native_enum=False, length=20),
        nullable=False,
        default=ApplicationStatus.PENDING,
    )
    version = db.Column(db.Integer, nullable=False, default=1)
    reviewed_by = db.Column(BIGINT, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    reviewed_at = db.Column(db.DateTime, nullable=True)
    rejection_reason = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship("User", foreign_keys=[user_id])
    reviewer = db.relationship("User", foreign_keys=[reviewed_by])
    specialization_links = db.relationship(
        "VendorApplicationCategory",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def specialization(self):
        return sorted(link.category_id for link in self.specialization_links)

    def to_dict(self, include_user=False):
        data = {
            "id": self.id,
            "userId": self.user_id,
            "fullName": self.full_name,
            "phone": self.phone,
            "email": self.email,
            "storeName": self.store_name,
            "specialization": self.specialization,
            "city": self.city,
            "region": self.region,
            "yearsOfExperience": self.years_of_experience,
            "whatsappNumber": self.whatsapp_number,
            "callNumber": self.call_number,
            "status": self.status.value,
            "reviewedBy": self.reviewed_by,
            "reviewedAt": isoformat(self.reviewed_at),
            "rejectionReason": self.rejection_reason,
            "createdAt": isoformat(self.created_at),
        }
        if include_user and self.user is not None:
            data["user"] = self.user.to_summary()
        return data


class VendorApplicationCategory(db.Model):
    __tablename__ = "vendor_application_category"

    application_id = db.Column(
        BIGINT, db.ForeignKey("vendor_application.id", ondelete="CASCADE"), primary_key=True
    )
    category_id = db.Column(BIGINT, db.ForeignKey("category.id"), primary_key=True)


class VendorApplicationLog(db.Model):
    __tablename__ = "vendor_application_log"

    id = db.Column(BIGINT, primary_key=True)
    application_id = db.Column(
        BIGINT, db.ForeignKey("vendor_application.id", ondelete="CASCADE"), nullable=False, index=True
    )
    action_type = db.Column(db.String(50), nullable=False)
    actor_id = db.Column(BIGINT, nullable=False)
    details = db.Column(db.Text, nullable=True)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "applicationId": self.application_id,
            "actionType": self.action_type,
            "actorId": self.actor_id,
            "details": self.details,
            "timestamp": isoformat(self.timestamp),
        }


class Vendor(db.Model):
    __tablename__ = "vendor"

    id = db.Column(BIGINT, primary_key=True)
    user_id = db.Column(BIGINT, db.ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    application_id = db.Column(BIGINT, db.ForeignKey("vendor_application.id"), nullable=True)
    store_name = db.Column(db.String(150), nullable=False)
    city = db.Column(db.String(100), nullable=False)
    region = db.Column(db.String(100), nullable=True)
    years_of_experience = db.Column(db.Integer, nullable=False, default=0)
    whatsapp_number = db.Column(db.String(20), nullable=True)
    call_number = db.Column(db.String(20), nullable=True)
    is_approved = db.Column(db.Boolean, nullable=False, default=False)
    approved_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship("User", back_populates="vendor_profile")
    categories = db.relationship(
        "VendorCategory", back_populates="vendor", cascade="all, delete-orphan", lazy="selectin"
    )
    products = db.relationship("Product", back_populates="vendor", cascade="all, delete-orphan", lazy=True)
    statuses = db.relationship("Status", back_populates="vendor", cascade="all, delete-orphan", lazy=True)

    @property
    def category_ids(self):
        return sorted(link.category_id for link in self.categories)

    def to_dict(self, counts=None, include_user=False):
        data = {
            "id": self.id,
            "userId": self.user_id,
            "storeName": self.store_name,
            "city": self.city,
            "region": self.region,
            "yearsOfExperience": self.years_of_experience,
            "whatsappNumber": self.whatsapp_number,
            "callNumber": self.call_number,
            "isApproved": self.is_approved,
            "approvedAt": isoformat(self.approved_at),
            "categories": [link.category.to_dict() for link in self.categories],
            "createdAt": isoformat(self.created_at),
        }
        if counts is not None:
            data["_count"] = counts
        if include_user and self.user is not None:
            data["user"] = self.user.to_summary()
        return data


class VendorCategory(db.Model):
    __tablename__ = "vendor_category"

    vendor_id = db.Column(BIGINT, db.ForeignKey("vendor.id", ondelete="CASCADE"), primary_key=True)
    category_id = db.Column(BIGINT, db.ForeignKey("category.id"), primary_key=True)

    vendor = db.relationship("Vendor", back_populates="categories")
    category = db.relationship("Category", lazy="joined")
