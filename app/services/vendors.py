import logging

from sqlalchemy import or_

from models import db
from models.product import Product
from models.status import Status
from models.user import Role
from models.vendor import Vendor, VendorCategory
from app.exceptions import AuthenticationError, NotFoundError
from app.services import identity, vendor_applications

logger = logging.getLogger(__name__)

_PROFILE_FIELDS = {
    "storeName": "store_name",
    "city": "city",
    "region": "region",
    "yearsOfExperience": "years_of_experience",
    "whatsappNumber": "whatsapp_number",
    "callNumber": "call_number",
}


def approved_vendors(category_id=None, city=None, region=None, search=None):
    query = Vendor.query.filter(Vendor.is_approved.is_(True))
    if category_id:
        query = query.filter(
            Vendor.categories.any(VendorCategory.category_id == category_id)
        )
    if city:
        query = query.filter(Vendor.city.ilike(f"%{city}%"))
    if region:
        query = query.filter(Vendor.region.ilike(f"%{region}%"))
    if search:
        query = query.filter(or_(Vendor.store_name.ilike(f"%{search}%"), Vendor.city.ilike(f"%{search}%")))
    return query.order_by(Vendor.created_at.desc(), Vendor.id.desc())


def vendor_counts(vendor_id):
    return {
        "products": Product.query.filter_by(vendor_id=vendor_id, is_active=True, is_approved=True).count(),
        "statuses": Status.query.filter_by(vendor_id=vendor_id, is_active=True).count(),
    }


def get_approved_vendor(vendor_id) -> Vendor:
    vendor = db.session.get(Vendor, vendor_id)
    if vendor is None or not vendor.is_approved:
        raise NotFoundError("Vendor not found")
    return vendor


def update_profile(vendor: Vendor, data) -> Vendor:
    for key, value in data.model_dump(exclude_unset=True).items():
        if value is not None and key in _PROFILE_FIELDS:
            setattr(vendor, _PROFILE_FIELDS[key], value)
    return vendor


def remove_vendor(vendor: Vendor, actor_id, reason):
    """Delete a vendor profile with its catalog and demote the owner to USER.

    The approved application behind the profile is retired too, so the user
    can apply again and a profile exists exactly when an approved application does.
    """
    user = vendor.user
    vendor_id, user_id = vendor.id, vendor.user_id
    db.session.delete(vendor)
    # the profile references its application, so it goes first
    db.session.flush()
    if user is not None:
        db.session.expire(user, ["vendor_profile"])
    retired = vendor_applications.retire_approved_applications(user_id, actor_id)
    if user is not None and user.role is Role.VENDOR:
        identity.update_user_role(user, Role.USER, reason=reason, actor_id=actor_id)
    db.session.flush()
    logger.info({
        "event": "vendor_removed",
        "vendor_id": vendor_id,
        "actor_id": actor_id,
        "reason": reason,
        "retired_application_ids": retired,
    })


def delete_own_account(user, password):
    vendor = user.vendor_profile
    if vendor is None:
        raise NotFoundError("Vendor profile not found")
    if not identity.verify_password(user, password):
        raise AuthenticationError("Invalid password")
    remove_vendor(vendor, actor_id=user.id, reason="vendor_account_deleted")


def close_account(user, password):
    """Delete the caller's whole account after checking their password.

    A vendor profile is removed first so its approved application is retired with it.
    """
    if not identity.verify_password(user, password):
        raise AuthenticationError("Incorrect password. Account deletion requires password confirmation.")
    user_id = user.id
    if user.vendor_profile is not None:
        remove_vendor(user.vendor_profile, actor_id=user_id, reason="account_closed")
    db.session.delete(user)
    db.session.flush()
    logger.info({"event": "account_closed", "user_id": user_id})
