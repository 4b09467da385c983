import logging

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import db
from models.user import Role
from models.vendor import (
    ACTIVE_APPLICATION_STATUSES,
    ApplicationStatus,
    Vendor,
    VendorApplication,
    VendorApplicationCategory,
    VendorApplicationLog,
    VendorCategory,
)
from app.exceptions import ConflictError, InternalError, NotFoundError
from app.metrics import APPLICATION_EVENTS
from app.services import identity
from app.services.categories import require_categories
from app.services.vendor_workflow import (
    ALREADY_REVIEWED,
    ReviewAction,
    VendorApproved,
    approval_event,
    transition,
)

logger = logging.getLogger(__name__)

ALREADY_APPLIED = "You already have a pending or approved vendor application"
ALREADY_VENDOR = "You are already a vendor"
CONTACT_IN_USE = "Email or phone is already used by another account"


def _log_action(application, action_type, actor_id, details=None):
    db.session.add(
        VendorApplicationLog(
            application_id=application.id,
            action_type=action_type,
            actor_id=actor_id,
            details=details,
        )
    )


def has_active_application(user_id) -> bool:
    return (
        VendorApplication.query
        .filter(
            VendorApplication.user_id == user_id,
            VendorApplication.status.in_(ACTIVE_APPLICATION_STATUSES),
        )
        .first()
        is not None
    )


def ensure_can_apply(user):
    if Vendor.query.filter_by(user_id=user.id).first() is not None:
        raise ConflictError(ALREADY_VENDOR)
    if has_active_application(user.id):
        raise ConflictError(ALREADY_APPLIED)


def _is_active_application_clash(error: IntegrityError) -> bool:
    message = str(error.orig)
    return "uq_vendor_application_active_user" in message or "vendor_application.user_id" in message


def _create_application(user, categories, **fields) -> VendorApplication:
    application = VendorApplication(user_id=user.id, status=ApplicationStatus.PENDING, version=1, **fields)
    application.specialization_links = [
        VendorApplicationCategory(category_id=category.id) for category in categories
    ]
    db.session.add(application)
    try:
        db.session.flush()
    except IntegrityError as e:
        # a concurrent submission won the partial unique index
        if _is_active_application_clash(e):
            raise ConflictError(ALREADY_APPLIED) from e
        raise
    _log_action(application, "submitted", user.id, f"Specialization: {application.specialization}")
    APPLICATION_EVENTS.labels("submitted").inc()
    logger.info({
        "event": "vendor_application_submitted",
        "application_id": application.id,
        "user_id": user.id,
    })
    return application


def submit_application(user, data) -> VendorApplication:
    ensure_can_apply(user)
    categories = require_categories(data.specialization)
    return _create_application(
        user,
        categories,
        full_name=data.fullName,
        phone=data.phone,
        email=data.email.lower(),
        store_name=data.storeName,
        city=data.city,
        region=data.region,
        years_of_experience=data.yearsOfExperience,
        whatsapp_number=data.whatsappNumber,
        call_number=data.callNumber,
    )


def register_vendor_with_profile(user, data) -> VendorApplication:
    """Update the caller's profile and credential and submit an application in one go."""
    ensure_can_apply(user)
    email = data.email.lower()
    if identity.find_user_by_email_or_phone(email=email, phone=data.phone, exclude_user_id=user.id):
        raise ConflictError(CONTACT_IN_USE)
    categories = require_categories(data.categories)

    user.full_name = data.fullName
    user.email = email
    user.phone = data.phone
    user.password_hash = identity.hash_password(data.password)
    try:
        db.session.flush()
    except IntegrityError as e:
        # another account took the email or phone after the lookup above
        raise ConflictError(CONTACT_IN_USE) from e

    return _create_application(
        user,
        categories,
        full_name=data.fullName,
        phone=data.phone,
        email=email,
        store_name=data.shop_or_farm_name,
        city=data.locationText,
        region=data.region,
        years_of_experience=data.experienceYears,
        whatsapp_number=data.whatsappNumber or data.phone,
        call_number=data.callNumber or data.phone,
    )


def retire_approved_applications(user_id, actor_id):
    """Delete the approved application of a user whose vendor profile was removed.

    Its category links and log rows go with it. Returns the retired ids.
    """
    approved = VendorApplication.query.filter_by(user_id=user_id, status=ApplicationStatus.APPROVED).all()
    ids = [application.id for application in approved]
    if not ids:
        return ids
    VendorApplicationLog.query.filter(VendorApplicationLog.application_id.in_(ids)).delete(
        synchronize_session=False
    )
    for application in approved:
        db.session.delete(application)
    db.session.flush()
    APPLICATION_EVENTS.labels("retired").inc(len(ids))
    logger.info({"event": "vendor_application_retired", "application_ids": ids, "actor_id": actor_id})
    return ids


def get_application(application_id) -> VendorApplication:
    application = db.session.get(VendorApplication, application_id)
    if application is None:
        raise NotFoundError("Application not found")
    return application


def list_applications(status=None):
    query = VendorApplication.query
    if status:
        query = query.filter(VendorApplication.status == ApplicationStatus(status))
    return query.order_by(VendorApplication.created_at.desc(), VendorApplication.id.desc())


def list_user_applications(user_id):
    return (
        VendorApplication.query
        .filter_by(user_id=user_id)
        .order_by(VendorApplication.created_at.desc(), VendorApplication.id.desc())
        .all()
    )


def apply_vendor_approved(event: VendorApproved, application: VendorApplication) -> Vendor:
    """Materialize the vendor profile, its categories and the role change."""
    user = identity.get_user(event.user_id)
    vendor = Vendor(
        user=user,
        application_id=application.id,
        store_name=application.store_name,
        city=application.city,
        region=application.region,
        years_of_experience=application.years_of_experience,
        whatsapp_number=application.whatsapp_number,
        call_number=application.call_number,
        is_approved=True,
        approved_at=event.occurred_at,
    )
    vendor.categories = [VendorCategory(category_id=cid) for cid in application.specialization]
    db.session.add(vendor)
    identity.update_user_role(
        user, Role.VENDOR, reason="vendor_application_approved", actor_id=event.reviewer_id
    )
    db.session.flush()
    return vendor


def review(application: VendorApplication, action, reviewer, rejection_reason=None) -> VendorApplication:
    """Move a PENDING application to a terminal state.

    The status write is conditional on the status and version that were read,
    so of two concurrent reviews exactly one updates a row; the other gets a
    ConflictError and writes nothing. Approval side effects happen in the same
    transaction, which the caller commits.
    """
    decision = transition(application, action, reviewer.id, rejection_reason)
    application_id, reviewer_id = decision.application_id, decision.reviewer_id

    result = db.session.execute(
        update(VendorApplication)
        .where(
            VendorApplication.id == application_id,
            VendorApplication.status == ApplicationStatus.PENDING,
            VendorApplication.version == decision.expected_version,
        )
        .values(
            status=decision.target,
            reviewed_by=decision.reviewer_id,
            reviewed_at=decision.reviewed_at,
            rejection_reason=decision.rejection_reason,
            version=VendorApplication.version + 1,
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        logger.warning({
            "event": "vendor_application_review_conflict",
            "application_id": application_id,
            "reviewer_id": reviewer_id,
        })
        APPLICATION_EVENTS.labels("review_conflict").inc()
        raise ConflictError(ALREADY_REVIEWED)
    db.session.refresh(application)

    event = approval_event(application, decision)
    try:
        if event is not None:
            apply_vendor_approved(event, application)
        _log_action(
            application,
            "approved" if decision.action is ReviewAction.APPROVE else "rejected",
            reviewer_id,
            decision.rejection_reason,
        )
        db.session.flush()
    except SQLAlchemyError as e:
        # the session is unusable until rolled back; log only values read earlier
        logger.error("Failed to apply review of application %s: %s", application_id, e, exc_info=True)
        raise InternalError("Failed to apply application review") from e

    APPLICATION_EVENTS.labels(decision.target.value.lower()).inc()
    logger.info({
        "event": "vendor_application_reviewed",
        "application_id": application_id,
        "status": decision.target.value,
        "reviewer_id": reviewer_id,
    })
    return application


def review_application(application_id, status, reviewer, rejection_reason=None) -> VendorApplication:
    application = get_application(application_id)
    return review(application, ReviewAction.from_status(status), reviewer, rejection_reason)
