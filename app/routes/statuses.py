from flask import Blueprint, request
from app.version import API_PREFIX
from app.utils import auth_required, ok, page_params, paginate, role_required, transactional, validate_schema
from app.schemas.engagement import StatusRequest, StatusUpdateRequest
from app.exceptions import AuthorizationError, NotFoundError, ValidationError
from models import db
from models.status import Status
from models.user import Role
from models.vendor import Vendor

statuses_bp = Blueprint("statuses", __name__, url_prefix=f"{API_PREFIX}/statuses")

_FIELDS = {
    "image": "image",
    "productId": "product_id",
    "price": "price",
    "icon": "icon",
    "titleAr": "title_ar",
    "titleEn": "title_en",
    "descriptionAr": "description_ar",
    "descriptionEn": "description_en",
    "isActive": "is_active",
}


def _owned_status(status_id):
    status = db.session.get(Status, status_id)
    if status is None or not status.is_active:
        raise NotFoundError("Status not found")
    user = request.user
    if user.role is Role.ADMIN:
        return status
    vendor = user.vendor_profile
    if vendor is None or vendor.id != status.vendor_id:
        raise AuthorizationError("Not authorized to modify this status")
    return status


def _publishing_vendor(data):
    user = request.user
    if user.role is Role.ADMIN:
        if not data.vendorId:
            raise ValidationError("vendorId is required for admin")
        vendor = db.session.get(Vendor, data.vendorId)
    else:
        vendor = user.vendor_profile
    if vendor is None or not vendor.is_approved:
        raise NotFoundError("Vendor not found or not approved")
    return vendor


@statuses_bp.route("", methods=["GET"])
def list_statuses():
    query = Status.query.filter(Status.is_active.is_(True))
    vendor_id = request.args.get("vendorId", type=int)
    if vendor_id:
        query = query.filter(Status.vendor_id == vendor_id)
    page, limit = page_params()
    items, pagination = paginate(query.order_by(Status.created_at.desc(), Status.id.desc()), page, limit)
    return ok({"statuses": [s.to_dict() for s in items], "pagination": pagination})


@statuses_bp.route("/<int:status_id>", methods=["GET"])
def get_status(status_id):
    status = db.session.get(Status, status_id)
    if status is None or not status.is_active:
        raise NotFoundError("Status not found")
    return ok(status.to_dict())


@statuses_bp.route("", methods=["POST"])
@auth_required
@role_required(["VENDOR:publish_status", "ADMIN"])
@validate_schema(StatusRequest)
def create_status():
    data: StatusRequest = request.validated_data
    vendor = _publishing_vendor(data)
    with transactional("Failed to create status"):
        status = Status(
            vendor_id=vendor.id,
            product_id=data.productId,
            image=data.image,
            price=data.price,
            icon=data.icon,
            title_ar=data.titleAr,
            title_en=data.titleEn,
            description_ar=data.descriptionAr,
            description_en=data.descriptionEn,
        )
        db.session.add(status)
    return ok(status.to_dict(), message="Status created successfully", status=201)


@statuses_bp.route("/<int:status_id>", methods=["PUT"])
@auth_required
@role_required(["VENDOR:publish_status", "ADMIN"])
@validate_schema(StatusUpdateRequest)
def update_status(status_id):
    status = _owned_status(status_id)
    with transactional("Failed to update status"):
        for key, value in request.validated_data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(status, _FIELDS[key], value)
    return ok(status.to_dict(), message="Status updated successfully")


@statuses_bp.route("/<int:status_id>", methods=["DELETE"])
@auth_required
@role_required(["VENDOR:publish_status", "ADMIN"])
def delete_status(status_id):
    status = _owned_status(status_id)
    with transactional("Failed to delete status"):
        status.is_active = False
    return ok(message="Status deleted successfully")
