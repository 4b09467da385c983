from flask import Blueprint, request
from sqlalchemy import or_
from app.version import API_PREFIX
from app.utils import auth_required, ok, page_params, paginate, role_required, transactional, validate_schema
from app.schemas.users import ProfileUpdateRequest, UserStatusRequest
from app.services import identity
from app.exceptions import ConflictError, ValidationError
from models.user import Role, User

users_bp = Blueprint("users", __name__, url_prefix=f"{API_PREFIX}/users")


@users_bp.route("/profile", methods=["GET"])
@auth_required
def get_profile():
    return ok(request.user.to_dict())


@users_bp.route("/profile", methods=["PUT"])
@auth_required
@validate_schema(ProfileUpdateRequest)
def update_profile():
    data: ProfileUpdateRequest = request.validated_data
    user = request.user
    if data.phone and data.phone != user.phone:
        if identity.find_user_by_email_or_phone(phone=data.phone, exclude_user_id=user.id):
            raise ConflictError("Phone number already in use")
    with transactional("Failed to update profile"):
        if data.fullName:
            user.full_name = data.fullName
        if data.phone:
            user.phone = data.phone
        if data.profileImage is not None:
            user.profile_image = data.profileImage
    return ok(user.to_dict(), message="Profile updated successfully")


@users_bp.route("", methods=["GET"])
@auth_required
@role_required("ADMIN")
def list_users():
    query = User.query
    role = request.args.get("role")
    if role:
        if role not in Role.__members__:
            raise ValidationError("Invalid role filter")
        query = query.filter(User.role == Role(role))
    search = request.args.get("search")
    if search:
        like = f"%{search}%"
        query = query.filter(
            or_(User.full_name.ilike(like), User.email.ilike(like), User.phone.ilike(like))
        )
    page, limit = page_params()
    items, pagination = paginate(query.order_by(User.created_at.desc(), User.id.desc()), page, limit)
    return ok({"users": [u.to_dict() for u in items], "pagination": pagination})


@users_bp.route("/<int:user_id>", methods=["GET"])
@auth_required
@role_required("ADMIN")
def get_user(user_id):
    return ok(identity.get_user(user_id).to_dict())


@users_bp.route("/<int:user_id>/status", methods=["PUT"])
@auth_required
@role_required("ADMIN")
@validate_schema(UserStatusRequest)
def update_user_status(user_id):
    user = identity.get_user(user_id)
    with transactional("Failed to update user status"):
        user.is_active = request.validated_data.isActive
    state = "activated" if user.is_active else "deactivated"
    return ok(user.to_dict(), message=f"User {state} successfully")
