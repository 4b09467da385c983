from flask import request
from . import admin_bp
from app.utils import ok, transactional, validate_schema
from app.schemas.users import AdminCreateUserRequest, RoleUpdateRequest
from app.services import identity, vendors
from app.exceptions import NotFoundError, ValidationError
from models import db
from models.user import Role
from models.vendor import Vendor


@admin_bp.route("/users", methods=["POST"])
@validate_schema(AdminCreateUserRequest)
def create_user():
    data: AdminCreateUserRequest = request.validated_data
    if data.role is Role.VENDOR:
        raise ValidationError("Vendors are created by approving a vendor application")
    with transactional("Failed to create user"):
        user = identity.create_user(data.fullName, data.email, data.phone, data.password, role=data.role)
    return ok(user.to_dict(), message="User created successfully", status=201)


@admin_bp.route("/users/<int:user_id>/role", methods=["PUT"])
@validate_schema(RoleUpdateRequest)
def update_user_role(user_id):
    new_role = request.validated_data.role
    if user_id == request.user.id:
        raise ValidationError("You cannot change your own role")
    if new_role is Role.VENDOR:
        raise ValidationError("Vendors are created by approving a vendor application")
    user = identity.get_user(user_id)
    with transactional("Failed to update user role"):
        if user.vendor_profile is not None:
            vendors.remove_vendor(user.vendor_profile, actor_id=request.user.id, reason="admin_role_change")
        if user.role is not new_role:
            identity.update_user_role(user, new_role, reason="admin_role_change", actor_id=request.user.id)
    return ok(user.to_dict(), message="User role updated successfully")


@admin_bp.route("/users/<int:user_id>", methods=["DELETE"])
def delete_user(user_id):
    if user_id == request.user.id:
        raise ValidationError("You cannot delete your own account")
    user = identity.get_user(user_id)
    with transactional("Failed to delete user"):
        db.session.delete(user)
    return ok(message="User deleted successfully")


@admin_bp.route("/vendors/<int:vendor_id>", methods=["DELETE"])
def delete_vendor(vendor_id):
    vendor = db.session.get(Vendor, vendor_id)
    if vendor is None:
        raise NotFoundError("Vendor not found")
    with transactional("Failed to delete vendor"):
        vendors.remove_vendor(vendor, actor_id=request.user.id, reason="admin_vendor_removal")
    return ok(message="Vendor deleted successfully")
