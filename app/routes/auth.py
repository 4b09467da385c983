from flask import Blueprint, request, current_app
from app.version import API_PREFIX
from extensions import limiter
from app.utils import (
    auth_required,
    decode_token,
    error,
    issue_tokens,
    ok,
    TokenError,
    transactional,
    validate_schema,
)
from app.schemas.auth import ChangePasswordRequest, LoginRequest, RefreshRequest, RegisterRequest
from app.services import identity
from app.exceptions import AuthenticationError, AuthorizationError
from models import db
from models.user import User
import logging

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix=f"{API_PREFIX}/auth")


# --- Register ---

@auth_bp.route("/register", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["REGISTER_LIMIT_PER_IP"],
    error_message="Too many registrations from this IP",
)
@validate_schema(RegisterRequest)
def register():
    data: RegisterRequest = request.validated_data
    with transactional("Failed to register user"):
        user = identity.create_user(data.fullName, data.email, data.phone, data.password)
    logger.info({"event": "user_registered", "user_id": user.id})
    return ok(
        {"user": user.to_dict(), **issue_tokens(user)},
        message="User registered successfully",
        status=201,
    )


# --- Login ---

@auth_bp.route("/login", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["LOGIN_LIMIT_PER_IP"],
    error_message="Too many login attempts from this IP",
)
@validate_schema(LoginRequest)
def login():
    data: LoginRequest = request.validated_data
    user = identity.find_user_by_email_or_phone(email=data.email, phone=data.phone)
    if not identity.verify_password(user, data.password):
        raise AuthenticationError("Invalid credentials")
    if not user.is_active:
        raise AuthorizationError("Account is deactivated")
    return ok({"user": user.to_dict(), **issue_tokens(user)}, message="Login successful")


@auth_bp.route("/me", methods=["GET"])
@auth_required
def me():
    return ok(request.user.to_dict())


@auth_bp.route("/change-password", methods=["PUT"])
@auth_required
@validate_schema(ChangePasswordRequest)
def change_password():
    data: ChangePasswordRequest = request.validated_data
    user = request.user
    if not identity.verify_password(user, data.currentPassword):
        raise AuthenticationError("Current password is incorrect")
    with transactional("Failed to change password"):
        user.password_hash = identity.hash_password(data.newPassword)
    return ok(message="Password changed successfully")


@auth_bp.route("/refresh", methods=["POST"])
@validate_schema(RefreshRequest)
def refresh_tokens():
    try:
        payload = decode_token(request.validated_data.refreshToken, expected_type="refresh")
    except TokenError as e:
        return error(str(e), status=401)

    try:
        user = db.session.get(User, int(payload.get("sub")))
    except (TypeError, ValueError):
        user = None
    if user is None or not user.is_active:
        return error("Invalid token or user not active", status=401)
    return ok(issue_tokens(user))


# --- Logout handler ---

@auth_bp.route("/logout", methods=["POST"])
@auth_required
def logout():
    return ok(message="Logged out")
