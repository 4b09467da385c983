from functools import wraps
from flask import request, g
from .responses import error
from app.auth.permissions import role_has_scope
from .jwt import decode_token, TokenError
from models import db
from models.user import User


def _bearer_token():
    auth = request.headers.get("Authorization", "")
    if not auth:
        return None
    return auth.split(" ", 1)[1].strip() if auth.startswith("Bearer ") else auth.strip()


def _load_user(payload):
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        return None
    user = db.session.get(User, user_id)
    if not user or not user.is_active:
        return None
    return user


def auth_required(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        token = _bearer_token()
        if not token:
            return error("Authentication required", status=401)
        try:
            payload = decode_token(token, expected_type="access")
        except TokenError as e:
            return error(str(e), status=401)

        user = _load_user(payload)
        if user is None:
            return error("Invalid token or user not active", status=401)
        g.user_id = user.id
        g.role = user.role.value
        request.user = user
        return func(*args, **kwargs)

    return wrapper


def optional_auth(func):
    """Load the user when a valid token is sent, otherwise continue anonymously."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        request.user = None
        token = _bearer_token()
        if token:
            try:
                request.user = _load_user(decode_token(token, expected_type="access"))
            except TokenError:
                request.user = None
        return func(*args, **kwargs)

    return wrapper


def _to_set(obj):
    return set(obj) if isinstance(obj, (list, tuple, set)) else {obj}


def role_required(required):
    """Authorize based on user role or scoped action."""
    required_set = _to_set(required)

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            user = getattr(request, "user", None)
            role = user.role.value if user is not None else getattr(g, "role", None)
            if not role:
                return error("Authentication required", status=401)
            for entry in required_set:
                if ":" in entry:
                    r, action = entry.split(":", 1)
                    if role == r and role_has_scope(role, action):
                        break
                else:
                    if role == entry:
                        break
            else:
                return error("Insufficient permissions", status=403)
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def vendor_required(fn):
    """Require an approved vendor profile; exposes it as ``request.vendor``."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        user = getattr(request, "user", None)
        if user is None:
            return error("Authentication required", status=401)
        vendor = user.vendor_profile
        if user.role.value != "VENDOR" or vendor is None or not vendor.is_approved:
            return error("Vendor not approved", status=403)
        request.vendor = vendor
        return fn(*args, **kwargs)

    return wrapper
