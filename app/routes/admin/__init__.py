from flask import Blueprint
from app.version import API_PREFIX
from app.utils import auth_required, role_required

admin_bp = Blueprint("admin", __name__, url_prefix=f"{API_PREFIX}/admin")


@admin_bp.before_request
@auth_required
@role_required("ADMIN")
def _enforce_admin_role():
    """Ensure the requester is an authenticated admin."""
    return None

from . import dashboard  # noqa: E402,F401
from . import users  # noqa: E402,F401
from . import moderation  # noqa: E402,F401
from . import products  # noqa: E402,F401
