from flask import Blueprint
from app.version import API_PREFIX

mobile_bp = Blueprint("mobile", __name__, url_prefix=f"{API_PREFIX}/mobile")

from . import vendors  # noqa: E402,F401
from . import messages  # noqa: E402,F401
from . import users  # noqa: E402,F401
