from flask import request
from . import mobile_bp
from app.utils import auth_required, ok, transactional, validate_schema
from app.schemas.users import AccountDeleteRequest
from app.services import vendors


@mobile_bp.route("/user/account", methods=["DELETE"])
@auth_required
@validate_schema(AccountDeleteRequest)
def delete_account():
    with transactional("Failed to delete account"):
        vendors.close_account(request.user, request.validated_data.password)
    return ok(message="Account deleted successfully")
