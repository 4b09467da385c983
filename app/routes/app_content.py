from flask import Blueprint, request
from app.version import API_PREFIX
from app.utils import auth_required, ok, role_required, transactional, validate_schema
from app.schemas.content import AppContentRequest
from app.exceptions import NotFoundError
from models import db
from models.content import AppContent, ContentType

app_content_bp = Blueprint("app_content", __name__, url_prefix=f"{API_PREFIX}/app-content")


def _content_type(raw):
    try:
        return ContentType(raw.upper())
    except ValueError:
        raise NotFoundError("Content type not found")


@app_content_bp.route("", methods=["GET"])
@auth_required
@role_required("ADMIN")
def list_content():
    return ok([c.to_dict() for c in AppContent.query.order_by(AppContent.type.asc()).all()])


@app_content_bp.route("/<content_type>", methods=["GET"])
def get_content(content_type):
    content = AppContent.query.filter_by(type=_content_type(content_type)).first()
    if content is None:
        raise NotFoundError("Content not found")
    return ok(content.to_dict())


@app_content_bp.route("/<content_type>", methods=["PUT"])
@auth_required
@role_required("ADMIN")
@validate_schema(AppContentRequest)
def upsert_content(content_type):
    ctype = _content_type(content_type)
    data: AppContentRequest = request.validated_data
    with transactional("Failed to update app content"):
        content = AppContent.query.filter_by(type=ctype).first()
        if content is None:
            content = AppContent(type=ctype)
            db.session.add(content)
        content.content_ar = data.contentAr
        content.content_en = data.contentEn
        content.updated_by = request.user.id
    return ok(content.to_dict(), message="Content updated successfully")
