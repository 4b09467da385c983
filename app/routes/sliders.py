from flask import Blueprint, request
from app.version import API_PREFIX
from app.utils import auth_required, ok, role_required, transactional, validate_schema
from app.schemas.content import SliderRequest, SliderUpdateRequest
from app.exceptions import NotFoundError
from models import db
from models.content import Slider

sliders_bp = Blueprint("sliders", __name__, url_prefix=f"{API_PREFIX}/sliders")

_FIELDS = {
    "image": "image",
    "titleAr": "title_ar",
    "titleEn": "title_en",
    "descriptionAr": "description_ar",
    "descriptionEn": "description_en",
    "icon": "icon",
    "link": "link",
    "order": "order",
    "isActive": "is_active",
}


def _get_slider(slider_id):
    slider = db.session.get(Slider, slider_id)
    if slider is None:
        raise NotFoundError("Slider not found")
    return slider


@sliders_bp.route("", methods=["GET"])
def list_sliders():
    items = Slider.query.filter_by(is_active=True).order_by(Slider.order.asc(), Slider.id.asc()).all()
    return ok([s.to_dict() for s in items])


@sliders_bp.route("/all", methods=["GET"])
@auth_required
@role_required("ADMIN")
def list_all_sliders():
    items = Slider.query.order_by(Slider.order.asc(), Slider.id.asc()).all()
    return ok([s.to_dict() for s in items])


@sliders_bp.route("", methods=["POST"])
@auth_required
@role_required("ADMIN")
@validate_schema(SliderRequest)
def create_slider():
    data: SliderRequest = request.validated_data
    with transactional("Failed to create slider"):
        slider = Slider(**{_FIELDS[k]: v for k, v in data.model_dump().items()})
        db.session.add(slider)
    return ok(slider.to_dict(), message="Slider created successfully", status=201)


@sliders_bp.route("/<int:slider_id>", methods=["PUT"])
@auth_required
@role_required("ADMIN")
@validate_schema(SliderUpdateRequest)
def update_slider(slider_id):
    slider = _get_slider(slider_id)
    with transactional("Failed to update slider"):
        for key, value in request.validated_data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(slider, _FIELDS[key], value)
    return ok(slider.to_dict(), message="Slider updated successfully")


@sliders_bp.route("/<int:slider_id>", methods=["DELETE"])
@auth_required
@role_required("ADMIN")
def delete_slider(slider_id):
    slider = _get_slider(slider_id)
    with transactional("Failed to delete slider"):
        db.session.delete(slider)
    return ok(message="Slider deleted successfully")
