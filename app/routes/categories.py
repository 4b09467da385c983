from flask import Blueprint, request
from app.version import API_PREFIX
from app.utils import auth_required, ok, optional_auth, role_required, transactional, validate_schema
from app.schemas.catalog import CategoryRequest, CategoryUpdateRequest
from app.services import categories
from models.category import Category
from models.user import Role

categories_bp = Blueprint("categories", __name__, url_prefix=f"{API_PREFIX}/categories")


@categories_bp.route("", methods=["GET"])
def list_categories():
    items = Category.query.filter_by(is_active=True).order_by(Category.name_en.asc()).all()
    return ok([c.to_dict(counts=categories.category_counts(c.id)) for c in items])


@categories_bp.route("/<int:category_id>", methods=["GET"])
@optional_auth
def get_category(category_id):
    user = request.user
    is_admin = user is not None and user.role is Role.ADMIN
    category = categories.get_category(category_id, include_inactive=is_admin)
    return ok(category.to_dict(counts=categories.category_counts(category.id)))


@categories_bp.route("", methods=["POST"])
@auth_required
@role_required("ADMIN")
@validate_schema(CategoryRequest)
def create_category():
    with transactional("Failed to create category"):
        category = categories.create_category(request.validated_data)
    return ok(category.to_dict(), message="Category created successfully", status=201)


@categories_bp.route("/<int:category_id>", methods=["PUT"])
@auth_required
@role_required("ADMIN")
@validate_schema(CategoryUpdateRequest)
def update_category(category_id):
    category = categories.get_category(category_id, include_inactive=True)
    with transactional("Failed to update category"):
        categories.update_category(category, request.validated_data)
    return ok(category.to_dict(), message="Category updated successfully")


@categories_bp.route("/<int:category_id>", methods=["DELETE"])
@auth_required
@role_required("ADMIN")
def delete_category(category_id):
    category = categories.get_category(category_id, include_inactive=True)
    with transactional("Failed to delete category"):
        category.is_active = False
    return ok(message="Category deleted successfully")
