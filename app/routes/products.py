from flask import Blueprint, request
from app.version import API_PREFIX
from app.utils import (
    auth_required,
    ok,
    optional_auth,
    page_params,
    paginate,
    role_required,
    transactional,
    validate_schema,
    vendor_required,
)
from app.schemas.catalog import ProductApprovalRequest, ProductRequest, ProductUpdateRequest
from app.services import products
from models.user import Role

products_bp = Blueprint("products", __name__, url_prefix=f"{API_PREFIX}/products")


def _approval_filter(user):
    """Only admins may look past the approval gate."""
    if user is None or user.role is not Role.ADMIN:
        return True
    raw = request.args.get("isApproved")
    if raw is None:
        return None
    return raw.lower() in ("1", "true", "yes")


@products_bp.route("", methods=["GET"])
@optional_auth
def list_products():
    query = products.search_products(
        vendor_id=request.args.get("vendorId", type=int),
        category_id=request.args.get("categoryId", type=int),
        search=request.args.get("search"),
        is_approved=_approval_filter(request.user),
    )
    page, limit = page_params()
    items, pagination = paginate(query, page, limit)
    return ok({"products": [p.to_dict() for p in items], "pagination": pagination})


@products_bp.route("/<int:product_id>", methods=["GET"])
@optional_auth
def get_product(product_id):
    return ok(products.get_product(product_id, viewer=request.user).to_dict())


@products_bp.route("", methods=["POST"])
@auth_required
@role_required("VENDOR:manage_products")
@vendor_required
@validate_schema(ProductRequest)
def create_product():
    with transactional("Failed to create product"):
        product = products.create_product(request.vendor, request.validated_data)
    return ok(product.to_dict(), message="Product created successfully. Pending admin approval.", status=201)


@products_bp.route("/<int:product_id>", methods=["PUT"])
@auth_required
@role_required("VENDOR:manage_products")
@vendor_required
@validate_schema(ProductUpdateRequest)
def update_product(product_id):
    with transactional("Failed to update product"):
        product = products.update_product(request.vendor, product_id, request.validated_data)
    return ok(product.to_dict(), message="Product updated successfully. Pending admin approval.")


@products_bp.route("/<int:product_id>", methods=["DELETE"])
@auth_required
@role_required(["VENDOR:manage_products", "ADMIN"])
def delete_product(product_id):
    with transactional("Failed to delete product"):
        products.delete_product(request.user, product_id)
    return ok(message="Product deleted successfully")


@products_bp.route("/<int:product_id>/approve", methods=["PUT"])
@auth_required
@role_required("ADMIN")
@validate_schema(ProductApprovalRequest)
def approve_product(product_id):
    is_approved = request.validated_data.isApproved
    with transactional("Failed to update product approval"):
        product = products.set_approval(product_id, is_approved)
    state = "approved" if is_approved else "unapproved"
    return ok(product.to_dict(), message=f"Product {state} successfully")
