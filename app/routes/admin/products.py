from flask import request
from . import admin_bp
from app.utils import ok, transactional, validate_schema
from app.schemas.catalog import AdminProductRequest, ProductUpdateRequest
from app.services import products


@admin_bp.route("/products", methods=["POST"])
@validate_schema(AdminProductRequest)
def create_product():
    """Create a product on behalf of a vendor. It is published immediately.
    ---
    tags: [Admin]
    responses:
      201: {description: Product created and approved}
      404: {description: Vendor or category not found}
    """
    with transactional("Failed to create product"):
        product = products.admin_create_product(request.validated_data)
    return ok(product.to_dict(), message="Product created successfully", status=201)


@admin_bp.route("/products/<int:product_id>", methods=["PUT"])
@validate_schema(ProductUpdateRequest)
def update_product(product_id):
    with transactional("Failed to update product"):
        product = products.admin_update_product(product_id, request.validated_data)
    return ok(product.to_dict(), message="Product updated successfully")
