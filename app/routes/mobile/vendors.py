from flask import current_app, request
from extensions import limiter
from . import mobile_bp
from app.utils import auth_required, ok, page_params, paginate, role_required, transactional, validate_schema
from app.schemas.vendor import DeleteVendorAccountRequest, MobileVendorRegisterRequest
from app.services import products, vendor_applications, vendors
from models import isoformat
from models.status import Status


def _snake_vendor(vendor):
    return {
        "id": vendor.id,
        "store_name": vendor.store_name,
        "city": vendor.city,
        "region": vendor.region,
        "years_of_experience": vendor.years_of_experience,
        "whatsapp_number": vendor.whatsapp_number,
        "call_number": vendor.call_number,
        "categories": [
            {"id": link.category.id, "name_ar": link.category.name_ar, "name_en": link.category.name_en}
            for link in vendor.categories
        ],
        "products_count": vendors.vendor_counts(vendor.id)["products"],
    }


def _snake_product(product):
    return {
        "id": product.id,
        "name_ar": product.name_ar,
        "name_en": product.name_en,
        "price": float(product.price),
        "age": product.age,
        "weight": product.weight,
        "images": list(product.images or []),
        "description_ar": product.description_ar,
        "description_en": product.description_en,
        "rating": product.rating,
        "is_best_product": product.is_best_product,
        "specifications": [
            {"key": s.key, "value_ar": s.value_ar, "value_en": s.value_en} for s in product.specifications
        ],
        "created_at": isoformat(product.created_at),
    }


@mobile_bp.route("/vendors/register", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["APPLY_LIMIT_PER_IP"],
    error_message="Too many vendor applications from this IP",
)
@auth_required
@role_required(("USER:apply_vendor", "VENDOR"))
@validate_schema(MobileVendorRegisterRequest)
def register_vendor():
    """Update the caller's profile and submit a vendor application together.
    ---
    tags: [Vendor Applications]
    responses:
      201: {description: Profile updated and application created}
      400: {description: "Invalid input, already applied, or email/phone taken"}
    """
    data: MobileVendorRegisterRequest = request.validated_data
    with transactional("Failed to register vendor"):
        application = vendor_applications.register_vendor_with_profile(request.user, data)
    return ok(
        {"application": application.to_dict(), "user": request.user.to_dict()},
        message="Vendor application submitted successfully. It will be reviewed within 24 hours.",
        status=201,
    )


@mobile_bp.route("/vendors/search", methods=["GET"])
def search_vendors():
    page, limit = page_params()
    query = vendors.approved_vendors(
        category_id=request.args.get("categoryId", type=int),
        city=request.args.get("city"),
        region=request.args.get("region"),
        search=request.args.get("q"),
    )
    items, pagination = paginate(query, page, limit)
    return ok({"vendors": [_snake_vendor(v) for v in items], "pagination": pagination})


@mobile_bp.route("/vendors/<int:vendor_id>/profile", methods=["GET"])
def vendor_profile(vendor_id):
    """Public profile of an approved vendor.
    ---
    tags: [Vendors]
    responses:
      200: {description: Vendor profile with owner, contact and counts}
      404: {description: Vendor not found}
    """
    vendor = vendors.get_approved_vendor(vendor_id)
    owner = vendor.user
    counts = vendors.vendor_counts(vendor.id)
    return ok({
        "id": vendor.id,
        "store_name": vendor.store_name,
        "owner": {"id": owner.id, "full_name": owner.full_name, "email": owner.email, "phone": owner.phone},
        "location": {"city": vendor.city, "region": vendor.region},
        "years_experience": vendor.years_of_experience,
        "contact": {"whatsapp": vendor.whatsapp_number, "call": vendor.call_number},
        "categories": [
            {"id": link.category.id, "name_ar": link.category.name_ar, "name_en": link.category.name_en}
            for link in vendor.categories
        ],
        "stats": {"products_count": counts["products"], "offers_count": counts["statuses"]},
        "created_at": isoformat(vendor.created_at),
    })


@mobile_bp.route("/vendors/<int:vendor_id>/contact-info", methods=["GET"])
def vendor_contact_info(vendor_id):
    vendor = vendors.get_approved_vendor(vendor_id)
    owner = vendor.user
    return ok({
        "vendor_id": vendor.id,
        "store_name": vendor.store_name,
        "owner_name": owner.full_name,
        "contact": {
            "whatsapp": vendor.whatsapp_number,
            "call": vendor.call_number,
            "email": owner.email,
            "phone": owner.phone,
        },
    })


@mobile_bp.route("/vendors/<int:vendor_id>/category/<int:category_id>/products", methods=["GET"])
def vendor_category_products(vendor_id, category_id):
    vendor = vendors.get_approved_vendor(vendor_id)
    page, limit = page_params()
    items, pagination = paginate(products.vendor_category_products(vendor, category_id), page, limit)
    return ok({
        "vendor": {"id": vendor.id, "store_name": vendor.store_name},
        "category_id": category_id,
        "products": [_snake_product(p) for p in items],
        "pagination": pagination,
    })


@mobile_bp.route("/vendors/<int:vendor_id>/statuses", methods=["GET"])
def vendor_statuses(vendor_id):
    vendor = vendors.get_approved_vendor(vendor_id)
    query = Status.query.filter_by(vendor_id=vendor.id, is_active=True).order_by(
        Status.created_at.desc(), Status.id.desc()
    )
    page, limit = page_params()
    items, pagination = paginate(query, page, limit)
    offers = [
        {
            "id": s.id,
            "image": s.image,
            "price": float(s.price) if s.price is not None else None,
            "title_ar": s.title_ar,
            "title_en": s.title_en,
            "description_ar": s.description_ar,
            "description_en": s.description_en,
            "product_id": s.product_id,
            "created_at": isoformat(s.created_at),
        }
        for s in items
    ]
    return ok({"statuses": offers, "pagination": pagination})


@mobile_bp.route("/vendors/account", methods=["DELETE"])
@auth_required
@role_required("VENDOR")
@validate_schema(DeleteVendorAccountRequest)
def delete_vendor_account():
    with transactional("Failed to delete vendor account"):
        vendors.delete_own_account(request.user, request.validated_data.password)
    return ok(message="Vendor account deleted successfully")
