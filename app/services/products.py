from datetime import datetime

from sqlalchemy import or_

from models import db
from models.product import Product, ProductSpecification
from models.user import Role
from models.vendor import Vendor, VendorCategory
from app.exceptions import AuthorizationError, NotFoundError
from app.services import categories

_FIELDS = {
    "categoryId": "category_id",
    "nameAr": "name_ar",
    "nameEn": "name_en",
    "price": "price",
    "age": "age",
    "weight": "weight",
    "images": "images",
    "descriptionAr": "description_ar",
    "descriptionEn": "description_en",
    "isBestProduct": "is_best_product",
}


def _ensure_vendor_category(vendor, category_id):
    link = VendorCategory.query.filter_by(vendor_id=vendor.id, category_id=category_id).first()
    if link is None:
        raise AuthorizationError("You are not authorized to add products in this category")


def _specifications(items):
    return [ProductSpecification(key=s.key, value_ar=s.valueAr, value_en=s.valueEn) for s in items]


def search_products(vendor_id=None, category_id=None, search=None, is_approved=True):
    query = Product.query.filter(Product.is_active.is_(True))
    if is_approved is not None:
        query = query.filter(Product.is_approved.is_(is_approved))
    if vendor_id:
        query = query.filter(Product.vendor_id == vendor_id)
    if category_id:
        query = query.filter(Product.category_id == category_id)
    if search:
        like = f"%{search}%"
        query = query.filter(or_(Product.name_en.ilike(like), Product.name_ar.ilike(like)))
    return query.order_by(Product.created_at.desc(), Product.id.desc())


def get_product(product_id, viewer=None) -> Product:
    """Fetch an active product; unapproved ones are visible to their vendor and admins only."""
    product = db.session.get(Product, product_id)
    if product is None or not product.is_active:
        raise NotFoundError("Product not found")
    if not product.is_approved and not _can_manage(viewer, product):
        raise NotFoundError("Product not found")
    return product


def _can_manage(user, product) -> bool:
    if user is None:
        return False
    if user.role is Role.ADMIN:
        return True
    vendor = user.vendor_profile
    return vendor is not None and vendor.id == product.vendor_id


def _new_product(vendor_id, data, approved) -> Product:
    product = Product(
        vendor_id=vendor_id,
        category_id=data.categoryId,
        name_ar=data.nameAr,
        name_en=data.nameEn,
        price=data.price,
        age=data.age,
        weight=data.weight,
        images=list(data.images),
        description_ar=data.descriptionAr,
        description_en=data.descriptionEn,
        is_best_product=data.isBestProduct,
        is_approved=approved,
        approved_at=datetime.utcnow() if approved else None,
    )
    product.specifications = _specifications(data.specifications)
    db.session.add(product)
    db.session.flush()
    return product


def create_product(vendor, data) -> Product:
    _ensure_vendor_category(vendor, data.categoryId)
    return _new_product(vendor.id, data, approved=False)


def _apply_fields(product, data):
    fields = data.model_dump(exclude_unset=True)
    for key, attr in _FIELDS.items():
        if key in fields and fields[key] is not None:
            setattr(product, attr, fields[key])
    if data.specifications is not None:
        product.specifications = _specifications(data.specifications)


def update_product(vendor, product_id, data) -> Product:
    product = db.session.get(Product, product_id)
    if product is None or not product.is_active or product.vendor_id != vendor.id:
        raise NotFoundError("Product not found or unauthorized")
    if data.categoryId is not None:
        _ensure_vendor_category(vendor, data.categoryId)
    _apply_fields(product, data)
    # edits go back through moderation
    product.is_approved = False
    product.approved_at = None
    return product


def delete_product(user, product_id):
    product = db.session.get(Product, product_id)
    if product is None or not product.is_active:
        raise NotFoundError("Product not found")
    if not _can_manage(user, product):
        raise AuthorizationError("Not authorized to delete this product")
    product.is_active = False
    return product


def set_approval(product_id, is_approved: bool) -> Product:
    product = db.session.get(Product, product_id)
    if product is None:
        raise NotFoundError("Product not found")
    product.is_approved = is_approved
    product.approved_at = datetime.utcnow() if is_approved else None
    return product


def admin_create_product(data) -> Product:
    """Create a product for any vendor; admin-made products skip moderation."""
    vendor = db.session.get(Vendor, data.vendorId)
    if vendor is None:
        raise NotFoundError("Vendor not found")
    categories.get_category(data.categoryId)
    return _new_product(vendor.id, data, approved=True)


def admin_update_product(product_id, data) -> Product:
    product = db.session.get(Product, product_id)
    if product is None or not product.is_active:
        raise NotFoundError("Product not found")
    if data.categoryId is not None:
        categories.get_category(data.categoryId)
    _apply_fields(product, data)
    product.is_approved = True
    product.approved_at = datetime.utcnow()
    return product


def vendor_category_products(vendor, category_id):
    if not any(link.category_id == category_id for link in vendor.categories):
        raise NotFoundError("Vendor does not have products in this category")
    return search_products(vendor_id=vendor.id, category_id=category_id)
