from models import db
from models.category import Category
from models.product import Product
from models.vendor import Vendor, VendorCategory
from app.exceptions import NotFoundError


def find_categories_by_ids(ids, active_only=True):
    if not ids:
        return []
    query = Category.query.filter(Category.id.in_(ids))
    if active_only:
        query = query.filter(Category.is_active.is_(True))
    return query.all()


def category_exists(category_id, active_only=True) -> bool:
    return bool(find_categories_by_ids([category_id], active_only=active_only))


def require_categories(ids):
    """Return the categories for ``ids`` or raise if any is unknown or inactive."""
    wanted = set(ids)
    found = find_categories_by_ids(wanted)
    missing = wanted - {c.id for c in found}
    if missing:
        raise NotFoundError(
            "Category not found",
            errors=[{"field": "specialization", "message": f"Unknown category id {cid}"} for cid in sorted(missing)],
        )
    return found


def get_category(category_id, include_inactive=False) -> Category:
    category = db.session.get(Category, category_id)
    if category is None or (not category.is_active and not include_inactive):
        raise NotFoundError("Category not found")
    return category


def category_counts(category_id):
    vendors = (
        db.session.query(db.func.count(VendorCategory.vendor_id))
        .join(Vendor, Vendor.id == VendorCategory.vendor_id)
        .filter(VendorCategory.category_id == category_id, Vendor.is_approved.is_(True))
        .scalar()
    )
    products = Product.query.filter_by(category_id=category_id, is_active=True, is_approved=True).count()
    return {"vendors": vendors or 0, "products": products}


def create_category(data) -> Category:
    category = Category(
        name_ar=data.nameAr,
        name_en=data.nameEn,
        icon=data.icon,
        image=data.image,
    )
    db.session.add(category)
    db.session.flush()
    return category


def update_category(category: Category, data) -> Category:
    fields = data.model_dump(exclude_unset=True)
    mapping = {"nameAr": "name_ar", "nameEn": "name_en", "icon": "icon", "image": "image", "isActive": "is_active"}
    for key, attr in mapping.items():
        if key in fields and fields[key] is not None:
            setattr(category, attr, fields[key])
    return category
