"""Admin dashboard figures and date-ranged reports."""
from datetime import datetime, timedelta

from models import db
from models.category import Category
from models.order import Order, OrderStatus
from models.product import Product
from models.user import Role, User
from models.vendor import ApplicationStatus, Vendor, VendorApplication
from app.exceptions import ValidationError

REPORT_TYPES = ("users", "vendors", "products", "orders")


def dashboard_stats():
    return {
        "totalUsers": User.query.filter_by(role=Role.USER).count(),
        "totalVendors": Vendor.query.filter_by(is_approved=True).count(),
        "totalProducts": Product.query.filter_by(is_active=True).count(),
        "pendingApplications": VendorApplication.query.filter_by(status=ApplicationStatus.PENDING).count(),
        "pendingProducts": Product.query.filter_by(is_active=True, is_approved=False).count(),
        "totalOrders": Order.query.count(),
        "totalCategories": Category.query.filter_by(is_active=True).count(),
    }


def _parse_date(value, field):
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError(
            "Invalid date",
            errors=[{"field": field, "message": "Use ISO format YYYY-MM-DD"}],
        )


def _grouped(model, column, start, end):
    query = db.session.query(column, db.func.count(model.id))
    if start:
        query = query.filter(model.created_at >= start)
    if end:
        query = query.filter(model.created_at < end)
    rows = query.group_by(column).all()
    return {(k.value if hasattr(k, "value") else str(k)): count for k, count in rows}


def build_report(report_type, start_date=None, end_date=None):
    if report_type not in REPORT_TYPES:
        raise ValidationError(f"Report type must be one of: {', '.join(REPORT_TYPES)}")
    start = _parse_date(start_date, "startDate")
    end = _parse_date(end_date, "endDate")
    if end is not None and len(end_date) == 10:
        # a bare date includes the whole day
        end = end + timedelta(days=1)

    if report_type == "users":
        breakdown = _grouped(User, User.role, start, end)
    elif report_type == "vendors":
        breakdown = {
            ("approved" if k == "True" else "pending"): v
            for k, v in _grouped(Vendor, Vendor.is_approved, start, end).items()
        }
    elif report_type == "products":
        breakdown = {
            ("approved" if k == "True" else "pending"): v
            for k, v in _grouped(Product, Product.is_approved, start, end).items()
        }
    else:
        breakdown = _grouped(Order, Order.status, start, end)

    revenue_query = db.session.query(db.func.coalesce(db.func.sum(Order.total_amount), 0)).filter(
        Order.status == OrderStatus.COMPLETED
    )
    if start:
        revenue_query = revenue_query.filter(Order.created_at >= start)
    if end:
        revenue_query = revenue_query.filter(Order.created_at < end)

    return {
        "type": report_type,
        "startDate": start_date,
        "endDate": end_date,
        "total": sum(breakdown.values()),
        "breakdown": breakdown,
        "summary": {
            "totalUsers": User.query.count(),
            "totalVendors": Vendor.query.filter_by(is_approved=True).count(),
            "totalProducts": Product.query.filter_by(is_active=True).count(),
            "totalOrders": Order.query.count(),
            "totalRevenue": float(revenue_query.scalar() or 0),
        },
    }
