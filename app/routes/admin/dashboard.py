from flask import request
from . import admin_bp
from app.utils import ok, page_params, paginate, transactional, validate_schema
from app.schemas.engagement import CreateNotificationRequest
from app.services import identity, notifications, products, reports
from app.exceptions import ValidationError
from models.order import Order, OrderStatus


@admin_bp.route("/dashboard/stats", methods=["GET"])
def dashboard_stats():
    return ok(reports.dashboard_stats())


@admin_bp.route("/products/pending", methods=["GET"])
def pending_products():
    page, limit = page_params()
    items, pagination = paginate(products.search_products(is_approved=False), page, limit)
    return ok({"products": [p.to_dict() for p in items], "pagination": pagination})


@admin_bp.route("/orders", methods=["GET"])
def list_orders():
    query = Order.query
    status = request.args.get("status")
    if status:
        if status not in OrderStatus.__members__:
            raise ValidationError("Invalid status filter")
        query = query.filter(Order.status == OrderStatus(status))
    page, limit = page_params()
    items, pagination = paginate(query.order_by(Order.created_at.desc(), Order.id.desc()), page, limit)
    return ok({"orders": [o.to_dict() for o in items], "pagination": pagination})


@admin_bp.route("/reports", methods=["GET"])
def build_report():
    report = reports.build_report(
        request.args.get("type", "users"),
        request.args.get("startDate"),
        request.args.get("endDate"),
    )
    return ok(report)


@admin_bp.route("/notifications", methods=["POST"])
@validate_schema(CreateNotificationRequest)
def send_notification():
    data: CreateNotificationRequest = request.validated_data
    identity.get_user(data.userId)
    with transactional("Failed to send notification"):
        notification = notifications.notify(
            data.userId, data.type, data.titleAr, data.titleEn, data.messageAr, data.messageEn,
            data=data.data, strict=True,
        )
    notifications.dispatch(notification)
    return ok(notification.to_dict(), message="Notification sent successfully", status=201)
