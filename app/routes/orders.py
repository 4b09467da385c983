from flask import Blueprint, current_app, request
from app.version import API_PREFIX
from extensions import limiter
from app.utils import auth_required, ok, page_params, paginate, role_required, transactional, validate_schema
from app.schemas.orders import CreateOrderRequest, OrderStatusRequest
from app.services import notifications, order_service

orders_bp = Blueprint("orders", __name__, url_prefix=f"{API_PREFIX}/orders")


@orders_bp.route("", methods=["GET"])
@auth_required
def list_orders():
    page, limit = page_params()
    items, pagination = paginate(order_service.orders_for(request.user), page, limit)
    return ok({"orders": [o.to_dict() for o in items], "pagination": pagination})


@orders_bp.route("/<int:order_id>", methods=["GET"])
@auth_required
def get_order(order_id):
    return ok(order_service.get_order(request.user, order_id).to_dict())


@orders_bp.route("", methods=["POST"])
@limiter.limit(lambda: current_app.config.get("ORDER_LIMIT_PER_IP", "30 per hour"))
@auth_required
@role_required("USER:place_order")
@validate_schema(CreateOrderRequest)
def create_order():
    with transactional("Failed to create order"):
        order, notification = order_service.create_order(request.user, request.validated_data)
    if notification is not None:
        notifications.dispatch(notification)
    return ok(order.to_dict(), message="Order created successfully", status=201)


@orders_bp.route("/<int:order_id>/status", methods=["PUT"])
@auth_required
@validate_schema(OrderStatusRequest)
def update_order_status(order_id):
    with transactional("Failed to update order status"):
        order, notification = order_service.update_status(
            request.user, order_id, request.validated_data.status
        )
    if notification is not None:
        notifications.dispatch(notification)
    return ok(order.to_dict(), message="Order status updated successfully")
