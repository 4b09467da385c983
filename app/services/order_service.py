from decimal import Decimal

from models import db
from models.order import Order, OrderItem, OrderStatus, OrderStatusLog
from models.product import Product
from models.user import Role
from models.vendor import Vendor
from models.notification import NotificationType
from app.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.services import notifications


def orders_for(user):
    if user.role is Role.VENDOR and user.vendor_profile is not None:
        query = Order.query.filter(Order.vendor_id == user.vendor_profile.id)
    else:
        query = Order.query.filter(Order.user_id == user.id)
    return query.order_by(Order.created_at.desc(), Order.id.desc())


def _is_vendor_of(user, order) -> bool:
    vendor = user.vendor_profile
    return vendor is not None and vendor.id == order.vendor_id


def get_order(user, order_id) -> Order:
    order = db.session.get(Order, order_id)
    if order is None:
        raise NotFoundError("Order not found")
    if user.role is not Role.ADMIN and order.user_id != user.id and not _is_vendor_of(user, order):
        raise AuthorizationError("Not authorized to view this order")
    return order


def create_order(user, data):
    """Place an order with one approved vendor; returns ``(order, notification)``."""
    vendor = db.session.get(Vendor, data.vendorId)
    if vendor is None or not vendor.is_approved:
        raise NotFoundError("Vendor not found or not approved")

    product_ids = {item.productId for item in data.items}
    products = {
        p.id: p
        for p in Product.query.filter(
            Product.id.in_(product_ids),
            Product.vendor_id == vendor.id,
            Product.is_active.is_(True),
            Product.is_approved.is_(True),
        ).all()
    }
    missing = sorted(product_ids - products.keys())
    if missing:
        raise ValidationError(
            "Some products are not available from this vendor",
            errors=[{"field": "items", "message": f"Product {pid} is not available"} for pid in missing],
        )

    order = Order(user_id=user.id, vendor_id=vendor.id, status=OrderStatus.PENDING, notes=data.notes)
    total = Decimal("0.00")
    for item in data.items:
        product = products[item.productId]
        price = Decimal(product.price)
        total += price * item.quantity
        order.items.append(
            OrderItem(product_id=product.id, name_en=product.name_en, quantity=item.quantity, price=price)
        )
    order.total_amount = total
    db.session.add(order)
    db.session.flush()

    db.session.add(OrderStatusLog(order_id=order.id, status=OrderStatus.PENDING.value, updated_by=user.id))
    notification = notifications.notify(
        vendor.user_id,
        NotificationType.ORDER,
        "طلب جديد",
        "New order",
        f"لديك طلب جديد رقم {order.id}",
        f"You have a new order #{order.id}",
        data={"orderId": order.id},
    )
    return order, notification


def update_status(user, order_id, status):
    """Change an order's status; returns ``(order, notification)``."""
    status = OrderStatus(status)
    order = db.session.get(Order, order_id)
    if order is None:
        raise NotFoundError("Order not found")

    if user.role is Role.ADMIN or _is_vendor_of(user, order):
        pass
    elif order.user_id == user.id:
        if status is not OrderStatus.CANCELLED:
            raise AuthorizationError("Users can only cancel their orders")
    else:
        raise AuthorizationError("Not authorized to update this order")

    order.status = status
    db.session.add(OrderStatusLog(order_id=order.id, status=status.value, updated_by=user.id))
    notification = None
    if order.user_id != user.id:
        notification = notifications.notify(
            order.user_id,
            NotificationType.ORDER,
            "تحديث الطلب",
            "Order update",
            f"تم تحديث حالة طلبك رقم {order.id}",
            f"Your order #{order.id} is now {status.value}",
            data={"orderId": order.id, "status": status.value},
        )
    return order, notification
