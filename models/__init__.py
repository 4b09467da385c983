from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import BigInteger, Integer

# Use BigInteger in production but fall back to Integer for SQLite
BIGINT = BigInteger().with_variant(Integer, "sqlite")

db = SQLAlchemy()


def isoformat(value):
    return value.isoformat() if value else None


# Re-export common models for convenience
from .user import User, Role, RoleChangeLog  # noqa: F401,E402
from .category import Category  # noqa: F401,E402
from .vendor import (  # noqa: F401,E402
    ApplicationStatus,
    Vendor,
    VendorApplication,
    VendorApplicationCategory,
    VendorApplicationLog,
    VendorCategory,
)
from .product import Product, ProductSpecification  # noqa: F401,E402
from .order import Order, OrderItem, OrderStatus, OrderStatusLog  # noqa: F401,E402
from .favorite import Favorite  # noqa: F401,E402
from .message import Message, MessageType  # noqa: F401,E402
from .notification import Notification, NotificationSettings, NotificationType  # noqa: F401,E402
from .status import Status  # noqa: F401,E402
from .content import AppContent, ContentType, Slider  # noqa: F401,E402
