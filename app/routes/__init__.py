from .auth import auth_bp
from .users import users_bp
from .vendor import vendors_bp
from .mobile import mobile_bp
from .categories import categories_bp
from .products import products_bp
from .orders import orders_bp
from .favorites import favorites_bp
from .messages import messages_bp
from .notifications import notifications_bp
from .statuses import statuses_bp
from .sliders import sliders_bp
from .app_content import app_content_bp
from .admin import admin_bp


__all__ = [
    'auth_bp',
    'users_bp',
    'vendors_bp',
    'mobile_bp',
    'categories_bp',
    'products_bp',
    'orders_bp',
    'favorites_bp',
    'messages_bp',
    'notifications_bp',
    'statuses_bp',
    'sliders_bp',
    'app_content_bp',
    'admin_bp',
]
