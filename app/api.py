from app.routes import (
    auth_bp,
    users_bp,
    vendors_bp,
    mobile_bp,
    categories_bp,
    products_bp,
    orders_bp,
    favorites_bp,
    messages_bp,
    notifications_bp,
    statuses_bp,
    sliders_bp,
    app_content_bp,
    admin_bp,
)


def register_api_v1(app):
    """Register blueprint routes under the API version prefix."""
    for bp in (
        auth_bp,
        users_bp,
        vendors_bp,
        mobile_bp,
        categories_bp,
        products_bp,
        orders_bp,
        favorites_bp,
        messages_bp,
        notifications_bp,
        statuses_bp,
        sliders_bp,
        app_content_bp,
        admin_bp,
    ):
        app.register_blueprint(bp)
