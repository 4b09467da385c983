"""Actions each role may perform.

Routes reference these as ``"ROLE:action"`` in ``role_required``. Ownership
checks (whose order, whose product) stay in the services.
"""
ROLE_SCOPES = {
    "USER": {"apply_vendor", "place_order", "send_message"},
    "VENDOR": {"manage_products", "publish_status", "send_notification", "send_message"},
    "ADMIN": {"*"},
}


def role_has_scope(role: str, action: str) -> bool:
    scopes = ROLE_SCOPES.get(role, set())
    return "*" in scopes or action in scopes
