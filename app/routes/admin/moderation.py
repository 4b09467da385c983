from flask import request
from . import admin_bp
from app.utils import ok, page_params, paginate
from app.services import messages, notifications
from app.exceptions import ValidationError
from models.message import MessageType
from models.notification import NotificationType


def _enum_arg(name, enum, label):
    raw = request.args.get(name)
    if raw and raw not in enum.__members__:
        raise ValidationError(f"Invalid {label}")
    return raw or None


@admin_bp.route("/messages", methods=["GET"])
def list_messages():
    """All messages between users, newest first.
    ---
    tags: [Admin]
    parameters:
      - {name: type, in: query, type: string, enum: [SUPPORT, COMPLAINT, INQUIRY, GENERAL]}
      - {name: page, in: query, type: integer}
      - {name: limit, in: query, type: integer}
    responses:
      200: {description: Messages with sender and receiver}
    """
    query = messages.list_all(_enum_arg("type", MessageType, "message type"))
    page, limit = page_params()
    items, pagination = paginate(query, page, limit)
    return ok({"messages": [m.to_dict() for m in items], "pagination": pagination})


@admin_bp.route("/notifications", methods=["GET"])
def list_notifications():
    is_read = request.args.get("isRead")
    query = notifications.list_all(
        _enum_arg("type", NotificationType, "notification type"),
        request.args.get("userId", type=int),
        None if is_read is None else is_read.lower() in ("1", "true", "yes"),
    )
    page, limit = page_params()
    items, pagination = paginate(query, page, limit)
    data = [
        {**n.to_dict(), "user": n.user.to_summary() if n.user is not None else None}
        for n in items
    ]
    return ok({"notifications": data, "pagination": pagination})
