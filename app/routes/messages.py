from flask import Blueprint, request
from app.version import API_PREFIX
from app.utils import auth_required, ok, page_params, paginate, role_required, transactional, validate_schema
from app.schemas.engagement import SendMessageRequest
from app.services import messages, notifications
from app.exceptions import ValidationError

messages_bp = Blueprint("messages", __name__, url_prefix=f"{API_PREFIX}/messages")


@messages_bp.route("", methods=["GET"])
@auth_required
def list_messages():
    box = request.args.get("type", "all")
    if box not in ("all", "sent", "received"):
        raise ValidationError("type must be one of: all, sent, received")
    page, limit = page_params()
    items, pagination = paginate(messages.list_messages(request.user.id, box), page, limit)
    return ok({"messages": [m.to_dict() for m in items], "pagination": pagination})


@messages_bp.route("/conversation/<int:other_user_id>", methods=["GET"])
@auth_required
def get_conversation(other_user_id):
    with transactional("Failed to load conversation"):
        items = messages.conversation(request.user.id, other_user_id)
    return ok([m.to_dict() for m in items])


@messages_bp.route("", methods=["POST"])
@auth_required
@role_required(["USER:send_message", "VENDOR:send_message", "ADMIN"])
@validate_schema(SendMessageRequest)
def send_message():
    with transactional("Failed to send message"):
        message, notification = messages.send_message(request.user, request.validated_data)
    if notification is not None:
        notifications.dispatch(notification)
    return ok(message.to_dict(), message="Message sent successfully", status=201)


@messages_bp.route("/<int:message_id>/read", methods=["PUT"])
@auth_required
def mark_message_read(message_id):
    with transactional("Failed to mark message as read"):
        message = messages.mark_read(request.user.id, message_id)
    return ok(message.to_dict(), message="Message marked as read")


@messages_bp.route("/unread/count", methods=["GET"])
@auth_required
def unread_count():
    return ok({"count": messages.unread_count(request.user.id)})
