from flask import request
from . import mobile_bp
from app.utils import auth_required, ok, transactional, validate_schema
from app.schemas.engagement import SupportTicketRequest
from app.services import messages, notifications
from models import isoformat


@mobile_bp.route("/messages/support/ticket", methods=["POST"])
@auth_required
@validate_schema(SupportTicketRequest)
def open_support_ticket():
    """Send a support, complaint or inquiry ticket to the admins.
    ---
    tags: [Engagement]
    responses:
      201: {description: Ticket filed}
      400: {description: Missing subject or content, or unsupported type}
      500: {description: No active admin to receive it}
    """
    with transactional("Failed to create support ticket"):
        message, notification = messages.open_support_ticket(request.user, request.validated_data)
    if notification is not None:
        notifications.dispatch(notification)
    return ok(
        {
            "ticket_id": message.id,
            "subject": message.subject,
            "type": message.type.value,
            "created_at": isoformat(message.created_at),
        },
        message="Support ticket created successfully. Our team will respond soon.",
        status=201,
    )
