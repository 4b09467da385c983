from sqlalchemy import and_, or_

from models import db
from models.message import Message, MessageType
from models.notification import NotificationType
from models.user import Role, User
from app.exceptions import AuthorizationError, InternalError, NotFoundError
from app.services import notifications

# roles each sender role may write to
ALLOWED_RECIPIENTS = {
    Role.USER: {Role.VENDOR, Role.ADMIN},
    Role.VENDOR: {Role.USER, Role.ADMIN},
    Role.ADMIN: {Role.USER, Role.VENDOR, Role.ADMIN},
}


def list_messages(user_id, box="all"):
    query = Message.query
    if box == "sent":
        query = query.filter(Message.sender_id == user_id)
    elif box == "received":
        query = query.filter(Message.receiver_id == user_id)
    else:
        query = query.filter(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
    return query.order_by(Message.created_at.desc(), Message.id.desc())


def conversation(user_id, other_id):
    messages = (
        Message.query
        .filter(
            or_(
                and_(Message.sender_id == user_id, Message.receiver_id == other_id),
                and_(Message.sender_id == other_id, Message.receiver_id == user_id),
            )
        )
        .order_by(Message.created_at.asc(), Message.id.asc())
        .all()
    )
    (
        Message.query
        .filter_by(sender_id=other_id, receiver_id=user_id, is_read=False)
        .update({"is_read": True}, synchronize_session=False)
    )
    return messages


def send_message(sender, data):
    """Send a message; returns ``(message, notification)``."""
    receiver = db.session.get(User, data.receiverId)
    if receiver is None or not receiver.is_active:
        raise NotFoundError("Receiver not found")
    if receiver.role not in ALLOWED_RECIPIENTS[sender.role]:
        raise AuthorizationError(
            f"{sender.role.value.capitalize()}s cannot send messages to {receiver.role.value.lower()}s"
        )
    message = Message(
        sender_id=sender.id,
        receiver_id=receiver.id,
        subject=data.subject,
        content_ar=data.contentAr,
        content_en=data.contentEn,
        type=data.type,
    )
    db.session.add(message)
    db.session.flush()
    notification = notifications.notify(
        receiver.id,
        NotificationType.MESSAGE,
        "رسالة جديدة",
        "New message",
        f"لديك رسالة جديدة من {sender.full_name}",
        f"You have a new message from {sender.full_name}",
        data={"messageId": message.id, "senderId": sender.id},
    )
    return message, notification


def mark_read(user_id, message_id) -> Message:
    message = Message.query.filter_by(id=message_id, receiver_id=user_id).first()
    if message is None:
        raise NotFoundError("Message not found")
    message.is_read = True
    return message


def unread_count(user_id) -> int:
    return Message.query.filter_by(receiver_id=user_id, is_read=False).count()


def list_all(message_type=None):
    """Every message on the platform, for moderation."""
    query = Message.query
    if message_type:
        query = query.filter(Message.type == MessageType(message_type))
    return query.order_by(Message.created_at.desc(), Message.id.desc())


def support_recipient() -> User:
    admin = (
        User.query
        .filter(User.role == Role.ADMIN, User.is_active.is_(True))
        .order_by(User.id.asc())
        .first()
    )
    if admin is None:
        raise InternalError("No admin available to receive support ticket")
    return admin


def open_support_ticket(sender, data):
    """File a ticket as a message to the first active admin; returns ``(message, notification)``."""
    admin = support_recipient()
    message = Message(
        sender_id=sender.id,
        receiver_id=admin.id,
        subject=data.subject,
        content_ar=data.contentAr,
        content_en=data.contentEn,
        type=data.type,
    )
    db.session.add(message)
    db.session.flush()
    notification = notifications.notify(
        admin.id,
        NotificationType.MESSAGE,
        "تذكرة دعم جديدة",
        "New support ticket",
        f"تذكرة جديدة من {sender.full_name}: {data.subject}",
        f"New ticket from {sender.full_name}: {data.subject}",
        data={"messageId": message.id, "senderId": sender.id},
    )
    return message, notification
