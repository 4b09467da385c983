import logging

from flask import current_app

from models import db
from models.notification import Notification, NotificationSettings, NotificationType
from app.exceptions import NotFoundError, ValidationError
from app.tasks.notifications import deliver_notification_task

logger = logging.getLogger(__name__)


def get_settings(user_id) -> NotificationSettings:
    settings = NotificationSettings.query.filter_by(user_id=user_id).first()
    if settings is None:
        settings = NotificationSettings(user_id=user_id)
        db.session.add(settings)
        db.session.flush()
    return settings


def enabled_types(user_id):
    settings = get_settings(user_id)
    return [t for t in NotificationType if settings.allows(t)]


def dispatch(notification: Notification):
    args = (notification.id, notification.user_id, notification.type.value, notification.title_en)
    if current_app.config.get("TESTING"):
        deliver_notification_task(*args)
    else:
        deliver_notification_task.delay(*args)


def notify(user_id, notification_type, title_ar, title_en, message_ar, message_en, data=None, strict=False):
    """Create a notification if the user's settings allow that type.

    Returns the notification, or ``None`` when the type is disabled. With
    ``strict`` a disabled type raises instead.
    """
    notification_type = NotificationType(notification_type)
    if not get_settings(user_id).allows(notification_type):
        if strict:
            raise ValidationError(f"User has disabled {notification_type.value.lower()} notifications")
        logger.debug("notification of type %s suppressed for user %s", notification_type.value, user_id)
        return None
    notification = Notification(
        user_id=user_id,
        type=notification_type,
        title_ar=title_ar,
        title_en=title_en,
        message_ar=message_ar,
        message_en=message_en,
        data=data,
    )
    db.session.add(notification)
    db.session.flush()
    return notification


def list_for_user(user_id, notification_type=None, is_read=None):
    query = Notification.query.filter(
        Notification.user_id == user_id,
        Notification.type.in_(enabled_types(user_id)),
    )
    if notification_type:
        query = query.filter(Notification.type == NotificationType(notification_type))
    if is_read is not None:
        query = query.filter(Notification.is_read.is_(is_read))
    return query.order_by(Notification.created_at.desc(), Notification.id.desc())


def mark_read(user_id, notification_id) -> Notification:
    notification = Notification.query.filter_by(id=notification_id, user_id=user_id).first()
    if notification is None:
        raise NotFoundError("Notification not found")
    notification.is_read = True
    return notification


def mark_all_read(user_id) -> int:
    return (
        Notification.query
        .filter_by(user_id=user_id, is_read=False)
        .update({"is_read": True}, synchronize_session=False)
    )


def update_settings(user_id, data) -> NotificationSettings:
    settings = get_settings(user_id)
    mapping = {"orderEnabled": "order_enabled", "offerEnabled": "offer_enabled", "messageEnabled": "message_enabled"}
    for key, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(settings, mapping[key], value)
    return settings


def list_all(notification_type=None, user_id=None, is_read=None):
    query = Notification.query
    if notification_type:
        query = query.filter(Notification.type == NotificationType(notification_type))
    if user_id:
        query = query.filter(Notification.user_id == user_id)
    if is_read is not None:
        query = query.filter(Notification.is_read.is_(is_read))
    return query.order_by(Notification.created_at.desc(), Notification.id.desc())
