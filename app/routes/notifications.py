from flask import Blueprint, request
from app.version import API_PREFIX
from app.utils import auth_required, ok, page_params, paginate, role_required, transactional, validate_schema
from app.schemas.engagement import CreateNotificationRequest, NotificationSettingsRequest
from app.services import identity, notifications
from app.exceptions import ValidationError
from models.notification import NotificationType

notifications_bp = Blueprint("notifications", __name__, url_prefix=f"{API_PREFIX}/notifications")


def _bool_arg(name):
    raw = request.args.get(name)
    if raw is None:
        return None
    return raw.lower() in ("1", "true", "yes")


@notifications_bp.route("", methods=["GET"])
@auth_required
def list_notifications():
    ntype = request.args.get("type")
    if ntype and ntype not in NotificationType.__members__:
        raise ValidationError("Invalid notification type")
    with transactional("Failed to load notifications"):
        query = notifications.list_for_user(request.user.id, ntype, _bool_arg("isRead"))
        page, limit = page_params()
        items, pagination = paginate(query, page, limit)
        data = {"notifications": [n.to_dict() for n in items], "pagination": pagination}
    return ok(data)


@notifications_bp.route("/<int:notification_id>/read", methods=["PUT"])
@auth_required
def mark_notification_read(notification_id):
    with transactional("Failed to mark notification as read"):
        notification = notifications.mark_read(request.user.id, notification_id)
    return ok(notification.to_dict(), message="Notification marked as read")


@notifications_bp.route("/read-all", methods=["PUT"])
@auth_required
def mark_all_notifications_read():
    with transactional("Failed to mark notifications as read"):
        count = notifications.mark_all_read(request.user.id)
    return ok({"updated": count}, message="All notifications marked as read")


@notifications_bp.route("/settings", methods=["GET"])
@auth_required
def get_notification_settings():
    with transactional("Failed to load notification settings"):
        settings = notifications.get_settings(request.user.id)
        data = settings.to_dict()
    return ok(data)


@notifications_bp.route("/settings", methods=["PUT"])
@auth_required
@validate_schema(NotificationSettingsRequest)
def update_notification_settings():
    with transactional("Failed to update notification settings"):
        settings = notifications.update_settings(request.user.id, request.validated_data)
        data = settings.to_dict()
    return ok(data, message="Notification settings updated successfully")


@notifications_bp.route("", methods=["POST"])
@auth_required
@role_required(["ADMIN", "VENDOR:send_notification"])
@validate_schema(CreateNotificationRequest)
def create_notification():
    data: CreateNotificationRequest = request.validated_data
    identity.get_user(data.userId)
    with transactional("Failed to create notification"):
        notification = notifications.notify(
            data.userId,
            data.type,
            data.titleAr,
            data.titleEn,
            data.messageAr,
            data.messageEn,
            data=data.data,
            strict=True,
        )
    notifications.dispatch(notification)
    return ok(notification.to_dict(), message="Notification created successfully", status=201)
