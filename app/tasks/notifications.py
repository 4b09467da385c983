import logging
from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def deliver_notification_task(self, notification_id: int, user_id: int, notification_type: str, title: str) -> None:
    """Log the push delivery instead of calling a push provider."""
    logger.info(
        "[Push disabled] notification %s (%s) to user %s: %s",
        notification_id,
        notification_type,
        user_id,
        title,
    )
