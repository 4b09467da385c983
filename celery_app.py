import logging
import os

from celery import Celery
from celery.signals import task_failure, task_retry

logger = logging.getLogger(__name__)

NOTIFICATION_QUEUE = os.environ.get("CELERY_NOTIFICATION_QUEUE", "notifications")

celery_app = Celery(
    "arzaquna",
    broker=os.environ.get("CELERY_BROKER_URL", "memory://"),
    backend=os.environ.get("CELERY_RESULT_BACKEND", "cache+memory://"),
    include=["app.tasks.notifications"],
)
celery_app.conf.update(
    task_always_eager=os.environ.get("CELERY_TASK_ALWAYS_EAGER", "0") == "1",
    task_eager_propagates=True,
    task_store_eager_result=False,
    task_acks_late=True,
    task_default_queue=NOTIFICATION_QUEUE,
    task_routes={"app.tasks.notifications.*": {"queue": NOTIFICATION_QUEUE}},
)


@task_failure.connect
def _log_failure(sender=None, task_id=None, exception=None, args=None, **kwargs):
    logger.error("Notification task %s failed (args=%s): %s", getattr(sender, "name", task_id), args, exception)


@task_retry.connect
def _log_retry(sender=None, request=None, reason=None, **kwargs):
    logger.warning("Notification task %s retrying: %s", getattr(sender, "name", ""), reason)
