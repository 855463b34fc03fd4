# store/services/notification_service.py
from kombu.exceptions import OperationalError

from store.celery_worker import celery_app
from store.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Order notifications, dispatched through Celery so checkout never waits on them.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int) -> bool:
        # the order is already committed, a broker outage must not fail checkout
        try:
            send_order_notification_task.delay(user_id, order_id)
        except OperationalError as e:
            logger.error(f"Could not queue notification for order {order_id}: {e}")
            return False
        return True


@celery_app.task(name="store.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int):
    """
    Celery task. Only logs for now, a mail or push gateway would be called here.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} received")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
