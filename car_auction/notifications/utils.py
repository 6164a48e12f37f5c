import logging

from channels.layers import get_channel_layer
from asgiref.sync import async_to_sync

from .models import Notification

logger = logging.getLogger(__name__)


def send_user_notification(recipient, message, kind=Notification.BID_RECEIVED, data=None, save=True):
    """
    Create Notification (optional) and push to user's websocket group.
    :param recipient: User instance
    :param message: str
    :param kind: one of Notification.KIND_CHOICES
    :param data: dict optional structured payload
    :param save: if True, persist Notification to DB
    """
    payload = {
        "kind": kind,
        "message": message,
        "data": data or {},
        "is_read": False,
    }

    if save:
        n = Notification.objects.create(recipient=recipient, kind=kind, message=message, data=data or {})
        payload.update({
            "id": n.id,
            "created_at": n.created_at.isoformat(),
            "is_read": n.is_read,
        })

    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.warning("Channel layer not configured, skipping websocket push")
        return payload

    group = f"user_{recipient.id}"
    async_to_sync(channel_layer.group_send)(
        group,
        {
            "type": "notify",         # maps to `notify` method in consumer
            "payload": payload,
        },
    )
    return payload


def enqueue_bid_notifications(bid_id, previous_bid_id=None):
    """
    Hand the notifications for an accepted bid to the worker.

    Runs after the bid has committed; a broker outage is logged and dropped,
    the bid itself stands.
    """
    from .tasks import notify_owner_of_bid, notify_outbid_bidder

    try:
        notify_owner_of_bid.delay(bid_id)
        if previous_bid_id:
            notify_outbid_bidder.delay(bid_id, previous_bid_id)
    except Exception:
        logger.exception(f"Could not enqueue notifications for bid {bid_id}")
