import logging

from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail

from car_auction.bids.models import Bid
from .models import Notification
from .utils import send_user_notification

logger = logging.getLogger(__name__)


def _auction_url(auction_id):
    return f"{settings.FRONTEND_URL.rstrip('/')}/auctions/{auction_id}"


def deliver_notification(recipient, kind, subject, message, data):
    """
    In-app (persisted + websocket) and email delivery. Each channel fails on
    its own; returns the names of the channels that went out.
    """
    delivered = []

    try:
        send_user_notification(recipient, message, kind=kind, data=data)
        delivered.append("in_app")
    except Exception:
        logger.exception(f"In-app {kind} notification to {recipient.email} failed")

    if recipient.email:
        try:
            send_mail(
                subject,
                f"{message}\n\n{_auction_url(data['auction_id'])}",
                settings.DEFAULT_FROM_EMAIL,
                [recipient.email],
                fail_silently=False,
            )
            delivered.append("email")
        except Exception:
            logger.exception(f"Email {kind} notification to {recipient.email} failed")

    return delivered


@shared_task
def notify_owner_of_bid(bid_id):
    """Tell the seller that a new bid was accepted on their auction."""
    bid = (
        Bid.objects
        .select_related("auction__car", "auction__seller", "bidder")
        .get(pk=bid_id)
    )
    auction = bid.auction

    message = f"New bid of {bid.amount} on your {auction.car}."
    data = {
        "auction_id": auction.id,
        "bid_id": bid.id,
        "amount": str(bid.amount),
    }
    delivered = deliver_notification(
        auction.seller, Notification.BID_RECEIVED, f"New bid on your {auction.car}", message, data,
    )
    logger.info(f"Owner notification for bid {bid.id} delivered via {delivered or 'nothing'}")
    return delivered


@shared_task
def notify_outbid_bidder(bid_id, previous_bid_id):
    """Tell the previous leader they have been outbid. Self-raises are silent."""
    bid = Bid.objects.select_related("auction__car", "bidder").get(pk=bid_id)
    previous = Bid.objects.select_related("bidder").get(pk=previous_bid_id)

    if previous.bidder_id == bid.bidder_id:
        return []

    auction = bid.auction
    message = f"You have been outbid on {auction.car}. The current price is {bid.amount}."
    data = {
        "auction_id": auction.id,
        "bid_id": bid.id,
        "amount": str(bid.amount),
    }
    delivered = deliver_notification(
        previous.bidder, Notification.OUTBID, f"You have been outbid on {auction.car}", message, data,
    )
    logger.info(f"Outbid notification for bid {bid.id} delivered via {delivered or 'nothing'}")
    return delivered
