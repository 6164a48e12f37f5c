import logging
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.db import transaction, OperationalError, InterfaceError
from django.utils import timezone

from car_auction.bids.exceptions import (
    BID_INCREMENT, MAX_BID_AMOUNT, AuctionEnded, AuctionNotActive, AuctionNotFound,
    BidTooLow, ConcurrentBidConflict, InvalidBidAmount, OwnerCannotBid, StorageUnavailable,
)
from car_auction.bids.models import Auction, Bid
from car_auction.notifications.utils import enqueue_bid_notifications
from car_auction.users.utils import is_admin

logger = logging.getLogger(__name__)


@contextmanager
def storage_guard(auction_id):
    """Translate lost connections / unreachable database into StorageUnavailable."""
    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        logger.error(f"Storage unavailable while bidding on auction {auction_id}: {exc}")
        raise StorageUnavailable() from exc


class BidService:

    @staticmethod
    def place_bid(*, auction_id, bidder, amount, now=None):
        """
        Place a bid with optimistic concurrency control.

        The auction is read once, validated, and then the price is advanced
        with a conditional update that only matches while the stored price is
        still the one we validated against. Losing that race raises
        ConcurrentBidConflict and leaves no bid behind.
        """
        now = now or timezone.now()
        amount = BidService.parse_amount(amount)

        auction = BidService.read_auction(auction_id)
        BidService.validate_bid(auction, bidder, amount, now)
        bid = BidService.commit_bid(auction, bidder, amount, now)

        logger.info(
            f"Bid {bid.id} of {amount} accepted on auction {auction.id} from {bidder.email} "
            f"(previous price {auction.current_price})"
        )
        BidService.schedule_notifications(bid, previous_bid_id=auction.winning_bid_id)
        return bid

    @staticmethod
    def parse_amount(amount):
        """
        Bids are whole cents below MAX_BID_AMOUNT. Anything finer would be
        rounded on its way into storage and the cached price would no longer
        match the value the next compare-and-swap expects.
        """
        try:
            amount = Decimal(str(amount))
            if not amount.is_finite() or amount <= 0:
                raise InvalidBidAmount()
            cents = amount.quantize(BID_INCREMENT)
        except InvalidOperation:
            raise InvalidBidAmount()

        if cents != amount or cents >= MAX_BID_AMOUNT:
            raise InvalidBidAmount()
        return cents

    @staticmethod
    def read_auction(auction_id):
        with storage_guard(auction_id):
            try:
                return Auction.objects.get(pk=auction_id)
            except (Auction.DoesNotExist, ValueError, TypeError):
                raise AuctionNotFound()

    @staticmethod
    def validate_bid(auction, bidder, amount, now):
        if auction.status != Auction.ACTIVE:
            raise AuctionNotActive()

        # the closer may not have run yet
        if now >= auction.end_at:
            raise AuctionEnded()

        if auction.seller_id == bidder.id:
            raise OwnerCannotBid()

        if amount <= auction.current_price:
            logger.info(
                f"Bid of {amount} on auction {auction.id} rejected, current price is {auction.current_price}"
            )
            raise BidTooLow(auction.current_price)

    @staticmethod
    def commit_bid(auction, bidder, amount, now):
        """
        Compare-and-swap on current_price, then record the bid and move the
        leading-bid pointer, all in one atomic unit.
        """
        with storage_guard(auction.id):
            with transaction.atomic():
                updated = (
                    Auction.objects
                    .filter(
                        pk=auction.pk,
                        status=Auction.ACTIVE,
                        current_price=auction.current_price,
                        end_at__gt=now,
                    )
                    .update(current_price=amount)
                )
                if updated != 1:
                    raise BidService._explain_lost_write(auction.pk, now)

                bid = Bid.objects.create(auction_id=auction.pk, bidder=bidder, amount=amount, created_at=now)
                Auction.objects.filter(pk=auction.pk).update(winning_bid=bid)

        return bid

    @staticmethod
    def _explain_lost_write(auction_id, now):
        state = Auction.objects.filter(pk=auction_id).values('status', 'end_at').first()
        if state is None:
            return AuctionNotFound()
        if state['status'] != Auction.ACTIVE:
            return AuctionNotActive()
        if now >= state['end_at']:
            return AuctionEnded()

        logger.warning(f"Concurrent bid conflict on auction {auction_id}")
        return ConcurrentBidConflict()

    @staticmethod
    def schedule_notifications(bid, previous_bid_id=None):
        if not settings.AUCTION_NOTIFICATIONS_ENABLED:
            return

        # never inside the pricing transaction
        transaction.on_commit(
            lambda: enqueue_bid_notifications(bid.id, previous_bid_id=previous_bid_id)
        )

    @staticmethod
    def get_bid_history(auction_id, limit=None):
        """Bids for one auction, newest first."""
        with storage_guard(auction_id):
            try:
                exists = Auction.objects.filter(pk=auction_id).exists()
            except (ValueError, TypeError):
                exists = False
            if not exists:
                raise AuctionNotFound()

            qs = (
                Bid.objects
                .filter(auction_id=auction_id)
                .select_related("bidder", "bidder__profile")
                .order_by("-created_at", "-id")
            )
            if limit:
                qs = qs[:limit]
            return list(qs)

    @staticmethod
    def get_bids_for_user(user):
        qs = (
            Bid.objects
            .select_related("bidder", "bidder__profile", "auction", "auction__car")
            .order_by("-created_at", "-id")
        )

        if is_admin(user):
            return qs

        return qs.filter(bidder=user)
