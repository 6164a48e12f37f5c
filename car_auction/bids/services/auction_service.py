import logging

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone
from rest_framework.exceptions import ValidationError, PermissionDenied

from car_auction.bids.exceptions import AuctionNotActive, AuctionNotFound
from car_auction.bids.models import Auction
from car_auction.bids.selectors.bid_queries import get_highest_bid
from car_auction.inventory.models import Car
from car_auction.users.utils import is_admin

logger = logging.getLogger(__name__)


class AuctionService:

    @staticmethod
    def base_queryset() -> QuerySet:
        return Auction.objects.select_related("car", "seller", "seller__profile", "winning_bid")

    @staticmethod
    def get_auctions_for_user(user, status=Auction.ACTIVE) -> QuerySet:
        """
        Everyone may browse active auctions; closed and cancelled ones are
        admin-only.
        """
        valid_statuses = [choice[0] for choice in Auction.STATUS_CHOICES]
        if status not in valid_statuses:
            raise ValidationError(f"Invalid status. Allowed: {', '.join(valid_statuses)}")

        if status != Auction.ACTIVE and not is_admin(user):
            raise PermissionDenied("Admin access required to view this status.")

        return AuctionService.base_queryset().filter(status=status)

    @staticmethod
    def is_active(auction: Auction, now=None) -> bool:
        now = now or timezone.now()
        return auction.status == Auction.ACTIVE and now < auction.end_at

    @staticmethod
    @transaction.atomic
    def create_auction(*, seller, car_data, starting_price, end_at, reserve_price=None, now=None):
        now = now or timezone.now()

        if end_at <= now:
            raise ValidationError({"end_at": "Auction end date must be in the future."})
        if starting_price <= 0:
            raise ValidationError({"starting_price": "Starting price must be greater than zero."})
        if reserve_price is not None and reserve_price <= 0:
            raise ValidationError({"reserve_price": "Reserve price must be greater than zero."})

        car = Car.objects.create(posted_by=seller, **car_data)
        auction = Auction.objects.create(
            car=car,
            seller=seller,
            starting_price=starting_price,
            current_price=starting_price,
            reserve_price=reserve_price,
            end_at=end_at,
            status=Auction.ACTIVE,
        )
        logger.info(f"Auction {auction.id} created by {seller.email} for {car}, ends {end_at.isoformat()}")
        return auction

    @staticmethod
    @transaction.atomic
    def cancel_auction(*, auction_id, actor, now=None):
        now = now or timezone.now()
        try:
            auction = Auction.objects.select_for_update().get(pk=auction_id)
        except (Auction.DoesNotExist, ValueError, TypeError):
            raise AuctionNotFound()

        if not (is_admin(actor) or auction.seller_id == actor.id):
            raise PermissionDenied("Only the seller or an admin can cancel this auction.")

        updated = (
            Auction.objects
            .filter(pk=auction.pk, status=Auction.ACTIVE)
            .update(status=Auction.CANCELLED, winning_bid=None, closed_at=now)
        )
        if not updated:
            raise AuctionNotActive("Only active auctions can be cancelled.")

        auction.refresh_from_db()
        logger.info(f"Auction {auction.id} cancelled by {actor.email}")
        return auction

    @staticmethod
    @transaction.atomic
    def close_auction(auction_id, now=None):
        """
        Resolve one ended auction. Returns the updated auction, or None when
        another sweep (or a cancellation) already moved it out of active.
        """
        now = now or timezone.now()

        # Row lock: bids committed before this point are part of the decision,
        # bids attempted after it find the auction no longer active.
        auction = (
            Auction.objects
            .select_for_update()
            .get(pk=auction_id)
        )

        if auction.status != Auction.ACTIVE:
            return None

        if auction.end_at > now:
            raise ValidationError("Auction has not ended yet.")

        highest_bid = get_highest_bid(auction)

        if highest_bid is None or (
            auction.reserve_price is not None and highest_bid.amount < auction.reserve_price
        ):
            status, winning_bid = Auction.RESERVE_NOT_MET, None
        else:
            status, winning_bid = Auction.COMPLETED, highest_bid

        updated = (
            Auction.objects
            .filter(pk=auction.pk, status=Auction.ACTIVE)
            .update(status=status, winning_bid=winning_bid, closed_at=now)
        )
        if not updated:
            return None

        auction.refresh_from_db()
        logger.info(
            f"Auction {auction.id}: {status} "
            f"(highest bid: {highest_bid.amount if highest_bid else 'none'}, reserve: {auction.reserve_price})"
        )
        return auction

    @staticmethod
    def run_closing_sweep(now=None):
        """
        Close every active auction whose end time has passed.

        Each auction is resolved in its own transaction; a failure is logged
        and reported without stopping the rest of the sweep.
        """
        now = now or timezone.now()
        report = {"outcomes": [], "errors": []}

        auction_ids = list(
            Auction.objects
            .filter(status=Auction.ACTIVE, end_at__lte=now)
            .order_by("end_at", "id")
            .values_list("id", flat=True)
        )
        logger.info(f"[{now.isoformat()}] Found {len(auction_ids)} ended active auctions.")

        for auction_id in auction_ids:
            try:
                auction = AuctionService.close_auction(auction_id, now=now)
            except Exception as exc:
                logger.exception(f"Failed to close auction {auction_id}")
                report["errors"].append({"auction_id": auction_id, "error": str(exc)})
                continue

            if auction is None:
                report["outcomes"].append({"auction_id": auction_id, "status": "skipped", "winning_bid_id": None})
                continue

            report["outcomes"].append({
                "auction_id": auction.id,
                "status": auction.status,
                "winning_bid_id": auction.winning_bid_id,
            })

        return report
