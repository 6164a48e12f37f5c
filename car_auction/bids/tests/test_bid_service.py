from datetime import timedelta
from decimal import Decimal
from unittest import mock

import pytest
from django.core.exceptions import ValidationError
from django.db import OperationalError
from django.utils import timezone

from car_auction.bids.exceptions import (
    AuctionEnded, AuctionNotActive, AuctionNotFound, BidTooLow,
    ConcurrentBidConflict, InvalidBidAmount, OwnerCannotBid, StorageUnavailable,
)
from car_auction.bids.models import Auction, Bid
from car_auction.bids.services.bid_service import BidService

pytestmark = pytest.mark.django_db


def test_accepted_bid_advances_price_and_leader(auction, bidder):
    bid = BidService.place_bid(auction_id=auction.id, bidder=bidder, amount=Decimal("1100.00"))

    auction.refresh_from_db()
    assert bid.amount == Decimal("1100.00")
    assert bid.bidder == bidder
    assert auction.current_price == Decimal("1100.00")
    assert auction.winning_bid_id == bid.id
    assert Bid.objects.filter(auction=auction).count() == 1


def test_price_is_monotonic_over_a_bidding_war(auction, bidder, other_bidder):
    amounts = ["1001.00", "1050.00", "1200.00", "1200.01"]
    bidders = [bidder, other_bidder, bidder, other_bidder]

    for who, amount in zip(bidders, amounts):
        BidService.place_bid(auction_id=auction.id, bidder=who, amount=amount)

    auction.refresh_from_db()
    assert auction.current_price == Decimal("1200.01")
    history = BidService.get_bid_history(auction.id)
    assert [b.amount for b in history] == [Decimal(a) for a in reversed(amounts)]


def test_bid_equal_to_current_price_is_rejected(auction, bidder):
    with pytest.raises(BidTooLow) as exc_info:
        BidService.place_bid(auction_id=auction.id, bidder=bidder, amount=Decimal("1000.00"))

    assert exc_info.value.current_price == Decimal("1000.00")
    assert exc_info.value.minimum_bid == Decimal("1000.01")
    assert not Bid.objects.exists()


def test_lower_bid_leaves_state_untouched(auction, bidder, other_bidder):
    BidService.place_bid(auction_id=auction.id, bidder=bidder, amount="1500")

    with pytest.raises(BidTooLow):
        BidService.place_bid(auction_id=auction.id, bidder=other_bidder, amount="1499.99")

    auction.refresh_from_db()
    assert auction.current_price == Decimal("1500.00")
    assert Bid.objects.count() == 1


def test_owner_cannot_bid(auction, seller):
    with pytest.raises(OwnerCannotBid):
        BidService.place_bid(auction_id=auction.id, bidder=seller, amount="2000")


def test_unknown_auction(bidder):
    with pytest.raises(AuctionNotFound):
        BidService.place_bid(auction_id=999999, bidder=bidder, amount="10")


def test_malformed_auction_id_is_not_found(bidder):
    with pytest.raises(AuctionNotFound):
        BidService.place_bid(auction_id="not-a-number", bidder=bidder, amount="10")


@pytest.mark.parametrize("status", [Auction.COMPLETED, Auction.RESERVE_NOT_MET, Auction.CANCELLED])
def test_closed_auction_rejects_bids(auction, bidder, status):
    Auction.objects.filter(pk=auction.pk).update(status=status)

    with pytest.raises(AuctionNotActive):
        BidService.place_bid(auction_id=auction.id, bidder=bidder, amount="5000")


def test_active_auction_past_end_rejects_bids(make_auction, bidder):
    auction = make_auction(ends_in=-timedelta(minutes=1))

    with pytest.raises(AuctionEnded):
        BidService.place_bid(auction_id=auction.id, bidder=bidder, amount="5000")

    auction.refresh_from_db()
    assert auction.status == Auction.ACTIVE
    assert auction.current_price == Decimal("1000.00")


def test_bid_at_exact_end_instant_is_rejected(auction, bidder):
    with pytest.raises(AuctionEnded):
        BidService.place_bid(auction_id=auction.id, bidder=bidder, amount="5000", now=auction.end_at)


def test_status_is_checked_before_end_time_and_owner(make_auction, seller):
    auction = make_auction(ends_in=-timedelta(minutes=1))
    Auction.objects.filter(pk=auction.pk).update(status=Auction.CANCELLED)

    # cancelled, ended and owned all at once: status wins
    with pytest.raises(AuctionNotActive):
        BidService.place_bid(auction_id=auction.id, bidder=seller, amount="1")


def test_end_time_is_checked_before_ownership(make_auction, seller):
    auction = make_auction(ends_in=-timedelta(minutes=1))

    with pytest.raises(AuctionEnded):
        BidService.place_bid(auction_id=auction.id, bidder=seller, amount="1")


def test_ownership_is_checked_before_amount(auction, seller):
    with pytest.raises(OwnerCannotBid):
        BidService.place_bid(auction_id=auction.id, bidder=seller, amount="1")


@pytest.mark.parametrize("amount", [
    "1000.005", "1100.001", "NaN", "sNaN", "Infinity", "-Infinity",
    "abc", None, "0", "-1500", "10000000000.00",
])
def test_malformed_amount_is_rejected(auction, bidder, amount):
    with pytest.raises(InvalidBidAmount):
        BidService.place_bid(auction_id=auction.id, bidder=bidder, amount=amount)

    auction.refresh_from_db()
    assert auction.current_price == Decimal("1000.00")
    assert not Bid.objects.exists()


def test_sub_cent_bid_does_not_block_later_bids(auction, bidder, other_bidder):
    with pytest.raises(InvalidBidAmount):
        BidService.place_bid(auction_id=auction.id, bidder=bidder, amount="1000.005")

    BidService.place_bid(auction_id=auction.id, bidder=other_bidder, amount="1500.00")
    latest = BidService.place_bid(auction_id=auction.id, bidder=bidder, amount="1600.00")

    auction.refresh_from_db()
    assert auction.current_price == Decimal("1600.00")
    assert auction.winning_bid_id == latest.id


def test_trailing_zeros_are_whole_cents(auction, bidder):
    bid = BidService.place_bid(auction_id=auction.id, bidder=bidder, amount="1100.500")

    auction.refresh_from_db()
    assert bid.amount == Decimal("1100.50")
    assert auction.current_price == bid.amount


def test_bid_is_stamped_with_the_validation_clock(auction, bidder, other_bidder):
    first_at = timezone.now() - timedelta(hours=2)
    second_at = first_at + timedelta(minutes=5)

    first = BidService.place_bid(auction_id=auction.id, bidder=bidder, amount="1100", now=first_at)
    second = BidService.place_bid(auction_id=auction.id, bidder=other_bidder, amount="1200", now=second_at)

    first.refresh_from_db()
    second.refresh_from_db()
    assert first.created_at == first_at
    assert second.created_at == second_at
    assert BidService.get_bid_history(auction.id) == [second, first]


def test_stale_snapshot_loses_the_race(auction, bidder, other_bidder):
    now = timezone.now()
    first_read = Auction.objects.get(pk=auction.pk)
    second_read = Auction.objects.get(pk=auction.pk)

    BidService.validate_bid(first_read, bidder, Decimal("1100.00"), now)
    BidService.validate_bid(second_read, other_bidder, Decimal("1050.00"), now)

    winner = BidService.commit_bid(first_read, bidder, Decimal("1100.00"), now)
    with pytest.raises(ConcurrentBidConflict):
        BidService.commit_bid(second_read, other_bidder, Decimal("1050.00"), now)

    auction.refresh_from_db()
    assert auction.current_price == Decimal("1100.00")
    assert auction.winning_bid_id == winner.id
    assert list(Bid.objects.values_list("bidder_id", flat=True)) == [bidder.id]


def test_conflict_even_when_loser_offers_more(auction, bidder, other_bidder):
    stale = Auction.objects.get(pk=auction.pk)
    BidService.place_bid(auction_id=auction.id, bidder=bidder, amount="1100")

    # the loser validated against 1000; it must refresh rather than silently win
    with mock.patch.object(BidService, "read_auction", return_value=stale):
        with pytest.raises(ConcurrentBidConflict):
            BidService.place_bid(auction_id=auction.id, bidder=other_bidder, amount="1200")

    auction.refresh_from_db()
    assert auction.current_price == Decimal("1100.00")
    assert Bid.objects.count() == 1


def test_lost_write_after_close_reports_not_active(auction, bidder):
    stale = Auction.objects.get(pk=auction.pk)
    Auction.objects.filter(pk=auction.pk).update(status=Auction.CANCELLED)

    with mock.patch.object(BidService, "read_auction", return_value=stale):
        with pytest.raises(AuctionNotActive):
            BidService.place_bid(auction_id=auction.id, bidder=bidder, amount="1100")

    assert not Bid.objects.exists()


def test_storage_failure_is_reported_as_unavailable(auction, bidder):
    with mock.patch.object(Auction.objects, "get", side_effect=OperationalError("server closed the connection")):
        with pytest.raises(StorageUnavailable):
            BidService.place_bid(auction_id=auction.id, bidder=bidder, amount="1100")

    assert not Bid.objects.exists()


def test_bids_are_append_only(auction, bidder):
    bid = BidService.place_bid(auction_id=auction.id, bidder=bidder, amount="1100")

    bid.amount = Decimal("1.00")
    with pytest.raises(ValidationError):
        bid.save()
    with pytest.raises(ValidationError):
        bid.delete()


def test_bid_history_limit_and_missing_auction(auction, bidder, other_bidder):
    for i, who in enumerate([bidder, other_bidder, bidder]):
        BidService.place_bid(auction_id=auction.id, bidder=who, amount=1100 + i * 100)

    history = BidService.get_bid_history(auction.id, limit=2)
    assert [b.amount for b in history] == [Decimal("1300.00"), Decimal("1200.00")]

    with pytest.raises(AuctionNotFound):
        BidService.get_bid_history(999999)


def test_users_see_only_their_own_bids(auction, bidder, other_bidder, admin_user):
    BidService.place_bid(auction_id=auction.id, bidder=bidder, amount="1100")
    BidService.place_bid(auction_id=auction.id, bidder=other_bidder, amount="1200")

    assert [b.bidder_id for b in BidService.get_bids_for_user(bidder)] == [bidder.id]
    assert BidService.get_bids_for_user(admin_user).count() == 2
