from decimal import Decimal
from types import SimpleNamespace

import pytest

from car_auction.bids.selectors.bid_queries import get_bid_statistics, get_highest_bid
from car_auction.bids.services.bid_service import BidService


def make_bids(*pairs):
    return [SimpleNamespace(bidder_id=bidder_id, amount=Decimal(amount)) for bidder_id, amount in pairs]


def test_statistics_of_three_bids():
    stats = get_bid_statistics(make_bids((1, "100"), (2, "300"), (1, "200")))

    assert stats == {
        "total_bids": 3,
        "unique_bidders": 2,
        "highest_bid": Decimal("300"),
        "lowest_bid": Decimal("100"),
        "average_bid": Decimal("200.00"),
    }


def test_statistics_of_no_bids():
    assert get_bid_statistics([]) == {
        "total_bids": 0,
        "unique_bidders": 0,
        "highest_bid": None,
        "lowest_bid": None,
        "average_bid": None,
    }


def test_average_is_rounded_to_cents():
    stats = get_bid_statistics(make_bids((1, "100.00"), (2, "100.00"), (3, "100.01")))

    assert stats["average_bid"] == Decimal("100.00")
    assert stats["unique_bidders"] == 3


def test_statistics_accept_a_queryset(auction, bidder, other_bidder):
    BidService.place_bid(auction_id=auction.id, bidder=bidder, amount="1100")
    BidService.place_bid(auction_id=auction.id, bidder=other_bidder, amount="1250")

    stats = get_bid_statistics(auction.bids.all())

    assert stats["total_bids"] == 2
    assert stats["highest_bid"] == Decimal("1250.00")
    assert stats["average_bid"] == Decimal("1175.00")


@pytest.mark.django_db
def test_highest_bid_of_empty_auction(auction):
    assert get_highest_bid(auction) is None
