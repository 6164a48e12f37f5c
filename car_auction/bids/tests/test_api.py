from datetime import timedelta
from decimal import Decimal
from unittest import mock

import pytest
from django.db import OperationalError
from django.utils import timezone

from car_auction.bids.models import Auction, Bid
from car_auction.bids.services.bid_service import BidService

pytestmark = pytest.mark.django_db


def bid_url(auction):
    return f"/api/auctions/{auction.id}/bid/"


class TestPlaceBid:

    def test_accepted_bid(self, client_for, auction, bidder):
        response = client_for(bidder).post(bid_url(auction), {"amount": "1100.00"}, format="json")

        assert response.status_code == 201
        assert response.data["amount"] == "1100.00"
        assert response.data["auction"] == auction.id
        assert response.data["bidder"]["email"] == bidder.email
        auction.refresh_from_db()
        assert auction.current_price == Decimal("1100.00")

    def test_bid_too_low_reports_minimum(self, client_for, auction, bidder):
        response = client_for(bidder).post(bid_url(auction), {"amount": "1000.00"}, format="json")

        assert response.status_code == 400
        assert response.data["code"] == "bid_too_low"
        assert response.data["current_price"] == "1000.00"
        assert response.data["minimum_bid"] == "1000.01"

    def test_owner_bid_is_forbidden(self, client_for, auction, seller):
        response = client_for(seller).post(bid_url(auction), {"amount": "5000"}, format="json")

        assert response.status_code == 403
        assert response.data["code"] == "owner_cannot_bid"

    def test_ended_auction(self, client_for, make_auction, bidder):
        auction = make_auction(ends_in=-timedelta(seconds=1))

        response = client_for(bidder).post(bid_url(auction), {"amount": "5000"}, format="json")

        assert response.status_code == 400
        assert response.data["code"] == "auction_ended"

    def test_unknown_auction(self, client_for, bidder):
        response = client_for(bidder).post("/api/auctions/987654/bid/", {"amount": "5000"}, format="json")

        assert response.status_code == 404
        assert response.data["code"] == "auction_not_found"

    def test_concurrent_conflict_is_409(self, client_for, auction, bidder, other_bidder):
        stale = Auction.objects.get(pk=auction.pk)
        BidService.place_bid(auction_id=auction.id, bidder=other_bidder, amount="1100")

        with mock.patch.object(BidService, "read_auction", return_value=stale):
            response = client_for(bidder).post(bid_url(auction), {"amount": "1200"}, format="json")

        assert response.status_code == 409
        assert response.data["code"] == "concurrent_bid_conflict"

    def test_storage_outage_is_503(self, client_for, auction, bidder):
        with mock.patch.object(Auction.objects, "get", side_effect=OperationalError("connection refused")):
            response = client_for(bidder).post(bid_url(auction), {"amount": "1200"}, format="json")

        assert response.status_code == 503
        assert response.data["code"] == "storage_unavailable"

    @pytest.mark.parametrize("amount", ["0", "-5", "abc"])
    def test_invalid_amount(self, client_for, auction, bidder, amount):
        response = client_for(bidder).post(bid_url(auction), {"amount": amount}, format="json")

        assert response.status_code == 400
        assert not Bid.objects.exists()

    def test_anonymous_user_cannot_bid(self, api_client, auction):
        response = api_client.post(bid_url(auction), {"amount": "1100"}, format="json")

        assert response.status_code == 401

    def test_bid_through_bids_endpoint(self, client_for, auction, bidder):
        response = client_for(bidder).post("/api/bids/", {"auction": auction.id, "amount": "1300"}, format="json")

        assert response.status_code == 201
        assert response.data["car"]["make"] == "Toyota"


class TestAuctionEndpoints:

    def test_create_auction(self, client_for, seller):
        payload = {
            "car": {"make": "Audi", "model": "A4", "year": 2018, "mileage": 80000, "fuel_type": "petrol"},
            "starting_price": "7000.00",
            "reserve_price": "9000.00",
            "end_at": (timezone.now() + timedelta(days=2)).isoformat(),
        }

        response = client_for(seller).post("/api/auctions/", payload, format="json")

        assert response.status_code == 201
        assert response.data["current_price"] == "7000.00"
        assert response.data["status"] == Auction.ACTIVE
        assert response.data["is_active"] is True
        assert "reserve_price" not in response.data
        assert Auction.objects.get(pk=response.data["id"]).reserve_price == Decimal("9000.00")

    def test_create_auction_ending_in_the_past(self, client_for, seller):
        payload = {
            "car": {"make": "Audi", "model": "A4", "year": 2018, "mileage": 80000, "fuel_type": "petrol"},
            "starting_price": "7000.00",
            "end_at": (timezone.now() - timedelta(days=1)).isoformat(),
        }

        response = client_for(seller).post("/api/auctions/", payload, format="json")

        assert response.status_code == 400
        assert "end_at" in response.data

    def test_list_shows_active_auctions(self, client_for, make_auction, bidder):
        active = make_auction()
        closed = make_auction()
        Auction.objects.filter(pk=closed.pk).update(status=Auction.COMPLETED)

        response = client_for(bidder).get("/api/auctions/")

        assert response.status_code == 200
        assert [a["id"] for a in response.data] == [active.id]

    def test_closed_listing_needs_admin(self, client_for, bidder):
        response = client_for(bidder).get("/api/auctions/", {"status": Auction.COMPLETED})

        assert response.status_code == 403

    def test_bid_history(self, client_for, auction, bidder, other_bidder):
        BidService.place_bid(auction_id=auction.id, bidder=bidder, amount="1100")
        BidService.place_bid(auction_id=auction.id, bidder=other_bidder, amount="1200")

        response = client_for(bidder).get(f"/api/auctions/{auction.id}/bids/", {"limit": 1})

        assert response.status_code == 200
        assert [b["amount"] for b in response.data] == ["1200.00"]

    def test_stats_for_owner(self, client_for, auction, seller, bidder, other_bidder):
        for who, amount in [(bidder, "1100"), (other_bidder, "1300"), (bidder, "1500")]:
            BidService.place_bid(auction_id=auction.id, bidder=who, amount=amount)

        response = client_for(seller).get(f"/api/auctions/{auction.id}/stats/")

        assert response.status_code == 200
        assert response.data == {
            "total_bids": 3,
            "unique_bidders": 2,
            "highest_bid": "1500.00",
            "lowest_bid": "1100.00",
            "average_bid": "1300.00",
        }

    def test_stats_forbidden_for_bidders(self, client_for, auction, bidder):
        response = client_for(bidder).get(f"/api/auctions/{auction.id}/stats/")

        assert response.status_code == 403

    def test_cancel(self, client_for, auction, seller):
        response = client_for(seller).post(f"/api/auctions/{auction.id}/cancel/")

        assert response.status_code == 200
        assert response.data["status"] == Auction.CANCELLED

    def test_cancel_by_stranger(self, client_for, auction, bidder):
        response = client_for(bidder).post(f"/api/auctions/{auction.id}/cancel/")

        assert response.status_code == 403
        auction.refresh_from_db()
        assert auction.status == Auction.ACTIVE

    def test_my_bids(self, client_for, auction, bidder, other_bidder):
        BidService.place_bid(auction_id=auction.id, bidder=bidder, amount="1100")
        BidService.place_bid(auction_id=auction.id, bidder=other_bidder, amount="1200")

        response = client_for(bidder).get("/api/bids/")

        assert [b["amount"] for b in response.data] == ["1100.00"]

    def test_filter_by_make_and_price(self, client_for, make_auction, bidder):
        cheap = make_auction(starting_price="500.00")
        make_auction(starting_price="5000.00")

        response = client_for(bidder).get("/api/auctions/", {"make": "toyota", "max_price": "1000"})

        assert [a["id"] for a in response.data] == [cheap.id]
