from decimal import Decimal

import pytest
from rest_framework.exceptions import NotFound, ValidationError

from car_auction.rating.models import UserRating
from car_auction.rating.services.rating_service import RatingService

pytestmark = pytest.mark.django_db


def profile_summary(user):
    user.profile.refresh_from_db()
    return user.profile.rating, user.profile.rating_count


class TestRatingService:

    def test_rating_updates_profile_summary(self, auction, seller, bidder, other_bidder):
        rating, created = RatingService.rate_user(
            rater=bidder, rated_user_id=seller.id, car_id=auction.car_id, score=5, comment="Smooth sale",
        )
        RatingService.rate_user(rater=other_bidder, rated_user_id=seller.id, car_id=auction.car_id, score=4)

        assert created is True
        assert rating.comment == "Smooth sale"
        assert profile_summary(seller) == (Decimal("4.50"), 2)

    def test_rating_again_replaces_the_score(self, auction, seller, bidder):
        first, _ = RatingService.rate_user(rater=bidder, rated_user_id=seller.id, car_id=auction.car_id, score=2)
        second, created = RatingService.rate_user(rater=bidder, rated_user_id=seller.id, car_id=auction.car_id, score=5)

        assert created is False
        assert second.pk == first.pk
        assert UserRating.objects.get().score == 5
        assert profile_summary(seller) == (Decimal("5.00"), 1)

    def test_same_pair_can_rate_per_car(self, make_auction, seller, bidder):
        for auction in (make_auction(), make_auction()):
            RatingService.rate_user(rater=bidder, rated_user_id=seller.id, car_id=auction.car_id, score=3)

        assert profile_summary(seller) == (Decimal("3.00"), 2)

    def test_average_is_rounded_to_cents(self, make_auction, seller, bidder):
        for score in (5, 4, 4):
            RatingService.rate_user(rater=bidder, rated_user_id=seller.id, car_id=make_auction().car_id, score=score)

        assert profile_summary(seller) == (Decimal("4.33"), 3)

    def test_cannot_rate_yourself(self, auction, seller):
        with pytest.raises(ValidationError):
            RatingService.rate_user(rater=seller, rated_user_id=seller.id, car_id=auction.car_id, score=5)
        assert not UserRating.objects.exists()

    @pytest.mark.parametrize("score", [0, 6])
    def test_score_out_of_range(self, auction, seller, bidder, score):
        with pytest.raises(ValidationError):
            RatingService.rate_user(rater=bidder, rated_user_id=seller.id, car_id=auction.car_id, score=score)

    def test_unknown_user_or_car(self, auction, seller, bidder):
        with pytest.raises(NotFound):
            RatingService.rate_user(rater=bidder, rated_user_id=987654, car_id=auction.car_id, score=5)
        with pytest.raises(NotFound):
            RatingService.rate_user(rater=bidder, rated_user_id=seller.id, car_id=987654, score=5)


class TestRatingEndpoints:

    def test_create_then_replace(self, client_for, auction, seller, bidder):
        client = client_for(bidder)
        payload = {"rated_user": seller.id, "car": auction.car_id, "score": 4, "comment": "<b>Fair</b> seller"}

        response = client.post("/api/ratings/", payload, format="json")
        assert response.status_code == 201
        assert response.data["comment"] == "Fair seller"
        assert response.data["rater"]["email"] == bidder.email

        response = client.post("/api/ratings/", {**payload, "score": 2}, format="json")
        assert response.status_code == 200
        assert response.data["score"] == 2

    def test_invalid_score(self, client_for, auction, seller, bidder):
        response = client_for(bidder).post(
            "/api/ratings/", {"rated_user": seller.id, "car": auction.car_id, "score": 9}, format="json",
        )

        assert response.status_code == 400
        assert "score" in response.data

    def test_list_is_admin_only_and_filters_by_car(self, client_for, make_auction, seller, bidder, admin_user):
        rated, other = make_auction(), make_auction()
        RatingService.rate_user(rater=bidder, rated_user_id=seller.id, car_id=rated.car_id, score=5)
        RatingService.rate_user(rater=bidder, rated_user_id=seller.id, car_id=other.car_id, score=1)

        assert client_for(bidder).get("/api/ratings/").status_code == 403

        response = client_for(admin_user).get("/api/ratings/", {"car": rated.car_id})
        assert response.status_code == 200
        assert [r["score"] for r in response.data] == [5]
