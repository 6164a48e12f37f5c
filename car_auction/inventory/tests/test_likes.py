import pytest
from rest_framework.exceptions import NotFound, ValidationError

from car_auction.inventory.models import CarLike
from car_auction.inventory.services.car_like_service import CarLikeService

pytestmark = pytest.mark.django_db


def like_url(car):
    return f"/api/cars/{car.id}/like/"


class TestCarLikeService:

    def test_like_then_unlike(self, auction, bidder):
        like = CarLikeService.like_car(bidder, auction.car_id)

        assert like.user == bidder
        assert list(auction.car.likes.all()) == [like]
        assert CarLikeService.unlike_car(bidder, auction.car_id) == 1
        assert not CarLike.objects.exists()

    def test_liking_twice_is_rejected(self, auction, bidder):
        CarLikeService.like_car(bidder, auction.car_id)

        with pytest.raises(ValidationError):
            CarLikeService.like_car(bidder, auction.car_id)
        assert CarLike.objects.count() == 1

    def test_unlike_without_like_is_a_no_op(self, auction, bidder):
        assert CarLikeService.unlike_car(bidder, auction.car_id) == 0

    @pytest.mark.parametrize("car_id", [987654, "not-a-number"])
    def test_unknown_car(self, bidder, car_id):
        with pytest.raises(NotFound):
            CarLikeService.like_car(bidder, car_id)

    def test_list_likes_newest_first(self, auction, bidder, other_bidder):
        CarLikeService.like_car(bidder, auction.car_id)
        CarLikeService.like_car(other_bidder, auction.car_id)

        assert [like.user for like in CarLikeService.list_likes(auction.car_id)] == [other_bidder, bidder]


class TestCarLikeEndpoints:

    def test_like_and_unlike(self, client_for, auction, bidder):
        client = client_for(bidder)

        response = client.post(like_url(auction.car))
        assert response.status_code == 201
        assert response.data["user"]["email"] == bidder.email

        assert client.post(like_url(auction.car)).status_code == 400

        assert client.delete(like_url(auction.car)).status_code == 204
        assert not CarLike.objects.exists()

    def test_anonymous_cannot_like(self, api_client, auction):
        assert api_client.post(like_url(auction.car)).status_code == 401

    def test_likers_are_admin_only(self, client_for, auction, bidder, admin_user):
        CarLikeService.like_car(bidder, auction.car_id)

        assert client_for(bidder).get(f"/api/cars/{auction.car_id}/likes/").status_code == 403

        response = client_for(admin_user).get(f"/api/cars/{auction.car_id}/likes/")
        assert response.status_code == 200
        assert [like["user"]["email"] for like in response.data] == [bidder.email]

    def test_like_unknown_car(self, client_for, bidder):
        assert client_for(bidder).post("/api/cars/987654/like/").status_code == 404
