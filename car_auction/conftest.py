from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from car_auction.bids.models import Auction
from car_auction.inventory.models import Car
from car_auction.users.models import User


@pytest.fixture
def seller(db):
    return User.objects.create_user(email="seller@example.com", password="Secret123!")


@pytest.fixture
def bidder(db):
    return User.objects.create_user(email="bidder@example.com", password="Secret123!")


@pytest.fixture
def other_bidder(db):
    return User.objects.create_user(email="other@example.com", password="Secret123!")


@pytest.fixture
def admin_user(db):
    return User.objects.create_superuser(email="admin@example.com", password="Secret123!")


@pytest.fixture
def make_auction(db, seller):
    def _make_auction(starting_price="1000.00", reserve_price=None, ends_in=timedelta(days=1), owner=None):
        owner = owner or seller
        car = Car.objects.create(
            make="Toyota", model="Corolla", year=2019, mileage=42000,
            fuel_type="petrol", posted_by=owner,
        )
        return Auction.objects.create(
            car=car,
            seller=owner,
            starting_price=Decimal(starting_price),
            current_price=Decimal(starting_price),
            reserve_price=Decimal(reserve_price) if reserve_price is not None else None,
            end_at=timezone.now() + ends_in,
        )
    return _make_auction


@pytest.fixture
def auction(make_auction):
    return make_auction()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for(api_client):
    def _client_for(user):
        api_client.force_authenticate(user=user)
        return api_client
    return _client_for
