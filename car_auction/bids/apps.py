from django.apps import AppConfig


class BidsConfig(AppConfig):
    name = "car_auction.bids"
    verbose_name = "Auctions & Bids"
