from django.apps import AppConfig


class RatingConfig(AppConfig):
    name = "car_auction.rating"
    verbose_name = "Ratings"
