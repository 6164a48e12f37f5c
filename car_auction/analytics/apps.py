from django.apps import AppConfig


class AnalyticsConfig(AppConfig):
    name = "car_auction.analytics"
    verbose_name = "Analytics"
