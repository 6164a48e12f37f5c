from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    name = "car_auction.notifications"
    verbose_name = "Notifications"
