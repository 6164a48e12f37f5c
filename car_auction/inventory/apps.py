from django.apps import AppConfig


class InventoryConfig(AppConfig):
    name = "car_auction.inventory"
    verbose_name = "Inventory"
