# inventory/admin.py
from django.contrib import admin
from .models import Car, CarLike


@admin.register(Car)
class CarAdmin(admin.ModelAdmin):
    list_display = ['make', 'model', 'year', 'mileage', 'fuel_type', 'body_type', 'condition', 'posted_by', 'auction_status']
    search_fields = ['make', 'model', 'year', 'posted_by__email']
    list_filter = ['year', 'fuel_type', 'body_type', 'condition']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['posted_by']

    fields = (
        'make', 'model', 'year', 'mileage', 'power', 'fuel_type', 'body_type', 'condition',
        'euro_standard', 'description', 'specs', 'address_line', 'zipcode', 'city',
        'posted_by', 'created_at', 'updated_at'
    )

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('posted_by', 'auction')

    def auction_status(self, obj):
        auction = getattr(obj, 'auction', None)
        return auction.get_status_display() if auction else "-"

    auction_status.short_description = "Auction"


@admin.register(CarLike)
class CarLikeAdmin(admin.ModelAdmin):
    list_display = ['car', 'user', 'created_at']
    search_fields = ['car__make', 'car__model', 'user__email']
    raw_id_fields = ['car', 'user']
    readonly_fields = ['created_at']
