from django.contrib import admin, messages

from .models import Auction, Bid
from .services.auction_service import AuctionService


class BidInline(admin.TabularInline):
    model = Bid
    extra = 0
    can_delete = False
    fields = ['bidder', 'amount', 'created_at']
    readonly_fields = fields
    ordering = ['-amount', 'created_at']

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Auction)
class AuctionAdmin(admin.ModelAdmin):
    list_display = ['id', 'car', 'seller', 'starting_price', 'current_price', 'reserve_price', 'end_at', 'status']
    list_filter = ['status', 'end_at']
    search_fields = ['car__make', 'car__model', 'seller__email']
    raw_id_fields = ['car', 'seller']
    readonly_fields = ['current_price', 'status', 'winning_bid', 'created_at', 'closed_at']
    inlines = [BidInline]
    actions = ['close_selected', 'cancel_selected']

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('car', 'seller', 'winning_bid')

    @admin.action(description="Close selected ended auctions")
    def close_selected(self, request, queryset):
        closed = 0
        for auction in queryset.filter(status=Auction.ACTIVE):
            try:
                if AuctionService.close_auction(auction.id):
                    closed += 1
            except Exception as exc:
                self.message_user(request, f"Auction {auction.id}: {exc}", level=messages.WARNING)
        self.message_user(request, f"{closed} auction(s) closed.", level=messages.SUCCESS)

    @admin.action(description="Cancel selected active auctions")
    def cancel_selected(self, request, queryset):
        cancelled = 0
        for auction in queryset.filter(status=Auction.ACTIVE):
            AuctionService.cancel_auction(auction_id=auction.id, actor=request.user)
            cancelled += 1
        self.message_user(request, f"{cancelled} auction(s) cancelled.", level=messages.SUCCESS)


@admin.register(Bid)
class BidAdmin(admin.ModelAdmin):
    list_display = ['id', 'auction', 'bidder', 'amount', 'created_at']
    list_filter = ['created_at']
    search_fields = ['bidder__email', 'auction__car__make', 'auction__car__model']
    readonly_fields = ['auction', 'bidder', 'amount', 'created_at']

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('auction__car', 'bidder')

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
