from rest_framework.permissions import BasePermission, SAFE_METHODS

from car_auction.users.utils import is_admin


class IsAuctionOwnerOrAdmin(BasePermission):
    """
    Sellers manage their own auctions; admins manage every auction.
    Read access is left to the view's other permissions.
    """
    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS and view.action not in ("stats",):
            return True
        return is_admin(request.user) or obj.seller_id == request.user.id
