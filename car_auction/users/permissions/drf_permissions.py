from rest_framework.permissions import BasePermission
from rolepermissions.checkers import has_role

from car_auction.users.utils import is_admin


class IsSeller(BasePermission):
    def has_permission(self, request, view):
        return request.user.is_authenticated and has_role(request.user, 'seller')


class IsBidder(BasePermission):
    def has_permission(self, request, view):
        return request.user.is_authenticated and has_role(request.user, 'bidder')


class IsSuperAdminOrAdmin(BasePermission):
    def has_permission(self, request, view):
        return is_admin(request.user)
