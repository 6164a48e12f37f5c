from rolepermissions.roles import AbstractUserRole


class Admin(AbstractUserRole):
    available_permissions = {
        'view_admin_dashboard': True,
        'view_bid_statistics': True,
        'view_closed_auctions': True,
        'cancel_any_auction': True,
    }


class Seller(AbstractUserRole):
    available_permissions = {
        'post_car': True,
        'create_auction': True,
        'cancel_own_auction': True,
        'view_own_auction_statistics': True,
    }


class Bidder(AbstractUserRole):
    available_permissions = {
        'view_cars': True,
        'bid_on_car': True,
        'view_own_bids': True,
    }


DEFAULT_ROLES = ['bidder', 'seller']
