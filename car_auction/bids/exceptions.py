"""
Rejections raised by the bid ledger and the auction closer.

Precondition failures all derive from ``BidRejected``; ``StorageUnavailable``
is an infrastructure fault and deliberately sits outside that hierarchy, so
callers can tell "retry with a new price" from "retry the same request".
"""
from decimal import Decimal

from rest_framework import status
from rest_framework.exceptions import APIException, NotFound

BID_INCREMENT = Decimal('0.01')
# Bid.amount is DecimalField(max_digits=12, decimal_places=2)
MAX_BID_AMOUNT = Decimal("10000000000")


class AuctionNotFound(NotFound):
    default_detail = "Auction not found."
    default_code = "auction_not_found"


class BidRejected(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bid rejected."
    default_code = "bid_rejected"


class InvalidBidAmount(BidRejected):
    default_detail = "Bid amount must be a positive number with at most two decimal places."
    default_code = "invalid_bid_amount"


class AuctionNotActive(BidRejected):
    default_detail = "Auction is not active."
    default_code = "auction_not_active"


class AuctionEnded(BidRejected):
    default_detail = "Auction has ended."
    default_code = "auction_ended"


class OwnerCannotBid(BidRejected):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You cannot bid on your own car."
    default_code = "owner_cannot_bid"


class BidTooLow(BidRejected):
    default_code = "bid_too_low"

    def __init__(self, current_price):
        self.current_price = current_price
        self.minimum_bid = current_price + BID_INCREMENT
        super().__init__(
            f"Bid must be higher than current price: {current_price}. "
            f"Minimum next bid is {self.minimum_bid}."
        )


class ConcurrentBidConflict(BidRejected):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Someone else bid first, please refresh and retry."
    default_code = "concurrent_bid_conflict"


class StorageUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Bidding is temporarily unavailable, please retry shortly."
    default_code = "storage_unavailable"
