from rest_framework.views import exception_handler

from car_auction.bids.exceptions import BidTooLow


def bid_exception_handler(exc, context):
    """
    DRF's handler, plus a machine-readable ``code`` so clients can tell a
    stale price (409, refresh and rebid) from a hard rejection.
    """
    response = exception_handler(exc, context)
    if response is None:
        return response

    if isinstance(response.data, dict) and "detail" in response.data:
        codes = exc.get_codes() if hasattr(exc, "get_codes") else None
        if isinstance(codes, str):
            response.data["code"] = codes

    if isinstance(exc, BidTooLow):
        response.data["current_price"] = str(exc.current_price)
        response.data["minimum_bid"] = str(exc.minimum_bid)

    return response
