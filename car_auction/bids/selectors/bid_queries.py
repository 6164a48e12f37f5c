from decimal import Decimal, ROUND_HALF_UP

from car_auction.bids.models import Bid

CENTS = Decimal('0.01')


def get_highest_bid(auction):
    """
    Highest accepted bid straight from the bid table; earliest wins a tie.
    The cached Auction.current_price is deliberately not consulted.
    """
    return (
        Bid.objects
        .filter(auction=auction)
        .order_by("-amount", "created_at", "id")
        .first()
    )


def get_bid_statistics(bids):
    """
    Summary of a bid list for display. Pure: works on any iterable of objects
    exposing ``amount`` and ``bidder_id``; an empty list yields zero counts
    and ``None`` amounts.
    """
    bids = list(bids)
    amounts = [bid.amount for bid in bids]

    if not amounts:
        return {
            "total_bids": 0,
            "unique_bidders": 0,
            "highest_bid": None,
            "lowest_bid": None,
            "average_bid": None,
        }

    average = (sum(amounts, Decimal('0')) / len(amounts)).quantize(CENTS, rounding=ROUND_HALF_UP)
    return {
        "total_bids": len(amounts),
        "unique_bidders": len({bid.bidder_id for bid in bids}),
        "highest_bid": max(amounts),
        "lowest_bid": min(amounts),
        "average_bid": average,
    }
