from django.contrib.auth import get_user_model
from django.db.models import Count, Sum

from car_auction.bids.exceptions import BID_INCREMENT
from car_auction.bids.models import Auction, Bid

User = get_user_model()


def get_top_bidders(limit=10):
    """
    Bidders ranked by the summed amount of every bid they placed.
    Equal totals share a rank; totals are quantized to cents.
    """
    stats = (
        Bid.objects
        .values('bidder_id', 'bidder__email')
        .annotate(total_bid_amount=Sum('amount'), total_bids=Count('id'))
        .order_by('-total_bid_amount', 'bidder_id')[:limit]
    )

    data = []
    rank, previous_total = 0, None
    for stat in stats:
        total = stat["total_bid_amount"].quantize(BID_INCREMENT)
        if total != previous_total:
            rank += 1
            previous_total = total
        data.append({
            "bidder_id": stat['bidder_id'],
            "email": stat['bidder__email'],
            "total_bid_amount": total,
            "total_bids": stat['total_bids'],
            "rank": rank,
        })
    return data


def get_top_sellers(limit=20):
    """
    Sellers ranked by number of auctions listed.
    """
    queryset = (
        User.objects
        .annotate(total_auctions=Count('auctions'))
        .filter(total_auctions__gt=0)
        .order_by('-total_auctions', 'id')[:limit]
    )
    return [
        {"seller_id": user.id, "email": user.email, "total_auctions": user.total_auctions}
        for user in queryset
    ]


def get_platform_statistics():
    auctions_by_status = dict(
        Auction.objects.values_list('status').annotate(count=Count('id')).order_by()
    )

    return {
        "total_users": User.objects.count(),
        "total_auctions": sum(auctions_by_status.values()),
        "active_auctions": auctions_by_status.get(Auction.ACTIVE, 0),
        "auctions_by_status": {
            status: auctions_by_status.get(status, 0) for status, _ in Auction.STATUS_CHOICES
        },
        "total_bids": Bid.objects.count(),
        "top_bidders": get_top_bidders(),
        "top_sellers": get_top_sellers(),
    }
