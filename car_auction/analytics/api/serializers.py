from rest_framework import serializers


class TopBidderSerializer(serializers.Serializer):
    bidder_id = serializers.IntegerField()
    email = serializers.CharField()
    total_bid_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_bids = serializers.IntegerField()
    rank = serializers.IntegerField()


class TopSellerSerializer(serializers.Serializer):
    seller_id = serializers.IntegerField()
    email = serializers.CharField()
    total_auctions = serializers.IntegerField()


class DashboardSerializer(serializers.Serializer):
    total_users = serializers.IntegerField()
    total_auctions = serializers.IntegerField()
    active_auctions = serializers.IntegerField()
    auctions_by_status = serializers.DictField(child=serializers.IntegerField())
    total_bids = serializers.IntegerField()
    top_bidders = TopBidderSerializer(many=True)
    top_sellers = TopSellerSerializer(many=True)
