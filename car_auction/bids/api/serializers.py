from rest_framework import serializers
from django.conf import settings

from ..models import Auction, Bid
from ..services.auction_service import AuctionService
from ..services.bid_service import BidService
from car_auction.inventory.api.serializers import CarSerializer
from car_auction.inventory.models import Car
from car_auction.users.api.serializers import UserMiniSerializer


class CarMiniSerializer(serializers.ModelSerializer):
    class Meta:
        model = Car
        fields = ['id', 'make', 'model', 'year']


class BidSerializer(serializers.ModelSerializer):
    # WRITE
    auction = serializers.IntegerField(source='auction_id')

    # READ
    bidder = UserMiniSerializer(read_only=True)
    car = CarMiniSerializer(source='auction.car', read_only=True)

    class Meta:
        model = Bid
        fields = ['id', 'auction', 'car', 'bidder', 'amount', 'created_at']
        read_only_fields = ['id', 'created_at']

    def validate_amount(self, amount):
        if amount <= 0:
            raise serializers.ValidationError("Bid amount must be greater than zero.")
        return amount

    def create(self, validated_data):
        return BidService.place_bid(
            auction_id=validated_data['auction_id'],
            bidder=self.context['request'].user,
            amount=validated_data['amount'],
        )


class AuctionBidHistorySerializer(serializers.ModelSerializer):
    bidder = UserMiniSerializer(read_only=True)

    class Meta:
        model = Bid
        fields = ['id', 'bidder', 'amount', 'created_at']


class PlaceBidSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)

    def validate_amount(self, amount):
        if amount <= 0:
            raise serializers.ValidationError("Bid amount must be greater than zero.")
        return amount


class AuctionSerializer(serializers.ModelSerializer):
    car = CarSerializer()
    seller = UserMiniSerializer(read_only=True)
    winning_bid = AuctionBidHistorySerializer(read_only=True)
    is_active = serializers.SerializerMethodField()
    bid_count = serializers.SerializerMethodField()

    class Meta:
        model = Auction
        fields = [
            'id', 'car', 'seller', 'starting_price', 'current_price', 'reserve_price',
            'end_at', 'status', 'is_active', 'winning_bid', 'bid_count', 'created_at', 'closed_at',
        ]
        read_only_fields = ['id', 'current_price', 'status', 'winning_bid', 'created_at', 'closed_at']
        extra_kwargs = {
            # only the seller and admins see the reserve
            'reserve_price': {'write_only': True, 'required': False},
        }

    def get_is_active(self, obj) -> bool:
        return AuctionService.is_active(obj)

    def get_bid_count(self, obj) -> int:
        annotated = getattr(obj, 'bid_count', None)
        if annotated is not None:
            return annotated
        return obj.bids.count()

    def validate_starting_price(self, value):
        if value <= 0:
            raise serializers.ValidationError("Starting price must be greater than zero.")
        return value

    def create(self, validated_data):
        return AuctionService.create_auction(
            seller=self.context['request'].user,
            car_data=validated_data['car'],
            starting_price=validated_data['starting_price'],
            reserve_price=validated_data.get('reserve_price'),
            end_at=validated_data['end_at'],
        )


class BidStatisticsSerializer(serializers.Serializer):
    total_bids = serializers.IntegerField()
    unique_bidders = serializers.IntegerField()
    highest_bid = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
    lowest_bid = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
    average_bid = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)


class BidHistoryQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(required=False, min_value=1, max_value=500)

    def get_limit(self):
        return self.validated_data.get('limit', settings.AUCTION_BID_HISTORY_LIMIT)
