from rest_framework import mixins, status
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework.viewsets import GenericViewSet
from rest_framework.decorators import action
from rest_framework.filters import SearchFilter, OrderingFilter
from django_filters.rest_framework import DjangoFilterBackend
from django.db.models import Count
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter

from ..models import Auction
from ..selectors.bid_queries import get_bid_statistics
from ..services.auction_service import AuctionService
from ..services.bid_service import BidService
from .filters import AuctionFilter
from .serializers import (
    AuctionSerializer, AuctionBidHistorySerializer, BidSerializer,
    BidHistoryQuerySerializer, BidStatisticsSerializer, PlaceBidSerializer,
)
from car_auction.users.permissions.drf_permissions import IsBidder, IsSeller
from car_auction.users.permissions.business_permissions import IsAuctionOwnerOrAdmin


@extend_schema_view(
    list=extend_schema(
        tags=["Auctions"],
        summary="List auctions",
        description="Active auctions are visible to everyone; other statuses are admin-only.",
        parameters=[
            OpenApiParameter(
                name="status",
                description="Filter by auction status (default: active)",
                required=False,
                type=str,
                enum=[choice[0] for choice in Auction.STATUS_CHOICES],
            )
        ],
    ),
    retrieve=extend_schema(tags=["Auctions"], summary="Retrieve an auction"),
    create=extend_schema(
        tags=["Auctions"],
        summary="Put a car up for auction",
        description="Creates the car and its auction in one step. Sellers only.",
    ),
    mine=extend_schema(tags=["Auctions"], summary="Auctions you are selling"),
    bid=extend_schema(
        tags=["Bids"],
        summary="Place a bid",
        description=(
            "Bids must be strictly higher than the current price. "
            "A 409 response means another bid landed first: refresh and retry."
        ),
        request=PlaceBidSerializer,
        responses={201: BidSerializer},
    ),
    bids=extend_schema(
        tags=["Bids"],
        summary="Bid history of an auction",
        parameters=[BidHistoryQuerySerializer],
        responses={200: AuctionBidHistorySerializer(many=True)},
    ),
    stats=extend_schema(
        tags=["Auctions"],
        summary="Bid statistics of an auction",
        description="Available to the seller and to admins.",
        responses={200: BidStatisticsSerializer},
    ),
    cancel=extend_schema(
        tags=["Auctions"],
        summary="Cancel an active auction",
        request=None,
        responses={200: AuctionSerializer},
    ),
)
class AuctionViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, mixins.CreateModelMixin, GenericViewSet):
    serializer_class = AuctionSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_class = AuctionFilter
    search_fields = ["car__make", "car__model", "car__city"]
    ordering_fields = ["end_at", "current_price", "created_at"]

    def get_queryset(self):
        if self.action == "list":
            qs = AuctionService.get_auctions_for_user(
                self.request.user,
                status=self.request.query_params.get("status", Auction.ACTIVE),
            )
        else:
            qs = AuctionService.base_queryset()
        return qs.annotate(bid_count=Count("bids")).order_by("end_at", "id")

    def get_permissions(self):
        if self.action == "create":
            return [IsAuthenticated(), IsSeller()]
        if self.action == "bid":
            return [IsAuthenticated(), IsBidder()]
        if self.action == "stats":
            return [IsAuthenticated(), IsAuctionOwnerOrAdmin()]
        return super().get_permissions()

    @action(detail=False, methods=["get"])
    def mine(self, request):
        qs = (
            AuctionService.base_queryset()
            .filter(seller=request.user)
            .annotate(bid_count=Count("bids"))
        )
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(self.get_serializer(page, many=True).data)
        return Response(self.get_serializer(qs, many=True).data)

    @action(detail=True, methods=["post"])
    def bid(self, request, pk=None):
        serializer = PlaceBidSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        bid = BidService.place_bid(
            auction_id=pk,
            bidder=request.user,
            amount=serializer.validated_data["amount"],
        )
        return Response(BidSerializer(bid).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["get"])
    def bids(self, request, pk=None):
        query = BidHistoryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        bids = BidService.get_bid_history(pk, limit=query.get_limit())
        return Response(AuctionBidHistorySerializer(bids, many=True).data)

    @action(detail=True, methods=["get"])
    def stats(self, request, pk=None):
        auction = self.get_object()
        data = get_bid_statistics(auction.bids.all())
        return Response(BidStatisticsSerializer(data).data)

    @action(detail=True, methods=["post", "patch"])
    def cancel(self, request, pk=None):
        auction = AuctionService.cancel_auction(auction_id=pk, actor=request.user)
        return Response(self.get_serializer(auction).data)


@extend_schema_view(
    list=extend_schema(
        tags=["Bids"],
        summary="List Bids",
        description="Bids made by the authenticated user; admins see every bid.",
        responses={200: BidSerializer(many=True)},
    ),
    create=extend_schema(
        tags=["Bids"],
        summary="Create a New Bid",
        description="Place a bid on an auction. Only users with the 'bidder' role can bid.",
        request=BidSerializer,
        responses={201: BidSerializer},
    ),
    retrieve=extend_schema(
        tags=["Bids"],
        summary="Retrieve a Bid",
        responses={200: BidSerializer},
    ),
    auction_bid_history=extend_schema(
        tags=["Bids"],
        summary="Bid history per auction",
        description="Retrieve all bids for a specific auction, ordered by most recent.",
        responses={200: AuctionBidHistorySerializer(many=True)},
    ),
)
class BidViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, mixins.CreateModelMixin, GenericViewSet):
    """Accepted bids are immutable, so there is no update or destroy."""
    serializer_class = BidSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return BidService.get_bids_for_user(self.request.user)

    def get_permissions(self):
        if self.action == "create":
            return [IsAuthenticated(), IsBidder()]
        return super().get_permissions()

    @action(detail=False, methods=["get"], url_path="auction/(?P<auction_id>[^/.]+)/history")
    def auction_bid_history(self, request, auction_id=None):
        bids = BidService.get_bid_history(auction_id)
        return Response(AuctionBidHistorySerializer(bids, many=True).data)
