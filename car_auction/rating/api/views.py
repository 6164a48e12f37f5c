from rest_framework import mixins, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiResponse

from ..services.rating_service import RatingService
from .serializers import RateUserSerializer, UserRatingSerializer
from car_auction.users.permissions.drf_permissions import IsSuperAdminOrAdmin


@extend_schema_view(
    list=extend_schema(
        tags=["Ratings"],
        summary="List ratings",
        description="Admin only. Filter with ?car= and ?rated_user=.",
        responses={200: UserRatingSerializer(many=True)},
    ),
    create=extend_schema(
        tags=["Ratings"],
        summary="Rate a user for a car",
        description=(
            "One rating per rater, rated user and car. Rating again replaces the "
            "previous score and returns 200 instead of 201."
        ),
        request=RateUserSerializer,
        responses={
            200: UserRatingSerializer,
            201: UserRatingSerializer,
            400: OpenApiResponse(description="Invalid score or self-rating"),
            404: OpenApiResponse(description="User or car not found"),
        },
    ),
)
class UserRatingViewSet(mixins.ListModelMixin, GenericViewSet):
    serializer_class = UserRatingSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['car', 'rated_user']

    def get_queryset(self):
        return RatingService.base_queryset().order_by('-created_at', '-id')

    def get_permissions(self):
        if self.action == "list":
            return [IsAuthenticated(), IsSuperAdminOrAdmin()]
        return super().get_permissions()

    def create(self, request, *args, **kwargs):
        serializer = RateUserSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        rating, created = RatingService.rate_user(
            rater=request.user,
            rated_user_id=serializer.validated_data['rated_user'],
            car_id=serializer.validated_data['car'],
            score=serializer.validated_data['score'],
            comment=serializer.validated_data.get('comment'),
        )
        return Response(
            UserRatingSerializer(rating).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )
