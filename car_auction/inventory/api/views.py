from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiResponse

from ..models import Car
from ..services.car_like_service import CarLikeService
from .serializers import CarLikeSerializer
from car_auction.users.permissions.drf_permissions import IsSuperAdminOrAdmin


@extend_schema_view(
    like=extend_schema(
        tags=["Likes"],
        summary="Like or unlike a car",
        description="POST adds a like (400 if already liked); DELETE removes it.",
        request=None,
        responses={
            201: CarLikeSerializer,
            204: OpenApiResponse(description="Like removed"),
            400: OpenApiResponse(description="Already liked"),
            404: OpenApiResponse(description="Car not found"),
        },
    ),
    likes=extend_schema(
        tags=["Likes"],
        summary="Users who liked a car",
        description="Admin only.",
        responses={200: CarLikeSerializer(many=True)},
    ),
)
class CarViewSet(GenericViewSet):
    queryset = Car.objects.all()
    serializer_class = CarLikeSerializer
    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        if self.action == "likes":
            return [IsAuthenticated(), IsSuperAdminOrAdmin()]
        return super().get_permissions()

    @action(detail=True, methods=["post", "delete"])
    def like(self, request, pk=None):
        if request.method == "DELETE":
            CarLikeService.unlike_car(request.user, pk)
            return Response(status=status.HTTP_204_NO_CONTENT)

        like = CarLikeService.like_car(request.user, pk)
        return Response(CarLikeSerializer(like).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["get"])
    def likes(self, request, pk=None):
        likes = CarLikeService.list_likes(pk)
        return Response(CarLikeSerializer(likes, many=True).data)
