from rest_framework import mixins, status
from rest_framework.viewsets import GenericViewSet
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, extend_schema_view
from .serializers import ProfileSerializer, UserRegistrationSerializer, UserMiniSerializer
from car_auction.users.models import Profile
import logging

logger = logging.getLogger(__name__)


@extend_schema_view(
    create=extend_schema(
        tags=["Authentication & Users"],
        summary="Register a new account",
        request=UserRegistrationSerializer,
        responses={201: UserMiniSerializer},
    ),
)
class RegistrationViewSet(mixins.CreateModelMixin, GenericViewSet):
    serializer_class = UserRegistrationSerializer
    permission_classes = [AllowAny]
    authentication_classes = []

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(UserMiniSerializer(user).data, status=status.HTTP_201_CREATED)


@extend_schema_view(
    me=extend_schema(tags=["Authentication & Users"], summary="Get or update your own profile"),
)
class ProfileViewSet(GenericViewSet):
    serializer_class = ProfileSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return Profile.objects.select_related('user').filter(user=self.request.user)

    @action(detail=False, methods=["get", "patch"], url_path="me")
    def me(self, request):
        profile, _ = Profile.objects.get_or_create(user=request.user)

        if request.method == "PATCH":
            serializer = self.get_serializer(profile, data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            serializer.save()
            logger.info(f"Profile (me) updated for {request.user.email}")
            return Response(serializer.data)

        return Response(self.get_serializer(profile).data)
