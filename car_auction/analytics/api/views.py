import logging

from rest_framework.viewsets import ViewSet
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from car_auction.users.permissions.drf_permissions import IsSuperAdminOrAdmin
from ..utils import get_platform_statistics
from .serializers import DashboardSerializer

logger = logging.getLogger(__name__)


class AnalyticsViewSet(ViewSet):
    """ Analytics endpoints """
    permission_classes = [IsSuperAdminOrAdmin]

    @extend_schema(
        tags=["Analytics"],
        description="Platform-wide auction and bidding statistics (admin only).",
        responses={200: DashboardSerializer},
    )
    @action(detail=False, methods=["get"])
    def dashboard(self, request):
        serializer = DashboardSerializer(get_platform_statistics())
        logger.info(f"Dashboard statistics served to {request.user.email}")
        return Response(serializer.data)
