from rest_framework import viewsets, permissions
from rest_framework.decorators import action
from rest_framework.response import Response
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema_view, extend_schema, OpenApiParameter
from ..models import Notification
from .serializers import NotificationSerializer, MarkReadSerializer


@extend_schema_view(
    list=extend_schema(
        tags=["Notifications"],
        summary="List notifications",
        parameters=[
            OpenApiParameter(
                name="unread",
                description="If true, only unread notifications are returned",
                required=False,
                type=str,
                enum=["true", "false"],
            )
        ],
    ),
    retrieve=extend_schema(tags=["Notifications"], summary="Retrieve a notification"),
    mark_read=extend_schema(
        tags=["Notifications"],
        summary="Mark one or all notifications as read",
        request=MarkReadSerializer,
    ),
    unread_count=extend_schema(tags=["Notifications"], summary="Get unread notification count"),
)
class NotificationViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = NotificationSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        qs = Notification.objects.filter(recipient=self.request.user).order_by("-created_at")
        if self.request.query_params.get("unread") == "true":
            qs = qs.filter(is_read=False)

        return qs

    @action(detail=False, methods=["post"])
    def mark_read(self, request):
        serializer = MarkReadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        notification_id = serializer.validated_data.get("id")
        user = request.user

        if notification_id:
            n = get_object_or_404(Notification, id=notification_id, recipient=user)
            n.is_read = True
            n.save(update_fields=["is_read"])
        else:
            Notification.objects.filter(recipient=user, is_read=False).update(is_read=True)

        return Response({"status": "ok"})

    @action(detail=False, methods=["get"])
    def unread_count(self, request):
        count = Notification.objects.filter(recipient=request.user, is_read=False).count()
        return Response({"unread": count})
