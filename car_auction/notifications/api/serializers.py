from rest_framework import serializers
from ..models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = ['id', 'kind', 'message', 'data', 'is_read', 'created_at']
        read_only_fields = ['id', 'kind', 'message', 'data', 'created_at']


class MarkReadSerializer(serializers.Serializer):
    id = serializers.IntegerField(required=False, help_text="Omit to mark every notification as read")
