from django.db import models
from django.contrib.auth import get_user_model

User = get_user_model()


class Notification(models.Model):
    BID_RECEIVED = 'bid_received'
    OUTBID = 'outbid'

    KIND_CHOICES = [
        (BID_RECEIVED, 'Bid received'),
        (OUTBID, 'Outbid'),
    ]

    recipient = models.ForeignKey(User, on_delete=models.CASCADE, related_name='notifications')
    kind = models.CharField(max_length=20, choices=KIND_CHOICES, default=BID_RECEIVED)
    message = models.TextField(null=True, blank=True)
    data = models.JSONField(default=dict, blank=True)  # for structured info
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['recipient', 'is_read'], name='idx_notification_unread'),
            models.Index(fields=['created_at'], name='idx_notification_created'),
        ]

    def __str__(self):
        return f"Notification to {self.recipient}: {(self.message or '')[:50]}"
