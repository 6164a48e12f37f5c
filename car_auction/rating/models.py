from django.db import models
from django.db.models import F, Q
from django.contrib.auth import get_user_model

from car_auction.inventory.models import Car

User = get_user_model()


class UserRating(models.Model):
    """A score one user gives another over a car they dealt on."""
    rated_user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='ratings_received')
    rater = models.ForeignKey(User, on_delete=models.CASCADE, related_name='ratings_given')
    car = models.ForeignKey(Car, on_delete=models.CASCADE, related_name='ratings')
    score = models.PositiveSmallIntegerField()  # 1–5
    comment = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            # one rating per rater, rated user and car; re-rating updates it
            models.UniqueConstraint(fields=['rated_user', 'rater', 'car'], name='unique_user_rating_per_car'),
            models.CheckConstraint(condition=Q(score__gte=1, score__lte=5), name='userrating_valid_score'),
            models.CheckConstraint(condition=~Q(rater=F('rated_user')), name='userrating_no_self_rating'),
        ]
        indexes = [
            models.Index(fields=['rated_user'], name='idx_rating_rated_user'),
        ]

    def __str__(self):
        return f"{self.score}/5 for {self.rated_user.email} by {self.rater.email}"
