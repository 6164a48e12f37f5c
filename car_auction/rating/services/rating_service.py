import logging
from decimal import Decimal, ROUND_HALF_UP

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Avg, Count
from rest_framework.exceptions import NotFound, ValidationError

from car_auction.inventory.models import Car
from car_auction.users.models import Profile
from ..models import UserRating

logger = logging.getLogger(__name__)
User = get_user_model()

MIN_SCORE, MAX_SCORE = 1, 5


class RatingService:

    @staticmethod
    @transaction.atomic
    def rate_user(*, rater, rated_user_id, car_id, score, comment=None):
        """
        Create or replace the rater's score for ``rated_user`` over ``car``
        and refresh the rated user's profile summary.

        Returns ``(rating, created)``.
        """
        if not MIN_SCORE <= score <= MAX_SCORE:
            raise ValidationError({"score": f"Score must be between {MIN_SCORE} and {MAX_SCORE}."})

        try:
            rated_user = User.objects.get(pk=rated_user_id)
        except (User.DoesNotExist, ValueError, TypeError):
            raise NotFound("User not found.")
        try:
            car = Car.objects.get(pk=car_id)
        except (Car.DoesNotExist, ValueError, TypeError):
            raise NotFound("Car not found.")

        if rated_user.pk == rater.pk:
            raise ValidationError("You cannot rate yourself.")

        rating, created = UserRating.objects.update_or_create(
            rated_user=rated_user,
            rater=rater,
            car=car,
            defaults={"score": score, "comment": comment},
        )
        RatingService.refresh_profile_rating(rated_user)

        logger.info(
            f"{rater.email} {'rated' if created else 're-rated'} {rated_user.email} "
            f"{score}/5 for car {car.id}"
        )
        return rating, created

    @staticmethod
    def refresh_profile_rating(user):
        summary = UserRating.objects.filter(rated_user=user).aggregate(average=Avg('score'), count=Count('id'))
        average = Decimal(str(summary['average'] or 0)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
        Profile.objects.filter(user=user).update(rating=average, rating_count=summary['count'])

    @staticmethod
    def base_queryset():
        return UserRating.objects.select_related('rater', 'rater__profile', 'rated_user', 'rated_user__profile', 'car')
