import logging

from django.db import IntegrityError, transaction
from rest_framework.exceptions import NotFound, ValidationError

from ..models import Car, CarLike

logger = logging.getLogger(__name__)


class CarLikeService:

    @staticmethod
    def get_car(car_id):
        try:
            return Car.objects.get(pk=car_id)
        except (Car.DoesNotExist, ValueError, TypeError):
            raise NotFound("Car not found.")

    @staticmethod
    def like_car(user, car_id):
        car = CarLikeService.get_car(car_id)
        try:
            with transaction.atomic():
                like, created = CarLike.objects.get_or_create(user=user, car=car)
        except IntegrityError:
            # a concurrent request created the same like
            created = False

        if not created:
            raise ValidationError("You have already liked this car.")

        logger.info(f"{user.email} liked car {car.id}")
        return like

    @staticmethod
    def unlike_car(user, car_id):
        """Removing a like that does not exist is not an error."""
        car = CarLikeService.get_car(car_id)
        deleted, _ = CarLike.objects.filter(user=user, car=car).delete()
        if deleted:
            logger.info(f"{user.email} unliked car {car.id}")
        return deleted

    @staticmethod
    def list_likes(car_id):
        car = CarLikeService.get_car(car_id)
        return car.likes.select_related('user', 'user__profile').order_by('-created_at', '-id')
