import bleach
from rest_framework import serializers

from ..models import UserRating
from ..services.rating_service import MIN_SCORE, MAX_SCORE
from car_auction.users.api.serializers import UserMiniSerializer


class RateUserSerializer(serializers.Serializer):
    rated_user = serializers.IntegerField()
    car = serializers.IntegerField()
    score = serializers.IntegerField(min_value=MIN_SCORE, max_value=MAX_SCORE)
    comment = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_comment(self, value):
        if value:
            return bleach.clean(value.strip(), tags=[], strip=True)
        return value


class UserRatingSerializer(serializers.ModelSerializer):
    rater = UserMiniSerializer(read_only=True)
    rated_user = UserMiniSerializer(read_only=True)

    class Meta:
        model = UserRating
        fields = ['id', 'car', 'rater', 'rated_user', 'score', 'comment', 'created_at', 'updated_at']
        read_only_fields = fields
