from rest_framework import serializers
from ..models import Car, CarLike
from car_auction.users.api.serializers import UserMiniSerializer
import re
import bleach
from datetime import datetime


class CarSerializer(serializers.ModelSerializer):
    """
    Vehicle details of an auction listing.
    Free text is sanitized; enum fields are validated against the model choices.
    """

    class Meta:
        model = Car
        fields = [
            'id', 'make', 'model', 'year', 'mileage', 'power', 'fuel_type', 'body_type',
            'condition', 'euro_standard', 'description', 'specs',
            'address_line', 'zipcode', 'city', 'created_at',
        ]
        read_only_fields = ['id', 'created_at']

    def validate_make(self, value):
        cleaned = bleach.clean(value.strip(), tags=[], strip=True)
        if not cleaned:
            raise serializers.ValidationError("Make cannot be empty.")
        if len(cleaned) > 100:
            raise serializers.ValidationError("Make cannot exceed 100 characters.")
        if not re.match(r"^[a-zA-Z0-9\s-]+$", cleaned):
            raise serializers.ValidationError("Invalid characters.")
        return cleaned

    def validate_model(self, value):
        cleaned = bleach.clean(value.strip(), tags=[], strip=True)
        if not cleaned:
            raise serializers.ValidationError("Model cannot be empty.")
        if len(cleaned) > 100:
            raise serializers.ValidationError("Model cannot exceed 100 characters.")
        if not re.match(r"^[a-zA-Z0-9\s-]+$", cleaned):
            raise serializers.ValidationError("Invalid characters.")
        return cleaned

    def validate_year(self, value):
        current_year = datetime.now().year
        if not 1900 <= value <= current_year + 1:
            raise serializers.ValidationError(f"Year must be 1900-{current_year+1}.")
        return value

    def validate_mileage(self, value):
        if value < 0:
            raise serializers.ValidationError("Mileage cannot be negative.")
        if value > 1000000:
            raise serializers.ValidationError("Mileage cannot exceed 1,000,000 km.")
        return value

    def validate_power(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError("Power must be positive.")
        return value

    def validate_description(self, value):
        if value:
            return bleach.clean(value.strip(), tags=[], strip=True)
        return value

    def validate_specs(self, value):
        if value:
            return bleach.clean(value.strip(), tags=[], strip=True)
        return value

    def validate_city(self, value):
        if value:
            return bleach.clean(value.strip(), tags=[], strip=True)
        return value


class CarLikeSerializer(serializers.ModelSerializer):
    user = UserMiniSerializer(read_only=True)

    class Meta:
        model = CarLike
        fields = ['id', 'car', 'user', 'created_at']
        read_only_fields = fields
