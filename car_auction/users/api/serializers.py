from rest_framework import serializers
from rolepermissions.roles import get_user_roles
from django.contrib.auth import get_user_model
from car_auction.users.models import Profile
from car_auction.users.services.user_service import UserService
import bleach
import logging

logger = logging.getLogger(__name__)
User = get_user_model()


class UserRegistrationSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=8)
    confirm_password = serializers.CharField(write_only=True)
    first_name = serializers.CharField(max_length=50, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=50, required=False, allow_blank=True)
    contact = serializers.CharField(max_length=20, required=False, allow_blank=True)

    class Meta:
        model = User
        fields = ['id', 'email', 'password', 'confirm_password', 'first_name', 'last_name', 'contact']
        read_only_fields = ['id']
        extra_kwargs = {
            'email': {'required': True},
        }

    def validate_email(self, value):
        cleaned = bleach.clean(value.strip(), tags=[], strip=True).lower()
        if User.objects.filter(email__iexact=cleaned).exists():
            raise serializers.ValidationError("This email is already in use.")
        return cleaned

    def validate_password(self, value):
        if not any(char.isupper() for char in value):
            raise serializers.ValidationError("Password must contain at least one uppercase letter.")
        if not any(char.isdigit() for char in value):
            raise serializers.ValidationError("Password must contain at least one digit.")
        return value

    def validate(self, data):
        if data['password'] != data['confirm_password']:
            raise serializers.ValidationError({"confirm_password": "Passwords do not match."})
        return data

    def create(self, validated_data):
        user = UserService.register_user(validated_data)
        logger.info(f"User created: {user.email}")
        return user


class UserMiniSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(source='profile.get_full_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'email', 'full_name']


class ProfileSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(source='user.email', read_only=True)
    roles = serializers.SerializerMethodField()

    class Meta:
        model = Profile
        fields = [
            'id', 'email', 'first_name', 'last_name', 'contact', 'city', 'rating', 'rating_count',
            'roles', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'email', 'rating', 'rating_count', 'roles', 'created_at', 'updated_at']

    def get_roles(self, obj) -> list[str]:
        return [role.get_name() for role in get_user_roles(obj.user)]

    def validate(self, data):
        for field in ('first_name', 'last_name', 'contact', 'city'):
            if field in data and data[field]:
                data[field] = bleach.clean(data[field].strip(), tags=[], strip=True)
        return data
