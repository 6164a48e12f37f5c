from django.contrib.auth import get_user_model
from django.db import transaction

User = get_user_model()


class UserService:

    @staticmethod
    @transaction.atomic
    def register_user(validated_data):
        first_name = validated_data.pop('first_name', '')
        last_name = validated_data.pop('last_name', '')
        contact = validated_data.pop('contact', '')
        validated_data.pop('confirm_password', None)

        # post_save creates the profile and assigns the default roles
        user = User.objects.create_user(**validated_data)

        profile = user.profile
        profile.first_name = first_name
        profile.last_name = last_name
        profile.contact = contact
        profile.save()

        return user
