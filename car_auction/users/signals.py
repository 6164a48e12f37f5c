import logging

from django.db.models.signals import post_save
from django.dispatch import receiver
from rolepermissions.checkers import has_role
from rolepermissions.roles import assign_role

from car_auction.users.models import User, Profile
from car_auction.users.roles.base_roles import DEFAULT_ROLES

logger = logging.getLogger(__name__)


@receiver(post_save, sender=User)
def create_profile(sender, instance, created, **kwargs):
    """Every new account gets a profile and may both sell and bid."""
    if not created:
        return

    Profile.objects.get_or_create(user=instance)
    for role in DEFAULT_ROLES:
        if not has_role(instance, role):
            assign_role(instance, role)
    logger.debug(f"Profile and default roles created for {instance.email}")
