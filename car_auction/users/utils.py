from rolepermissions.checkers import has_role


def is_admin(user):
    """Platform admins: django staff/superusers or anyone holding the admin role."""
    if user is None or not user.is_authenticated:
        return False
    return user.is_superuser or user.is_staff or has_role(user, 'admin')
