from django.contrib import admin
from django.contrib.auth import get_user_model
from rolepermissions.admin import RolePermissionsUserAdmin
from rolepermissions.roles import get_user_roles, assign_role, remove_role
from rolepermissions.exceptions import RoleDoesNotExist
from django.db.models import Count

from car_auction.users.models import Profile
from car_auction.users.utils import is_admin

User = get_user_model()

# Unregister User first
try:
    admin.site.unregister(User)
except admin.sites.NotRegistered:
    pass


# Inline for Profile under User
class ProfileInline(admin.StackedInline):
    model = Profile
    can_delete = False
    verbose_name_plural = 'Profile'
    fields = ['first_name', 'last_name', 'contact', 'city', 'rating', 'rating_count', 'created_at', 'updated_at']
    readonly_fields = ['rating', 'rating_count', 'created_at', 'updated_at']


# Custom User Admin
@admin.register(User)
class CustomUserAdmin(RolePermissionsUserAdmin):
    ordering = ("email",)
    list_display = ("email", "is_active", "is_staff", "get_roles", "auction_count", "bid_count")
    search_fields = ("email",)
    list_filter = ("is_active", "is_staff")
    inlines = [ProfileInline]
    actions = ['grant_admin_role', 'revoke_admin_role']

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'password1', 'password2', 'is_active', 'is_staff'),
        }),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(
            num_auctions=Count('auctions', distinct=True),
            num_bids=Count('bids', distinct=True),
        )

    def get_roles(self, obj):
        return ", ".join([role.get_name() for role in get_user_roles(obj)])

    get_roles.short_description = "Roles"

    def auction_count(self, obj):
        return obj.num_auctions

    auction_count.short_description = "Auctions"

    def bid_count(self, obj):
        return obj.num_bids

    bid_count.short_description = "Bids"

    def _change_admin_role(self, request, queryset, grant):
        if not is_admin(request.user):
            self.message_user(request, "Only admins can change roles.", level='error')
            return
        for user in queryset:
            try:
                if grant:
                    assign_role(user, 'admin')
                else:
                    remove_role(user, 'admin')
                self.message_user(request, f"{'Granted' if grant else 'Revoked'} admin role for {user.email}")
            except RoleDoesNotExist:
                self.message_user(request, f"Role admin does not exist for {user.email}.", level='error')

    def grant_admin_role(self, request, queryset):
        self._change_admin_role(request, queryset, grant=True)

    grant_admin_role.short_description = "Grant Admin role"

    def revoke_admin_role(self, request, queryset):
        self._change_admin_role(request, queryset, grant=False)

    revoke_admin_role.short_description = "Revoke Admin role"


# Profile Admin
@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("id", "user_email", "first_name", "last_name", "city", "rating", "rating_count", "created_at")
    search_fields = ("user__email", "first_name", "last_name", "contact", "city")
    list_filter = ("created_at",)
    readonly_fields = ("rating", "rating_count", "created_at", "updated_at")

    def user_email(self, obj):
        return obj.user.email

    user_email.short_description = "User Email"
