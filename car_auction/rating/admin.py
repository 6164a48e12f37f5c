from django.contrib import admin

from .models import UserRating


@admin.register(UserRating)
class UserRatingAdmin(admin.ModelAdmin):
    list_display = ['rated_user', 'rater', 'car', 'score', 'created_at']
    list_filter = ['score']
    search_fields = ['rated_user__email', 'rater__email', 'car__make', 'car__model']
    raw_id_fields = ['rated_user', 'rater', 'car']
    readonly_fields = ['created_at', 'updated_at']
