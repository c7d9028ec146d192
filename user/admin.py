from django.contrib import admin

from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'role', 'is_deleted', 'created_at')
    list_filter = ('role', 'is_deleted')
    search_fields = ('user__email', 'user__first_name')
