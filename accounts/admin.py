from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin interface for custom User model."""

    list_display = [
        'email',
        'first_name',
        'last_name',
        'email_notifications_enabled',
        'last_login',
        'is_staff',
    ]
    list_filter = ['email_notifications_enabled', 'is_staff', 'is_superuser']
    search_fields = ['email', 'first_name', 'last_name']
    ordering = ['email']

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Notifications', {'fields': ('email_notifications_enabled',)}),
    )

    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('Notifications', {'fields': ('email', 'email_notifications_enabled')}),
    )
