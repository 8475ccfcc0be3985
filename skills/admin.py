from django.contrib import admin
from .models import Skill


@admin.register(Skill)
class SkillAdmin(admin.ModelAdmin):
    """Admin interface for Skill."""

    list_display = ['name', 'category', 'level', 'user', 'created_at', 'last_updated']
    list_filter = ['level', 'category', 'last_updated']
    search_fields = ['name', 'category', 'user__email', 'description']
    readonly_fields = ['created_at', 'last_updated']

    fieldsets = (
        ('Skill', {
            'fields': ('user', 'name', 'category', 'level', 'description')
        }),
        ('Metadata', {
            'fields': ('created_at', 'last_updated')
        }),
    )
