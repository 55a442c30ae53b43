# apps/core/admin.py

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html

from .models import Usuario, Project


@admin.register(Usuario)
class UsuarioAdmin(BaseUserAdmin):
    """Admin for the custom user"""

    list_display = ['username', 'full_name', 'role', 'is_active', 'date_joined']
    list_filter = ['role', 'is_staff', 'is_active', 'date_joined']
    search_fields = ['username', 'full_name', 'email']
    ordering = ['-date_joined']

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Profile', {
            'fields': ('full_name', 'role')
        }),
    )

    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('Profile', {
            'fields': ('full_name', 'role')
        }),
    )


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    """Admin for project records"""

    list_display = ['id', 'student_name', 'project_title', 'status_badge', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['student_name', 'project_title']
    readonly_fields = ['created_at']

    def status_badge(self, obj):
        """Status with a colored badge"""
        colors = {
            Project.STATUS_PROPOSAL: '#F59E0B',  # amber
            Project.STATUS_ONGOING: '#3B82F6',  # blue
            Project.STATUS_COMPLETED: '#10B981',  # green
        }
        color = colors.get(obj.status, '#6B7280')
        return format_html(
            '<span style="background-color: {}; color: white; '
            'padding: 3px 8px; border-radius: 4px; font-size: 11px;">{}</span>',
            color, obj.status
        )

    status_badge.short_description = 'Status'
