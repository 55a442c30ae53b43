# apps/dashboard/apps.py

from django.apps import AppConfig


class DashboardConfig(AppConfig):
    """Client engine, its templates and the console command"""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.dashboard'
    verbose_name = 'Dashboard - Client'
