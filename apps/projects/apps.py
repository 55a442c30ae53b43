# apps/projects/apps.py

import logging

from django.apps import AppConfig


class ProjectsConfig(AppConfig):
    """JSON endpoints for project records"""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.projects'
    verbose_name = 'Projects - API'

    def ready(self):
        logger = logging.getLogger(__name__)
        logger.debug("Projects API ready")
