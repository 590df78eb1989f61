# classifieds/apps.py
"""
Django app configuration for the classifieds marketplace.
"""

from django.apps import AppConfig


class ClassifiedsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "classifieds"
    verbose_name = "Classifieds Marketplace"

    def ready(self) -> None:
        from django.conf import settings

        from . import checks  # noqa: F401

        if getattr(settings, "USE_STRUCTURED_LOGGING", True):
            from classifiedsutils.logging import configure_logging

            configure_logging()
