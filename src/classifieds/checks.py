# classifieds/checks.py
"""
System checks for deployment-sensitive settings.

Run with ``python manage.py check --deploy`` or as part of any management
command.
"""

from django.conf import settings
from django.core.checks import Warning, register


@register()
def check_settings(app_configs, **kwargs):
    errors = []
    environment = getattr(settings, "ENVIRONMENT", "development")

    if settings.DEBUG and environment == "production":
        errors.append(
            Warning(
                "DEBUG is enabled in production.",
                hint="Set DEBUG=False for production deployments.",
                id="classifieds.W001",
            )
        )

    if "insecure" in settings.SECRET_KEY and environment in ("production", "staging"):
        errors.append(
            Warning(
                "Using an insecure SECRET_KEY in a deployed environment.",
                hint="Set a strong SECRET_KEY environment variable.",
                id="classifieds.W002",
            )
        )

    if not getattr(settings, "OPENAI_API_KEY", ""):
        errors.append(
            Warning(
                "OPENAI_API_KEY is not set.",
                hint="Every new listing will be held for manual review.",
                id="classifieds.W003",
            )
        )

    return errors
