import os

from celery import Celery
from celery.signals import setup_logging

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "configuration.settings")

app = Celery("classifieds")

# Every CELERY_* setting (broker, routes, beat schedule) comes from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Picks up classifieds.tasks
app.autodiscover_tasks()


@setup_logging.connect
def configure_worker_logging(**kwargs):
    """Keep Celery from replacing the structlog handlers."""
    from django.conf import settings

    if getattr(settings, "USE_STRUCTURED_LOGGING", True):
        from classifiedsutils.logging import configure_logging

        configure_logging()
