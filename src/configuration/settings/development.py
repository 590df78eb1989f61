# settings/development.py
"""
Development settings - optimized for local development.

These settings are used when DJANGO_ENV=development or when not specified.
"""

from .base import *
from .components import (
    get_allowed_hosts,
    get_cache_settings,
    get_celery_settings,
    get_cors_settings,
    get_database_settings,
    get_redis_settings,
    get_security_settings,
)

# =============================================================================
# ENVIRONMENT
# =============================================================================

ENVIRONMENT = "development"
DEBUG = True

# =============================================================================
# DATABASE
# =============================================================================

DATABASES = get_database_settings()

# Set USE_SQLITE=true in .env to run without PostgreSQL

# =============================================================================
# REDIS / CACHE
# =============================================================================

redis_config = get_redis_settings()
CACHES = get_cache_settings(redis_config["url"])

# =============================================================================
# CELERY
# =============================================================================

celery_settings = get_celery_settings(redis_config["url"])
for key, value in celery_settings.items():
    locals()[key] = value

# =============================================================================
# CORS & SECURITY
# =============================================================================

cors_settings = get_cors_settings(debug=True)
for key, value in cors_settings.items():
    locals()[key] = value

security_settings = get_security_settings(debug=True)
for key, value in security_settings.items():
    locals()[key] = value

ALLOWED_HOSTS = get_allowed_hosts(debug=True)

# =============================================================================
# DEVELOPMENT SPECIFIC SETTINGS
# =============================================================================

# Show full error pages
DEBUG_PROPAGATE_EXCEPTIONS = False

INTERNAL_IPS = ["127.0.0.1", "localhost"]

# Looser limits for local testing
REST_FRAMEWORK = {
    **REST_FRAMEWORK,  # inherit base settings
    "DEFAULT_THROTTLE_RATES": {
        "listing_create": os.environ.get("LISTING_CREATE_RATE", "100/15m"),
    },
}
RATE_LIMIT_REQUESTS = int(os.environ.get("RATE_LIMIT_REQUESTS", 1000))
