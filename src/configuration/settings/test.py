# settings/test.py
"""
Test settings - optimized for running tests.

These settings are used when DJANGO_ENV=test or DJANGO_ENV=testing, and
loaded directly by pytest (see pyproject.toml).
Focus is on speed and isolation from external services.
"""

from .base import *
from .components import get_cors_settings, get_security_settings

# =============================================================================
# ENVIRONMENT
# =============================================================================

ENVIRONMENT = "test"
DEBUG = True
TEST = True
USE_STRUCTURED_LOGGING = False

# =============================================================================
# DATABASE - SQLite
# =============================================================================

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
        "ATOMIC_REQUESTS": True,  # Each test in a transaction
        "OPTIONS": {"timeout": 20},
        # File-backed so worker threads in concurrency tests share one database
        "TEST": {"NAME": str(BASE_DIR / "test-db.sqlite3")},
    }
}

# =============================================================================
# CACHE - Local memory cache
# =============================================================================

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "test-cache",
    }
}

# =============================================================================
# CELERY - Run tasks synchronously
# =============================================================================

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True

# =============================================================================
# CORS - Permissive
# =============================================================================

cors_settings = get_cors_settings(debug=True)
for key, value in cors_settings.items():
    locals()[key] = value

# =============================================================================
# SECURITY - Relaxed for tests
# =============================================================================

security_settings = get_security_settings(debug=True)
for key, value in security_settings.items():
    locals()[key] = value

ALLOWED_HOSTS = ["*"]

# =============================================================================
# PASSWORD VALIDATORS - Disabled for speed
# =============================================================================

AUTH_PASSWORD_VALIDATORS = []


# =============================================================================
# RATE LIMITS - High enough not to interfere
# =============================================================================

RATE_LIMIT_REQUESTS = 1000

# =============================================================================
# MODERATION - Oracle calls are patched in tests
# =============================================================================

OPENAI_API_KEY = "test-key"
MODERATION_TIMEOUT_SECONDS = 1

# =============================================================================
# MEDIA - Overridden per test with a temporary directory
# =============================================================================

MEDIA_ROOT = BASE_DIR / "test-media"

# =============================================================================
# TEST OPTIMIZATIONS
# =============================================================================

# Use faster password hasher for tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Migrations stay enabled: 0002 seeds the default categories

# Empty internal IPs
INTERNAL_IPS = []
