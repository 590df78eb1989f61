# settings/base.py
"""
Base Django settings - shared across all environments.

Environment-specific settings are loaded from development.py, production.py,
staging.py and test.py on top of this module.
"""

import os
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables before any setting reads them
load_dotenv()

# src/ directory: holds manage.py and the project packages
BASE_DIR = Path(__file__).resolve().parent.parent.parent


# =============================================================================
# ENVIRONMENT DETECTION
# =============================================================================

DJANGO_ENV = os.environ.get("DJANGO_ENV", "development").lower()
IS_PRODUCTION = DJANGO_ENV in ("production", "prod")
IS_STAGING = DJANGO_ENV in ("staging",)
IS_TEST = DJANGO_ENV in ("test", "testing")
IS_DEVELOPMENT = not (IS_PRODUCTION or IS_STAGING or IS_TEST)


# =============================================================================
# REQUIRED SETTINGS VALIDATION
# =============================================================================


def _validate_required_settings():
    """
    Raise ImproperlyConfigured when production is missing required variables.
    """
    from django.core.exceptions import ImproperlyConfigured

    required_vars = []

    if IS_PRODUCTION and (
        not os.environ.get("SECRET_KEY") or os.environ.get("SECRET_KEY") == "change-me"
    ):
        required_vars.append("SECRET_KEY")

    if IS_PRODUCTION:
        for var in ["DB_NAME", "DB_USER", "DB_PASSWORD", "DB_HOST"]:
            if not os.environ.get(var):
                required_vars.append(var)

    if required_vars:
        raise ImproperlyConfigured(
            f"The following required environment variables are missing: {', '.join(required_vars)}"
        )


# =============================================================================
# CORE DJANGO SETTINGS
# =============================================================================

SECRET_KEY = os.environ.get(
    "SECRET_KEY", "django-insecure-dev-key-change-in-production"
)

DEBUG = False

ALLOWED_HOSTS = ["localhost", "127.0.0.1"]

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

AUTH_USER_MODEL = "classifieds.User"

APPEND_SLASH = False


# =============================================================================
# APPLICATION DEFINITION
# =============================================================================

DJANGO_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
]

THIRD_PARTY_APPS = [
    "rest_framework",
    "corsheaders",
    "django_celery_results",
    "django_celery_beat",
    "django_extensions",
    "drf_yasg",
]

LOCAL_APPS = [
    "classifieds.apps.ClassifiedsConfig",
]

INSTALLED_APPS = DJANGO_APPS + THIRD_PARTY_APPS + LOCAL_APPS


# =============================================================================
# MIDDLEWARE
# =============================================================================

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "classifieds.middleware.RequestLoggingMiddleware",
    "classifieds.middleware.APIRateLimitMiddleware",
]

# Request id / path context on every log entry
USE_STRUCTLOG_MIDDLEWARE = (
    os.environ.get("USE_STRUCTLOG_MIDDLEWARE", "true").lower() == "true"
)

if USE_STRUCTLOG_MIDDLEWARE:
    MIDDLEWARE.insert(0, "classifiedsutils.logging.StructlogMiddleware")


# =============================================================================
# URL CONFIGURATION
# =============================================================================

ROOT_URLCONF = "configuration.urls"

WSGI_APPLICATION = "configuration.wsgi.application"
ASGI_APPLICATION = "configuration.asgi.application"


# =============================================================================
# TEMPLATES
# =============================================================================

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]


# =============================================================================
# PASSWORD VALIDATION
# =============================================================================

AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
        "OPTIONS": {
            "min_length": 8,
        },
    },
    {
        "NAME": "django.contrib.auth.password_validation.CommonPasswordValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.NumericPasswordValidator",
    },
]


# =============================================================================
# INTERNATIONALIZATION
# =============================================================================

LANGUAGE_CODE = "pl"

TIME_ZONE = "UTC"

USE_I18N = True

USE_TZ = True


# =============================================================================
# STATIC AND MEDIA FILES
# =============================================================================

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# Listing images are stored under MEDIA_ROOT/listings/
MEDIA_URL = "/media/"
MEDIA_ROOT = Path(os.environ.get("MEDIA_ROOT", BASE_DIR / "media"))

STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
}

# Uploads above this size are streamed to a temporary file instead of memory
FILE_UPLOAD_MAX_MEMORY_SIZE = 5 * 1024 * 1024
DATA_UPLOAD_MAX_MEMORY_SIZE = 60 * 1024 * 1024


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Applied by classifiedsutils.logging.configure_logging() from apps.ready()
USE_STRUCTURED_LOGGING = (
    os.environ.get("USE_STRUCTURED_LOGGING", "true").lower() == "true"
)

# Django's own dictConfig step is skipped; configure_logging() owns it
LOGGING_CONFIG = None


# =============================================================================
# REST FRAMEWORK CONFIGURATION
# =============================================================================

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "classifieds.authentication.CustomJWTAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
        "rest_framework.renderers.BrowsableAPIRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.FormParser",
        "rest_framework.parsers.MultiPartParser",
    ],
    "DEFAULT_THROTTLE_RATES": {
        "listing_create": os.environ.get("LISTING_CREATE_RATE", "5/15m"),
    },
    "EXCEPTION_HANDLER": "classifieds.exceptions.custom_exception_handler",
}


# =============================================================================
# JWT SETTINGS
# =============================================================================

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(hours=2),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=7),
    "ROTATE_REFRESH_TOKENS": False,
    "BLACKLIST_AFTER_ROTATION": False,
    "AUTH_HEADER_TYPES": ("Bearer",),
    "USER_ID_FIELD": "user_id",
    "USER_ID_CLAIM": "user_id",
}

SWAGGER_SETTINGS = {
    "SECURITY_DEFINITIONS": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": 'JWT Authorization header using the Bearer scheme. Example: "Authorization: Bearer {token}"',
        }
    },
    "USE_SESSION_AUTH": False,
    "JSON_EDITOR": True,
    "SUPPORTED_SUBMIT_METHODS": ["get", "post", "put", "delete", "patch"],
    "OPERATIONS_SORTER": "alpha",
    "TAGS_SORTER": "alpha",
}

REDOC_SETTINGS = {
    "LAZY_RENDERING": False,
}


# =============================================================================
# CORS SETTINGS (BASE)
# =============================================================================

CORS_ALLOW_CREDENTIALS = True

CORS_ALLOW_HEADERS = [
    "accept",
    "accept-encoding",
    "authorization",
    "content-type",
    "dnt",
    "origin",
    "user-agent",
    "x-csrftoken",
    "x-requested-with",
    "x-request-id",
]

CORS_ALLOW_METHODS = [
    "DELETE",
    "GET",
    "OPTIONS",
    "PATCH",
    "POST",
    "PUT",
]


# =============================================================================
# CELERY SETTINGS
# =============================================================================

CELERY_BROKER_URL = os.environ.get("CELERY_BROKER_URL", "redis://localhost:6379/0")
CELERY_RESULT_BACKEND = os.environ.get(
    "CELERY_RESULT_BACKEND", "redis://localhost:6379/0"
)

CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_TIMEZONE = TIME_ZONE
CELERY_ENABLE_UTC = True

CELERY_TASK_TRACK_STARTED = True
CELERY_TASK_TIME_LIMIT = 30 * 60
CELERY_TASK_SOFT_TIME_LIMIT = 25 * 60

CELERY_WORKER_PREFETCH_MULTIPLIER = 1
CELERY_WORKER_MAX_TASKS_PER_CHILD = 1000

CELERY_BEAT_SCHEDULER = "django_celery_beat.schedulers:DatabaseScheduler"


# =============================================================================
# CACHE SETTINGS (DEFAULT)
# =============================================================================

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "classifieds",
    }
}


# =============================================================================
# SECURITY SETTINGS (BASE - OVERRIDDEN IN ENV FILES)
# =============================================================================

X_FRAME_OPTIONS = "SAMEORIGIN"

SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SAMESITE = "Lax"

CSRF_COOKIE_HTTPONLY = True
CSRF_COOKIE_SAMESITE = "Lax"


# =============================================================================
# RATE LIMITING
# =============================================================================

# Per client IP, every /api/ path
RATE_LIMIT_ENABLED = os.environ.get("RATE_LIMIT_ENABLED", "true").lower() == "true"
RATE_LIMIT_REQUESTS = int(os.environ.get("RATE_LIMIT_REQUESTS", 100))
RATE_LIMIT_WINDOW_SECONDS = int(os.environ.get("RATE_LIMIT_WINDOW_SECONDS", 15 * 60))


# =============================================================================
# CONTENT MODERATION SETTINGS
# =============================================================================

OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY", "")
OPENAI_API_BASE = os.environ.get("OPENAI_API_BASE", "https://api.openai.com/v1")
OPENAI_MODERATION_MODEL = os.environ.get("OPENAI_MODERATION_MODEL", "gpt-5")
MODERATION_TIMEOUT_SECONDS = float(os.environ.get("MODERATION_TIMEOUT_SECONDS", 15))

# Both verdicts must exceed this confidence to publish without review
MODERATION_AUTO_APPROVE_THRESHOLD = float(
    os.environ.get("MODERATION_AUTO_APPROVE_THRESHOLD", 0.8)
)


# =============================================================================
# LISTING SETTINGS
# =============================================================================

MAX_LISTING_IMAGES = int(os.environ.get("MAX_LISTING_IMAGES", 10))
MAX_IMAGE_UPLOAD_BYTES = int(os.environ.get("MAX_IMAGE_UPLOAD_BYTES", 5 * 1024 * 1024))
LISTING_VIEW_RETENTION_DAYS = int(os.environ.get("LISTING_VIEW_RETENTION_DAYS", 365))

TWO_FACTOR_ISSUER = os.environ.get("TWO_FACTOR_ISSUER", "Classifieds")


# =============================================================================
# APPLICATION-SPECIFIC SETTINGS
# =============================================================================

FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:5173")
API_URL = os.environ.get("API_URL", "http://localhost:8000")

