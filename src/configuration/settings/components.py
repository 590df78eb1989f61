# settings/components.py
"""
Settings components shared by the environment modules.

Each factory reads its environment variables and returns a dict, so an
environment module only decides which flavour it wants:

    from .components import get_database_settings
    DATABASES = get_database_settings()
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent


def _get_env_bool(key: str, default: bool = False) -> bool:
    return os.environ.get(key, str(default)).lower() in ("true", "1", "yes", "on")


def _get_env_int(key: str, default: int = 0) -> int:
    try:
        return int(os.environ.get(key, str(default)))
    except (ValueError, TypeError):
        return default


def _get_env_list(key: str, default: list | None = None) -> list:
    """Comma-separated environment variable as a list."""
    value = os.environ.get(key, "")
    return [item.strip() for item in value.split(",") if item.strip()] or (
        default or []
    )


# =============================================================================
# DATABASE SETTINGS
# =============================================================================


def get_database_settings() -> dict:
    """
    Listing store configuration.

    PostgreSQL unless USE_SQLITE is set. Connections are kept for a minute
    because every listing page hits the database.

    Environment variables:
        DB_NAME, DB_USER, DB_PASSWORD, DB_HOST, DB_PORT_NUMBER, DB_SSLMODE
        USE_SQLITE: use a local db.sqlite3 instead
        DOCKER_ENV: default DB_HOST to the compose service name
    """
    if _get_env_bool("USE_SQLITE"):
        return {
            "default": {
                "ENGINE": "django.db.backends.sqlite3",
                "NAME": BASE_DIR / "db.sqlite3",
            }
        }

    is_docker = _get_env_bool("DOCKER_ENV")
    return {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.environ.get("DB_NAME", "classifieds"),
            "USER": os.environ.get("DB_USER", "postgres"),
            "PASSWORD": os.environ.get("DB_PASSWORD", "postgres"),
            "HOST": os.environ.get("DB_HOST", "db" if is_docker else "localhost"),
            "PORT": _get_env_int("DB_PORT_NUMBER", 5432),
            "OPTIONS": {
                "connect_timeout": 10,
                "sslmode": os.environ.get("DB_SSLMODE", "prefer"),
            },
            "CONN_MAX_AGE": 60,
            "CONN_HEALTH_CHECKS": True,
        }
    }


# =============================================================================
# REDIS SETTINGS
# =============================================================================


def get_redis_settings() -> dict:
    """
    Redis connection shared by the cache, the rate limiter and Celery.

    Returns a dict whose ``url`` has no database number; callers append
    the one they use.
    """
    is_docker = _get_env_bool("DOCKER_ENV")

    host = os.environ.get("REDIS_HOST", "redis" if is_docker else "localhost")
    port = _get_env_int("REDIS_PORT_NUMBER", 6379)
    password = os.environ.get("REDIS_PASSWORD", "")

    auth = f":{password}@" if password else ""
    return {
        "url": f"redis://{auth}{host}:{port}",
        "host": host,
        "port": port,
    }


def get_cache_settings(redis_url: str) -> dict:
    """
    Django cache on Redis database 0.

    Holds the per-IP request counters, the DRF throttle history and the
    token blacklist, so it must be shared by every web worker.
    """
    return {
        "default": {
            "BACKEND": "django_redis.cache.RedisCache",
            "LOCATION": f"{redis_url}/0",
            "TIMEOUT": _get_env_int("CACHE_DEFAULT_TIMEOUT", 300),
            "OPTIONS": {
                "CLIENT_CLASS": "django_redis.client.DefaultClient",
                "SOCKET_CONNECT_TIMEOUT": 5,
                "SOCKET_TIMEOUT": 5,
                "CONNECTION_POOL_KWARGS": {"max_connections": 50},
            },
            "KEY_PREFIX": "classifieds",
        },
    }


# =============================================================================
# CELERY SETTINGS
# =============================================================================


def get_celery_settings(redis_url: str) -> dict:
    """
    Celery configuration: broker on Redis database 1, results stored by
    django-celery-results, periodic jobs from django-celery-beat.

    Environment variables:
        CELERY_BROKER_URL: override the broker
        CELERY_WORKER_CONCURRENCY: worker processes (default 4)
        CELERY_TASK_TIME_LIMIT: hard limit per task in seconds
    """
    from celery.schedules import crontab

    return {
        "CELERY_BROKER_URL": os.environ.get("CELERY_BROKER_URL", f"{redis_url}/1"),
        "CELERY_RESULT_BACKEND": "django-db",
        "CELERY_CACHE_BACKEND": "default",
        "CELERY_ACCEPT_CONTENT": ["json"],
        "CELERY_TASK_SERIALIZER": "json",
        "CELERY_RESULT_SERIALIZER": "json",
        "CELERY_TIMEZONE": "UTC",
        "CELERY_ENABLE_UTC": True,
        # File cleanup and pruning are short; anything longer is stuck
        "CELERY_TASK_TIME_LIMIT": _get_env_int("CELERY_TASK_TIME_LIMIT", 300),
        "CELERY_TASK_SOFT_TIME_LIMIT": _get_env_int("CELERY_TASK_SOFT_TIME_LIMIT", 240),
        "CELERY_TASK_ACKS_LATE": True,
        "CELERY_RESULT_EXPIRES": 3600,
        "CELERY_WORKER_CONCURRENCY": _get_env_int("CELERY_WORKER_CONCURRENCY", 4),
        "CELERY_WORKER_MAX_TASKS_PER_CHILD": 1000,
        "CELERY_WORKER_PREFETCH_MULTIPLIER": 1,
        "CELERY_BEAT_SCHEDULER": "django_celery_beat.schedulers:DatabaseScheduler",
        "CELERY_BEAT_SCHEDULE": {
            "prune-listing-views": {
                "task": "classifieds.tasks.tasks.prune_listing_views_task",
                "schedule": crontab(minute=30, hour=3),
            },
        },
        "CELERY_TASK_ROUTES": {
            "classifieds.tasks.tasks.*": {"queue": "default"},
        },
    }


# =============================================================================
# CORS SETTINGS
# =============================================================================


def get_cors_settings(debug: bool = False) -> dict:
    """
    CORS for the browser client.

    In debug the local dev servers are allowed; otherwise only
    CORS_ALLOWED_ORIGINS. ``x-request-id`` is exposed so the client can
    quote it when reporting a failed upload.
    """
    if debug:
        origins = _get_env_list(
            "CORS_ALLOWED_ORIGINS",
            [
                "http://localhost:5000",
                "http://localhost:5173",
                "http://127.0.0.1:5173",
                "http://localhost:8000",
            ],
        )
        allow_all = _get_env_bool("CORS_ALLOW_ALL_ORIGINS", True)
    else:
        origins = _get_env_list(
            "CORS_ALLOWED_ORIGINS", ["https://classifieds.example.com"]
        )
        allow_all = _get_env_bool("CORS_ALLOW_ALL_ORIGINS", False)

    return {
        "CORS_ALLOW_ALL_ORIGINS": allow_all,
        "CORS_ALLOWED_ORIGINS": origins,
        "CORS_ALLOW_HEADERS": [
            "accept",
            "authorization",
            "content-type",
            "origin",
            "x-request-id",
            "x-requested-with",
        ],
        "CORS_EXPOSE_HEADERS": ["x-request-id", "retry-after"],
        "CORS_ALLOW_CREDENTIALS": True,
        "CSRF_TRUSTED_ORIGINS": origins,
    }


# =============================================================================
# SECURITY SETTINGS
# =============================================================================


def get_security_settings(debug: bool = False) -> dict:
    if debug:
        return {
            "SECURE_SSL_REDIRECT": False,
            "SECURE_PROXY_SSL_HEADER": None,
            "SESSION_COOKIE_SECURE": False,
            "CSRF_COOKIE_SECURE": False,
            "SECURE_HSTS_SECONDS": 0,
            "X_FRAME_OPTIONS": "SAMEORIGIN",
        }

    return {
        "SECURE_SSL_REDIRECT": True,
        "SECURE_PROXY_SSL_HEADER": ("HTTP_X_FORWARDED_PROTO", "https"),
        "SECURE_HSTS_SECONDS": 31536000,
        "SECURE_HSTS_INCLUDE_SUBDOMAINS": True,
        "SECURE_HSTS_PRELOAD": True,
        "SESSION_COOKIE_SECURE": True,
        "SESSION_COOKIE_HTTPONLY": True,
        "CSRF_COOKIE_SECURE": True,
        "SECURE_CONTENT_TYPE_NOSNIFF": True,
        "SECURE_REFERRER_POLICY": "strict-origin-when-cross-origin",
        "X_FRAME_OPTIONS": "DENY",
    }


# =============================================================================
# ALLOWED HOSTS
# =============================================================================


def get_allowed_hosts(debug: bool = False) -> list:
    """ALLOWED_HOSTS from the environment, or a per-mode default."""
    hosts = _get_env_list("ALLOWED_HOSTS")
    if hosts:
        return hosts
    return ["*"] if debug else ["localhost", "127.0.0.1"]
