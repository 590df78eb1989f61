# settings/__init__.py
"""
Loads the settings module named by DJANGO_ENV.

    development (default), dev, local -> development.py
    staging, stage                    -> staging.py
    production, prod                  -> production.py
    test, testing                     -> test.py

pytest skips this package and points DJANGO_SETTINGS_MODULE at
``configuration.settings.test`` directly.
"""

import os
import sys

ENVIRONMENT_ALIASES = {
    "dev": "development",
    "local": "development",
    "stage": "staging",
    "prod": "production",
    "testing": "test",
}

_requested = os.environ.get("DJANGO_ENV", "development").lower()
environment = ENVIRONMENT_ALIASES.get(_requested, _requested)
if environment not in ("development", "staging", "production", "test"):
    environment = "development"

# The autoreloader child would print it a second time
if not os.environ.get("RUN_MAIN"):
    print(f"[classifieds] Using {environment.upper()} settings", file=sys.stderr)

if environment == "production":
    from .production import *  # noqa: F403
elif environment == "staging":
    from .staging import *  # noqa: F403
elif environment == "test":
    from .test import *  # noqa: F403
else:
    from .development import *  # noqa: F403

CURRENT_ENVIRONMENT = environment
