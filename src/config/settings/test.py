"""
Test settings.

Optimized for fast, isolated testing without external dependencies.
Uses SQLite in memory and a local cache instead of PostgreSQL/Redis.
"""

from .base import *  # noqa: F401,F403

SECRET_KEY = "test-secret-key"
DEBUG = False
ALLOWED_HOSTS = ["*"]
ENVIRONMENT = "test"

# Database: SQLite in memory for fast, isolated tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
        "OPTIONS": {
            "timeout": 20,
        },
    }
}

# Cache: Local memory cache instead of Redis
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "test-cache",
        "TIMEOUT": 300,
    }
}

# Posts: fixed values so tests do not depend on the environment
POSTS_DEFAULT_PAGE_SIZE = 10
POSTS_MAX_PAGE_SIZE = 100

# Security headers from SecurityMiddleware: disabled for testing
SECURE_SSL_REDIRECT = False
SECURE_CONTENT_TYPE_NOSNIFF = False

# Logging: Quiet logging during tests
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {
            "level": "ERROR",
            "class": "logging.StreamHandler",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "ERROR",
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": "ERROR",
            "propagate": False,
        },
        "django.db.backends": {
            "handlers": [],
            "level": "ERROR",
            "propagate": False,
        },
    },
}
