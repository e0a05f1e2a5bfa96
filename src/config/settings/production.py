# mypy: ignore-errors
import logging

import sentry_sdk
from decouple import Csv, config
from sentry_sdk.integrations.django import DjangoIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from .base import *  # noqa: F403, F401

# Import specific symbols to avoid F405 errors
from .base import (
    CACHES,
    DATABASES,
    LOGGING,
    MIDDLEWARE,
    REDIS_URL,
    VERSION,
)

# GENERAL
# ------------------------------------------------------------------------------
DEBUG = False
ENVIRONMENT = config("ENVIRONMENT", default="production")
SECRET_KEY = config("SECRET_KEY")
ALLOWED_HOSTS = config("ALLOWED_HOSTS", cast=Csv())

# SECURITY
# ------------------------------------------------------------------------------
SECURE_SSL_REDIRECT = config("SECURE_SSL_REDIRECT", default=True, cast=bool)
SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_REFERRER_POLICY = "strict-origin-when-cross-origin"
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

# HSTS Settings
SECURE_HSTS_SECONDS = 31536000  # 1 year
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True

# Database Performance
# ------------------------------------------------------------------------------
DATABASES["default"]["CONN_MAX_AGE"] = config("DB_CONN_MAX_AGE", default=600, cast=int)
DATABASES["default"]["CONN_HEALTH_CHECKS"] = True

# Static Files
# ------------------------------------------------------------------------------
MIDDLEWARE.insert(1, "whitenoise.middleware.WhiteNoiseMiddleware")
STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage",
    },
}

# Cache
# ------------------------------------------------------------------------------
if REDIS_URL:
    CACHES["default"]["TIMEOUT"] = 3600
    CACHES["default"]["OPTIONS"]["CONNECTION_POOL_KWARGS"].update(
        {
            "max_connections": 100,
            "retry_on_timeout": True,
        }
    )
    # Surface cache errors in production instead of hiding them
    CACHES["default"]["OPTIONS"]["IGNORE_EXCEPTIONS"] = False

# CORS
# ------------------------------------------------------------------------------
CORS_ALLOW_ALL_ORIGINS = False
CORS_ALLOWED_ORIGINS = config("CORS_ALLOWED_ORIGINS", cast=Csv(), default="")
CORS_EXPOSE_HEADERS = ["X-Request-ID"]

# Logging for Production
# ------------------------------------------------------------------------------
LOGGING["handlers"]["console"]["formatter"] = "json"
LOGGING["handlers"]["file"] = {
    "level": "ERROR",
    "class": "logging.handlers.RotatingFileHandler",
    "filename": config("LOG_FILE", default="logs/production.log"),
    "maxBytes": 1024 * 1024 * 15,  # 15MB
    "backupCount": 10,
    "formatter": "json",
}
LOGGING["root"]["handlers"].append("file")

# Error Monitoring with Sentry
# ------------------------------------------------------------------------------
SENTRY_DSN = config("SENTRY_DSN", default="")
if SENTRY_DSN:
    sentry_logging = LoggingIntegration(
        level=logging.INFO,  # Capture info and above as breadcrumbs
        event_level=logging.ERROR,  # Send errors as events
    )

    sentry_sdk.init(
        dsn=SENTRY_DSN,
        integrations=[
            DjangoIntegration(transaction_style="url", middleware_spans=True),
            sentry_logging,
        ],
        traces_sample_rate=config("SENTRY_TRACES_SAMPLE_RATE", default=0.1, cast=float),
        send_default_pii=False,
        environment=ENVIRONMENT,
        release=VERSION,
        max_breadcrumbs=50,
        attach_stacktrace=True,
    )

# Health Check Configuration
HEALTH_CHECK = {
    "MEMORY_MIN": config("HEALTH_CHECK_MEMORY_MIN", default=100, cast=int),
}
