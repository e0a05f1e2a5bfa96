"""Development settings: debug on, verbose logging, SQLite."""

from .base import *  # noqa: F401,F403
from .base import LOGGING

DEBUG = True
ALLOWED_HOSTS = ["*"]

LOGGING["loggers"]["apps"]["level"] = "DEBUG"  # type: ignore[index]
