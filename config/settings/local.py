# config/settings/local.py
from .base import *  # noqa

DEBUG = os.getenv("DJANGO_DEBUG", "1") == "1"

# print mail to the console unless an SMTP backend is configured
EMAIL_BACKEND = os.getenv("EMAIL_BACKEND", "django.core.mail.backends.console.EmailBackend")

LOGGING["loggers"]["cr_core"]["level"] = "DEBUG" if DEBUG else LOG_LEVEL
