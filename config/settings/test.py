# config/settings/test.py
from .base import *  # noqa

DEBUG = False
SECRET_KEY = "test-secret-key-not-for-production-use-0123456789"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

# app records propagate to the root logger so caplog sees them
LOGGING["root"]["level"] = "WARNING"
LOGGING["loggers"]["cr_core"] = {"level": "INFO", "propagate": True}
