"""
Test settings for LicenseTokenService.
"""

import os
import urllib.parse

from .base import *  # noqa: F403, F401

DEBUG = False

# No exporter or metrics server under test
os.environ.setdefault("OTEL_ENABLED", "false")

# Use PostgreSQL in CI (from DATABASE_URL), SQLite in-memory for local tests
DATABASE_URL = os.environ.get("DATABASE_URL")
if DATABASE_URL and DATABASE_URL.startswith("postgresql"):
    parsed = urllib.parse.urlparse(DATABASE_URL)
    db_name = parsed.path[1:] if parsed.path.startswith("/") else parsed.path
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": db_name,
            "USER": parsed.username or "postgres",
            "PASSWORD": parsed.password or "",
            "HOST": parsed.hostname or "localhost",
            "PORT": parsed.port or 5432,
            "TEST": {
                "NAME": db_name + "_test",
            },
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
        }
    }

# Use in-memory cache for tests
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

# Password hashers for faster tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

LICENSE_TOKEN_EXPECTED_ISSUER = None
LICENSE_TOKEN_EXPECTED_AUDIENCE = None

# Disable logging during tests
LOGGING_CONFIG = None
