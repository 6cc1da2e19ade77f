"""
PharmaLedger — Test Settings

In-memory SQLite, local cache, fast hashing, no throttling. Activated by
pytest through pyproject.toml.

@file config/settings/test.py
"""

from .base import *  # noqa: F401, F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    },
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    },
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []  # noqa: F405

LOGGING['loggers']['pharmaledger']['level'] = 'DEBUG'  # noqa: F405
