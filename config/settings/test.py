"""
Test settings: in-memory SQLite, fast hashing, in-memory file storage.
"""
import os

# base.py refuses to start without a PostgreSQL config; the test DB is replaced below.
os.environ.setdefault('DB_NAME', 'llpmm_test')
os.environ.setdefault('DB_USER', 'llpmm')

from .base import *  # noqa: E402,F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.InMemoryStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

LOGGING['loggers'] = {}  # noqa: F405
