"""
Development settings
"""
from .base import *

DEBUG = True

LOGGING['loggers'].setdefault('django.db.backends', {'handlers': ['console'], 'level': 'INFO'})

# Email backend (console for development)
EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'
