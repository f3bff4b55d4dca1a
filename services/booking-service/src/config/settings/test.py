"""
Test Settings

Django settings for running tests.
"""

from datetime import timedelta

from .base import *

DEBUG = False
TESTING = True

# In-memory SQLite unless a real database is requested (concurrency tests need PostgreSQL)
if os.environ.get('TEST_DB_ENGINE') == 'postgresql':
    DATABASES['default']['HOST'] = os.environ.get('DB_HOST', 'localhost')
    DATABASES['default']['PORT'] = os.environ.get('DB_PORT', '5432')
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': ':memory:',
        }
    }


# Disable migrations for faster tests
class DisableMigrations:
    def __contains__(self, item):
        return True

    def __getitem__(self, item):
        return None


MIGRATION_MODULES = DisableMigrations()

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    },
}

# Symmetric key so tests can mint tokens
JWT_SETTINGS = {
    'ALGORITHM': 'HS256',
    'SIGNING_KEY': 'test-secret-key-for-testing-only',
    'VERIFYING_KEY': 'test-secret-key-for-testing-only',
    'ISSUER': 'booking-platform-auth',
    'ACCESS_TOKEN_LIFETIME': timedelta(minutes=5),
}

# Logging - minimal output during tests
LOGGING = {
    'version': 1,
    'disable_existing_loggers': True,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'CRITICAL',
    },
    'loggers': {
        'django': {
            'handlers': ['null'],
            'level': 'CRITICAL',
            'propagate': False,
        },
        'apps': {
            'handlers': ['null'],
            'level': 'CRITICAL',
            'propagate': False,
        },
    },
}

CORS_ALLOW_ALL_ORIGINS = True
