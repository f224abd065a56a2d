import os
import sys
from pathlib import Path
from dotenv import load_dotenv
from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent
# Try root project .env (one directory up from BASE_DIR) first, then local
root_env = (BASE_DIR.parent / '.env')
local_env = (BASE_DIR / '.env')
if root_env.exists():
    load_dotenv(root_env)
elif local_env.exists():
    load_dotenv(local_env)

# ---------------------------------------------------------------------------
# SECRET KEY HANDLING
# Prefer DJANGO_SECRET_KEY, fall back to SECRET_KEY.
# Outside DEBUG a non-default, non-empty key is required.
# ---------------------------------------------------------------------------
_candidate_key = (
    os.getenv('DJANGO_SECRET_KEY')
    or os.getenv('SECRET_KEY')
    or ''
)

SECRET_KEY = _candidate_key if _candidate_key else 'dev-secret-key'
DEBUG = os.getenv('DEBUG', 'True') == 'True'
ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', '*').split(',')

if (not SECRET_KEY or SECRET_KEY == 'dev-secret-key') and not DEBUG:
    raise ImproperlyConfigured(
        'SECRET_KEY is missing or using insecure default. Set DJANGO_SECRET_KEY or SECRET_KEY env var.'
    )

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'rest_framework',
    'drf_spectacular',
    'apps.common',
    'apps.users',
    'apps.catalog',
    'apps.carts',
    'apps.orders',
]

REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
    ],
    # Tokens are issued by the identity service; this backend only verifies them.
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'rest_framework_simplejwt.authentication.JWTAuthentication',
    ],
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
    'EXCEPTION_HANDLER': 'apps.api.exceptions.global_exception_handler',
}

SIMPLE_JWT = {
    'SIGNING_KEY': os.getenv('JWT_SIGNING_KEY', SECRET_KEY),
    'AUTH_HEADER_TYPES': ('Bearer',),
    'USER_ID_FIELD': 'id',
    'USER_ID_CLAIM': 'user_id',
}

SPECTACULAR_SETTINGS = {
    'TITLE': 'Storefront API',
    'DESCRIPTION': 'Storefront backend: carts, checkout and the order ledger.',
    'VERSION': '1.0.0',
    'SERVE_INCLUDE_SCHEMA': False,
    'COMPONENT_SPLIT_REQUEST': True,
    'SCHEMA_PATH_PREFIX': r'/api',
    'SERVE_PERMISSIONS': [],
}

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'apps.api.middleware.RequestValidationMiddleware',
]

ROOT_URLCONF = 'storefront.urls'

WSGI_APPLICATION = 'storefront.wsgi.application'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.postgresql',
        'NAME': os.getenv('POSTGRES_DB', 'storefront'),
        'USER': os.getenv('POSTGRES_USER', 'storefront'),
        'PASSWORD': os.getenv('POSTGRES_PASSWORD', 'storefront'),
        'HOST': os.getenv('POSTGRES_HOST', 'db'),
        'PORT': os.getenv('POSTGRES_PORT', '5432'),
        # Checkout relies on row locks taken inside each request's transaction.
        'ATOMIC_REQUESTS': False,
    }
}

"""Caching configuration.
Only the display-side product listing is cached. Checkout always reads live
prices from the database. Cache exceptions are ignored so a Redis outage
degrades to uncached reads."""
REDIS_URL = os.getenv('REDIS_URL', 'redis://redis:6379/1')
CACHE_TTL = int(os.getenv('CACHE_TTL', '60'))  # seconds

CACHES = {
    'default': {
        'BACKEND': 'django_redis.cache.RedisCache',
        'LOCATION': REDIS_URL,
        'OPTIONS': {
            'CLIENT_CLASS': 'django_redis.client.DefaultClient',
            'IGNORE_EXCEPTIONS': True,
        },
        'KEY_PREFIX': os.getenv('CACHE_KEY_PREFIX', 'storefront'),
        'TIMEOUT': CACHE_TTL,
    }
}

# Use SQLite for tests to simplify CI/dev without Postgres
USING_PYTEST = (
    os.getenv('PYTEST_CURRENT_TEST') is not None
    or any(os.path.basename(arg).startswith('pytest') for arg in sys.argv)
    or 'pytest' in sys.modules
)

if 'test' in sys.argv or USING_PYTEST:
    # TEST_USE_POSTGRES=1 keeps the PostgreSQL database so the row-lock tests run.
    if not os.getenv('TEST_USE_POSTGRES'):
        DATABASES = {
            'default': {
                'ENGINE': 'django.db.backends.sqlite3',
                'NAME': BASE_DIR / 'db.sqlite3',
            }
        }
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
            'LOCATION': 'storefront-test-cache',
            'TIMEOUT': 60,
        }
    }

LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'plain': {
            'format': '%(asctime)s %(levelname)s %(name)s %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'plain',
        },
    },
    'loggers': {
        'apps': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}

AUTH_PASSWORD_VALIDATORS = []

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Use custom user model
AUTH_USER_MODEL = 'users.User'
