import os
from datetime import timedelta
from pathlib import Path

from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent
SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'dev-secret-change-me')
DEBUG = os.environ.get('DJANGO_DEBUG', 'false').lower() == 'true'
ALLOWED_HOSTS = ['*']

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'rest_framework',
    'corsheaders',
    'tmbackend.api',
]

# Order matters: each entry may short-circuit the ones below it.
MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'tmbackend.api.middleware.RequestLogMiddleware',
    'tmbackend.api.middleware.UnhandledErrorMiddleware',
    'tmbackend.api.middleware.JsonBodyMiddleware',
    'tmbackend.api.middleware.BearerTokenMiddleware',
]

ROOT_URLCONF = 'tmbackend.urls'

WSGI_APPLICATION = 'tmbackend.wsgi.application'

# Database: SQLite file, connections kept open and reused per worker thread
SQLITE_FILE = os.environ.get('SQLITE_FILE', str(BASE_DIR / 'data.sqlite'))
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': SQLITE_FILE,
        'CONN_MAX_AGE': int(os.environ.get('DB_CONN_MAX_AGE', '60')),
    }
}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Listen port used by `manage.py runserver` when none is given
PORT = int(os.environ.get('PORT', '4000'))

# CORS settings - parse comma-separated CLIENT_URL env
_cors = os.environ.get('CLIENT_URL', 'http://localhost:5173')
CORS_ALLOWED_ORIGINS = [o.strip() for o in _cors.split(',') if o.strip()]
CORS_ALLOW_METHODS = ['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS']
CORS_ALLOW_HEADERS = ['content-type', 'authorization']

REST_FRAMEWORK = {
    'UNAUTHENTICATED_USER': None,
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [],
}


def _parse_ttl(value):
    """Parse `3600`, `90s`, `15m`, `12h` or `1d` into a timedelta."""
    units = {'s': 'seconds', 'm': 'minutes', 'h': 'hours', 'd': 'days'}
    value = value.strip().lower()
    unit = 's'
    if value and value[-1] in units:
        value, unit = value[:-1], value[-1]
    if not (value.isascii() and value.isdigit()):
        raise ImproperlyConfigured('JWT_EXPIRES_IN must look like 3600, 30m, 12h or 1d')
    return timedelta(**{units[unit]: int(value)})


# Bearer tokens
TOKEN_SECRET = os.environ.get('JWT_SECRET') or SECRET_KEY
TOKEN_TTL = _parse_ttl(os.environ.get('JWT_EXPIRES_IN', '1d'))

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'plain': {
            'format': '%(asctime)s | %(levelname)s | %(name)s | %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'plain',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        # 4xx lines are already written by tmbackend.request; 5xx still log here
        'django.request': {
            'level': 'ERROR',
        },
    },
}
