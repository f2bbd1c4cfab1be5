# pokrok/settings.py
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / '.env')


def env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


SECRET_KEY = os.getenv('SECRET_KEY', 'django-insecure-dev-key-change-me')
DEBUG = env_bool('DEBUG', False)
ALLOWED_HOSTS = [h.strip() for h in os.getenv('ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',') if h.strip()]


INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'django_filters',

    # Project apps
    'apps.core',
    'apps.areas',
    'apps.goals',
    'apps.steps',
    'apps.habits',
    'apps.workflows',
    'apps.players',
    'apps.calendar_app',
    'apps.crm',
    'apps.newsletter',
    'apps.content',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'apps.core.middleware.IdentityProviderMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

AUTHENTICATION_BACKENDS = [
    'apps.core.backends.IdentityProviderBackend',
    'django.contrib.auth.backends.ModelBackend',
]

ROOT_URLCONF = 'pokrok.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'pokrok.wsgi.application'


# SQLite locally, PostgreSQL when DB_NAME is set
if os.getenv('DB_NAME'):
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': os.getenv('DB_NAME'),
            'USER': os.getenv('DB_USER', ''),
            'PASSWORD': os.getenv('DB_PASSWORD', ''),
            'HOST': os.getenv('DB_HOST', 'localhost'),
            'PORT': os.getenv('DB_PORT', '5432'),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'db.sqlite3',
        }
    }

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LANGUAGE_CODE = 'cs'
TIME_ZONE = 'Europe/Prague'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'


# Identity provider (the reverse proxy sets these headers)
IDENTITY_USER_HEADER = os.getenv('IDENTITY_USER_HEADER', 'HTTP_X_IDENTITY_USER')
IDENTITY_EMAIL_HEADER = os.getenv('IDENTITY_EMAIL_HEADER', 'HTTP_X_IDENTITY_EMAIL')

# Cron endpoints
CRON_SECRET = os.getenv('CRON_SECRET', '')
CRON_JOB_ORG_API_KEY = os.getenv('CRON_JOB_ORG_API_KEY', '')
APP_URL = os.getenv('APP_URL', 'http://localhost:8000').rstrip('/')

# Field encryption at rest
ENCRYPTION_MASTER_KEY = os.getenv('ENCRYPTION_MASTER_KEY', '')

# Recurring steps
RECURRENCE_LOOKAHEAD_DAYS = int(os.getenv('RECURRENCE_LOOKAHEAD_DAYS', '30'))

# Calendar
CALENDAR_PROVIDER = os.getenv('CALENDAR_PROVIDER', 'google')
GOOGLE_CLIENT_SECRETS_FILE = os.getenv('GOOGLE_CLIENT_SECRETS_FILE', str(BASE_DIR / 'client_secret.json'))
GOOGLE_REDIRECT_URI = os.getenv('GOOGLE_REDIRECT_URI', f'{APP_URL}/api/google/callback')
COACH_TIMEZONE = os.getenv('COACH_TIMEZONE', 'Europe/Prague')

# Task board (ClickUp)
CLICKUP_API_TOKEN = os.getenv('CLICKUP_API_TOKEN', '')
CLICKUP_LIST_ID = os.getenv('CLICKUP_LIST_ID', '')

# E-mail
EMAIL_BACKEND = os.getenv('EMAIL_BACKEND', 'django.core.mail.backends.console.EmailBackend')
EMAIL_HOST = os.getenv('EMAIL_HOST', 'localhost')
EMAIL_PORT = int(os.getenv('EMAIL_PORT', '25'))
EMAIL_HOST_USER = os.getenv('EMAIL_HOST_USER', '')
EMAIL_HOST_PASSWORD = os.getenv('EMAIL_HOST_PASSWORD', '')
EMAIL_USE_TLS = env_bool('EMAIL_USE_TLS', False)
DEFAULT_FROM_EMAIL = os.getenv('DEFAULT_FROM_EMAIL', 'Pokrok <noreply@localhost>')
ADMIN_EMAIL = os.getenv('ADMIN_EMAIL', 'admin@localhost')

# Outbox
OUTBOX_MAX_ATTEMPTS = int(os.getenv('OUTBOX_MAX_ATTEMPTS', '5'))


LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
        'apps': {
            'handlers': ['console'],
            'level': os.getenv('LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}
