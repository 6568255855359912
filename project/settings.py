"""
Django settings for the OAI-PMH repository.

Most settings can be overridden from the environment; see the OAI-PMH section
at the bottom for the repository's own configuration.
"""

import json
import os
from datetime import timedelta


def env_bool(name, default):
    return os.environ.get(name, str(default)).lower() in ('1', 'true', 'yes', 'on')


def env_list(name, default):
    value = os.environ.get(name)
    if value is None:
        return list(default)
    return [part.strip() for part in value.split(',') if part.strip()]


BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

SECRET_KEY = os.environ.get('SECRET_KEY', 'c^0=k9r3i2jp)-oai-pmh-dev-only-secret')

DEBUG = env_bool('DEBUG', True)

ALLOWED_HOSTS = env_list('ALLOWED_HOSTS', ['*'] if DEBUG else [])

INSTALLED_APPS = [
    'oairepo',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'project.urls'

WSGI_APPLICATION = 'project.wsgi.application'

DATABASES = {
    'default': {
        'ENGINE': os.environ.get('DATABASE_ENGINE', 'django.db.backends.sqlite3'),
        'NAME': os.environ.get('DATABASE_NAME', os.path.join(BASE_DIR, 'oairepo.sqlite3')),
        'USER': os.environ.get('DATABASE_USER', ''),
        'PASSWORD': os.environ.get('DATABASE_PASSWORD', ''),
        'HOST': os.environ.get('DATABASE_HOST', ''),
        'PORT': os.environ.get('DATABASE_PORT', ''),
    },
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = False
USE_TZ = True

# Logging
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'json': {
            '()': 'project.logging_formatter.JsonLogFormatter',
        },
        'console': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'json' if env_bool('LOG_JSON', False) else 'console',
        },
    },
    'loggers': {
        'oairepo': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'django': {
            'handlers': ['console'],
            'level': os.environ.get('DJANGO_LOG_LEVEL', 'WARNING'),
            'propagate': False,
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
}

# Celery
CELERY_BROKER_URL = os.environ.get('CELERY_BROKER_URL', 'memory://')
CELERY_TASK_ALWAYS_EAGER = env_bool('CELERY_TASK_ALWAYS_EAGER', False)
CELERY_BEAT_SCHEDULE = {
    'Expire resumption tokens': {
        'task': 'oairepo.tasks.expire_resumption_tokens',
        'schedule': timedelta(minutes=10),
    },
}

# OAI-PMH repository
OAIPMH_REPOSITORY_NAME = os.environ.get('OAIPMH_REPOSITORY_NAME', 'OAI-PMH Repository')
# identifiers look like "oai:<namespace id>:<item id>"
OAIPMH_NAMESPACE_ID = os.environ.get('OAIPMH_NAMESPACE_ID', 'localhost')
OAIPMH_ADMIN_EMAILS = env_list('OAIPMH_ADMIN_EMAILS', ['admin@localhost'])

# include a dc:identifier per attached file
OAIPMH_EXPOSE_MEDIA = env_bool('OAIPMH_EXPOSE_MEDIA', True)
# which item link to append as the record's own identifier: 'url', 'api_url' or 'none'
OAIPMH_APPEND_IDENTIFIER = os.environ.get('OAIPMH_APPEND_IDENTIFIER', 'url')
# how to render uri values: 'uri', 'label' or 'uri_label'
OAIPMH_FORMAT_URI = os.environ.get('OAIPMH_FORMAT_URI', 'uri')

# keys in the `oairepo.metadata_formats` entry point namespace
OAIPMH_METADATA_FORMATS = env_list('OAIPMH_METADATA_FORMATS', ['oai_dc', 'mods', 'mets', 'cdwalite'])
# keys in the `oairepo.value_filters` and `oairepo.element_policies` namespaces
OAIPMH_VALUE_FILTERS = env_list('OAIPMH_VALUE_FILTERS', ['strip_blank'])
OAIPMH_DC_ELEMENT_POLICIES = env_list('OAIPMH_DC_ELEMENT_POLICIES', ['fit_thesis'])

# key in the `oairepo.oai_sets` namespace; empty for no sets from the item source
OAIPMH_SET_FORMAT = os.environ.get('OAIPMH_SET_FORMAT', 'base')
# extra sets, {setSpec: {'name': ..., 'description': ...}}
OAIPMH_STATIC_SETS = json.loads(os.environ.get('OAIPMH_STATIC_SETS', '{}'))

OAIPMH_LIST_LIMIT = int(os.environ.get('OAIPMH_LIST_LIMIT', 50))
OAIPMH_TOKEN_EXPIRATION_MINUTES = int(os.environ.get('OAIPMH_TOKEN_EXPIRATION_MINUTES', 10))
# 'database' or 'memory' (memory only works with a single server process)
OAIPMH_TOKEN_STORE = os.environ.get('OAIPMH_TOKEN_STORE', 'database')

# key in the `oairepo.item_sources` namespace, and keyword args for it
OAIPMH_ITEM_SOURCE = os.environ.get('OAIPMH_ITEM_SOURCE', 'memory')
OAIPMH_ITEM_SOURCE_OPTIONS = json.loads(os.environ.get('OAIPMH_ITEM_SOURCE_OPTIONS', '{}'))
