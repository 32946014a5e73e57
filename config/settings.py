"""Django settings for the weather average service.

Every value can be overridden through environment variables; defaults are
suitable for local development.
"""

from __future__ import annotations

import os
from pathlib import Path


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> list[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-only-not-for-prod")
DEBUG = _env_bool("DJANGO_DEBUG", False)
ALLOWED_HOSTS = _env_list(
    "DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver"
)

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "drf_spectacular",
    "django_prometheus",
    "weather",
]

MIDDLEWARE = [
    "django_prometheus.middleware.PrometheusBeforeMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django_prometheus.middleware.PrometheusAfterMiddleware",
]

ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"
ASGI_APPLICATION = "config.asgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {"context_processors": []},
    }
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "EXCEPTION_HANDLER": "config.api.exceptions.custom_exception_handler",
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Weather Average API",
    "DESCRIPTION": (
        "Average current temperature of a city across several weather "
        "providers, in Kelvin."
    ),
    "VERSION": "1.0.0",
}

# ---- Weather providers ----
WEATHER_PROVIDERS = _env_list(
    "WEATHER_PROVIDERS", "openweathermap,apixu,tomorrow"
)
OPENWEATHERMAP_API_KEY = os.getenv("OPENWEATHERMAP_API_KEY", "")
APIXU_API_KEY = os.getenv("APIXU_API_KEY", "")
TOMORROW_API_KEY = os.getenv("TOMORROW_API_KEY", "")
OPENWEATHERMAP_BASE_URL = os.getenv(
    "OPENWEATHERMAP_BASE_URL",
    "http://api.openweathermap.org/data/2.5/weather",
)
APIXU_BASE_URL = os.getenv(
    "APIXU_BASE_URL", "https://api.apixu.com/v1/current.json"
)
TOMORROW_BASE_URL = os.getenv(
    "TOMORROW_BASE_URL", "https://api.tomorrow.io/v4/weather/realtime"
)
WEATHER_PROVIDER_TIMEOUT_SECONDS = float(
    os.getenv("WEATHER_PROVIDER_TIMEOUT_SECONDS", "10")
)
WEATHER_AGGREGATION_TIMEOUT_SECONDS = float(
    os.getenv("WEATHER_AGGREGATION_TIMEOUT_SECONDS", "10")
)

LOG_LEVEL = os.getenv("DJANGO_LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "weather": {"level": LOG_LEVEL},
        "config": {"level": LOG_LEVEL},
    },
}
