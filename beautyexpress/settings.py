# beautyexpress/settings.py
#
# Purpose:
# - Django settings for the BeautyExpress salon admin backend.
# - Everything deployment-specific comes from environment variables
#   (optionally loaded from a local .env file).
#
# Notes for developers:
# - Leave MPESA_CONSUMER_KEY / MPESA_CONSUMER_SECRET empty in dev: the payment
#   client then answers STK push requests with a simulated success response.
# - TIME_ZONE decides what "today" means for dashboard stats and revenue reports.
#
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")


def _env_bool(name, default):
    return os.environ.get(name, str(default)).lower() in ("1", "true", "yes", "on")


def _split_csv(value):
    return [x.strip() for x in (value or "").split(",") if x.strip()]


# -------------------------
# Core
# -------------------------
SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-only-insecure-key-change-me")
DEBUG = _env_bool("DJANGO_DEBUG", True)
ALLOWED_HOSTS = _split_csv(os.environ.get("DJANGO_ALLOWED_HOSTS", "*"))

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "configmgr",
    "booking.apps.BookingConfig",
    "staff",
    "messaging",
    "notifications.apps.NotificationsConfig",
    "reports",
    "payments",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "beautyexpress.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "beautyexpress.wsgi.application"

# -------------------------
# Database
# -------------------------
DATABASES = {
    "default": {
        "ENGINE": os.environ.get("DATABASE_ENGINE", "django.db.backends.sqlite3"),
        "NAME": os.environ.get("DATABASE_NAME", str(BASE_DIR / "db.sqlite3")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# -------------------------
# i18n / time
# -------------------------
LANGUAGE_CODE = "en-us"
TIME_ZONE = os.environ.get("TIME_ZONE", "Africa/Nairobi")
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# -------------------------
# REST framework
# -------------------------
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.SessionAuthentication",
        "rest_framework.authentication.BasicAuthentication",
    ],
}

# -------------------------
# Logging
# -------------------------
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s [%(levelname)s] %(name)s :: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
}

# -------------------------
# Salon
# -------------------------
# Recipient id used for admin-facing notifications (new bookings, customer messages).
SALON_ADMIN_ID = os.environ.get("SALON_ADMIN_ID", "admin")

# Seconds to wait for the first snapshot of each dashboard subscription.
STATS_FIRST_SNAPSHOT_TIMEOUT = float(os.environ.get("STATS_FIRST_SNAPSHOT_TIMEOUT", "5"))
# Seconds before a stats read re-queries the database (writes from other processes)
STATS_REFRESH_INTERVAL = float(os.environ.get("STATS_REFRESH_INTERVAL", "30"))

# -------------------------
# M-Pesa (Daraja) payment gateway
# -------------------------
MPESA_CONSUMER_KEY = os.environ.get("MPESA_CONSUMER_KEY", "")
MPESA_CONSUMER_SECRET = os.environ.get("MPESA_CONSUMER_SECRET", "")
MPESA_ENV = os.environ.get("MPESA_ENV", "sandbox")
MPESA_SHORTCODE = os.environ.get("MPESA_SHORTCODE", "174379")
MPESA_TILL_NUMBER = os.environ.get("MPESA_TILL_NUMBER", "")
MPESA_PASSKEY = os.environ.get(
    "MPESA_PASSKEY",
    "bfb279f9aa9bdbcf158e97dd71a467cd2e0c893059b10f78e6b72ada1ed2c919",
)
MPESA_RECEIVER_NUMBER = os.environ.get("MPESA_RECEIVER_NUMBER", "0707444525")
MPESA_CALLBACK_URL = os.environ.get("MPESA_CALLBACK_URL", "https://mydomain.com/path")
MPESA_TIMEOUT = float(os.environ.get("MPESA_TIMEOUT", "30"))
