# storefront/config/settings.py
import os
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv
import dj_database_url

BASE_DIR = Path(__file__).resolve().parent.parent.parent  # backend/
load_dotenv(BASE_DIR / ".env")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    return int(raw) if raw.strip() else default


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-insecure-secret-change-me")
DEBUG = _env_flag("DJANGO_DEBUG")
ALLOWED_HOSTS = [
    h.strip()
    for h in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if h.strip()
]
CORS_ALLOWED_ORIGINS = [
    o.strip()
    for o in os.environ.get("CORS_ALLOWED_ORIGINS", "").split(",")
    if o.strip()
]
CORS_ALLOW_CREDENTIALS = True

DATABASES = {
    "default": dj_database_url.config(
        default=os.environ.get("DATABASE_URL") or f"sqlite:///{BASE_DIR / 'db.sqlite3'}",
        conn_max_age=600,
    )
}

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # third party
    "rest_framework",
    "corsheaders",
    # local apps
    "storefront.common",
    "storefront.shops",
    "storefront.orders",
    "storefront.phone_verifications",
    "storefront.phone_auth",
    "storefront.customer_sessions",
    "storefront.customers",
]

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "storefront.customer_sessions.authentication.CustomerSessionAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": ("rest_framework.permissions.IsAuthenticated",),
    "EXCEPTION_HANDLER": "storefront.common.exceptions.custom_exception_handler",
    "UNAUTHENTICATED_USER": None,
}

# customer session tokens are signed with simplejwt's backend
SIMPLE_JWT = {
    "ALGORITHM": "HS256",
    "SIGNING_KEY": os.environ.get("CUSTOMER_JWT_SECRET", SECRET_KEY),
    "TOKEN_TYPE_CLAIM": "token_type",
    "JTI_CLAIM": "jti",
}

# Phone OTP policy
OTP_CODE_LENGTH = _env_int("OTP_CODE_LENGTH", 6)
OTP_CODE_TTL = timedelta(seconds=_env_int("OTP_CODE_TTL_SEC", 300))
OTP_MAX_ATTEMPTS = _env_int("OTP_MAX_ATTEMPTS", 5)
OTP_ISSUE_COOLDOWN = timedelta(seconds=_env_int("OTP_ISSUE_COOLDOWN_SEC", 60))
OTP_SECRET = os.environ.get("OTP_SECRET", SECRET_KEY)
OTP_DEV_MODE = _env_flag("OTP_DEV_MODE")

CUSTOMER_SESSION_TTL = timedelta(days=_env_int("CUSTOMER_SESSION_TTL_DAYS", 30))
CUSTOMER_SESSION_COOKIE = "customer_session"

# SMS: console | solapi | smsir
SMS_BACKEND = os.environ.get("SMS_BACKEND", "console").strip().lower()
SMSIR_API_KEY = os.environ.get("SMSIR_API_KEY", "")
SMSIR_TEMPLATE_ID = os.environ.get("SMSIR_TEMPLATE_ID", "")
SMSIR_BASE_URL = os.environ.get("SMSIR_BASE_URL", "https://api.sms.ir/v1")
SOLAPI_API_KEY = os.environ.get("SOLAPI_API_KEY", "")
SOLAPI_API_SECRET = os.environ.get("SOLAPI_API_SECRET", "")
SOLAPI_FROM_NUMBER = os.environ.get("SOLAPI_FROM_NUMBER", "")
SMS_TIMEOUT_SEC = _env_int("SMS_TIMEOUT_SEC", 10)

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]


TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "storefront": {
            "handlers": ["console"],
            "level": os.environ.get("DJANGO_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

ROOT_URLCONF = "storefront.config.urls"

WSGI_APPLICATION = "storefront.config.wsgi.application"
ASGI_APPLICATION = "storefront.config.asgi.application"
APPEND_SLASH = False
USE_TZ = True
TIME_ZONE = "Asia/Tehran"
LANGUAGE_CODE = "fa"

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"},
}
