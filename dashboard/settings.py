"""
Django settings for the Project Monitoring Dashboard.

Values come from the environment (.env via python-dotenv).

Runtime overrides that admins may change without a deploy live in
config.SiteSetting rows (see config/services.py).
"""

from pathlib import Path
from dotenv import load_dotenv
import os

load_dotenv()

# --------------------------------------------------
# Core paths
# --------------------------------------------------

BASE_DIR = Path(__file__).resolve().parent.parent

# --------------------------------------------------
# Security
# --------------------------------------------------

# WARNING: the fallback key is for local development only
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-insecure-dashboard-key")

ENV = os.getenv("DJANGO_ENV", "dev")

DEBUG = ENV == "dev"

ALLOWED_HOSTS = [
    h.strip()
    for h in os.getenv("DJANGO_ALLOWED_HOSTS", "testserver,localhost,127.0.0.1").split(",")
    if h.strip()
]
AUTH_USER_MODEL = "accounts.User"

AUTHENTICATION_BACKENDS = [
    "accounts.backends.EmailOrUsernameBackend",
]

# The single site administrator. Superusers are admins as well.
DASHBOARD_ADMIN_EMAIL = os.getenv("DASHBOARD_ADMIN_EMAIL", "admin@example.com")

# Sign-up requests (a config.SiteSetting row "signups_enabled" overrides this)
DASHBOARD_SIGNUPS_ENABLED = os.getenv("DASHBOARD_SIGNUPS_ENABLED", "1") not in ("0", "false", "False")

# --------------------------------------------------
# Applications
# --------------------------------------------------

INSTALLED_APPS = [
    # Django core...
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "django_extensions",

    # Project apps
    "accounts.apps.AccountsConfig",
    "config.apps.ConfigConfig",
    "projects.apps.ProjectsConfig",
    "deepwells.apps.DeepwellsConfig",
    "reforestation.apps.ReforestationConfig",
    "chats.apps.ChatsConfig",
    "notifications.apps.NotificationsConfig",
    "reports.apps.ReportsConfig",
    "uploads.apps.UploadsConfig",
]


# --------------------------------------------------
# Middleware
# --------------------------------------------------

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]


# --------------------------------------------------
# URL configuration
# --------------------------------------------------

ROOT_URLCONF = "dashboard.urls"


# --------------------------------------------------
# Templates
# --------------------------------------------------

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
                "accounts.context_processors.access_flags",
                "accounts.context_processors.pending_users_badge",
                "chats.context_processors.messenger_badge",
                "notifications.context_processors.polling",
            ],
        },
    },
]

# --------------------------------------------------
# WSGI
# --------------------------------------------------

WSGI_APPLICATION = "dashboard.wsgi.application"

# --------------------------------------------------
# Email
# --------------------------------------------------
if ENV == "dev":
    EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"
else:
    EMAIL_BACKEND = "accounts.email_backends.CertifiTLSEmailBackend"
    EMAIL_HOST = os.getenv("EMAIL_HOST", "smtp.gmail.com")
    EMAIL_PORT = int(os.getenv("EMAIL_PORT", "587"))
    EMAIL_USE_TLS = True
    EMAIL_HOST_USER = os.getenv("EMAIL_HOST_USER")
    EMAIL_HOST_PASSWORD = os.getenv("EMAIL_HOST_PASSWORD")
DEFAULT_FROM_EMAIL = os.getenv("DEFAULT_FROM_EMAIL", f"Project Dashboard <{DASHBOARD_ADMIN_EMAIL}>")

# --------------------------------------------------
# Database
# --------------------------------------------------

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.getenv("DASHBOARD_DB_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}


# --------------------------------------------------
# Password validation
# --------------------------------------------------

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]


# --------------------------------------------------
# Internationalisation
# --------------------------------------------------

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.getenv("DASHBOARD_TIME_ZONE", "Asia/Manila")
USE_I18N = True
USE_TZ = True

# --------------------------------------------------
# Logins
# --------------------------------------------------

LOGIN_URL = "accounts:login"
LOGIN_REDIRECT_URL = "projects:list"
LOGOUT_REDIRECT_URL = "accounts:login"


# --------------------------------------------------
# Static files
# --------------------------------------------------

STATIC_URL = "/static/"
STATICFILES_DIRS = [BASE_DIR / "static"]
STATIC_ROOT = BASE_DIR / "staticfiles"

# ============================================================
# MEDIA (photos, KMZ attachments)
# ============================================================

MEDIA_ROOT = Path(os.getenv("DASHBOARD_MEDIA_ROOT", str(BASE_DIR / "media")))
MEDIA_URL = "/media/"

# --------------------------------------------------
# Default primary key field type
# --------------------------------------------------

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# --------------------------------------------------
# Reports (DOCX template + optional PDF converter)
# --------------------------------------------------

DOCX_TEMPLATE_PATH = os.getenv("DOCX_TEMPLATE_PATH", "")
DOCX_PDF_ENDPOINT = os.getenv("DOCX_PDF_ENDPOINT", "")
DOCX_PDF_ENDPOINT_TYPE = os.getenv("DOCX_PDF_ENDPOINT_TYPE", "")
DOCX_PDF_TIMEOUT_SECONDS = int(os.getenv("DOCX_PDF_TIMEOUT_SECONDS", "60"))

# Photo compression (JPEG, bounded longest side)
PHOTO_MAX_DIMENSION = 1024
PHOTO_JPEG_QUALITY = 75

# Polling interval for change notifications and chat (milliseconds)
DASHBOARD_POLL_INTERVAL_MS = int(os.getenv("DASHBOARD_POLL_INTERVAL_MS", "15000"))

# --------------------------------------------------
# Logging
# --------------------------------------------------

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "dashboard": {
            "handlers": ["console"],
            "level": os.getenv("DASHBOARD_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
