import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./workshop.db")
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", 0))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")
    CREATE_TABLES_ON_STARTUP = bool(data.get("CREATE_TABLES_ON_STARTUP", True))

    # Shop defaults used for new service visits and invoices
    DEFAULT_TAX_RATE = data.get("DEFAULT_TAX_RATE", 10)  # Percent
    DEFAULT_REMINDER_WEEKS = data.get("DEFAULT_REMINDER_WEEKS", 8)
    DEFAULT_PAYMENT_METHOD = data.get("DEFAULT_PAYMENT_METHOD", None)  # None = must be chosen
    PAYMENT_TERMS_DAYS = data.get("PAYMENT_TERMS_DAYS", 14)
    UPCOMING_SERVICE_DAYS = data.get("UPCOMING_SERVICE_DAYS", 14)

    # Due Digest Worker Configuration
    DIGEST_ENABLED = bool(data.get("DIGEST_ENABLED", True))
    DIGEST_INTERVAL_SECONDS = data.get("DIGEST_INTERVAL_SECONDS", 86400)  # Daily
