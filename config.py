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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./tenancy.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")

    # Notifications
    EMAIL_BACKEND = data.get("EMAIL_BACKEND", "log")  # log | http
    EMAIL_SERVICE_URL = data.get("EMAIL_SERVICE_URL", "")
    EMAIL_SERVICE_API_KEY = data.get("EMAIL_SERVICE_API_KEY", "")
    EMAIL_TIMEOUT_SECONDS = float(data.get("EMAIL_TIMEOUT_SECONDS", 10))
    SITE_URL = data.get("SITE_URL", "http://localhost:3000")

    # Tenant lifecycle
    TRIAL_PERIOD_DAYS = int(data.get("TRIAL_PERIOD_DAYS", 14))
    TEMP_PASSWORD_LENGTH = int(data.get("TEMP_PASSWORD_LENGTH", 12))
    IDENTITY_PROVISIONING_TIMEOUT_SECONDS = float(
        data.get("IDENTITY_PROVISIONING_TIMEOUT_SECONDS", 10)
    )
    VALIDATION_ITEM_TIMEOUT_SECONDS = float(data.get("VALIDATION_ITEM_TIMEOUT_SECONDS", 5))
    ONBOARDING_STEP_ORDERING = data.get("ONBOARDING_STEP_ORDERING", "lenient")  # lenient | strict
