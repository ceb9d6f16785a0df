import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./tenant_governance.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    TRANSITION_TIMEOUT_SECONDS = float(data.get("TRANSITION_TIMEOUT_SECONDS", 5))
    CASCADE_TIMEOUT_SECONDS = float(data.get("CASCADE_TIMEOUT_SECONDS", 30))
    NOTIFIER_WEBHOOK_URL = data.get("NOTIFIER_WEBHOOK_URL", "")
    NOTIFIER_TIMEOUT_SECONDS = float(data.get("NOTIFIER_TIMEOUT_SECONDS", 10))
    PLATFORM_LOGIN_URL = data.get("PLATFORM_LOGIN_URL", "")
