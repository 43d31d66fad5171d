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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./egghunt.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    # Session lifetimes
    SESSION_REMEMBER_ME_DAYS = float(data.get("SESSION_REMEMBER_ME_DAYS", 30))
    SESSION_DEFAULT_HOURS = float(data.get("SESSION_DEFAULT_HOURS", 8))
    # Expired session cleanup
    SESSION_CLEANUP_ENABLED = bool(data.get("SESSION_CLEANUP_ENABLED", True))
    SESSION_CLEANUP_INTERVAL_HOURS = float(data.get("SESSION_CLEANUP_INTERVAL_HOURS", 24))
    SESSION_CLEANUP_INITIAL_DELAY_SECONDS = float(
        data.get("SESSION_CLEANUP_INITIAL_DELAY_SECONDS", 30)
    )
