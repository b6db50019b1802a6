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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    API_PORT = data.get("API_PORT", 8080)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    # No default: the app refuses to start without a signing secret
    JWT_SECRET = data.get("JWT_SECRET", os.environ.get("JWT_SECRET", ""))
    SESSION_TOKEN_TTL_HOURS = int(data.get("SESSION_TOKEN_TTL_HOURS", 24))
    INVITATION_TTL_HOURS = int(data.get("INVITATION_TTL_HOURS", 48))
    PASSWORD_MIN_LENGTH = int(data.get("PASSWORD_MIN_LENGTH", 8))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    STORE_TIMEOUT_SECONDS = float(data.get("STORE_TIMEOUT_SECONDS", 5))
