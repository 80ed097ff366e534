# config.py
import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Values already in the environment win over the .env file
ENV_FILE = os.getenv("ENV_FILE", ".env")
load_dotenv(ENV_FILE)

DEFAULT_DATABASE_URL = "sqlite:///./budget.db"
DEFAULT_JWT_SECRET = "change-me-budget-tracker-local-jwt-secret"

DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)

JWT_SECRET = os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET)
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "5000"))
CORS_ORIGIN = os.getenv("CORS_ORIGIN", "http://localhost:3005")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Wipes the notifications table every time the server boots
CLEAR_NOTIFICATIONS_ON_STARTUP = os.getenv(
    "CLEAR_NOTIFICATIONS_ON_STARTUP", "true"
).lower() in ("1", "true", "yes")

REQUIRED_VARS = ("DATABASE_URL", "JWT_SECRET")


def validate_settings():
    """Warn about critical settings that fell back to their defaults."""
    missing = [name for name in REQUIRED_VARS if not os.getenv(name)]
    for name in missing:
        logger.warning("%s is not set. Using default value.", name)
    return missing
