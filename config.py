"""
Application configuration
Every value can be overridden from the environment or a local .env file
"""
import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


# Database: DATABASE_URL wins, then the DB_* PostgreSQL settings, then a local SQLite file
if os.getenv("DATABASE_URL"):
    DATABASE_URL = os.getenv("DATABASE_URL")
elif os.getenv("DB_HOST"):
    DATABASE_URL = f"postgresql://{os.getenv('DB_USER')}:{os.getenv('DB_PASSWORD')}@{os.getenv('DB_HOST')}:{os.getenv('DB_PORT', '5432')}/{os.getenv('DB_NAME')}"
else:
    DATABASE_URL = "sqlite:///./hotel_admin.db"

# Sessions / JWT
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-me")  # ⚠️ override in production
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "480"))
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "hotel_session")
SESSION_COOKIE_SECURE = _env_bool("SESSION_COOKIE_SECURE")

# Where the sign-up confirmation e-mail should send the user back to.
# When unset the application's own /dashboard URL is used.
SIGNUP_REDIRECT_URL: Optional[str] = os.getenv("SIGNUP_REDIRECT_URL") or None

# Hotel calendar used for "this month" revenue
HOTEL_TIMEZONE = os.getenv("HOTEL_TIMEZONE", "UTC")

# Payments above the outstanding balance are rejected unless enabled
ALLOW_OVERPAYMENT = _env_bool("ALLOW_OVERPAYMENT")

# HTTP
CORS_ORIGINS = _env_list("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")

# Logging
LOG_FILE = os.getenv("LOG_FILE", "hotel_logs.txt")

# Rate limiting
RATE_LIMIT_ENABLED = _env_bool("RATE_LIMIT_ENABLED", "true")
RATE_LIMIT_DEFAULT = os.getenv("RATE_LIMIT_DEFAULT", "100/minute")
RATE_LIMIT_LOGIN = os.getenv("RATE_LIMIT_LOGIN", "10/minute")
RATE_LIMIT_STORAGE = os.getenv("REDIS_URL", "memory://")
