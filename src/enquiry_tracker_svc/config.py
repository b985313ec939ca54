import os
import logging
from dotenv import load_dotenv

load_dotenv()

# Basic configuration loaded from environment with safe defaults for development
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///:memory:")

# "development" exposes exception detail in 500 responses
APP_ENV: str = os.getenv("APP_ENV", "development")

HOST: str = os.getenv("HOST", "0.0.0.0")
try:
    PORT: int = int(os.getenv("PORT", "5000"))
except Exception as e:
    logging.error(e, exc_info=True)
    PORT = 5000

# Comma separated list of browser origins allowed by CORS
CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

# Security / JWT configuration
# SECRET_KEY should be overridden in production via environment
DEFAULT_SECRET_KEY = "dev-secret-key-change-me"
SECRET_KEY: str = os.getenv("SECRET_KEY", DEFAULT_SECRET_KEY)
ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
try:
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))
except Exception as e:
    logging.error(e, exc_info=True)
    ACCESS_TOKEN_EXPIRE_MINUTES = 1440


def is_development() -> bool:
    return APP_ENV.lower() == "development"


def cors_origins() -> list:
    return [o.strip() for o in CORS_ORIGINS.split(",") if o.strip()]
