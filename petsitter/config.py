import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# Postgres in production, e.g. postgresql+psycopg://user:pass@db:5432/petsitter
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./petsitter.db")

# Security - CRITICAL: No default secret key in production
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

# Refresh tokens are signed with their own key so an access key leak can't mint refresh tokens
REFRESH_SECRET_KEY = os.getenv("REFRESH_SECRET_KEY", f"{SECRET_KEY}-refresh")
JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15"))
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7"))

# bcrypt work factor (tests lower this to keep the suite fast)
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# Frontend base URL for CORS
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        f"http://localhost,http://localhost:80,http://localhost:5173,{FRONTEND_URL}",
    ).split(",")
    if origin.strip()
]

PORT = int(os.getenv("PORT", "5000"))

# Scheduling
TRAVEL_BUFFER_MINUTES = int(os.getenv("TRAVEL_BUFFER_MINUTES", "30"))

# Payments
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "EUR")

# Middleware toggles
SECURITY_HEADERS_ENABLED = os.getenv("SECURITY_HEADERS_ENABLED", "true").lower() == "true"
