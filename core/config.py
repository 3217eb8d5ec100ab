from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Chal Ostaad Admin API"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # -------------------------------------------------
    # Admin console front end
    # -------------------------------------------------
    ADMIN_CONSOLE_DOMAIN: Optional[str] = None

    ADMIN_CONSOLE_DEFAULT_ORIGINS: List[str] = [
        "http://localhost:3000",
    ]

    # -------------------------------------------------
    # CORS (auto-built below)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (Record Store & Identity Provider)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None

    # -------------------------------------------------
    # Authentication
    # -------------------------------------------------
    # Check the admins table for the email before calling the identity provider
    LOGIN_PRECHECK_ADMIN_EMAIL: bool = True
    MIN_PASSWORD_LENGTH: int = Field(6, description="Minimum password length for new admins")

    # Login + password reset throttling (per email)
    AUTH_RATE_LIMIT_MAX_REQUESTS: int = 5
    AUTH_RATE_LIMIT_WINDOW_SECONDS: int = 900

    # -------------------------------------------------
    # Worker rules
    # -------------------------------------------------
    MIN_WORKER_AGE: int = Field(18, description="Workers younger than this are rejected")

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
cors_origins = []

if settings.ADMIN_CONSOLE_DOMAIN:
    domain = settings.ADMIN_CONSOLE_DOMAIN
    if not domain.startswith("http"):
        domain = f"https://{domain}"
    cors_origins.append(domain.rstrip("/"))

cors_origins.extend([d.rstrip("/") for d in settings.ADMIN_CONSOLE_DEFAULT_ORIGINS])

settings.BACKEND_CORS_ORIGINS = sorted(list(set(cors_origins)))
