# core/config_validator.py

from typing import List
from core.config import settings
from core.logging_config import logger


def validate_required_config() -> List[str]:
    """
    Both stores need the project URL and the service role key.
    Returns the names of missing variables.
    """
    missing = []

    if not settings.SUPABASE_URL:
        missing.append("SUPABASE_URL")
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        missing.append("SUPABASE_SERVICE_ROLE_KEY")

    return missing


def validate_optional_config() -> List[str]:
    warnings = []

    if not settings.SUPABASE_ANON_KEY:
        warnings.append("SUPABASE_ANON_KEY (sign-in falls back to the service role key)")
    if not settings.ADMIN_CONSOLE_DOMAIN:
        warnings.append("ADMIN_CONSOLE_DOMAIN (CORS limited to local origins)")

    return warnings


def validate_config_on_startup():
    """
    Raises RuntimeError when a required variable is missing;
    optional gaps are only logged.
    """
    missing_required = validate_required_config()
    missing_optional = validate_optional_config()

    if missing_required:
        error_msg = f"Missing required environment variables: {', '.join(missing_required)}"
        logger.error(error_msg)
        raise RuntimeError(error_msg)

    for warning in missing_optional:
        logger.warning(f"Optional configuration missing: {warning}")

    if settings.MIN_PASSWORD_LENGTH < 6:
        logger.warning(f"MIN_PASSWORD_LENGTH={settings.MIN_PASSWORD_LENGTH} is below the identity provider minimum")

    logger.info("Configuration validation passed")
