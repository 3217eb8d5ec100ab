# core/errors.py

from core.logging_config import logger
from models.enums import AuthErrorKind, CredentialErrorKind


# ============================================================
# Console error hierarchy
# ============================================================
# Services raise these; main.py turns them into JSON responses.
# ============================================================

class ConsoleError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(ConsoleError):
    """Login / session rejected. The session always ends unauthenticated."""
    status_code = 401

    def __init__(self, kind: AuthErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class CredentialError(ConsoleError):
    """Identity provider rejected a credential operation."""
    status_code = 400

    def __init__(self, kind: CredentialErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class FormValidationError(ConsoleError):
    status_code = 400


class RecordNotFoundError(ConsoleError):
    status_code = 404


class DeleteBlockedError(ConsoleError):
    status_code = 409


class StoreError(ConsoleError):
    status_code = 500

    def __init__(self, operation: str, detail: str):
        super().__init__(f"{operation} failed: {detail}")
        self.operation = operation
        self.detail = detail


class CompensationError(ConsoleError):
    status_code = 500


class RecordDecodeError(ConsoleError):
    status_code = 500

    def __init__(self, collection: str, record_id, detail: str):
        super().__init__(f"Malformed {collection} record {record_id}: {detail}")
        self.collection = collection
        self.record_id = record_id


class MenuConfigError(ConsoleError):
    pass


# ============================================================
# Supabase error helpers
# ============================================================

def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """

    # Case 1 — Supabase Auth / GoTrue errors
    if hasattr(error, "message"):
        try:
            return str(error.message)
        except Exception:
            pass

    # Case 2 — Supabase errors with args (common)
    if hasattr(error, "args") and error.args:
        try:
            return str(error.args[0])
        except Exception:
            pass

    # Case 3 — Plain string fallback
    try:
        return str(error)
    except Exception:
        return "Unknown Supabase error"


def store_error(error: Exception, operation: str) -> StoreError:
    """
    Convert a Supabase / PostgREST failure into a StoreError.
    Returns (doesn't raise) so the caller decides how to re-raise.
    """
    detail = extract_supabase_error(error)
    logger.error(f"{operation}: {detail}")

    error_lower = detail.lower()
    if "duplicate" in error_lower or "unique" in error_lower:
        return StoreError(operation, "Record already exists")
    if "foreign key" in error_lower:
        return StoreError(operation, "Invalid reference")
    return StoreError(operation, detail)


def classify_auth_error(error: Exception) -> CredentialErrorKind:
    """
    Map a GoTrue exception onto a CredentialErrorKind.
    Newer clients expose `.code`; older ones only the message text.
    """
    code = (getattr(error, "code", None) or "")
    if not isinstance(code, str):
        code = str(code)
    text = extract_supabase_error(error).lower()

    if code == "user_not_found" or "user not found" in text:
        return CredentialErrorKind.not_found
    if code == "invalid_credentials" or "invalid login credentials" in text:
        return CredentialErrorKind.invalid_credentials
    if "wrong password" in text or "incorrect password" in text:
        return CredentialErrorKind.wrong_password
    if code in ("user_already_exists", "email_exists") or "already registered" in text:
        return CredentialErrorKind.email_in_use
    if code == "weak_password" or "password should be" in text:
        return CredentialErrorKind.weak_password
    if code == "email_address_invalid" or "unable to validate email" in text or "invalid email" in text:
        return CredentialErrorKind.invalid_email
    return CredentialErrorKind.other
