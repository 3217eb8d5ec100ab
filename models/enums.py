from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# ADMIN ROLE
# -----------------------------------------------------
class AdminRole(BaseStrEnum):
    """Stored lowercased; legacy records may carry 'Super' / 'Sub'."""

    super = "super"
    sub = "sub"


# -----------------------------------------------------
# ADMIN STATUS
# -----------------------------------------------------
class AdminStatus(BaseStrEnum):
    """Only `active` admins may hold a session."""

    active = "active"
    inactive = "inactive"
    suspended = "suspended"


# -----------------------------------------------------
# CAPABILITY LEVEL
# -----------------------------------------------------
class Capability(BaseStrEnum):
    """Access level a role holds on a menu section."""

    full = "full"
    view = "view"
    personal = "personal"


# -----------------------------------------------------
# SESSION STATE
# -----------------------------------------------------
class AuthState(BaseStrEnum):
    unauthenticated = "unauthenticated"
    checking = "checking"
    authenticated = "authenticated"


# -----------------------------------------------------
# ERROR KINDS
# -----------------------------------------------------
class AuthErrorKind(BaseStrEnum):
    admin_not_found = "admin_not_found"
    invalid_credentials = "invalid_credentials"
    unauthorized = "unauthorized"
    inactive = "inactive"
    no_session = "no_session"
    failed = "failed"


class CredentialErrorKind(BaseStrEnum):
    not_found = "not_found"
    wrong_password = "wrong_password"
    invalid_credentials = "invalid_credentials"
    email_in_use = "email_in_use"
    weak_password = "weak_password"
    invalid_email = "invalid_email"
    other = "other"


# -----------------------------------------------------
# WORKER ENUMS
# -----------------------------------------------------
class VerificationStatus(BaseStrEnum):
    """Worker review lifecycle. Management edits reset to pending."""

    pending = "pending"
    verified = "verified"
    rejected = "rejected"


class Availability(BaseStrEnum):
    full_time = "full-time"
    part_time = "part-time"
    on_call = "on-call"


# -----------------------------------------------------
# OFFICE ENUMS
# -----------------------------------------------------
class OfficeType(BaseStrEnum):
    main = "main"
    branch = "branch"
    partner = "partner"


class OfficeStatus(BaseStrEnum):
    active = "active"
    inactive = "inactive"
    maintenance = "maintenance"


# -----------------------------------------------------
# CATEGORY STATUS
# -----------------------------------------------------
class CategoryStatus(BaseStrEnum):
    active = "active"
    inactive = "inactive"


# -----------------------------------------------------
# RECORD STORE COLLECTIONS
# -----------------------------------------------------
class Collection(BaseStrEnum):
    """Supabase table backing each record collection."""

    admins = "admins"
    workers = "workers"
    offices = "offices"
    work_categories = "work_categories"
