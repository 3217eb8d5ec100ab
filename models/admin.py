# models/admin.py

from typing import Any, Optional
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from core.config import settings
from core.utils import validate_phone
from models.base import StoredRecord
from models.enums import AdminRole, AdminStatus


# ===============================================================
# OFFICE ASSIGNMENT (tagged variants on read)
# ===============================================================

class OfficeAssignment(StoredRecord):
    """Office id plus the name/city snapshot taken when assigned."""
    office_id: str
    office_name: Optional[str] = None
    office_city: Optional[str] = None


def decode_office_assignment(value: Any) -> Optional[dict]:
    """
    Stored assignments come in several shapes:
      • missing / None / ""           → unassigned
      • "office-id"                   → id only, no snapshot
      • {"officeId": ..., ...}        → snapshot (camelCase)
      • {"office_id": ..., ...}       → snapshot (snake_case)
      • {"id": ..., "name": ...}      → raw office reference
    An object with an empty id is the legacy "Not assigned" marker.
    """
    if value is None:
        return None

    if isinstance(value, OfficeAssignment):
        return value.model_dump()

    if isinstance(value, str):
        value = value.strip()
        return {"office_id": value} if value else None

    if isinstance(value, dict):
        office_id = value.get("office_id") or value.get("officeId") or value.get("id")
        if not office_id:
            return None
        return {
            "office_id": str(office_id),
            "office_name": value.get("office_name") or value.get("officeName") or value.get("name"),
            "office_city": value.get("office_city") or value.get("officeCity") or value.get("city"),
        }

    raise ValueError(f"unsupported assigned office value: {type(value).__name__}")


# ===============================================================
# LEGACY PER-ADMIN PERMISSION FLAGS
# ===============================================================

class AdminPermissions(StoredRecord):
    """
    Still persisted, but access is decided by core.menu_config.
    """
    workers: bool = True
    offices: bool = False
    categories: bool = False
    disputes: bool = False
    reviews: bool = False


class CreatorRef(StoredRecord):
    admin_id: Optional[str] = None
    admin_email: Optional[str] = None
    timestamp: Optional[datetime] = None


# ===============================================================
# ADMIN RECORD
# ===============================================================

class Admin(StoredRecord):
    id: str
    name: str = ""
    email: Optional[str] = None
    role: str
    status: Optional[AdminStatus] = None
    phone: Optional[str] = None
    assigned_office: Optional[OfficeAssignment] = None
    permissions: AdminPermissions = Field(default_factory=AdminPermissions)

    created_at: Optional[datetime] = None
    created_by: Optional[CreatorRef] = None
    updated_at: Optional[datetime] = None
    last_login: Optional[datetime] = None
    login_count: int = 0

    @field_validator("role", mode="before")
    @classmethod
    def lowercase_role(cls, value):
        if not isinstance(value, str):
            raise ValueError("role must be a string")
        return value.strip().lower()

    @field_validator("status", mode="before")
    @classmethod
    def lowercase_status(cls, value):
        if isinstance(value, str):
            return value.strip().lower() or None
        return value

    @field_validator("assigned_office", mode="before")
    @classmethod
    def normalize_assigned_office(cls, value):
        return decode_office_assignment(value)

    @field_validator("login_count", mode="before")
    @classmethod
    def default_login_count(cls, value):
        return 0 if value is None else value

    @property
    def is_active(self) -> bool:
        return self.status == AdminStatus.active


# ===============================================================
# PAYLOADS
# ===============================================================

class AdminCreate(BaseModel):
    """
    Two-step creation: the creator re-enters their own password
    (current_password) so their session can be restored afterwards.
    """
    name: str = Field(..., min_length=1)
    email: EmailStr
    role: AdminRole = AdminRole.sub
    phone: Optional[str] = None
    assigned_office_id: Optional[str] = None
    permissions: AdminPermissions = Field(default_factory=AdminPermissions)

    password: str
    confirm_password: str
    current_password: str = Field(..., min_length=1)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value):
        return validate_phone(value)

    @model_validator(mode="after")
    def check_passwords_and_office(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match!")
        if len(self.password) < settings.MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters!"
            )
        if self.role == AdminRole.sub and not (self.assigned_office_id or "").strip():
            raise ValueError("Sub Admin must be assigned to an office!")
        return self


class AdminUpdate(BaseModel):
    """
    Partial update. Sending assigned_office_id as null or "" removes
    the assignment; omitting it leaves the assignment untouched.
    """
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    role: Optional[AdminRole] = None
    status: Optional[AdminStatus] = None
    assigned_office_id: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value):
        return validate_phone(value)
