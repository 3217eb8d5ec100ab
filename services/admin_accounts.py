# services/admin_accounts.py

"""
Admin account management.

Creating an admin goes through the identity provider's sign-up, which
replaces the creator's session with the new account's. The creator's
session is then restored by signing in again with the password they
re-entered:

    0. verify creator password   (nothing created yet)
    1. create credential         (session now belongs to the new admin)
    2. write admin record
    3. re-authenticate creator

This is compensation, not a transaction. A failure after step 1 leaves
an identity-provider user without an admin record (which can never log
in, the session check rejects it). If step 3 fails, the new session is
signed out so the caller ends up logged out rather than signed in as
the new admin.
"""

from typing import List, Optional

from core.credential_store import CredentialStore
from core.errors import (
    CompensationError,
    CredentialError,
    DeleteBlockedError,
    FormValidationError,
    RecordNotFoundError,
    StoreError,
)
from core.logging_config import logger
from core.record_store import RecordStore
from core.utils import utc_now_iso
from models.admin import Admin, AdminCreate, AdminUpdate
from models.auth import AuthContext
from models.enums import AdminRole, AdminStatus, Collection, CredentialErrorKind
from models.office import Office


CREATE_ERRORS = {
    CredentialErrorKind.email_in_use: "Email already exists! Please use a different email.",
    CredentialErrorKind.weak_password: "Password is too weak! Please use a stronger password.",
    CredentialErrorKind.invalid_email: "Invalid email address.",
}


# -----------------------------------------------------
# Reads
# -----------------------------------------------------
def get_admin(store: RecordStore, admin_id: str) -> Admin:
    raw = store.get_one(Collection.admins, admin_id)
    if raw is None:
        raise RecordNotFoundError(f"Admin {admin_id} not found")
    return Admin.from_record(Collection.admins.value, raw)


def list_admins(
    store: RecordStore,
    *,
    role: Optional[AdminRole] = None,
    status: Optional[AdminStatus] = None,
    search: Optional[str] = None,
) -> List[Admin]:
    admins = Admin.from_records(Collection.admins.value, store.get_all(Collection.admins))

    if role:
        admins = [a for a in admins if a.role == role.value]
    if status:
        admins = [a for a in admins if a.status == status]
    if search:
        needle = search.strip().lower()
        admins = [
            a for a in admins
            if needle in a.name.lower() or needle in (a.email or "").lower()
        ]
    return admins


def _office_snapshot(store: RecordStore, office_id: str) -> dict:
    raw = store.get_one(Collection.offices, office_id)
    if raw is None:
        raise FormValidationError(f"Office {office_id} does not exist")
    office = Office.from_record(Collection.offices.value, raw)
    return {
        "office_id": office.id,
        "office_name": office.name or "Unknown Office",
        "office_city": office.city or "Unknown City",
    }


# -----------------------------------------------------
# Create (with session compensation)
# -----------------------------------------------------
def _restore_creator(credentials: CredentialStore, creator_email: str, password: str) -> bool:
    try:
        credentials.verify_credentials(creator_email, password)
        return True
    except CredentialError as e:
        logger.error(f"Re-login of {creator_email} failed: {e.kind}: {e.message}")
        return False


def create_admin(
    payload: AdminCreate,
    creator: AuthContext,
    *,
    credential_store: CredentialStore,
    record_store: RecordStore,
) -> Admin:
    if not creator.email:
        raise FormValidationError("Your account has no email; cannot re-authenticate")

    # 0. Creator proves their password before anything is created
    try:
        credential_store.verify_credentials(creator.email, payload.current_password)
    except CredentialError:
        raise FormValidationError("Current password is incorrect! Please try again.")

    office = None
    if payload.assigned_office_id:
        office = _office_snapshot(record_store, payload.assigned_office_id)

    email = str(payload.email).strip().lower()

    # 1. Credential (replaces the creator's session)
    try:
        new_session = credential_store.create_credential(email, payload.password)
    except CredentialError as e:
        _restore_creator(credential_store, creator.email, payload.current_password)
        message = CREATE_ERRORS.get(e.kind, f"Error creating admin: {e.message}")
        raise CredentialError(e.kind, message)

    # 2. Admin record keyed by the new identity-provider user id
    now = utc_now_iso()
    record = {
        "name": payload.name,
        "email": email,
        "role": payload.role.value,
        "phone": payload.phone,
        "assigned_office": office,
        "permissions": payload.permissions.model_dump(),
        "status": AdminStatus.active.value,
        "created_at": now,
        "created_by": {
            "admin_id": creator.user_id,
            "admin_email": creator.email,
            "timestamp": now,
        },
        "last_login": None,
        "login_count": 0,
    }

    try:
        record_store.create(Collection.admins, record, record_id=new_session.user_id)
    except StoreError:
        logger.error(
            f"Admin record write failed; identity user {new_session.user_id} ({email}) has no admin record"
        )
        if not _restore_creator(credential_store, creator.email, payload.current_password):
            credential_store.sign_out()
        raise

    # 3. Back to the creator's session
    if not _restore_creator(credential_store, creator.email, payload.current_password):
        credential_store.sign_out()
        raise CompensationError(
            "Admin created, but your session could not be restored. Please log in again."
        )

    logger.info(f"Admin created: {new_session.user_id} ({email}, {payload.role.value}) by {creator.user_id}")
    return get_admin(record_store, new_session.user_id)


# -----------------------------------------------------
# Last-super-admin guards
# -----------------------------------------------------
def _active_super_admins(store: RecordStore) -> List[Admin]:
    return [a for a in list_admins(store, role=AdminRole.super) if a.is_active]


def _guard_last_super(store: RecordStore, target: Admin, *, demote: bool, deactivate: bool, delete: bool) -> None:
    """At least one active super admin must remain after the change."""
    if target.role != AdminRole.super.value or not target.is_active:
        return

    if len(_active_super_admins(store)) > 1:
        return

    if delete:
        raise DeleteBlockedError("Cannot delete the last active super admin.")
    if demote:
        raise FormValidationError("Cannot demote the last active super admin.")
    if deactivate:
        raise FormValidationError("Cannot deactivate the last active super admin.")


# -----------------------------------------------------
# Update / status / office / delete
# -----------------------------------------------------
def update_admin(store: RecordStore, admin_id: str, payload: AdminUpdate) -> Admin:
    target = get_admin(store, admin_id)
    fields = payload.model_fields_set

    _guard_last_super(
        store,
        target,
        demote=payload.role is not None and payload.role != AdminRole.super,
        deactivate=payload.status is not None and payload.status != AdminStatus.active,
        delete=False,
    )

    data = {"updated_at": utc_now_iso()}
    if payload.name is not None:
        data["name"] = payload.name.strip()
    if payload.email is not None:
        data["email"] = str(payload.email).strip().lower()
    if "phone" in fields:
        data["phone"] = payload.phone
    if payload.role is not None:
        data["role"] = payload.role.value
    if payload.status is not None:
        data["status"] = payload.status.value
    if "assigned_office_id" in fields:
        office_id = (payload.assigned_office_id or "").strip()
        data["assigned_office"] = _office_snapshot(store, office_id) if office_id else None

    store.update(Collection.admins, admin_id, data)
    return get_admin(store, admin_id)


def toggle_admin_status(store: RecordStore, admin_id: str) -> Admin:
    target = get_admin(store, admin_id)
    new_status = AdminStatus.inactive if target.is_active else AdminStatus.active

    _guard_last_super(store, target, demote=False, deactivate=new_status != AdminStatus.active, delete=False)

    store.update(Collection.admins, admin_id, {"status": new_status.value, "updated_at": utc_now_iso()})
    logger.info(f"Admin {admin_id} status → {new_status.value}")
    return get_admin(store, admin_id)


def remove_office_assignment(store: RecordStore, admin_id: str) -> Admin:
    get_admin(store, admin_id)
    store.update(Collection.admins, admin_id, {"assigned_office": None, "updated_at": utc_now_iso()})
    return get_admin(store, admin_id)


def delete_admin(store: RecordStore, admin_id: str) -> None:
    """
    Irreversible. Only the admin record is removed; the identity-provider
    user remains but can no longer pass the session check.
    """
    target = get_admin(store, admin_id)
    _guard_last_super(store, target, demote=False, deactivate=False, delete=True)

    store.delete(Collection.admins, admin_id)
    logger.info(f"Admin deleted: {admin_id} ({target.email})")
