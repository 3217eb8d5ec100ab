# routers/admins.py

from typing import List, Optional

from fastapi import APIRouter, Depends

from core.credential_store import CredentialStore
from core.record_store import RecordStore
from dependencies.auth import (
    get_credential_store,
    get_record_store,
    requires_subsection,
)
from models.admin import Admin, AdminCreate, AdminUpdate
from models.auth import AuthContext
from models.enums import AdminRole, AdminStatus
from services import admin_accounts


router = APIRouter(
    prefix="/admins",
    tags=["Admins"],
)


# -----------------------------------------------------
# 1️⃣ LIST ADMINS
# -----------------------------------------------------
@router.get(
    "",
    response_model=List[Admin],
    summary="List admins",
    dependencies=[Depends(requires_subsection("view-admins"))],
)
def list_admins(
    role: Optional[AdminRole] = None,
    status: Optional[AdminStatus] = None,
    search: Optional[str] = None,
    store: RecordStore = Depends(get_record_store),
):
    return admin_accounts.list_admins(store, role=role, status=status, search=search)


@router.get(
    "/{admin_id}",
    response_model=Admin,
    summary="Get one admin",
    dependencies=[Depends(requires_subsection("view-admins"))],
)
def get_admin(admin_id: str, store: RecordStore = Depends(get_record_store)):
    return admin_accounts.get_admin(store, admin_id)


# -----------------------------------------------------
# 2️⃣ CREATE ADMIN
# -----------------------------------------------------
@router.post("", response_model=Admin, status_code=201, summary="Create an admin account")
def create_admin(
    payload: AdminCreate,
    context: AuthContext = Depends(requires_subsection("add-admin")),
    credential_store: CredentialStore = Depends(get_credential_store),
    store: RecordStore = Depends(get_record_store),
):
    """
    Requires the creator's current password: the identity provider
    replaces the session on sign-up and the creator is signed back in
    afterwards.
    """
    return admin_accounts.create_admin(
        payload,
        context,
        credential_store=credential_store,
        record_store=store,
    )


# -----------------------------------------------------
# 3️⃣ UPDATE ADMIN
# -----------------------------------------------------
@router.patch(
    "/{admin_id}",
    response_model=Admin,
    summary="Update an admin",
    dependencies=[Depends(requires_subsection("manage-admins"))],
)
def update_admin(admin_id: str, payload: AdminUpdate, store: RecordStore = Depends(get_record_store)):
    return admin_accounts.update_admin(store, admin_id, payload)


@router.post(
    "/{admin_id}/toggle-status",
    response_model=Admin,
    summary="Activate / deactivate an admin",
    dependencies=[Depends(requires_subsection("manage-admins"))],
)
def toggle_status(admin_id: str, store: RecordStore = Depends(get_record_store)):
    return admin_accounts.toggle_admin_status(store, admin_id)


@router.delete(
    "/{admin_id}/office",
    response_model=Admin,
    summary="Remove an admin's office assignment",
    dependencies=[Depends(requires_subsection("manage-admins"))],
)
def remove_office(admin_id: str, store: RecordStore = Depends(get_record_store)):
    return admin_accounts.remove_office_assignment(store, admin_id)


# -----------------------------------------------------
# 4️⃣ DELETE ADMIN
# -----------------------------------------------------
@router.delete(
    "/{admin_id}",
    summary="Delete an admin record",
    dependencies=[Depends(requires_subsection("manage-admins"))],
)
def delete_admin(admin_id: str, store: RecordStore = Depends(get_record_store)):
    admin_accounts.delete_admin(store, admin_id)
    return {"success": True, "deleted": admin_id}
