# tests/test_admin_accounts.py

"""
Tests for admin creation (with session compensation) and management.
"""

import pytest
from unittest.mock import patch
from pydantic import ValidationError

from core.errors import (
    CompensationError,
    CredentialError,
    DeleteBlockedError,
    FormValidationError,
    StoreError,
)
from models.admin import AdminCreate, AdminUpdate
from models.enums import AdminRole, AdminStatus, CredentialErrorKind
from services import admin_accounts


def _create_payload(**overrides):
    data = {
        "name": "Hina",
        "email": "Hina@Example.com",
        "role": "sub",
        "assigned_office_id": "office-1",
        "password": "newpass1",
        "confirm_password": "newpass1",
        "current_password": "secret123",
    }
    data.update(overrides)
    return AdminCreate(**data)


# ============================================================
# CREATE
# ============================================================
def test_create_admin_restores_creator_session(credential_store, record_store, super_context, office_id):
    admin = admin_accounts.create_admin(
        _create_payload(),
        super_context,
        credential_store=credential_store,
        record_store=record_store,
    )

    assert admin.email == "hina@example.com"
    assert admin.role == "sub"
    assert admin.status == AdminStatus.active
    assert admin.assigned_office.office_name == "Lahore Main"
    assert admin.created_by.admin_id == super_context.user_id
    assert admin.id == credential_store.users["hina@example.com"]["id"]
    assert credential_store.current.email == "super@example.com"


def test_wrong_creator_password_creates_nothing(credential_store, record_store, super_context, office_id):
    with pytest.raises(FormValidationError) as exc:
        admin_accounts.create_admin(
            _create_payload(current_password="wrong"),
            super_context,
            credential_store=credential_store,
            record_store=record_store,
        )

    assert exc.value.message == "Current password is incorrect! Please try again."
    assert "hina@example.com" not in credential_store.users
    assert record_store.writes == []


def test_duplicate_email_maps_message_and_restores(credential_store, record_store, super_context, office_id):
    credential_store.add_user("hina@example.com", "whatever")

    with pytest.raises(CredentialError) as exc:
        admin_accounts.create_admin(
            _create_payload(),
            super_context,
            credential_store=credential_store,
            record_store=record_store,
        )

    assert exc.value.kind == CredentialErrorKind.email_in_use
    assert exc.value.message == "Email already exists! Please use a different email."
    assert credential_store.current.email == "super@example.com"


def test_failed_restore_signs_out(credential_store, record_store, super_context, office_id):
    real_verify = credential_store.verify_credentials
    calls = []

    def verify(email, password):
        calls.append(email)
        if len(calls) > 1:
            raise CredentialError(CredentialErrorKind.other, "network down")
        return real_verify(email, password)

    with patch.object(credential_store, "verify_credentials", side_effect=verify):
        with pytest.raises(CompensationError):
            admin_accounts.create_admin(
                _create_payload(),
                super_context,
                credential_store=credential_store,
                record_store=record_store,
            )

    # The admin exists, but nobody is left signed in as them
    assert record_store.get_one("admins", credential_store.users["hina@example.com"]["id"]) is not None
    assert credential_store.current is None


def test_record_write_failure_restores_creator(credential_store, record_store, super_context, office_id):
    with patch.object(record_store, "create", side_effect=StoreError("Creating admins record", "down")):
        with pytest.raises(StoreError):
            admin_accounts.create_admin(
                _create_payload(),
                super_context,
                credential_store=credential_store,
                record_store=record_store,
            )

    assert credential_store.current.email == "super@example.com"


@pytest.mark.parametrize(
    "overrides",
    [
        {"confirm_password": "different"},
        {"password": "abc", "confirm_password": "abc"},
        {"assigned_office_id": None},
        {"email": "not-an-email"},
    ],
)
def test_create_payload_validation(overrides):
    with pytest.raises(ValidationError):
        _create_payload(**overrides)


def test_super_admin_needs_no_office():
    assert _create_payload(role="super", assigned_office_id=None).assigned_office_id is None


# ============================================================
# LAST SUPER ADMIN
# ============================================================
def test_cannot_delete_last_super_admin(record_store, super_context):
    with pytest.raises(DeleteBlockedError):
        admin_accounts.delete_admin(record_store, super_context.user_id)


def test_cannot_demote_or_deactivate_last_super_admin(record_store, super_context):
    with pytest.raises(FormValidationError):
        admin_accounts.update_admin(record_store, super_context.user_id, AdminUpdate(role="sub"))
    with pytest.raises(FormValidationError):
        admin_accounts.toggle_admin_status(record_store, super_context.user_id)


def test_second_super_admin_can_be_deleted(record_store, super_context, make_admin):
    other = make_admin(email="other@example.com")
    admin_accounts.delete_admin(record_store, other)
    assert record_store.get_one("admins", other) is None


def test_inactive_second_super_does_not_unlock_guard(record_store, super_context, make_admin):
    make_admin(email="dormant@example.com", status="inactive")

    with pytest.raises(DeleteBlockedError):
        admin_accounts.delete_admin(record_store, super_context.user_id)
    with pytest.raises(FormValidationError):
        admin_accounts.update_admin(record_store, super_context.user_id, AdminUpdate(role="sub"))
    with pytest.raises(FormValidationError):
        admin_accounts.update_admin(record_store, super_context.user_id, AdminUpdate(status="suspended"))

    assert admin_accounts.get_admin(record_store, super_context.user_id).role == "super"


def test_inactive_super_can_be_deleted_while_one_active_remains(record_store, super_context, make_admin):
    dormant = make_admin(email="dormant@example.com", status="inactive")

    admin_accounts.delete_admin(record_store, dormant)

    assert record_store.get_one("admins", dormant) is None


# ============================================================
# UPDATE / STATUS / OFFICE
# ============================================================
def test_toggle_status(record_store, sub_context):
    admin = admin_accounts.toggle_admin_status(record_store, sub_context.user_id)
    assert admin.status == AdminStatus.inactive

    admin = admin_accounts.toggle_admin_status(record_store, sub_context.user_id)
    assert admin.status == AdminStatus.active


def test_update_office_assignment(record_store, sub_context):
    other = record_store.seed("offices", {"id": "office-2", "basic_info": {"name": "Multan", "city": "Multan"}})

    admin = admin_accounts.update_admin(record_store, sub_context.user_id, AdminUpdate(assigned_office_id=other))
    assert admin.assigned_office.office_city == "Multan"

    admin = admin_accounts.update_admin(record_store, sub_context.user_id, AdminUpdate(assigned_office_id=None))
    assert admin.assigned_office is None


def test_update_without_office_keeps_assignment(record_store, sub_context):
    admin = admin_accounts.update_admin(record_store, sub_context.user_id, AdminUpdate(name="Bilal K"))
    assert admin.name == "Bilal K"
    assert admin.assigned_office.office_id == "office-1"


def test_remove_office_assignment(record_store, sub_context):
    admin = admin_accounts.remove_office_assignment(record_store, sub_context.user_id)
    assert admin.assigned_office is None


def test_list_admins_filters(record_store, super_context, sub_context):
    assert [a.email for a in admin_accounts.list_admins(record_store, role=AdminRole.sub)] == ["sub@example.com"]
    assert [a.email for a in admin_accounts.list_admins(record_store, search="SARA")] == ["super@example.com"]
