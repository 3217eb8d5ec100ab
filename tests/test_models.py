# tests/test_models.py

"""
Tests for decoding stored records at the boundary.
"""

import pytest

from core.errors import RecordDecodeError
from core.utils import calculate_age, sanitize
from datetime import date
from models.admin import Admin, decode_office_assignment
from models.worker import Worker


@pytest.mark.parametrize("value", [None, "", "   ", {"officeId": "", "officeName": "Not assigned"}])
def test_unassigned_office_variants(value):
    assert decode_office_assignment(value) is None


def test_office_id_only():
    assert decode_office_assignment(" o1 ") == {"office_id": "o1"}


def test_camel_and_snake_snapshots_agree():
    camel = decode_office_assignment({"officeId": "o1", "officeName": "Main", "officeCity": "Lahore"})
    snake = decode_office_assignment({"office_id": "o1", "office_name": "Main", "office_city": "Lahore"})
    raw = decode_office_assignment({"id": "o1", "name": "Main", "city": "Lahore"})
    assert camel == snake == raw


def test_unsupported_office_shape():
    with pytest.raises(ValueError):
        decode_office_assignment(42)


def test_admin_accepts_legacy_camel_case_record():
    admin = Admin.from_record("admins", {
        "id": "a1",
        "name": "Legacy",
        "role": "Sub",
        "status": "Active",
        "assignedOffice": {"officeId": "o1", "officeName": "Main"},
        "loginCount": None,
        "lastLogin": "2024-02-01T10:00:00+00:00",
    })

    assert admin.role == "sub"
    assert admin.is_active
    assert admin.assigned_office.office_id == "o1"
    assert admin.login_count == 0
    assert admin.last_login.year == 2024


def test_admin_without_status_is_not_active():
    assert Admin.from_record("admins", {"id": "a1", "role": "super"}).is_active is False


def test_malformed_record_raises_decode_error():
    with pytest.raises(RecordDecodeError) as exc:
        Worker.from_record("workers", {"id": "w1", "personal_info": "oops"})
    assert exc.value.record_id == "w1"
    assert exc.value.collection == "workers"


def test_from_records_skips_bad_rows():
    rows = [
        {"id": "w1", "personalInfo": {"name": "Ali"}, "workInfo": {"categoryId": "c1"}},
        {"id": "w2"},
        "not a dict",
    ]
    decoded = Worker.from_records("workers", rows)
    assert [w.id for w in decoded] == ["w1"]
    assert decoded[0].work_info.category_id == "c1"


def test_sanitize_nested():
    assert sanitize({"a": " x ", "b": "", "c": {"d": "  "}, "e": [" keep "]}) == {
        "a": "x",
        "b": None,
        "c": {"d": None},
        "e": [" keep "],
    }


@pytest.mark.parametrize(
    "born,expected",
    [
        (date(2000, 6, 1), 25),
        (date(2000, 6, 2), 24),
        (date(2000, 2, 29), 25),
    ],
)
def test_calculate_age(born, expected):
    assert calculate_age(born, today=date(2025, 6, 1)) == expected
