# tests/test_workers.py

"""
Tests for worker onboarding, editing and verification.
"""

from datetime import date

import pytest
from pydantic import ValidationError

from core.errors import FormValidationError, RecordNotFoundError
from models.enums import VerificationStatus
from models.worker import VerificationDecision, WorkerCreate, WorkerUpdate
from services import workers


TODAY = date(2025, 6, 1)


def _payload(dob="2000-01-01", **work):
    work_info = {"category_id": "cat-1", "office_id": "office-1", "skills": ["Pipes", "Fittings"]}
    work_info.update(work)
    return WorkerCreate(
        personal_info={"name": " Ali Khan ", "phone": "0300-1234567", "cnic": "35202-1234567-1", "date_of_birth": dob},
        work_info=work_info,
    )


def test_create_worker(record_store, super_context, office_id, category_id):
    worker = workers.create_worker(record_store, _payload(), super_context, today=TODAY)

    assert worker.personal_info.name == "Ali Khan"
    assert worker.verification.status == VerificationStatus.pending
    assert worker.office_info.office_name == "Lahore Main"
    assert worker.added_by.admin_id == super_context.user_id


def test_underage_worker_rejected_without_any_write(record_store, super_context, office_id, category_id):
    with pytest.raises(FormValidationError) as exc:
        workers.create_worker(record_store, _payload(dob="2008-06-02"), super_context, today=TODAY)

    assert exc.value.message == "Worker must be at least 18 years old!"
    assert record_store.writes == []


def test_eighteenth_birthday_is_old_enough(record_store, super_context, office_id, category_id):
    workers.create_worker(record_store, _payload(dob="2007-06-01"), super_context, today=TODAY)
    assert len(record_store.writes) == 1


def test_unknown_category_rejected(record_store, super_context, office_id):
    with pytest.raises(FormValidationError):
        workers.create_worker(record_store, _payload(category_id="missing"), super_context, today=TODAY)
    assert record_store.writes == []


def test_update_resets_verification(record_store, super_context, office_id, category_id):
    worker = workers.create_worker(record_store, _payload(), super_context, today=TODAY)
    workers.set_verification(
        record_store, worker.id, VerificationDecision(status="rejected", reason="Blurry CNIC"), super_context
    )

    payload = WorkerUpdate(**_payload().model_dump())
    updated = workers.update_worker(record_store, worker.id, payload, today=TODAY)

    assert updated.verification.status == VerificationStatus.pending
    assert updated.verification.rejection_reason is None


def test_rejection_reason_only_kept_for_rejections(record_store, super_context, office_id, category_id):
    worker = workers.create_worker(record_store, _payload(), super_context, today=TODAY)

    rejected = workers.set_verification(
        record_store, worker.id, VerificationDecision(status="rejected", reason=" Blurry CNIC "), super_context
    )
    assert rejected.verification.rejection_reason == "Blurry CNIC"

    verified = workers.set_verification(
        record_store, worker.id, VerificationDecision(status="verified", reason="ignored"), super_context
    )
    assert verified.verification.rejection_reason is None
    assert verified.verification.verified_by == "Sara Super"
    assert verified.verification.verified_at is not None


def test_list_workers_filters(record_store):
    record_store.seed("workers", {"id": "w1", "personal_info": {"name": "Ali"}, "work_info": {"category_id": "c1"}, "verification": {"status": "verified"}})
    record_store.seed("workers", {"id": "w2", "personal_info": {"name": "Umar"}, "work_info": {"category_id": "c2"}})
    record_store.seed("workers", {"id": "bad", "personal_info": None})

    assert [w.id for w in workers.list_workers(record_store, category_id="c1")] == ["w1"]
    assert [w.id for w in workers.list_workers(record_store, search="umar")] == ["w2"]
    assert [w.id for w in workers.list_workers(record_store)] == ["w1", "w2"]


def test_delete_missing_worker(record_store):
    with pytest.raises(RecordNotFoundError):
        workers.delete_worker(record_store, "nope")


@pytest.mark.parametrize(
    "personal,work",
    [
        ({"name": "Ali", "phone": "12"}, {}),
        ({"name": "Ali", "phone": "03001234567", "cnic": "123"}, {}),
        ({"name": "  ", "phone": "03001234567"}, {}),
        ({"name": "Ali", "phone": "03001234567"}, {"skills": ["Pipes", "Pipes"]}),
        ({"name": "Ali", "phone": "03001234567"}, {"service_radius": 0}),
    ],
)
def test_payload_validation(personal, work):
    work_info = {"category_id": "c1", "office_id": "o1"}
    work_info.update(work)
    with pytest.raises(ValidationError):
        WorkerCreate(personal_info=personal, work_info=work_info)
