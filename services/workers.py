# services/workers.py

from datetime import date
from typing import List, Optional

from core.config import settings
from core.errors import FormValidationError, RecordNotFoundError
from core.logging_config import logger
from core.record_store import RecordStore
from core.utils import calculate_age, utc_now_iso
from models.auth import AuthContext
from models.category import WorkCategory
from models.enums import Collection, VerificationStatus
from models.office import Office
from models.worker import PersonalInfoIn, VerificationDecision, WorkInfoIn, Worker, WorkerCreate, WorkerUpdate


def get_worker(store: RecordStore, worker_id: str) -> Worker:
    raw = store.get_one(Collection.workers, worker_id)
    if raw is None:
        raise RecordNotFoundError(f"Worker {worker_id} not found")
    return Worker.from_record(Collection.workers.value, raw)


def list_workers(
    store: RecordStore,
    *,
    category_id: Optional[str] = None,
    office_id: Optional[str] = None,
    verification_status: Optional[VerificationStatus] = None,
    search: Optional[str] = None,
) -> List[Worker]:
    filters = {}
    if category_id:
        filters["work_info->>category_id"] = category_id
    if office_id:
        filters["work_info->>office_id"] = office_id
    if verification_status:
        filters["verification->>status"] = verification_status.value

    workers = Worker.from_records(Collection.workers.value, store.get_all(Collection.workers, filters))

    if search:
        needle = search.strip().lower()
        workers = [
            w for w in workers
            if needle in w.personal_info.name.lower()
            or needle in (w.personal_info.phone or "")
            or needle in (w.personal_info.cnic or "")
        ]
    return workers


# -----------------------------------------------------
# Validation shared by create / update
# -----------------------------------------------------
def check_minimum_age(date_of_birth: Optional[date], today: Optional[date] = None) -> None:
    if date_of_birth is None:
        return
    if calculate_age(date_of_birth, today) < settings.MIN_WORKER_AGE:
        raise FormValidationError(
            f"Worker must be at least {settings.MIN_WORKER_AGE} years old!"
        )


def _load_assignment(store: RecordStore, work_info: WorkInfoIn) -> Office:
    """Category and office must both exist; returns the office for its snapshot."""
    raw_category = store.get_one(Collection.work_categories, work_info.category_id)
    if raw_category is None:
        raise FormValidationError("Please select a valid work category!")
    WorkCategory.from_record(Collection.work_categories.value, raw_category)

    raw_office = store.get_one(Collection.offices, work_info.office_id)
    if raw_office is None:
        raise FormValidationError("Please select a valid office for the worker!")
    return Office.from_record(Collection.offices.value, raw_office)


def _sections(personal: PersonalInfoIn, work: WorkInfoIn, office: Office) -> dict:
    return {
        "personal_info": personal.model_dump(mode="json"),
        "work_info": work.model_dump(mode="json"),
        "office_info": {
            "office_id": office.id,
            "office_name": office.name or "Unknown Office",
            "office_city": office.city or "Unknown City",
        },
    }


# -----------------------------------------------------
# Create / update / delete
# -----------------------------------------------------
def create_worker(
    store: RecordStore,
    payload: WorkerCreate,
    creator: AuthContext,
    *,
    today: Optional[date] = None,
) -> Worker:
    # Every check runs before the first write
    check_minimum_age(payload.personal_info.date_of_birth, today)
    office = _load_assignment(store, payload.work_info)

    now = utc_now_iso()
    data = _sections(payload.personal_info, payload.work_info, office)
    data.update({
        "verification": {"status": VerificationStatus.pending.value},
        "ratings": {"average": 0, "total_reviews": 0},
        "added_by": {
            "admin_id": creator.user_id,
            "admin_name": creator.name,
            "admin_email": creator.email,
        },
        "created_at": now,
        "updated_at": now,
    })

    new_id = store.create(Collection.workers, data)
    logger.info(f"Worker created: {new_id} by {creator.user_id}")
    return get_worker(store, new_id)


def update_worker(
    store: RecordStore,
    worker_id: str,
    payload: WorkerUpdate,
    *,
    today: Optional[date] = None,
) -> Worker:
    """
    Management edits always send the worker back to review:
    verification resets to pending and any rejection reason is cleared.
    """
    get_worker(store, worker_id)
    check_minimum_age(payload.personal_info.date_of_birth, today)
    office = _load_assignment(store, payload.work_info)

    now = utc_now_iso()
    data = _sections(payload.personal_info, payload.work_info, office)
    data.update({
        "verification": {
            "status": VerificationStatus.pending.value,
            "rejection_reason": None,
            "last_updated": now,
        },
        "updated_at": now,
    })

    store.update(Collection.workers, worker_id, data)
    logger.info(f"Worker updated, verification reset to pending: {worker_id}")
    return get_worker(store, worker_id)


def set_verification(
    store: RecordStore,
    worker_id: str,
    decision: VerificationDecision,
    verifier: AuthContext,
) -> Worker:
    worker = get_worker(store, worker_id)

    reason = None
    if decision.status == VerificationStatus.rejected:
        reason = (decision.reason or "").strip() or None

    now = utc_now_iso()
    verification = {
        "status": decision.status.value,
        "rejection_reason": reason,
        "verified_by": verifier.name or verifier.user_id,
        "verified_at": now if decision.status == VerificationStatus.verified else None,
        "last_updated": now,
    }

    store.update(Collection.workers, worker_id, {"verification": verification, "updated_at": now})
    logger.info(
        f"Worker {worker.id} marked {decision.status.value} by {verifier.user_id}"
    )
    return get_worker(store, worker_id)


def delete_worker(store: RecordStore, worker_id: str) -> None:
    worker = get_worker(store, worker_id)
    store.delete(Collection.workers, worker_id)
    logger.info(f"Worker deleted: {worker_id} ({worker.personal_info.name})")
