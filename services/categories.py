# services/categories.py

from collections import Counter
from typing import List

from core.errors import DeleteBlockedError, RecordNotFoundError
from core.logging_config import logger
from core.record_store import RecordStore
from core.utils import utc_now_iso
from models.category import CategoryCreate, CategoryUpdate, CategoryWithCounts, WorkCategory
from models.enums import CategoryStatus, Collection, VerificationStatus
from models.worker import Worker


def get_category(store: RecordStore, category_id: str) -> WorkCategory:
    raw = store.get_one(Collection.work_categories, category_id)
    if raw is None:
        raise RecordNotFoundError(f"Category {category_id} not found")
    return WorkCategory.from_record(Collection.work_categories.value, raw)


def list_categories(store: RecordStore) -> List[CategoryWithCounts]:
    """Categories with total / verified worker counts, as the manage screen shows them."""
    categories = WorkCategory.from_records(
        Collection.work_categories.value, store.get_all(Collection.work_categories)
    )
    workers = Worker.from_records(Collection.workers.value, store.get_all(Collection.workers))

    totals = Counter(w.work_info.category_id for w in workers)
    verified = Counter(
        w.work_info.category_id for w in workers
        if w.verification.status == VerificationStatus.verified
    )

    return [
        CategoryWithCounts(
            **category.model_dump(),
            worker_count=totals.get(category.id, 0),
            verified_worker_count=verified.get(category.id, 0),
        )
        for category in categories
    ]


def create_category(store: RecordStore, payload: CategoryCreate) -> WorkCategory:
    now = utc_now_iso()
    new_id = store.create(
        Collection.work_categories,
        {
            "name": payload.name,
            "description": payload.description,
            "icon": payload.icon,
            "status": CategoryStatus.active.value,
            "created_at": now,
            "updated_at": now,
        },
    )
    logger.info(f"Category created: {new_id} ({payload.name})")
    return get_category(store, new_id)


def update_category(store: RecordStore, category_id: str, payload: CategoryUpdate) -> WorkCategory:
    get_category(store, category_id)

    data = {
        "name": payload.name,
        "description": payload.description,
        "icon": payload.icon,
        "updated_at": utc_now_iso(),
    }
    if payload.status is not None:
        data["status"] = payload.status.value

    store.update(Collection.work_categories, category_id, data)
    return get_category(store, category_id)


def delete_category(store: RecordStore, category_id: str) -> None:
    """
    Refuse while any worker references the category.

    The count and the delete are separate calls with no isolation, so a
    worker created in between can still end up pointing at a deleted
    category.
    """
    category = get_category(store, category_id)

    workers = Worker.from_records(Collection.workers.value, store.get_all(Collection.workers))
    worker_count = sum(1 for w in workers if w.work_info.category_id == category_id)
    if worker_count > 0:
        raise DeleteBlockedError(
            f"Cannot delete category! There are {worker_count} workers assigned to this category."
        )

    store.delete(Collection.work_categories, category_id)
    logger.info(f"Category deleted: {category_id} ({category.name})")
