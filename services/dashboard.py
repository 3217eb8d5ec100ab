# services/dashboard.py

from collections import Counter
from datetime import date, timedelta
from typing import List, Optional

from core.record_store import RecordStore
from models.category import WorkCategory
from models.dashboard import CountByLabel, DailyCount, DashboardStats
from models.enums import Collection, OfficeStatus, VerificationStatus
from models.office import Office
from models.worker import Worker


REGISTRATION_WINDOW_DAYS = 30


def _registrations(workers: List[Worker], today: date) -> List[DailyCount]:
    start = today - timedelta(days=REGISTRATION_WINDOW_DAYS - 1)
    per_day = Counter(
        w.created_at.date() for w in workers
        if w.created_at and start <= w.created_at.date() <= today
    )
    return [
        DailyCount(date=day.isoformat(), count=per_day.get(day, 0))
        for day in (start + timedelta(days=i) for i in range(REGISTRATION_WINDOW_DAYS))
    ]


def build_dashboard_stats(
    workers: List[Worker],
    offices: List[Office],
    categories: List[WorkCategory],
    today: Optional[date] = None,
) -> DashboardStats:
    today = today or date.today()
    statuses = Counter(w.verification.status for w in workers)

    by_category = Counter(w.work_info.category_id for w in workers if w.work_info.category_id)
    by_office = Counter(w.work_info.office_id for w in workers if w.work_info.office_id)

    return DashboardStats(
        total_workers=len(workers),
        verified_workers=statuses.get(VerificationStatus.verified, 0),
        pending_workers=statuses.get(VerificationStatus.pending, 0),
        rejected_workers=statuses.get(VerificationStatus.rejected, 0),
        total_offices=len(offices),
        active_offices=sum(1 for o in offices if o.details.status == OfficeStatus.active),
        total_categories=len(categories),
        workers_by_category=[
            CountByLabel(id=c.id, label=c.name, workers=by_category.get(c.id, 0))
            for c in categories
        ],
        workers_by_office=[
            CountByLabel(id=o.id, label=o.name, workers=by_office.get(o.id, 0))
            for o in offices
        ],
        registrations_last_30_days=_registrations(workers, today),
    )


def compute_dashboard_stats(store: RecordStore, today: Optional[date] = None) -> DashboardStats:
    """One read per collection; everything else is counted in memory."""
    return build_dashboard_stats(
        Worker.from_records(Collection.workers.value, store.get_all(Collection.workers)),
        Office.from_records(Collection.offices.value, store.get_all(Collection.offices)),
        WorkCategory.from_records(
            Collection.work_categories.value, store.get_all(Collection.work_categories)
        ),
        today,
    )
