# services/offices.py

from typing import List, Optional

from core.errors import RecordNotFoundError
from core.logging_config import logger
from core.record_store import RecordStore
from core.utils import utc_now_iso
from models.admin import Admin
from models.auth import AuthContext
from models.enums import Collection, OfficeStatus, OfficeType
from models.office import Office, OfficeCreate, OfficeDeleteResult, OfficeUpdate
from models.worker import Worker


def get_office(store: RecordStore, office_id: str) -> Office:
    raw = store.get_one(Collection.offices, office_id)
    if raw is None:
        raise RecordNotFoundError(f"Office {office_id} not found")
    return Office.from_record(Collection.offices.value, raw)


def list_offices(
    store: RecordStore,
    *,
    city: Optional[str] = None,
    status: Optional[OfficeStatus] = None,
    office_type: Optional[OfficeType] = None,
    search: Optional[str] = None,
) -> List[Office]:
    offices = Office.from_records(Collection.offices.value, store.get_all(Collection.offices))

    if city:
        offices = [o for o in offices if (o.city or "").lower() == city.strip().lower()]
    if status:
        offices = [o for o in offices if o.details.status == status]
    if office_type:
        offices = [o for o in offices if o.details.type == office_type]
    if search:
        needle = search.strip().lower()
        offices = [
            o for o in offices
            if needle in o.name.lower()
            or needle in (o.city or "").lower()
            or needle in (o.basic_info.address or "").lower()
        ]
    return offices


def _office_data(payload: OfficeCreate) -> dict:
    basic = payload.basic_info
    location = payload.location
    return {
        "basic_info": {
            "name": basic.name,
            "phone": basic.phone,
            "email": basic.email,
            "address": basic.address,
            "city": basic.city,
            "established_date": basic.established_date.isoformat() if basic.established_date else None,
        },
        "location": {
            "coordinates": {"lat": location.lat, "lng": location.lng},
            "service_areas": location.service_areas,
            "radius": location.radius,
        },
        "management": payload.management.model_dump(),
        "details": payload.details.model_dump(mode="json"),
    }


def create_office(store: RecordStore, payload: OfficeCreate, creator: AuthContext) -> Office:
    now = utc_now_iso()
    data = _office_data(payload)
    data.update({
        "stats": {"total_workers": 0, "active_workers": 0, "completed_jobs": 0},
        "added_by": {
            "admin_id": creator.user_id,
            "admin_name": creator.name,
            "admin_email": creator.email,
        },
        "created_at": now,
        "updated_at": now,
    })

    new_id = store.create(Collection.offices, data)
    logger.info(f"Office created: {new_id} ({payload.basic_info.name}) by {creator.user_id}")
    return get_office(store, new_id)


def update_office(store: RecordStore, office_id: str, payload: OfficeUpdate) -> Office:
    get_office(store, office_id)

    data = _office_data(payload)
    data["updated_at"] = utc_now_iso()
    store.update(Collection.offices, office_id, data)
    return get_office(store, office_id)


def delete_office(store: RecordStore, office_id: str) -> OfficeDeleteResult:
    """
    Offices are deleted even when workers or admins still point at them.
    The dependents are counted beforehand and reported so they can be
    reassigned; nothing is cascaded.
    """
    office = get_office(store, office_id)

    workers = Worker.from_records(Collection.workers.value, store.get_all(Collection.workers))
    admins = Admin.from_records(Collection.admins.value, store.get_all(Collection.admins))
    orphaned_workers = sum(1 for w in workers if w.work_info.office_id == office_id)
    orphaned_admins = sum(
        1 for a in admins if a.assigned_office is not None and a.assigned_office.office_id == office_id
    )

    store.delete(Collection.offices, office_id)

    if orphaned_workers or orphaned_admins:
        logger.warning(
            f"Office {office_id} ({office.name}) deleted with {orphaned_workers} workers "
            f"and {orphaned_admins} admins still assigned"
        )
    else:
        logger.info(f"Office deleted: {office_id} ({office.name})")

    return OfficeDeleteResult(
        office_id=office_id,
        orphaned_workers=orphaned_workers,
        orphaned_admins=orphaned_admins,
    )
