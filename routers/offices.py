# routers/offices.py

from typing import List, Optional

from fastapi import APIRouter, Depends

from core.record_store import RecordStore
from dependencies.auth import get_record_store, requires_subsection
from models.auth import AuthContext
from models.enums import OfficeStatus, OfficeType
from models.office import Office, OfficeCreate, OfficeDeleteResult, OfficeUpdate
from services import offices


router = APIRouter(
    prefix="/offices",
    tags=["Offices"],
)


@router.get(
    "",
    response_model=List[Office],
    summary="List offices",
    dependencies=[Depends(requires_subsection("view-offices"))],
)
def list_offices(
    city: Optional[str] = None,
    status: Optional[OfficeStatus] = None,
    office_type: Optional[OfficeType] = None,
    search: Optional[str] = None,
    store: RecordStore = Depends(get_record_store),
):
    return offices.list_offices(store, city=city, status=status, office_type=office_type, search=search)


@router.get(
    "/{office_id}",
    response_model=Office,
    summary="Get one office",
    dependencies=[Depends(requires_subsection("view-offices"))],
)
def get_office(office_id: str, store: RecordStore = Depends(get_record_store)):
    return offices.get_office(store, office_id)


@router.post("", response_model=Office, status_code=201, summary="Create an office")
def create_office(
    payload: OfficeCreate,
    context: AuthContext = Depends(requires_subsection("add-office")),
    store: RecordStore = Depends(get_record_store),
):
    return offices.create_office(store, payload, context)


@router.patch(
    "/{office_id}",
    response_model=Office,
    summary="Update an office",
    dependencies=[Depends(requires_subsection("manage-offices"))],
)
def update_office(office_id: str, payload: OfficeUpdate, store: RecordStore = Depends(get_record_store)):
    return offices.update_office(store, office_id, payload)


@router.delete(
    "/{office_id}",
    response_model=OfficeDeleteResult,
    summary="Delete an office",
    dependencies=[Depends(requires_subsection("manage-offices"))],
)
def delete_office(office_id: str, store: RecordStore = Depends(get_record_store)):
    """
    Not blocked by assigned workers or admins; the response reports how
    many were left pointing at the deleted office.
    """
    return offices.delete_office(store, office_id)
