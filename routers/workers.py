# routers/workers.py

from typing import List, Optional

from fastapi import APIRouter, Depends

from core.record_store import RecordStore
from dependencies.auth import get_record_store, requires_subsection
from models.auth import AuthContext
from models.enums import VerificationStatus
from models.worker import VerificationDecision, Worker, WorkerCreate, WorkerUpdate
from services import workers


router = APIRouter(
    prefix="/workers",
    tags=["Workers"],
)


# -----------------------------------------------------
# LIST / GET
# -----------------------------------------------------
@router.get(
    "",
    response_model=List[Worker],
    summary="List workers",
    dependencies=[Depends(requires_subsection("view-workers"))],
)
def list_workers(
    category_id: Optional[str] = None,
    office_id: Optional[str] = None,
    verification_status: Optional[VerificationStatus] = None,
    search: Optional[str] = None,
    store: RecordStore = Depends(get_record_store),
):
    return workers.list_workers(
        store,
        category_id=category_id,
        office_id=office_id,
        verification_status=verification_status,
        search=search,
    )


@router.get(
    "/{worker_id}",
    response_model=Worker,
    summary="Get one worker",
    dependencies=[Depends(requires_subsection("view-workers"))],
)
def get_worker(worker_id: str, store: RecordStore = Depends(get_record_store)):
    return workers.get_worker(store, worker_id)


# -----------------------------------------------------
# CREATE
# -----------------------------------------------------
@router.post("", response_model=Worker, status_code=201, summary="Add a worker")
def create_worker(
    payload: WorkerCreate,
    context: AuthContext = Depends(requires_subsection("add-worker")),
    store: RecordStore = Depends(get_record_store),
):
    return workers.create_worker(store, payload, context)


# -----------------------------------------------------
# UPDATE / VERIFY
# -----------------------------------------------------
@router.patch(
    "/{worker_id}",
    response_model=Worker,
    summary="Edit a worker (resets verification)",
    dependencies=[Depends(requires_subsection("manage-workers"))],
)
def update_worker(worker_id: str, payload: WorkerUpdate, store: RecordStore = Depends(get_record_store)):
    return workers.update_worker(store, worker_id, payload)


@router.post("/{worker_id}/verification", response_model=Worker, summary="Verify or reject a worker")
def set_verification(
    worker_id: str,
    decision: VerificationDecision,
    context: AuthContext = Depends(requires_subsection("worker-verification")),
    store: RecordStore = Depends(get_record_store),
):
    return workers.set_verification(store, worker_id, decision, context)


# -----------------------------------------------------
# DELETE
# -----------------------------------------------------
@router.delete(
    "/{worker_id}",
    summary="Delete a worker",
    dependencies=[Depends(requires_subsection("manage-workers"))],
)
def delete_worker(worker_id: str, store: RecordStore = Depends(get_record_store)):
    workers.delete_worker(store, worker_id)
    return {"success": True, "deleted": worker_id}
