# routers/categories.py

from typing import List

from fastapi import APIRouter, Depends

from core.record_store import RecordStore
from dependencies.auth import get_record_store, requires_subsection
from models.category import CategoryCreate, CategoryUpdate, CategoryWithCounts, WorkCategory
from services import categories


router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
)


@router.get(
    "",
    response_model=List[CategoryWithCounts],
    summary="List work categories with worker counts",
    dependencies=[Depends(requires_subsection("view-categories"))],
)
def list_categories(store: RecordStore = Depends(get_record_store)):
    return categories.list_categories(store)


@router.get(
    "/{category_id}",
    response_model=WorkCategory,
    summary="Get one category",
    dependencies=[Depends(requires_subsection("view-categories"))],
)
def get_category(category_id: str, store: RecordStore = Depends(get_record_store)):
    return categories.get_category(store, category_id)


@router.post(
    "",
    response_model=WorkCategory,
    status_code=201,
    summary="Create a category",
    dependencies=[Depends(requires_subsection("manage-categories"))],
)
def create_category(payload: CategoryCreate, store: RecordStore = Depends(get_record_store)):
    return categories.create_category(store, payload)


@router.patch(
    "/{category_id}",
    response_model=WorkCategory,
    summary="Update a category",
    dependencies=[Depends(requires_subsection("manage-categories"))],
)
def update_category(category_id: str, payload: CategoryUpdate, store: RecordStore = Depends(get_record_store)):
    return categories.update_category(store, category_id, payload)


@router.delete(
    "/{category_id}",
    summary="Delete a category",
    responses={409: {"description": "Workers are still assigned to the category"}},
    dependencies=[Depends(requires_subsection("manage-categories"))],
)
def delete_category(category_id: str, store: RecordStore = Depends(get_record_store)):
    categories.delete_category(store, category_id)
    return {"success": True, "deleted": category_id}
