# models/category.py

from typing import Optional
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from models.base import StoredRecord
from models.enums import CategoryStatus


DEFAULT_CATEGORY_ICON = "🔧"


class WorkCategory(StoredRecord):
    """Row from the work_categories table."""
    id: str
    name: str
    description: Optional[str] = None
    icon: Optional[str] = DEFAULT_CATEGORY_ICON
    status: str = CategoryStatus.active.value
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CategoryWithCounts(WorkCategory):
    worker_count: int = 0
    verified_worker_count: int = 0


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    icon: str = DEFAULT_CATEGORY_ICON

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Category name is required!")
        return value


class CategoryUpdate(CategoryCreate):
    status: Optional[CategoryStatus] = None
