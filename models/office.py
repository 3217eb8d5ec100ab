# models/office.py

from typing import List, Optional
from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from core.utils import ensure_unique, validate_phone
from models.base import AdminRef, StoredRecord
from models.enums import OfficeStatus, OfficeType


# ===============================================================
# STORED SHAPE
# ===============================================================

class BasicInfo(StoredRecord):
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    established_date: Optional[date] = None

    @field_validator("established_date", mode="before")
    @classmethod
    def blank_date(cls, value):
        return value or None


class Coordinates(StoredRecord):
    lat: Optional[float] = None
    lng: Optional[float] = None

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def blank_coordinate(cls, value):
        return None if value == "" else value


class Location(StoredRecord):
    coordinates: Coordinates = Field(default_factory=Coordinates)
    service_areas: List[str] = []
    radius: Optional[float] = 20


class Management(StoredRecord):
    manager_id: Optional[str] = None
    manager_name: Optional[str] = None
    staff_count: int = 0


class OfficeDetails(StoredRecord):
    type: OfficeType = OfficeType.branch
    status: OfficeStatus = OfficeStatus.active
    facilities: List[str] = []


class OfficeStats(StoredRecord):
    total_workers: int = 0
    active_workers: int = 0
    completed_jobs: int = 0


class Office(StoredRecord):
    id: str
    basic_info: BasicInfo
    location: Location = Field(default_factory=Location)
    management: Management = Field(default_factory=Management)
    details: OfficeDetails = Field(default_factory=OfficeDetails)
    stats: OfficeStats = Field(default_factory=OfficeStats)
    added_by: Optional[AdminRef] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def name(self) -> str:
        return self.basic_info.name

    @property
    def city(self) -> Optional[str]:
        return self.basic_info.city


# ===============================================================
# PAYLOADS
# ===============================================================

class BasicInfoIn(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str
    address: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    city: Optional[str] = None
    established_date: Optional[date] = None

    @field_validator("name", "address")
    @classmethod
    def required_text(cls, value: str, info) -> str:
        value = value.strip()
        if not value:
            raise ValueError(f"Office {info.field_name} is required!")
        return value

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value):
        value = validate_phone(value)
        if not value:
            raise ValueError("Phone number is required!")
        return value


class LocationIn(BaseModel):
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)
    service_areas: List[str] = []
    radius: float = Field(20, gt=0)

    @field_validator("service_areas")
    @classmethod
    def unique_areas(cls, value: List[str]) -> List[str]:
        return ensure_unique(value, "service area")


class ManagementIn(BaseModel):
    manager_id: Optional[str] = None
    manager_name: Optional[str] = None
    staff_count: int = Field(0, ge=0)


class DetailsIn(BaseModel):
    type: OfficeType = OfficeType.branch
    status: OfficeStatus = OfficeStatus.active
    facilities: List[str] = []

    @field_validator("facilities")
    @classmethod
    def unique_facilities(cls, value: List[str]) -> List[str]:
        return ensure_unique(value, "facility")


class OfficeCreate(BaseModel):
    basic_info: BasicInfoIn
    location: LocationIn = Field(default_factory=LocationIn)
    management: ManagementIn = Field(default_factory=ManagementIn)
    details: DetailsIn = Field(default_factory=DetailsIn)


class OfficeUpdate(OfficeCreate):
    pass


class OfficeDeleteResult(BaseModel):
    """Deletion never blocks; dependents are reported so they can be reassigned."""
    deleted: bool = True
    office_id: str
    orphaned_workers: int = 0
    orphaned_admins: int = 0
