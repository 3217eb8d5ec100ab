# models/worker.py

from typing import List, Optional
from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from core.utils import ensure_unique, validate_cnic, validate_phone
from models.base import AdminRef, StoredRecord
from models.enums import Availability, VerificationStatus


# ===============================================================
# STORED SHAPE
# ===============================================================

class PersonalInfo(StoredRecord):
    name: str
    phone: Optional[str] = None
    cnic: Optional[str] = None
    address: Optional[str] = None
    email: Optional[str] = None
    date_of_birth: Optional[date] = None

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def blank_dob(cls, value):
        return value or None


class WorkInfo(StoredRecord):
    category_id: Optional[str] = None
    skills: List[str] = []
    experience: Optional[str] = None
    service_radius: Optional[float] = 10
    availability: Optional[Availability] = Availability.full_time
    office_id: Optional[str] = None


class Verification(StoredRecord):
    status: VerificationStatus = VerificationStatus.pending
    rejection_reason: Optional[str] = None
    verified_by: Optional[str] = None
    verified_at: Optional[datetime] = None
    last_updated: Optional[datetime] = None

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, value):
        return value or VerificationStatus.pending


class OfficeSnapshot(StoredRecord):
    office_id: Optional[str] = None
    office_name: Optional[str] = None
    office_city: Optional[str] = None


class Ratings(StoredRecord):
    average: float = 0
    total_reviews: int = 0


class Worker(StoredRecord):
    id: str
    personal_info: PersonalInfo
    work_info: WorkInfo = Field(default_factory=WorkInfo)
    verification: Verification = Field(default_factory=Verification)
    office_info: Optional[OfficeSnapshot] = None
    ratings: Ratings = Field(default_factory=Ratings)
    added_by: Optional[AdminRef] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ===============================================================
# PAYLOADS
# ===============================================================

class PersonalInfoIn(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str
    cnic: Optional[str] = None
    address: Optional[str] = None
    email: Optional[EmailStr] = None
    date_of_birth: Optional[date] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Worker name is required!")
        return value

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value):
        value = validate_phone(value)
        if not value:
            raise ValueError("Phone number is required!")
        return value

    @field_validator("cnic")
    @classmethod
    def check_cnic(cls, value):
        return validate_cnic(value)


class WorkInfoIn(BaseModel):
    category_id: str = Field(..., min_length=1)
    office_id: str = Field(..., min_length=1)
    skills: List[str] = []
    experience: Optional[str] = None
    service_radius: float = Field(10, gt=0)
    availability: Availability = Availability.full_time

    @field_validator("skills")
    @classmethod
    def unique_skills(cls, value: List[str]) -> List[str]:
        return ensure_unique(value, "skill")


class WorkerCreate(BaseModel):
    personal_info: PersonalInfoIn
    work_info: WorkInfoIn


class WorkerUpdate(BaseModel):
    """Full replacement of the editable sections, as the manage form sends."""
    personal_info: PersonalInfoIn
    work_info: WorkInfoIn


class VerificationDecision(BaseModel):
    status: VerificationStatus
    reason: Optional[str] = None
