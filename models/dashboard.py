# models/dashboard.py

from typing import List
from pydantic import BaseModel


class CountByLabel(BaseModel):
    id: str
    label: str
    workers: int = 0


class DailyCount(BaseModel):
    date: str
    count: int = 0


class DashboardStats(BaseModel):
    total_workers: int = 0
    verified_workers: int = 0
    pending_workers: int = 0
    rejected_workers: int = 0
    total_offices: int = 0
    active_offices: int = 0
    total_categories: int = 0
    workers_by_category: List[CountByLabel] = []
    workers_by_office: List[CountByLabel] = []
    registrations_last_30_days: List[DailyCount] = []
