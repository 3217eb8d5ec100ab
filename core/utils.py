# core/utils.py

import re
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional


# Accepts local (03xx-xxxxxxx) and international (+92 3xx xxxxxxx) formats
PHONE_PATTERN = re.compile(r"^\+?\d[\d\s-]{8,15}\d$")

# National identity card: 12345-1234567-1
CNIC_PATTERN = re.compile(r"^\d{5}-\d{7}-\d$")


def sanitize(data: dict) -> dict:
    """
    Sanitize dictionary data before it is written to the store:
    - Empty strings → None
    - Strip string whitespace
    - Recurse into nested dicts (JSON columns)
    - Preserve booleans, numbers, lists and None values
    """
    clean = {}

    for k, v in data.items():
        if isinstance(v, str):
            stripped = v.strip()
            clean[k] = stripped if stripped != "" else None
            continue

        if isinstance(v, dict):
            clean[k] = sanitize(v)
            continue

        clean[k] = v

    return clean


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def calculate_age(birth_date: date, today: Optional[date] = None) -> int:
    """Whole years between birth_date and today (birthday not yet reached → one less)."""
    today = today or date.today()
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def validate_phone(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if not PHONE_PATTERN.match(value):
        raise ValueError("Invalid phone number format")
    return value


def validate_cnic(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if not CNIC_PATTERN.match(value):
        raise ValueError("CNIC must look like 12345-1234567-1")
    return value


def ensure_unique(values: Iterable[str], label: str) -> List[str]:
    """Strip entries, drop blanks, reject duplicates."""
    cleaned = []
    for value in values:
        value = value.strip()
        if not value:
            continue
        if value in cleaned:
            raise ValueError(f"Duplicate {label}: {value}")
        cleaned.append(value)
    return cleaned
