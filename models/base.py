# models/base.py

from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import AliasChoices, AliasGenerator, BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel


RecordT = TypeVar("RecordT", bound="StoredRecord")


class StoredRecord(BaseModel):
    """
    Base for everything read back from the Record Store.

    Fields are snake_case. Older console builds wrote camelCase keys
    (personalInfo, assignedOffice, ...) so both spellings are accepted
    on read; writes and API responses always use snake_case.
    """

    model_config = ConfigDict(
        alias_generator=AliasGenerator(
            validation_alias=lambda name: AliasChoices(name, to_camel(name)),
        ),
        extra="ignore",
    )

    @classmethod
    def from_record(cls: Type[RecordT], collection: str, raw: Optional[Dict[str, Any]]) -> RecordT:
        """Decode a raw row or raise RecordDecodeError."""
        from core.errors import RecordDecodeError

        if not isinstance(raw, dict):
            raise RecordDecodeError(collection, None, "record is not an object")

        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise RecordDecodeError(collection, raw.get("id"), str(e))

    @classmethod
    def from_records(cls: Type[RecordT], collection: str, rows: List[Dict[str, Any]]) -> List[RecordT]:
        """
        Decode a list of rows, skipping (and logging) malformed ones
        so a single bad record can't blank a whole listing.
        """
        from core.errors import RecordDecodeError
        from core.logging_config import logger

        decoded = []
        for raw in rows or []:
            try:
                decoded.append(cls.from_record(collection, raw))
            except RecordDecodeError as e:
                logger.warning(f"Skipping record: {e.message}")
        return decoded


class AdminRef(StoredRecord):
    """Who created / added a record."""
    admin_id: Optional[str] = None
    admin_name: Optional[str] = None
    admin_email: Optional[str] = None
