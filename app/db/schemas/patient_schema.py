from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from datetime import date, datetime
from typing import Any, Optional
import re

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_calendar_date(value: Any) -> Optional[date]:
    """
    Accept only null or a `YYYY-MM-DD` string naming a real calendar day.
    Numbers, timestamps and date-times are rejected rather than coerced.
    """
    if value is None:
        return None
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise ValueError("birthDate must be an ISO calendar date (YYYY-MM-DD)")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"birthDate {value!r} is not a valid calendar date") from exc


class PatientBase(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    given_name: Optional[str] = Field(None, max_length=255)
    family_name: Optional[str] = Field(None, max_length=255)
    birth_date: Optional[date] = None

    @field_validator("birth_date", mode="before")
    @classmethod
    def validate_birth_date(cls, value: Any) -> Optional[date]:
        return parse_calendar_date(value)


class PatientCreate(PatientBase):
    """Body of POST /patient. Any client-supplied `id` is ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class PatientResponse(BaseModel):
    """Persisted patient as rendered over HTTP."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,  # Tells Pydantic to read SQLAlchemy objects
    )

    id: int
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    birth_date: Optional[date] = None


__all__ = ["PatientBase", "PatientCreate", "PatientResponse", "parse_calendar_date"]
