from __future__ import annotations

from datetime import date as date_type
from typing import Any, Optional

import dateparser
from pydantic import BaseModel, Field, field_validator

from safelyq.schemas.payload import text_or_none

_DATE_FORMAT = "%Y-%m-%d"


class AppointmentQuery(BaseModel):
    date: Optional[str] = Field(
        default=None,
        description="Optional date to check (YYYY-MM-DD). If omitted, use today's date (UTC).",
    )

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        if isinstance(value, date_type):
            return value.strftime(_DATE_FORMAT)
        if not isinstance(value, str):
            raise ValueError("date must be a string in YYYY-MM-DD format")
        text = value.strip()
        if not text:
            return None
        try:
            return date_type.fromisoformat(text).strftime(_DATE_FORMAT)
        except ValueError:
            pass
        parsed = dateparser.parse(
            text,
            settings={
                "TIMEZONE": "UTC",
                "TO_TIMEZONE": "UTC",
                "PREFER_DATES_FROM": "future",
            },
            languages=["en"],
        )
        if parsed is None:
            raise ValueError("date must be provided as YYYY-MM-DD")
        return parsed.strftime(_DATE_FORMAT)


class AppointmentResult(BaseModel):
    text: str


class AppointmentSummary(BaseModel):
    """Projection of one ``getCurrentUserAppointments`` element."""

    id: Optional[str] = None
    business_name: Optional[str] = None
    start_time: Optional[str] = None
    start_date: Optional[str] = None
    status: Optional[str] = None
    allocated_time: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["AppointmentSummary"]:
        if not isinstance(payload, dict):
            return None
        business = payload.get("business")
        business_name = business.get("name") if isinstance(business, dict) else None
        raw_id = payload.get("id")
        return cls(
            id=str(raw_id) if isinstance(raw_id, (int, str)) and not isinstance(raw_id, bool) else None,
            business_name=business_name if isinstance(business_name, str) else None,
            start_time=text_or_none(payload.get("startTimeOnly")),
            start_date=text_or_none(payload.get("startDateOnly")),
            status=text_or_none(payload.get("status")),
            allocated_time=text_or_none(payload.get("allocatedTimeFormatted")),
        )

    def describe(self) -> str:
        return f"{self.business_name or 'Unknown'} at {self.start_time or 'Unknown time'}"