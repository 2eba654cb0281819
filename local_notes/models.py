"""Pydantic models for local notes."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from local_notes.ids import generate_id

UNTITLED = "Untitled"

# How far ahead of the clock a previous save may be and still be bumped past.
CLOCK_SKEW_TOLERANCE = timedelta(seconds=5)


def utc_now_iso() -> str:
    """Current time as an ISO-8601 UTC string."""
    return datetime.now(UTC).isoformat()


def parse_iso(value: Any) -> datetime | None:
    """Parse an ISO-8601 string, or return None if it is not one.

    Naive values are assumed to be UTC.
    """
    if not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def next_timestamp(previous: str | None = None) -> str:
    """Return a save timestamp for a note last saved at ``previous``.

    When ``previous`` sits at or just ahead of the wall clock (a stalled or
    slightly rewound clock), the result is one microsecond past it. A
    previous value further in the future is ignored in favour of now.
    """
    now = datetime.now(UTC)
    last = parse_iso(previous)
    if last is not None and now <= last <= now + CLOCK_SKEW_TOLERANCE:
        try:
            now = last.astimezone(UTC) + timedelta(microseconds=1)
        except OverflowError:
            pass
    return now.isoformat()


class Note(BaseModel):
    """A single note. Instances are immutable; edits produce a copy.

    The timestamp is only read from its stored ``updatedAt`` key.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(default_factory=generate_id)
    title: str = Field(default="", description="Note title, may be empty")
    body: str = Field(default="", description="Note body, may be empty")
    updated_at: str = Field(
        default_factory=utc_now_iso,
        alias="updatedAt",
        description="ISO-8601 timestamp of the most recent save",
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        if value is None:
            return generate_id()
        return str(value)

    @field_validator("title", "body", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("updated_at", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> str:
        if isinstance(value, str):
            return value
        return utc_now_iso()

    def to_record(self) -> dict[str, str]:
        """Serialize to the stored ``{id, title, body, updatedAt}`` shape."""
        return self.model_dump(by_alias=True)
