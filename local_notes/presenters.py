"""Display helpers for notes: timestamps, fallback titles, list counts."""

from __future__ import annotations

from local_notes.models import UNTITLED, Note, parse_iso

NO_CONTENT = "No content"

# %b and %p follow the active LC_TIME locale.
_DISPLAY_FORMAT = "%b %d, %Y %I:%M %p"


def format_timestamp(iso: str) -> str:
    """Render an ISO-8601 timestamp in local time, e.g. ``Jan 14, 2026 04:19 AM``.

    Returns an empty string for anything that does not parse.
    """
    parsed = parse_iso(iso)
    if parsed is None:
        return ""
    try:
        return parsed.astimezone().strftime(_DISPLAY_FORMAT)
    except (OverflowError, OSError, ValueError):
        return ""


def display_title(note: Note) -> str:
    return note.title.strip() or UNTITLED


def body_preview(note: Note) -> str:
    return note.body.strip() or NO_CONTENT


def count_label(count: int, query: str = "") -> str:
    """Summary line for the notes list, e.g. ``3 notes (filtered)``."""
    noun = "note" if count == 1 else "notes"
    label = f"{count} {noun}"
    if query.strip():
        label += " (filtered)"
    return label
