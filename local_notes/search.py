"""Free-text filtering of the note list."""

from __future__ import annotations

from collections.abc import Sequence

from local_notes.models import Note


def filter_notes(notes: Sequence[Note], query: str) -> list[Note]:
    """Return notes whose title or body contains the query (case-insensitive).

    A blank query returns every note. Matches keep their original order.
    """
    q = query.strip().lower()
    if not q:
        return list(notes)
    # Newline join keeps a match from spanning the title/body boundary.
    return [n for n in notes if q in f"{n.title}\n{n.body}".lower()]
