"""In-memory note collection, the single writer of note data."""

from __future__ import annotations

import logging

from local_notes.ids import generate_id
from local_notes.metrics import NOTE_MUTATIONS, NOTES_STORED
from local_notes.models import UNTITLED, Note, next_timestamp
from local_notes.persistence import NotePersistence

logger = logging.getLogger(__name__)


class NoteStore:
    """Owns the ordered note collection (newest-created first).

    Every applied mutation is followed by a full save through the
    persistence adapter.
    """

    def __init__(self, persistence: NotePersistence) -> None:
        self._persistence = persistence
        self._notes: dict[str, Note] = {}
        for note in persistence.load():
            if note.id in self._notes:
                fresh_id = generate_id()
                logger.warning("Duplicate stored note id %s — reassigned to %s", note.id, fresh_id)
                note = note.model_copy(update={"id": fresh_id})
            self._notes[note.id] = note
        NOTES_STORED.set(len(self._notes))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list(self) -> list[Note]:
        """Return a snapshot of every note, newest first."""
        return list(self._notes.values())

    def get(self, note_id: str) -> Note | None:
        return self._notes.get(note_id)

    @property
    def count(self) -> int:
        """Number of stored notes."""
        return len(self._notes)

    def __len__(self) -> int:
        return len(self._notes)

    def __contains__(self, note_id: object) -> bool:
        return note_id in self._notes

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, title: str, body: str) -> Note | None:
        """Create a note at the front of the collection.

        Returns None, without saving, when title and body are both blank.
        """
        title, body = title.strip(), body.strip()
        if not title and not body:
            logger.debug("Ignored create with empty title and body")
            return None

        note = Note(title=title or UNTITLED, body=body, updatedAt=next_timestamp())
        self._notes = {note.id: note, **self._notes}
        self._commit("create")
        logger.info("Created note %s — '%s'", note.id, note.title)
        return note

    def update(self, note_id: str, title: str, body: str) -> Note | None:
        """Replace a note's title and body in place.

        Returns None if ``note_id`` is unknown. Blank input leaves the
        note untouched and returns it as is.
        """
        existing = self._notes.get(note_id)
        if existing is None:
            logger.info("Update of missing note %s", note_id)
            return None

        title, body = title.strip(), body.strip()
        if not title and not body:
            logger.debug("Ignored update of %s with empty title and body", note_id)
            return existing

        note = existing.model_copy(
            update={
                "title": title or UNTITLED,
                "body": body,
                "updated_at": next_timestamp(existing.updated_at),
            }
        )
        self._notes[note_id] = note
        self._commit("update")
        logger.info("Updated note %s — '%s'", note.id, note.title)
        return note

    def delete(self, note_id: str) -> bool:
        """Remove a note if present. Returns whether one was removed."""
        removed = self._notes.pop(note_id, None) is not None
        # Saved even when nothing matched, keeping memory and storage aligned.
        self._commit("delete" if removed else None)
        if removed:
            logger.info("Deleted note %s", note_id)
        return removed

    def _commit(self, operation: str | None) -> None:
        if operation is not None:
            NOTE_MUTATIONS.labels(operation=operation).inc()
        NOTES_STORED.set(len(self._notes))
        self._persistence.save(self.list())
