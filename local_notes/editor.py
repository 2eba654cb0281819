"""Editor session: which note is being composed and its unsaved text.

States::

    IDLE --start_new--> CREATING --save--> IDLE
    any  --start_edit(id)--> EDITING(id) --save--> IDLE
    CREATING / EDITING --cancel--> IDLE

A save rejected for blank input keeps the session open. A save or
reconcile that finds the target note gone drops back to IDLE.
"""

from __future__ import annotations

import logging
from enum import Enum

from local_notes.models import Note
from local_notes.store import NoteStore

logger = logging.getLogger(__name__)


class EditorMode(str, Enum):
    IDLE = "idle"
    CREATING = "creating"
    EDITING = "editing"


class SaveOutcome(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    REJECTED = "rejected"  # blank title and body, session stays open
    DISCARDED = "discarded"  # target note vanished, session closed
    IGNORED = "ignored"  # nothing open


class EditorSession:
    """State machine driving note store mutations from draft text."""

    def __init__(self, store: NoteStore) -> None:
        self._store = store
        self._mode = EditorMode.IDLE
        self._editing_id: str | None = None
        self.draft_title = ""
        self.draft_body = ""

    @property
    def mode(self) -> EditorMode:
        return self._mode

    @property
    def editing_id(self) -> str | None:
        return self._editing_id

    @property
    def is_open(self) -> bool:
        return self._mode is not EditorMode.IDLE

    @property
    def can_save(self) -> bool:
        """Whether a save could succeed with the current drafts."""
        return self.is_open and bool(self.draft_title.strip() or self.draft_body.strip())

    @property
    def heading(self) -> str:
        if self._mode is EditorMode.CREATING:
            return "New note"
        if self._mode is EditorMode.EDITING:
            return "Edit note"
        return "Editor"

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start_new(self) -> None:
        self._enter(EditorMode.CREATING)

    def start_edit(self, note_id: str) -> bool:
        """Load a note into the drafts. Falls back to IDLE if it is missing."""
        note = self._store.get(note_id)
        if note is None:
            logger.info("Cannot edit missing note %s", note_id)
            self.cancel()
            return False
        self._enter(EditorMode.EDITING, note)
        return True

    def cancel(self) -> None:
        self._enter(EditorMode.IDLE)

    def update_draft(self, title: str | None = None, body: str | None = None) -> None:
        if title is not None:
            self.draft_title = title
        if body is not None:
            self.draft_body = body

    def save(self, title: str | None = None, body: str | None = None) -> SaveOutcome:
        """Commit the drafts, optionally replacing them with live text first."""
        self.update_draft(title, body)
        if not self.reconcile():
            return SaveOutcome.DISCARDED

        if self._mode is EditorMode.CREATING:
            if self._store.create(self.draft_title, self.draft_body) is None:
                return SaveOutcome.REJECTED
            self.cancel()
            return SaveOutcome.CREATED

        if self._mode is EditorMode.EDITING:
            existing = self._store.get(self._editing_id)
            updated = self._store.update(self._editing_id, self.draft_title, self.draft_body)
            if updated is None:
                self.cancel()
                return SaveOutcome.DISCARDED
            # The store hands back the untouched note when it rejects blank input.
            if updated is existing:
                return SaveOutcome.REJECTED
            self.cancel()
            return SaveOutcome.UPDATED

        return SaveOutcome.IGNORED

    def delete_note(self, note_id: str) -> bool:
        """Delete through the store, closing the editor if it targeted that note."""
        removed = self._store.delete(note_id)
        if self._editing_id == note_id:
            self.cancel()
        return removed

    def reconcile(self) -> bool:
        """Close an edit whose target no longer exists.

        Returns False if the session was closed because of that.
        """
        if self._mode is EditorMode.EDITING and self._editing_id not in self._store:
            logger.info("Note %s was deleted while being edited — discarding drafts", self._editing_id)
            self.cancel()
            return False
        return True

    def _enter(self, mode: EditorMode, note: Note | None = None) -> None:
        self._mode = mode
        self._editing_id = note.id if note is not None else None
        self.draft_title = note.title if note is not None else ""
        self.draft_body = note.body if note is not None else ""
