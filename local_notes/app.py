"""Wires settings, storage, note store and editor session together.

The rendering layer holds a ``NotesApp`` and recomputes its views after
every mutation::

    app = build_app()
    app.session.start_new()
    app.session.save("Groceries", "Milk, eggs")
    app.visible_notes("milk")
"""

from __future__ import annotations

import logging

from local_notes.config import Settings, settings as default_settings
from local_notes.editor import EditorSession
from local_notes.logging_setup import configure_logging
from local_notes.models import Note
from local_notes.persistence import BlobStore, FileBlobStore, MemoryBlobStore, NotePersistence
from local_notes.presenters import count_label
from local_notes.search import filter_notes
from local_notes.store import NoteStore

logger = logging.getLogger(__name__)


class NotesApp:
    """The note store and editor session a single client works against."""

    def __init__(self, store: NoteStore, session: EditorSession | None = None) -> None:
        self.store = store
        self.session = session or EditorSession(store)

    def delete(self, note_id: str) -> bool:
        """Delete a note, closing the editor if it was editing that note."""
        return self.session.delete_note(note_id)

    def visible_notes(self, query: str = "") -> list[Note]:
        return filter_notes(self.store.list(), query)

    def count_label(self, query: str = "") -> str:
        return count_label(len(self.visible_notes(query)), query)


def make_blob_store(cfg: Settings) -> BlobStore:
    if cfg.storage_backend == "memory":
        return MemoryBlobStore(max_bytes=cfg.max_blob_bytes)
    return FileBlobStore(cfg.data_dir, max_bytes=cfg.max_blob_bytes)


def build_app(cfg: Settings | None = None) -> NotesApp:
    """Build a ready-to-use app from settings (module defaults if omitted)."""
    cfg = cfg or default_settings
    configure_logging(cfg.log_level)

    persistence = NotePersistence(make_blob_store(cfg), key=cfg.storage_key)
    store = NoteStore(persistence)
    logger.info(
        "Notes ready — backend=%s, key='%s', notes=%d",
        cfg.storage_backend,
        cfg.storage_key,
        store.count,
    )
    return NotesApp(store)
