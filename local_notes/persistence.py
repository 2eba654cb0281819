"""Blob-store persistence for the note collection.

Persistence is advisory: every read or write failure is logged and
swallowed here, and the in-memory store stays authoritative for the
rest of the session.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from local_notes.metrics import PERSISTENCE_OPERATIONS
from local_notes.models import Note

logger = logging.getLogger(__name__)

STORAGE_KEY = "simple_notes__v1"


class StorageQuotaExceeded(OSError):
    """Raised by a blob store when a value is larger than its capacity."""


class BlobStore(Protocol):
    """Key-value medium holding one serialized value per key."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


def _check_quota(size: int, max_bytes: int | None) -> None:
    if max_bytes is not None and size > max_bytes:
        raise StorageQuotaExceeded(
            f"value of {size} bytes exceeds quota of {max_bytes} bytes"
        )


class MemoryBlobStore:
    """Dict-backed blob store with an optional byte quota."""

    def __init__(self, max_bytes: int | None = None) -> None:
        self._max_bytes = max_bytes
        self._values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        _check_quota(len(value.encode("utf-8")), self._max_bytes)
        self._values[key] = value


class FileBlobStore:
    """One ``<key>.json`` file per key inside ``directory``.

    Writes land in a temp file that is moved over the target with
    ``os.replace``, so a blob is either fully replaced or left untouched.
    """

    def __init__(self, directory: Path, max_bytes: int | None = None) -> None:
        self._dir = Path(directory)
        self._max_bytes = max_bytes

    def path_for(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        encoded = value.encode("utf-8")
        _check_quota(len(encoded), self._max_bytes)
        self._dir.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=self._dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(encoded)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path_for(key))
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise


class NotePersistence:
    """Loads and saves the full note collection under a single blob key."""

    def __init__(self, blob_store: BlobStore, key: str = STORAGE_KEY) -> None:
        self._blobs = blob_store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[Note]:
        """Read the stored collection. Returns [] on any failure, never raises."""
        try:
            raw = self._blobs.get(self._key)
        except Exception as exc:
            logger.warning("Failed to read notes blob '%s': %s — starting fresh", self._key, exc)
            PERSISTENCE_OPERATIONS.labels(operation="load", status="failure").inc()
            return []

        if not raw:
            logger.info("No stored notes under '%s' — starting fresh", self._key)
            PERSISTENCE_OPERATIONS.labels(operation="load", status="success").inc()
            return []

        try:
            parsed = json.loads(raw)
            if not isinstance(parsed, list):
                raise ValueError(f"expected a JSON array, got {type(parsed).__name__}")
            records = [item for item in parsed if isinstance(item, dict)]
            notes = [Note.model_validate(record) for record in records]
        except (ValueError, RecursionError) as exc:
            logger.warning("Stored notes under '%s' are unreadable: %s — starting fresh", self._key, exc)
            PERSISTENCE_OPERATIONS.labels(operation="load", status="failure").inc()
            return []

        dropped = len(parsed) - len(records)
        if dropped:
            logger.debug("Dropped %d non-object entries from '%s'", dropped, self._key)

        PERSISTENCE_OPERATIONS.labels(operation="load", status="success").inc()
        logger.info("Loaded %d notes from '%s'", len(notes), self._key)
        return notes

    def save(self, notes: Iterable[Note]) -> None:
        """Overwrite the stored collection. Failures are logged and suppressed."""
        records = [note.to_record() for note in notes]
        try:
            self._blobs.set(self._key, json.dumps(records, ensure_ascii=False))
        except Exception as exc:
            logger.warning("Failed to persist %d notes to '%s': %s", len(records), self._key, exc)
            PERSISTENCE_OPERATIONS.labels(operation="save", status="failure").inc()
            return
        PERSISTENCE_OPERATIONS.labels(operation="save", status="success").inc()
        logger.debug("Persisted %d notes to '%s'", len(records), self._key)
