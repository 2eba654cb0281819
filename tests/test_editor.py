"""Tests for the editor session state machine."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from local_notes.editor import EditorMode, EditorSession, SaveOutcome
from local_notes.persistence import MemoryBlobStore, NotePersistence
from local_notes.store import NoteStore

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def store() -> NoteStore:
    return NoteStore(NotePersistence(MemoryBlobStore()))


@pytest.fixture()
def session(store: NoteStore) -> EditorSession:
    return EditorSession(store)


def _assert_idle(session: EditorSession) -> None:
    assert session.mode is EditorMode.IDLE
    assert session.editing_id is None
    assert session.draft_title == ""
    assert session.draft_body == ""


# ---------------------------------------------------------------------------
# Opening and closing
# ---------------------------------------------------------------------------


class TestTransitions:
    def test_initial_state(self, session: EditorSession) -> None:
        _assert_idle(session)
        assert session.is_open is False
        assert session.heading == "Editor"

    def test_start_new_clears_drafts(self, session: EditorSession) -> None:
        session.update_draft("leftover", "text")
        session.start_new()
        assert session.mode is EditorMode.CREATING
        assert session.draft_title == ""
        assert session.draft_body == ""
        assert session.heading == "New note"

    def test_start_edit_loads_note(self, session: EditorSession, store: NoteStore) -> None:
        note = store.create("Title", "Body")
        assert session.start_edit(note.id) is True
        assert session.mode is EditorMode.EDITING
        assert session.editing_id == note.id
        assert (session.draft_title, session.draft_body) == ("Title", "Body")
        assert session.heading == "Edit note"

    def test_start_edit_from_creating(self, session: EditorSession, store: NoteStore) -> None:
        note = store.create("Title", "Body")
        session.start_new()
        session.update_draft("unsaved", "")
        session.start_edit(note.id)
        assert session.editing_id == note.id
        assert session.draft_title == "Title"

    def test_switch_between_notes(self, session: EditorSession, store: NoteStore) -> None:
        a = store.create("A", "a")
        b = store.create("B", "b")
        session.start_edit(a.id)
        session.start_edit(b.id)
        assert session.editing_id == b.id
        assert (session.draft_title, session.draft_body) == ("B", "b")

    def test_start_edit_missing_falls_back_to_idle(self, session: EditorSession) -> None:
        session.start_new()
        assert session.start_edit("missing") is False
        _assert_idle(session)

    def test_cancel_discards_drafts(self, session: EditorSession, store: NoteStore) -> None:
        note = store.create("Title", "Body")
        session.start_edit(note.id)
        session.update_draft("Changed", "Changed")
        session.cancel()
        _assert_idle(session)
        assert store.get(note.id) == note

    def test_can_save(self, session: EditorSession) -> None:
        assert session.can_save is False
        session.start_new()
        assert session.can_save is False
        session.update_draft(body="  x ")
        assert session.can_save is True

    def test_update_draft_partial(self, session: EditorSession) -> None:
        session.start_new()
        session.update_draft(title="T")
        session.update_draft(body="B")
        assert (session.draft_title, session.draft_body) == ("T", "B")


# ---------------------------------------------------------------------------
# Saving
# ---------------------------------------------------------------------------


class TestSave:
    def test_save_new_note(self, session: EditorSession, store: NoteStore) -> None:
        session.start_new()
        assert session.save("Groceries", "Milk, eggs") is SaveOutcome.CREATED
        _assert_idle(session)
        assert [(n.title, n.body) for n in store.list()] == [("Groceries", "Milk, eggs")]

    def test_save_uses_buffered_drafts(self, session: EditorSession, store: NoteStore) -> None:
        session.start_new()
        session.update_draft("Draft", "text")
        assert session.save() is SaveOutcome.CREATED
        assert store.list()[0].title == "Draft"

    def test_blank_new_note_rejected(self, session: EditorSession, store: NoteStore) -> None:
        session.start_new()
        assert session.save("  ", "") is SaveOutcome.REJECTED
        assert session.mode is EditorMode.CREATING
        assert session.draft_title == "  "
        assert store.list() == []

    def test_save_edit(self, session: EditorSession, store: NoteStore) -> None:
        note = store.create("Old", "old")
        session.start_edit(note.id)
        assert session.save("New", "new") is SaveOutcome.UPDATED
        _assert_idle(session)
        assert store.get(note.id).title == "New"

    def test_blank_edit_rejected(self, session: EditorSession, store: NoteStore) -> None:
        note = store.create("Keep", "me")
        session.start_edit(note.id)
        assert session.save("", " ") is SaveOutcome.REJECTED
        assert session.mode is EditorMode.EDITING
        assert session.editing_id == note.id
        assert store.get(note.id) == note

    def test_blank_edit_is_decided_by_store(self, session: EditorSession, store: NoteStore) -> None:
        note = store.create("Keep", "me")
        session.start_edit(note.id)
        with patch.object(store, "update", wraps=store.update) as update:
            assert session.save("  ", "") is SaveOutcome.REJECTED
        update.assert_called_once_with(note.id, "  ", "")
        assert session.editing_id == note.id
        assert session.draft_title == "  "

    def test_save_after_note_deleted_is_discarded(
        self, session: EditorSession, store: NoteStore
    ) -> None:
        note = store.create("Doomed", "")
        session.start_edit(note.id)
        store.delete(note.id)
        assert session.save("Resurrect", "me") is SaveOutcome.DISCARDED
        _assert_idle(session)
        assert store.list() == []

    def test_save_while_idle_is_ignored(self, session: EditorSession, store: NoteStore) -> None:
        assert session.save("T", "B") is SaveOutcome.IGNORED
        assert store.list() == []


# ---------------------------------------------------------------------------
# Deletion while editing
# ---------------------------------------------------------------------------


class TestDeletion:
    def test_deleting_edited_note_closes_session(
        self, session: EditorSession, store: NoteStore
    ) -> None:
        note = store.create("T", "")
        session.start_edit(note.id)
        assert session.delete_note(note.id) is True
        _assert_idle(session)

    def test_deleting_other_note_keeps_session(
        self, session: EditorSession, store: NoteStore
    ) -> None:
        edited = store.create("Edited", "")
        other = store.create("Other", "")
        session.start_edit(edited.id)
        session.update_draft("Edited v2")
        session.delete_note(other.id)
        assert session.editing_id == edited.id
        assert session.draft_title == "Edited v2"

    def test_deleting_while_creating_keeps_session(
        self, session: EditorSession, store: NoteStore
    ) -> None:
        note = store.create("T", "")
        session.start_new()
        session.delete_note(note.id)
        assert session.mode is EditorMode.CREATING

    def test_reconcile_after_external_delete(
        self, session: EditorSession, store: NoteStore
    ) -> None:
        note = store.create("T", "")
        session.start_edit(note.id)
        store.delete(note.id)
        assert session.reconcile() is False
        _assert_idle(session)

    def test_reconcile_noop_when_target_exists(
        self, session: EditorSession, store: NoteStore
    ) -> None:
        note = store.create("T", "")
        session.start_edit(note.id)
        assert session.reconcile() is True
        assert session.editing_id == note.id
