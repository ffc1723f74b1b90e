"""
Tests for the JSON store and the tally board.
"""

import json

import pytest

from calibrator.services.tally import JsonStore, TallyBoard, TallyValidationError
from calibrator.services.tally.board import COUNTER_KEY, NOTES_KEY


class TestJsonStore:

    def test_missing_file_returns_fallback(self, store):
        assert store.load("anything", {"value": 0}) == {"value": 0}

    def test_save_then_load(self, store):
        store.save("a", {"value": 3})
        store.save("b", [1, 2])
        assert store.load("a", None) == {"value": 3}
        assert store.load("b", None) == [1, 2]

    def test_corrupt_file_returns_fallback(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")
        assert JsonStore(path).load("a", "fallback") == "fallback"

    def test_non_object_document_returns_fallback(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert JsonStore(path).load("a", "fallback") == "fallback"


class TestCounter:

    def test_defaults_to_zero(self, store):
        assert TallyBoard(store).value == 0

    def test_mutations_persist(self, store):
        board = TallyBoard(store)
        board.increment()
        board.increment()
        board.decrement()
        assert board.value == 1
        assert TallyBoard(store).value == 1

        board.reset_counter()
        assert TallyBoard(store).value == 0

    def test_set_counter_requires_integer(self, store):
        board = TallyBoard(store)
        board.set_counter(-4)
        assert store.load(COUNTER_KEY, None) == {"value": -4}

        for bad in (1.5, "3", True, None):
            with pytest.raises(TallyValidationError):
                board.set_counter(bad)
        assert board.value == -4

    @pytest.mark.parametrize("blob", [{"value": "7"}, {"count": 7}, [7], "7", {"value": True}])
    def test_malformed_counter_falls_back(self, store, blob):
        store.save(COUNTER_KEY, blob)
        assert TallyBoard(store).value == 0


class TestNotes:

    def test_add_is_trimmed_and_newest_first(self, store):
        board = TallyBoard(store)
        board.add_note("  first  ")
        board.add_note("second")

        assert [note.text for note in board.notes] == ["second", "first"]
        assert [note.id for note in board.notes] == [2, 1]

        reloaded = TallyBoard(store)
        assert reloaded.notes == board.notes

    def test_blank_note_rejected(self, store):
        board = TallyBoard(store)
        with pytest.raises(TallyValidationError):
            board.add_note("   ")
        assert board.notes == []
        assert store.load(NOTES_KEY, None) is None

    def test_remove_note(self, store):
        board = TallyBoard(store)
        kept = board.add_note("keep")
        dropped = board.add_note("drop")

        assert board.remove_note(dropped.id) == dropped
        assert TallyBoard(store).notes == [kept]
        with pytest.raises(KeyError):
            board.remove_note(dropped.id)

    def test_clear_notes(self, store):
        board = TallyBoard(store)
        board.add_note("x")
        board.clear_notes()
        assert TallyBoard(store).notes == []

    @pytest.mark.parametrize("blob", [
        {"notes": "nope"},
        {"items": []},
        {"notes": [{"text": "missing id"}]},
        {"notes": ["plain string"]},
        None,
    ])
    def test_malformed_notes_fall_back(self, store, blob):
        store.save(NOTES_KEY, blob)
        assert TallyBoard(store).notes == []


class TestPersistenceFailure:

    def test_save_failure_keeps_memory_state(self, tmp_path):
        # A directory at the store path makes every write fail
        path = tmp_path / "store.json"
        path.mkdir()
        board = TallyBoard(JsonStore(path))

        assert board.increment() == 1
        assert board.add_note("still works").text == "still works"
        assert board.value == 1


class TestNoteIds:

    def test_removed_newest_id_is_not_reused(self, store):
        board = TallyBoard(store)
        board.add_note("one")
        newest = board.add_note("two")
        board.remove_note(newest.id)

        assert board.add_note("three").id == 3

    def test_ids_stay_monotonic_across_reload(self, store):
        board = TallyBoard(store)
        board.add_note("one")
        board.remove_note(board.add_note("two").id)

        assert TallyBoard(store).add_note("three").id == 3

    def test_clear_keeps_id_sequence(self, store):
        board = TallyBoard(store)
        board.add_note("one")
        board.clear_notes()
        assert board.add_note("two").id == 2

    def test_legacy_blob_without_next_id(self, store):
        store.save(NOTES_KEY, {"notes": [{"id": 4, "text": "old", "created_at": ""}]})
        assert TallyBoard(store).add_note("new").id == 5
