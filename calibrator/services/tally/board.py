"""
Tally board - a counter and a note list persisted through a JsonStore.

State is loaded once at construction and saved after every successful
mutation. Persistence failures never stop the board working in memory.
"""

import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, List

from .store import JsonStore

logger = logging.getLogger(__name__)

COUNTER_KEY = "tally.counter"
NOTES_KEY = "tally.notes"


class TallyValidationError(ValueError):
    """Raised for a non-integer counter value or a blank note."""


@dataclass(frozen=True)
class Note:
    id: int
    text: str
    created_at: str


class TallyBoard:

    def __init__(self, store: JsonStore):
        self.store = store
        self.value = self._load_counter()
        self.notes: List[Note] = self._load_notes()
        # Never lowered, so removed ids are not handed out again
        self._next_note_id = self._load_next_note_id()

    # --- COUNTER ---

    def increment(self) -> int:
        self.value += 1
        self._save_counter()
        return self.value

    def decrement(self) -> int:
        self.value -= 1
        self._save_counter()
        return self.value

    def reset_counter(self) -> int:
        self.value = 0
        self._save_counter()
        return self.value

    def set_counter(self, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TallyValidationError(f"Counter value must be an integer, got {value!r}")
        self.value = value
        self._save_counter()
        return self.value

    # --- NOTES ---

    def add_note(self, text: str) -> Note:
        cleaned = (text or "").strip()
        if not cleaned:
            raise TallyValidationError("Note text cannot be empty")

        note = Note(id=self._next_note_id, text=cleaned, created_at=datetime.now().isoformat())
        self._next_note_id += 1
        self.notes.insert(0, note)
        self._save_notes()
        logger.info(f"Added note {note.id} ({len(self.notes)} total)")
        return note

    def remove_note(self, note_id: int) -> Note:
        """
        Raises:
            KeyError: If no note has this id
        """
        for position, note in enumerate(self.notes):
            if note.id == note_id:
                del self.notes[position]
                self._save_notes()
                return note
        raise KeyError(note_id)

    def clear_notes(self):
        self.notes = []
        self._save_notes()

    # --- PERSISTENCE ---

    def _load_counter(self) -> int:
        blob = self.store.load(COUNTER_KEY, {"value": 0})
        value = blob.get("value") if isinstance(blob, dict) else None
        if isinstance(value, bool) or not isinstance(value, int):
            logger.warning(f"Malformed counter state {blob!r}, falling back to 0")
            return 0
        return value

    def _load_notes(self) -> List[Note]:
        blob = self.store.load(NOTES_KEY, {"notes": []})
        raw_notes = blob.get("notes") if isinstance(blob, dict) else None
        if not isinstance(raw_notes, list):
            logger.warning(f"Malformed notes state {blob!r}, falling back to []")
            return []

        notes = []
        for raw in raw_notes:
            try:
                notes.append(Note(
                    id=int(raw["id"]),
                    text=str(raw["text"]),
                    created_at=str(raw.get("created_at", "")),
                ))
            except (TypeError, KeyError, ValueError, AttributeError):
                logger.warning(f"Malformed notes state {blob!r}, falling back to []")
                return []
        return notes

    def _load_next_note_id(self) -> int:
        highest = max((note.id for note in self.notes), default=0)
        blob = self.store.load(NOTES_KEY, {})
        stored = blob.get("next_id") if isinstance(blob, dict) else None
        if isinstance(stored, bool) or not isinstance(stored, int):
            stored = 0
        return max(stored, highest + 1)

    def _save_counter(self):
        self._persist(COUNTER_KEY, {"value": self.value})

    def _save_notes(self):
        self._persist(NOTES_KEY, {
            "notes": [asdict(note) for note in self.notes],
            "next_id": self._next_note_id,
        })

    def _persist(self, key: str, value: Any):
        try:
            self.store.save(key, value)
        except OSError as e:
            logger.warning(f"Could not persist {key}: {e}")
