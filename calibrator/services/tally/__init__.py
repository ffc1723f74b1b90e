"""
Tally service - counter and notes persisted to a JSON key-value store.
"""

from .board import Note, TallyBoard, TallyValidationError
from .store import JsonStore

__all__ = ["JsonStore", "Note", "TallyBoard", "TallyValidationError"]
