import json
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)


class JsonStore:
    """
    Key -> JSON blob store backed by a single file.

    Writes are synchronous and whole-document; there is no transaction
    spanning several keys.
    """

    def __init__(self, path):
        self.path = Path(path)

    def load(self, key: str, fallback: Any) -> Any:
        """Returns the value stored under key, or fallback if missing or unreadable."""
        document = self._read()
        if key not in document:
            return fallback
        return document[key]

    def save(self, key: str, value: Any):
        """
        Raises:
            OSError: If the file cannot be written
        """
        document = self._read()
        document[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(document, indent=2), encoding="utf-8")

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Unreadable store {self.path}: {e}")
            return {}
        if not isinstance(document, dict):
            logger.warning(f"Store {self.path} is not a JSON object, ignoring it")
            return {}
        return document
