"""
Best-time record storage.

The engine only needs get/set by key; stores hold whole seconds under
``record_<level_id>`` keys.
"""
import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union


logger = logging.getLogger(__name__)


def record_key(level_id: str) -> str:
    """Key under which a level's best time is stored."""
    return f"record_{level_id}"


def _as_seconds(key: str, value: object) -> Optional[int]:
    """Coerce a stored value to seconds, dropping anything unusable."""
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        logger.warning("Ignoring malformed record %s=%r", key, value)
        return None
    try:
        seconds = int(value)
    except ValueError:
        logger.warning("Ignoring malformed record %s=%r", key, value)
        return None
    if seconds < 0:
        logger.warning("Ignoring negative record %s=%r", key, value)
        return None
    return seconds


# ============================================================================
# Store Interface
# ============================================================================

class RecordStore(ABC):
    """Key-value store for best times."""

    @abstractmethod
    def get(self, key: str) -> Optional[int]:
        """Return the stored seconds, or None if there is no record."""
        pass

    @abstractmethod
    def set(self, key: str, seconds: int) -> None:
        """Store ``seconds`` under ``key``."""
        pass


class MemoryRecordStore(RecordStore):
    """Records kept in a dict for the life of the process."""

    def __init__(self, initial: Optional[Dict[str, int]] = None) -> None:
        self._data: Dict[str, int] = dict(initial or {})

    def get(self, key: str) -> Optional[int]:
        if key not in self._data:
            return None
        return _as_seconds(key, self._data[key])

    def set(self, key: str, seconds: int) -> None:
        self._data[key] = int(seconds)

    def as_dict(self) -> Dict[str, int]:
        """Copy of every stored record."""
        return dict(self._data)


# ============================================================================
# JSON File Store
# ============================================================================

class JsonRecordStore(RecordStore):
    """
    Records kept in a single JSON object on disk.

    The file is read on every ``get`` so several engines can share it,
    and replaced atomically on every ``set``.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _load(self) -> Dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Could not read records from %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Records file %s does not hold an object", self.path)
            return {}
        return data

    def get(self, key: str) -> Optional[int]:
        data = self._load()
        if key not in data:
            return None
        return _as_seconds(key, data[key])

    def set(self, key: str, seconds: int) -> None:
        data = self._load()
        data[key] = int(seconds)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)
        os.replace(tmp_path, self.path)
