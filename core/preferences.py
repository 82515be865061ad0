"""
Preference Store

Small persistent key-value store backed by a JSON file. The flashlight only
persists the selected theme color index, but the store is generic.

Reads never fail: a missing, unreadable or corrupt file yields the defaults.
Writes are atomic (temp file, then rename) so a crash never leaves a
half-written file behind.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from config.settings import PREFERENCES_FILE


class PreferenceStore:
    """
    JSON file key-value store.

    Usage:
        prefs = PreferenceStore(Path("prefs.json"))
        prefs.set_int("selectedColorIndex", 3)
        prefs.get_int("selectedColorIndex", 0)  # 3
    """

    def __init__(self, path: Optional[Path] = None):
        self.logger = logging.getLogger(__name__)
        self.path = Path(path) if path is not None else PREFERENCES_FILE
        self._lock = threading.Lock()
        self._values: Dict[str, Any] = self._load()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            self.logger.warning(f"Ignoring unreadable preferences {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            self.logger.warning(f"Ignoring malformed preferences {self.path}")
            return {}

        return data

    def get_int(self, key: str, default: int = 0) -> int:
        """
        Get an integer preference.

        Returns:
            Stored value, or default if missing or not an integer
        """
        value = self._values.get(key, default)
        if isinstance(value, bool) or not isinstance(value, int):
            return default
        return value

    def set_int(self, key: str, value: int) -> bool:
        """
        Store an integer preference and persist it.

        Returns:
            True if written to disk, False if the write failed
            (the value is still kept in memory)
        """
        with self._lock:
            self._values[key] = int(value)
            return self._save()

    def _save(self) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # Atomic write (write to temp file, then rename)
            tmp_file = self.path.with_suffix(".tmp")
            tmp_file.write_text(json.dumps(self._values, indent=2), encoding="utf-8")
            tmp_file.replace(self.path)
            return True
        except OSError as e:
            self.logger.error(f"Failed to save preferences to {self.path}: {e}")
            return False
