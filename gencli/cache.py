"""Persistent cache of generated commands."""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class CommandCache:
    """JSON-backed mapping from cache keys to generated commands.

    The whole file is read at construction and the whole map is written
    after every store. Any I/O failure is logged at debug level and
    otherwise ignored: losing a cache entry never fails a generation.
    """

    def __init__(self, path: Optional[Path] = None, enabled: bool = True):
        self.path = Path(path) if path is not None else None
        self.enabled = enabled and self.path is not None
        self._entries: Dict[str, str] = {}
        if self.enabled:
            self._entries = self._load()

    def _load(self) -> Dict[str, str]:
        try:
            if self.path.exists():
                with open(self.path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return {str(k): str(v) for k, v in data.items()}
                logger.debug("Ignoring cache file %s: not a JSON object", self.path)
        except (OSError, ValueError) as e:
            logger.debug("Could not load cache file %s: %s", self.path, e)
        return {}

    def get(self, key: str) -> Optional[str]:
        return self._entries.get(key)

    def store(self, key: str, command: str) -> None:
        """Remember ``command`` under ``key`` and persist the cache."""
        self._entries[key] = command
        self.save()

    def save(self) -> bool:
        if not self.enabled:
            return False
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self._entries, f, indent=2)
            return True
        except OSError as e:
            logger.debug("Could not save cache file %s: %s", self.path, e)
            return False

    def clear(self, prefix: Optional[str] = None) -> int:
        """Drop entries whose key starts with ``prefix`` (all when None).

        Returns the number of removed entries.
        """
        if prefix is None:
            removed = len(self._entries)
            self._entries = {}
        else:
            keys = [k for k in self._entries if k.startswith(prefix)]
            for key in keys:
                del self._entries[key]
            removed = len(keys)
        self.save()
        return removed

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
