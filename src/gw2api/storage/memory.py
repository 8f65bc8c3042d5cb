"""In-process dictionary store."""

from __future__ import annotations

from typing import Optional


class MemoryStore:
    """Synchronous store backed by a ``dict``.

    Each instance owns its own dictionary, so separate clients built with
    separate stores never see each other's entries.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)
