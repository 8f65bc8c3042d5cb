"""Persistent store on the local filesystem.

Uses :mod:`diskcache` so that cached API responses and the API key survive
between command-line invocations.  Entries are written without an expiry
time; nothing is evicted.

See Also:
    :func:`gw2api.config.get_cache_dir` -- default location used by the CLI.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import diskcache


class DiskStore:
    """Synchronous store backed by a :class:`diskcache.Cache` directory.

    Args:
        directory: Directory holding the cache database.  Created if needed.

    Example::

        store = DiskStore(get_cache_dir() / "store")
        store.set("apiKey", "ABCD-...")
        assert store.get("apiKey") == "ABCD-..."
        store.close()
    """

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)
        # No eviction: entries stay until overwritten.
        self._cache = diskcache.Cache(
            str(self._directory), eviction_policy="none", size_limit=2**62
        )

    def get(self, key: str) -> Optional[str]:
        return self._cache.get(key)

    def set(self, key: str, value: str) -> None:
        self._cache.set(key, value)

    def stats(self) -> dict[str, Any]:
        """Return the entry count and directory of the store."""
        return {"size": len(self._cache), "directory": str(self._directory)}

    def close(self) -> None:
        """Close the underlying :class:`diskcache.Cache` and release resources."""
        self._cache.close()

    def __enter__(self) -> DiskStore:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
