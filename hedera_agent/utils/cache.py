"""
Session Result Cache Module

Holds one fetched result collection per session key so that paginated
tools can serve many pages from a single upstream snapshot.

Entries never expire. An entry is replaced only when the caller stores a
fresh collection (for example after an explicit refresh) or clears it.
"""

import threading
from datetime import datetime
from typing import Any, Dict, Iterable, Optional, Tuple


DEFAULT_SESSION_KEY = "default"


class CacheEntry:
    """
    A stored collection together with the time it was written.

    Attributes:
        items: Immutable tuple of cached records
        stored_at: Timestamp of the write
    """

    def __init__(self, items: Iterable[Any]):
        self.items: Tuple[Any, ...] = tuple(items)
        self.stored_at = datetime.now()


class SessionResultCache:
    """
    Thread-safe per-session store for fetched result collections.

    `get` is a pure lookup and never triggers a fetch; the calling tool
    decides whether a miss or a refresh request warrants going upstream.
    Writes replace the whole entry for a key (last writer wins).
    """

    def __init__(self):
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Tuple[Any, ...]]:
        """
        Get the cached collection for a session.

        Args:
            key: Session key

        Returns:
            Tuple of records, or None when nothing is cached for the key
        """
        with self._lock:
            entry = self._entries.get(key)
            return entry.items if entry is not None else None

    def set(self, key: str, collection: Iterable[Any]) -> None:
        """
        Store a collection for a session, replacing any previous one.

        Args:
            key: Session key
            collection: Records to cache (copied into a tuple)
        """
        entry = CacheEntry(collection)
        with self._lock:
            self._entries[key] = entry

    def clear(self, key: str) -> bool:
        """
        Drop the cached collection for a session.

        Args:
            key: Session key

        Returns:
            True if an entry was removed, False if none existed
        """
        with self._lock:
            return self._entries.pop(key, None) is not None

    def get_stats(self) -> Dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dictionary with per-session item counts and write times
        """
        with self._lock:
            return {
                'sessions': len(self._entries),
                'entries': {
                    key: {
                        'item_count': len(entry.items),
                        'stored_at': entry.stored_at.isoformat(),
                    }
                    for key, entry in self._entries.items()
                },
            }


def session_key_for(account_id: Optional[str]) -> str:
    """Session key for an operator account, falling back to a fixed sentinel"""
    return account_id or DEFAULT_SESSION_KEY
