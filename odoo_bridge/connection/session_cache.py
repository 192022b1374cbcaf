"""Per-database uid cache.

Tokens live for the lifetime of the process: no eviction, no expiry.
"""

from __future__ import annotations


class SessionCache:
    """Maps a database name to the uid obtained by authenticating against it."""

    def __init__(self) -> None:
        self._uids: dict[str, int] = {}

    def get(self, database: str) -> int | None:
        return self._uids.get(database)

    def put(self, database: str, uid: int) -> None:
        self._uids[database] = uid

    def databases(self) -> list[str]:
        return list(self._uids)

    def __contains__(self, database: object) -> bool:
        return database in self._uids

    def __len__(self) -> int:
        return len(self._uids)
