"""Session store contract used for CSRF tokens."""

from __future__ import annotations

from typing import Protocol


class SessionStore(Protocol):
    """Key-value store scoped to one client session."""

    def get(self, key: str) -> str | None:
        """Return the stored value or None."""

    def set(self, key: str, value: str) -> None:
        """Store a value under key."""


class InMemorySessionStore:
    """Dictionary-backed session store."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
