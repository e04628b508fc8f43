from __future__ import annotations

from typing import MutableMapping, Optional

from flask import session

from .repository import PreferenceStore

_PREFIX = "pref:"


class SessionPreferenceStore(PreferenceStore):
    """Preferences kept in the signed Flask session cookie (permanent session)."""

    def get(self, key: str) -> Optional[str]:
        value = session.get(_PREFIX + key)
        return str(value) if value is not None else None

    def set(self, key: str, value: str) -> None:
        session.permanent = True
        session[_PREFIX + key] = value


class InMemoryPreferenceStore(PreferenceStore):
    """Process-local preferences, used when no request context exists."""

    def __init__(self, values: Optional[MutableMapping[str, str]] = None):
        self._values: MutableMapping[str, str] = values if values is not None else {}

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
