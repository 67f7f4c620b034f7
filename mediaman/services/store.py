"""Key-value store abstraction used to persist media collections.

Implementations:
- MemoryStore: process-local dict, handy for tests and scratch sessions
- SqlAlchemyStore (mediaman.db): persistent table-backed store
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from mediaman.services.errors import StoreError
from mediaman.services.models import MediaKind

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """One logical store per media kind, keyed by collection identifier."""

    def __init__(self, kind: MediaKind) -> None:
        self.kind = kind

    @property
    def namespace(self) -> str:
        return self.kind.type_name

    @abstractmethod
    def get_item(self, key: str) -> dict[str, Any] | None:
        """Return the value stored under `key`, or None when absent."""

    @abstractmethod
    def set_item(self, key: str, value: dict[str, Any]) -> None:
        """Store `value` under `key`, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete `key`; absent keys are ignored."""

    @abstractmethod
    def keys(self) -> list[str]:
        """Return every stored key."""


class MemoryStore(KeyValueStore):
    """Dict-backed store keeping values as JSON text, like a browser store."""

    def __init__(self, kind: MediaKind) -> None:
        super().__init__(kind)
        self._data: dict[str, str] = {}

    def get_item(self, key: str) -> dict[str, Any] | None:
        raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def set_item(self, key: str, value: dict[str, Any]) -> None:
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise StoreError(f"Value for '{key}' is not JSON serializable") from exc
        logger.debug("[%s] stored %s", self.namespace, key)

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)
