"""Exceptions raised by the media domain and its stores."""

from __future__ import annotations


class MediaError(Exception):
    """Base exception for media collection failures."""


class InvalidArgument(MediaError, ValueError):
    """Raised when a required input is missing, blank, or of the wrong kind."""


class CollectionNotFound(MediaError, KeyError):
    """Raised when no collection is stored under the requested identifier."""

    def __init__(self, identifier: str) -> None:
        super().__init__(identifier)
        self.identifier = identifier

    def __str__(self) -> str:
        return f"No collection stored under '{self.identifier}'"


class StoreError(MediaError):
    """Raised when the underlying key-value store fails."""


class CorruptRecord(StoreError):
    """Raised when a stored value does not match the persisted record shape."""
