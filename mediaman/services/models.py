"""Shared dataclasses for the media domain."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union


class Genre(str, Enum):
    HORROR = "Horror"
    FANTASTIC = "Fantastic"
    THRILLER = "Thriller"
    ROMANCE = "Romance"
    FICTION = "Fiction"


class MediaKind(str, Enum):
    """Discriminant selecting the concrete item payload."""

    BOOK = "book"
    MOVIE = "movie"

    @property
    def type_name(self) -> str:
        """Name used to namespace stored collections of this kind."""
        return self.value.capitalize()


def new_identifier() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True, slots=True, kw_only=True)
class _MediaFields:
    name: str
    genre: Genre
    description: str = ""
    picture_location: str = ""
    identifier: str = field(default_factory=new_identifier)


@dataclass(frozen=True, slots=True, kw_only=True)
class Book(_MediaFields):
    """A book entry; `page_count` is always an int."""

    kind: ClassVar[MediaKind] = MediaKind.BOOK

    author: str
    page_count: int


@dataclass(frozen=True, slots=True, kw_only=True)
class Movie(_MediaFields):
    kind: ClassVar[MediaKind] = MediaKind.MOVIE

    director: str
    duration: str


MediaItem = Union[Book, Movie]

ITEM_TYPES: dict[MediaKind, type] = {
    MediaKind.BOOK: Book,
    MediaKind.MOVIE: Movie,
}


@dataclass(frozen=True, slots=True)
class MediaCollection:
    """Ordered group of items sharing one declared kind.

    Collections are never mutated: every change produces a new instance
    (see `mediaman.services.media`), so a reference handed out earlier
    keeps seeing the same items.
    """

    name: str
    kind: MediaKind
    items: tuple[MediaItem, ...] = ()
    identifier: str = field(default_factory=new_identifier)

    def __len__(self) -> int:
        return len(self.items)

    def item_ids(self) -> list[str]:
        return [item.identifier for item in self.items]
