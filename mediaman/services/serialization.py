"""Projection of domain objects to and from their persisted records.

Each entity has an explicit expose-list naming the attributes that leave
the process. Anything not on the list (such as a collection's `kind`,
which the store namespace already implies) is dropped on the way out and
ignored on the way in. Wire keys are camelCase.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from mediaman.services.errors import CorruptRecord, InvalidArgument
from mediaman.services.models import (
    Book,
    Genre,
    MediaCollection,
    MediaItem,
    MediaKind,
    Movie,
    new_identifier,
)

logger = logging.getLogger(__name__)

MEDIA_FIELDS = ("identifier", "name", "description", "picture_location", "genre")
BOOK_FIELDS = MEDIA_FIELDS + ("author", "page_count")
MOVIE_FIELDS = MEDIA_FIELDS + ("director", "duration")
COLLECTION_FIELDS = ("identifier", "name", "collection")


class _Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class MediaRecord(_Record):
    # items saved without an identifier get a fresh one on load
    identifier: str = Field(default_factory=new_identifier)
    name: str
    description: str = ""
    picture_location: str = ""
    genre: Genre


class BookRecord(MediaRecord):
    author: str
    page_count: int


class MovieRecord(MediaRecord):
    director: str
    duration: str


class CollectionRecord(_Record):
    identifier: str
    name: str
    collection: list[dict[str, Any]] = []


_ITEM_SCHEMAS: dict[MediaKind, tuple[type[MediaRecord], tuple[str, ...], type]] = {
    MediaKind.BOOK: (BookRecord, BOOK_FIELDS, Book),
    MediaKind.MOVIE: (MovieRecord, MOVIE_FIELDS, Movie),
}


def item_to_record(item: MediaItem) -> dict[str, Any]:
    """Project an item onto its expose-list and return the wire dict."""

    schema, fields, _ = _ITEM_SCHEMAS[item.kind]
    exposed = {name: getattr(item, name) for name in fields}
    try:
        record = schema(**exposed)
    except ValidationError as exc:
        raise InvalidArgument(f"Invalid {item.kind.type_name} item: {exc}") from exc
    return record.model_dump(mode="json", by_alias=True)


def record_to_item(kind: MediaKind, payload: dict[str, Any]) -> MediaItem:
    """Rebuild a typed item of `kind` from its wire dict."""

    schema, fields, item_type = _ITEM_SCHEMAS[kind]
    try:
        record = schema.model_validate(payload)
    except ValidationError as exc:
        raise CorruptRecord(f"Invalid {kind.type_name} record: {exc}") from exc
    return item_type(**{name: getattr(record, name) for name in fields})


def collection_to_record(collection: MediaCollection) -> dict[str, Any]:
    record = CollectionRecord(
        identifier=collection.identifier,
        name=collection.name,
        collection=[item_to_record(item) for item in collection.items],
    )
    return record.model_dump(mode="json", by_alias=True, include=set(COLLECTION_FIELDS))


def record_to_collection(kind: MediaKind, payload: Any) -> MediaCollection:
    """Rebuild a collection whose items are all of the declared `kind`."""

    try:
        record = CollectionRecord.model_validate(payload)
    except ValidationError as exc:
        raise CorruptRecord(f"Invalid collection record: {exc}") from exc
    logger.debug(
        "Deserializing collection %s with %d %s item(s)",
        record.identifier,
        len(record.collection),
        kind.value,
    )
    return MediaCollection(
        identifier=record.identifier,
        name=record.name,
        kind=kind,
        items=tuple(record_to_item(kind, entry) for entry in record.collection),
    )
