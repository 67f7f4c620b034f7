"""Copy-on-write collection operations and their persistence helpers."""

from __future__ import annotations

import dataclasses
import logging
from typing import Iterable

from mediaman.services.errors import CollectionNotFound, InvalidArgument
from mediaman.services.models import MediaCollection, MediaItem, MediaKind
from mediaman.services.serialization import collection_to_record, record_to_collection
from mediaman.services.store import KeyValueStore

logger = logging.getLogger(__name__)


def _is_blank(value: str | None) -> bool:
    return not value or not value.strip()


def create_collection(
    name: str,
    kind: MediaKind,
    items: Iterable[MediaItem] = (),
    *,
    identifier: str | None = None,
) -> MediaCollection:
    """Build a new collection, empty or seeded with `items` of one kind."""

    if _is_blank(name):
        raise InvalidArgument("The collection name must be provided")
    seeded = tuple(items)
    for item in seeded:
        _check_kind(kind, item)
    if identifier is not None and _is_blank(identifier):
        raise InvalidArgument("The collection identifier must not be blank")
    kwargs = {"identifier": identifier} if identifier else {}
    return MediaCollection(name=name.strip(), kind=kind, items=seeded, **kwargs)


def add_item(collection: MediaCollection, item: MediaItem | None) -> MediaCollection:
    """Return a copy of `collection` with `item` appended.

    A missing item leaves the collection untouched.
    """

    if item is None:
        logger.warning("Ignoring empty item for collection %s", collection.identifier)
        return collection
    _check_kind(collection.kind, item)
    return dataclasses.replace(collection, items=collection.items + (item,))


def remove_item(collection: MediaCollection, identifier: str | None) -> MediaCollection:
    """Return a copy of `collection` without the items matching `identifier`."""

    if _is_blank(identifier):
        logger.warning("Ignoring blank item identifier for collection %s", collection.identifier)
        return collection
    kept = tuple(item for item in collection.items if item.identifier != identifier)
    if len(kept) == len(collection.items):
        return collection
    return dataclasses.replace(collection, items=kept)


def load_collection(store: KeyValueStore, identifier: str) -> MediaCollection:
    """Read a collection and rebuild its items as the store's media kind."""

    if _is_blank(identifier):
        raise InvalidArgument("The collection identifier must be provided")
    payload = store.get_item(identifier)
    if payload is None:
        raise CollectionNotFound(identifier)
    logger.debug("Loaded %s payload: %s", store.namespace, payload)
    return record_to_collection(store.kind, payload)


def save_collection(store: KeyValueStore, collection: MediaCollection | None) -> None:
    """Write `collection` under its identifier using the expose-list projection."""

    if collection is None:
        raise InvalidArgument("The collection to save must be provided")
    if collection.kind != store.kind:
        raise InvalidArgument(
            f"Cannot save a {collection.kind.value} collection into the {store.namespace} store"
        )
    store.set_item(collection.identifier, collection_to_record(collection))
    logger.info(
        "Saved %s collection %s (%d item(s))",
        store.namespace,
        collection.identifier,
        len(collection),
    )


def list_collection_ids(store: KeyValueStore) -> list[str]:
    """Return the identifiers of every stored collection, possibly none."""

    return list(store.keys())


def delete_collection(store: KeyValueStore, identifier: str) -> None:
    """Remove a stored collection; deleting an absent one is not an error."""

    if _is_blank(identifier):
        raise InvalidArgument("The collection identifier must be provided")
    store.remove_item(identifier)
    logger.info("Deleted %s collection %s", store.namespace, identifier)


def _check_kind(kind: MediaKind, item: MediaItem) -> None:
    item_kind = getattr(item, "kind", None)
    if item_kind != kind:
        raise InvalidArgument(
            f"Expected a {kind.value} item, got {type(item).__name__}"
        )
