"""High level workflows over the collections of a single media kind."""

from __future__ import annotations

import logging

from mediaman.services import media
from mediaman.services.models import MediaCollection, MediaItem, MediaKind
from mediaman.services.store import KeyValueStore

logger = logging.getLogger(__name__)


class MediaManager:
    """Create, reload and edit persisted collections held in one store.

    Every edit loads the current collection, derives a new one and saves
    it back, so the stored record is always the latest whole collection.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    @property
    def kind(self) -> MediaKind:
        return self.store.kind

    def create_collection(self, name: str) -> MediaCollection:
        collection = media.create_collection(name, self.kind)
        media.save_collection(self.store, collection)
        return collection

    def get_collection(self, identifier: str) -> MediaCollection:
        return media.load_collection(self.store, identifier)

    def reload_collections(self) -> list[MediaCollection]:
        identifiers = media.list_collection_ids(self.store)
        logger.debug("Reloading %d %s collection(s)", len(identifiers), self.kind.value)
        return [media.load_collection(self.store, identifier) for identifier in identifiers]

    def remove_collection(self, identifier: str) -> None:
        media.delete_collection(self.store, identifier)

    def add_item(self, collection_id: str, item: MediaItem | None) -> MediaCollection:
        current = media.load_collection(self.store, collection_id)
        updated = media.add_item(current, item)
        if updated is not current:
            media.save_collection(self.store, updated)
        return updated

    def remove_item(self, collection_id: str, item_id: str) -> MediaCollection:
        current = media.load_collection(self.store, collection_id)
        updated = media.remove_item(current, item_id)
        if updated is not current:
            media.save_collection(self.store, updated)
        return updated
