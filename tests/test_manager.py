import pytest

from mediaman.services.errors import CollectionNotFound, InvalidArgument
from mediaman.services.manager import MediaManager
from mediaman.services.models import Book, Genre, MediaKind
from mediaman.services.store import MemoryStore


@pytest.fixture
def manager():
    return MediaManager(MemoryStore(MediaKind.BOOK))


@pytest.fixture
def dune():
    return Book(name="Dune", author="Herbert", page_count=412, genre=Genre.FICTION)


def test_create_collection_is_persisted(manager):
    created = manager.create_collection("  Favorites ")
    assert created.name == "Favorites"
    assert manager.get_collection(created.identifier) == created


def test_reload_collections_returns_every_collection(manager):
    first = manager.create_collection("First")
    second = manager.create_collection("Second")
    reloaded = manager.reload_collections()
    assert {c.identifier for c in reloaded} == {first.identifier, second.identifier}


def test_add_and_remove_item_are_saved(manager, dune):
    collection = manager.create_collection("Favorites")

    updated = manager.add_item(collection.identifier, dune)
    assert manager.get_collection(collection.identifier).items == (dune,)
    assert updated.items == (dune,)

    emptied = manager.remove_item(collection.identifier, dune.identifier)
    assert emptied.items == ()
    assert manager.get_collection(collection.identifier).items == ()


def test_add_none_leaves_store_untouched(manager, monkeypatch):
    collection = manager.create_collection("Favorites")
    calls = []
    monkeypatch.setattr(manager.store, "set_item", lambda *args: calls.append(args))

    assert manager.add_item(collection.identifier, None) == collection
    assert calls == []


def test_remove_collection(manager):
    collection = manager.create_collection("Gone")
    manager.remove_collection(collection.identifier)
    with pytest.raises(CollectionNotFound):
        manager.get_collection(collection.identifier)
    assert manager.reload_collections() == []


def test_create_collection_requires_name(manager):
    with pytest.raises(InvalidArgument):
        manager.create_collection("")


def test_add_to_missing_collection(manager, dune):
    with pytest.raises(CollectionNotFound):
        manager.add_item("missing", dune)
