import pytest

from mediaman.services.errors import CorruptRecord, InvalidArgument, StoreError
from mediaman.services.models import Book, Genre, MediaCollection, MediaKind, Movie
from mediaman.services.serialization import (
    collection_to_record,
    item_to_record,
    record_to_collection,
    record_to_item,
)


def test_book_record_uses_camel_case_expose_list():
    book = Book(
        identifier="b1",
        name="Dune",
        description="Spice",
        picture_location="dune.png",
        genre=Genre.FICTION,
        author="Herbert",
        page_count=412,
    )
    assert item_to_record(book) == {
        "identifier": "b1",
        "name": "Dune",
        "description": "Spice",
        "pictureLocation": "dune.png",
        "genre": "Fiction",
        "author": "Herbert",
        "pageCount": 412,
    }


def test_movie_record_fields():
    movie = Movie(identifier="m1", name="Alien", director="Scott", duration="1h57", genre=Genre.HORROR)
    record = item_to_record(movie)
    assert record["director"] == "Scott"
    assert record["duration"] == "1h57"
    assert "pageCount" not in record


def test_collection_record_strips_internal_kind():
    collection = MediaCollection(identifier="c1", name="Favorites", kind=MediaKind.BOOK)
    record = collection_to_record(collection)
    assert record == {"identifier": "c1", "name": "Favorites", "collection": []}


def test_record_to_item_coerces_numeric_strings():
    book = record_to_item(
        MediaKind.BOOK,
        {"identifier": "b1", "name": "Dune", "genre": "Fiction", "author": "Herbert", "pageCount": "412"},
    )
    assert book.page_count == 412
    assert book.genre is Genre.FICTION
    assert book.description == ""


def test_record_to_item_ignores_unknown_fields():
    book = record_to_item(
        MediaKind.BOOK,
        {
            "identifier": "b1",
            "name": "Dune",
            "genre": "Fiction",
            "author": "Herbert",
            "pageCount": 412,
            "_internal": "secret",
        },
    )
    assert not hasattr(book, "_internal")


def test_record_with_unknown_genre_is_corrupt():
    with pytest.raises(CorruptRecord):
        record_to_item(
            MediaKind.MOVIE,
            {"identifier": "m1", "name": "X", "genre": "Comedy", "director": "Y", "duration": "1h"},
        )


def test_collection_items_follow_declared_kind():
    payload = {
        "identifier": "c9",
        "name": "Films",
        "collection": [
            {"identifier": "m1", "name": "Alien", "genre": "Horror", "director": "Scott", "duration": "1h57"},
        ],
    }
    collection = record_to_collection(MediaKind.MOVIE, payload)
    assert collection.kind is MediaKind.MOVIE
    assert isinstance(collection.items[0], Movie)


def test_malformed_collection_is_a_store_error():
    with pytest.raises(StoreError):
        record_to_collection(MediaKind.BOOK, {"name": "no identifier"})


def test_stored_item_without_identifier_gets_a_fresh_one():
    payload = {
        "identifier": "c1",
        "name": "Favorites",
        "collection": [
            {"name": "Dune", "genre": "Fiction", "author": "Herbert", "pageCount": 412},
            {"name": "Emma", "genre": "Romance", "author": "Austen", "pageCount": 320},
        ],
    }

    collection = record_to_collection(MediaKind.BOOK, payload)

    first, second = collection.items
    assert first.name == "Dune"
    assert len(first.identifier) == 36
    assert first.identifier != second.identifier


def test_item_failing_validation_is_an_invalid_argument():
    book = Book(name="Dune", author="Herbert", page_count="many", genre=Genre.FICTION)
    with pytest.raises(InvalidArgument):
        item_to_record(book)
