"""Repository tests against a real (in-memory SQLite) session."""

import pytest

from bookstore.errors import ConflictError, NotFoundError
from bookstore.schemas import BookRecord
from bookstore.services import books


@pytest.fixture
def record(book_payload) -> BookRecord:
    return BookRecord.from_mapping(book_payload)


def test_create_then_get(db, record):
    created = books.create_book(db, record)

    assert created == record
    assert books.get_book(db, record.isbn) == record


def test_list_books(db, record):
    assert books.list_books(db) == []

    books.create_book(db, record)
    other = BookRecord.from_mapping({**record.to_dict(), "isbn": "111111111"})
    books.create_book(db, other)

    assert [b.isbn for b in books.list_books(db)] == ["111111111", "123456789"]


def test_get_missing_raises_not_found(db):
    with pytest.raises(NotFoundError) as exc:
        books.get_book(db, "nope")

    assert exc.value.status == 404
    assert exc.value.messages == ["There is no book with an isbn of 'nope'"]


def test_duplicate_isbn_raises_conflict(db, record):
    books.create_book(db, record)

    with pytest.raises(ConflictError) as exc:
        books.create_book(db, record)

    assert exc.value.status == 409
    # session is still usable after the rollback
    assert len(books.list_books(db)) == 1


def test_replace_updates_all_fields(db, record):
    books.create_book(db, record)
    new = BookRecord.from_mapping({**record.to_dict(), "pages": 23000, "title": "Digging Holes"})

    replaced = books.replace_book(db, record.isbn, new)

    assert replaced.pages == 23000
    assert books.get_book(db, record.isbn).title == "Digging Holes"


def test_replace_missing_raises_not_found(db, record):
    with pytest.raises(NotFoundError):
        books.replace_book(db, record.isbn, record)


def test_delete_removes_row_and_tolerates_missing(db, record):
    books.create_book(db, record)

    books.delete_book(db, record.isbn)
    books.delete_book(db, record.isbn)

    with pytest.raises(NotFoundError):
        books.get_book(db, record.isbn)
