from __future__ import annotations
import logging
from typing import List

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookstore.errors import ConflictError, NotFoundError
from bookstore.schemas import BookRecord

log = logging.getLogger(__name__)

_COLUMNS = "isbn, amazon_url, author, language, pages, publisher, title, year"


def list_books(db: Session) -> List[BookRecord]:
    rows = db.execute(text(f"SELECT {_COLUMNS} FROM books ORDER BY isbn")).mappings().all()
    return [BookRecord.from_mapping(r) for r in rows]


def get_book(db: Session, isbn: str) -> BookRecord:
    row = db.execute(
        text(f"SELECT {_COLUMNS} FROM books WHERE isbn = :isbn"),
        {"isbn": isbn},
    ).mappings().first()
    if row is None:
        raise NotFoundError(f"There is no book with an isbn of '{isbn}'")
    return BookRecord.from_mapping(row)


def create_book(db: Session, book: BookRecord) -> BookRecord:
    """
    INSERT a new row. The primary key rejects a duplicate isbn, which is
    reported as a ConflictError.
    """
    stmt = text(f"""
        INSERT INTO books ({_COLUMNS})
        VALUES (:isbn, :amazon_url, :author, :language, :pages, :publisher, :title, :year)
        RETURNING {_COLUMNS}
    """)
    try:
        row = db.execute(stmt, book.to_dict()).mappings().one()
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"A book with an isbn of '{book.isbn}' already exists")
    log.info("Created book %s", book.isbn)
    return BookRecord.from_mapping(row)


def replace_book(db: Session, isbn: str, book: BookRecord) -> BookRecord:
    """
    Overwrite every column except isbn for the row keyed by `isbn`.
    """
    stmt = text(f"""
        UPDATE books
        SET amazon_url = :amazon_url,
            author = :author,
            language = :language,
            pages = :pages,
            publisher = :publisher,
            title = :title,
            year = :year
        WHERE isbn = :isbn
        RETURNING {_COLUMNS}
    """)
    params = {**book.to_dict(), "isbn": isbn}
    row = db.execute(stmt, params).mappings().first()
    if row is None:
        db.rollback()
        raise NotFoundError(f"There is no book with an isbn of '{isbn}'")
    db.commit()
    log.info("Replaced book %s", isbn)
    return BookRecord.from_mapping(row)


def delete_book(db: Session, isbn: str) -> None:
    # deleting an unknown isbn is a no-op
    result = db.execute(text("DELETE FROM books WHERE isbn = :isbn"), {"isbn": isbn})
    db.commit()
    log.info("Deleted book %s (%d row(s))", isbn, result.rowcount)
