from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from bookstore.db import get_db
from bookstore.errors import ValidationError
from bookstore.schemas import BookRecord
from bookstore.services import books as repo
from bookstore.services.validation import normalize_book, validate_book

router = APIRouter(prefix="/books", tags=["books"])


def _validated(payload: Any, isbn: str | None = None) -> BookRecord:
    errors = validate_book(payload, isbn=isbn)
    if errors:
        raise ValidationError(errors)
    return BookRecord.from_mapping(normalize_book(payload))


@router.get("")
def list_books(db: Session = Depends(get_db)):
    return {"books": [b.to_dict() for b in repo.list_books(db)]}


@router.get("/{isbn}")
def get_book(isbn: str, db: Session = Depends(get_db)):
    return {"book": repo.get_book(db, isbn).to_dict()}


@router.post("")
def create_book(payload: Any = Body(...), db: Session = Depends(get_db)):
    """
    Create a book from a full eight-field payload.
    """
    book = _validated(payload)
    return {"book": repo.create_book(db, book).to_dict()}


@router.put("/{isbn}")
def replace_book(isbn: str, payload: Any = Body(...), db: Session = Depends(get_db)):
    """
    Replace every field of the book at `isbn`; the isbn itself never changes.
    """
    book = _validated(payload, isbn=isbn)
    return {"book": repo.replace_book(db, isbn, book).to_dict()}


@router.delete("/{isbn}")
def delete_book(isbn: str, db: Session = Depends(get_db)):
    repo.delete_book(db, isbn)
    return {"message": "Book deleted"}
