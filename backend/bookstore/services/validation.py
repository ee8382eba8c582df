from __future__ import annotations
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from bookstore.schemas import BOOK_FIELDS

_TYPE_NAMES = {str: "string", int: "integer"}

# INTEGER column range (Postgres int4)
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1


def _matches(value: Any, expected: type) -> bool:
    # bool is an int subclass but JSON true/false is not an integer;
    # 10.0 is an integer in JSON terms
    if expected is int:
        if isinstance(value, bool):
            return False
        return isinstance(value, int) or (isinstance(value, float) and value.is_integer())
    return isinstance(value, expected)


def _is_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_book(payload: Any, isbn: Optional[str] = None) -> List[str]:
    """
    Check a candidate Book payload against the fixed eight-field shape.

    Returns every violation found (empty list means valid):
      - payload must be an object
      - every declared field present
      - no undeclared fields
      - strings for text fields, integers for pages/year
      - integers within the INTEGER column range
      - amazon_url an absolute http(s) URL
      - body isbn equal to `isbn` when one is given (replace keeps the key)
    """
    if not isinstance(payload, dict):
        return ["instance is not of a type(s) object"]

    errors: List[str] = []

    for name in BOOK_FIELDS:
        if name not in payload:
            errors.append(f'instance requires property "{name}"')

    for name in payload:
        if name not in BOOK_FIELDS:
            errors.append(f'instance is not allowed to have the additional property "{name}"')

    for name, expected in BOOK_FIELDS.items():
        if name not in payload:
            continue
        value = payload[name]
        if not _matches(value, expected):
            errors.append(f"instance.{name} is not of a type(s) {_TYPE_NAMES[expected]}")
        elif expected is int and value > INT_MAX:
            errors.append(f"instance.{name} must be less than or equal to {INT_MAX}")
        elif expected is int and value < INT_MIN:
            errors.append(f"instance.{name} must be greater than or equal to {INT_MIN}")

    url = payload.get("amazon_url")
    if isinstance(url, str) and not _is_http_url(url):
        errors.append('instance.amazon_url does not conform to the "uri" format')

    body_isbn = payload.get("isbn")
    if isbn is not None and isinstance(body_isbn, str) and body_isbn != isbn:
        errors.append(f'instance.isbn does not match the isbn "{isbn}" in the request path')

    return errors


def normalize_book(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Turn whole-number floats in integer fields into ints; expects a valid payload."""
    return {
        name: int(value) if BOOK_FIELDS.get(name) is int else value
        for name, value in payload.items()
    }
