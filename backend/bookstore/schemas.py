from __future__ import annotations
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping

# Declared Book fields, in the order they are reported when missing.
BOOK_FIELDS: Dict[str, type] = {
    "isbn": str,
    "amazon_url": str,
    "author": str,
    "language": str,
    "pages": int,
    "publisher": str,
    "title": str,
    "year": int,
}


@dataclass(frozen=True)
class BookRecord:
    isbn: str
    amazon_url: str
    author: str
    language: str
    pages: int
    publisher: str
    title: str
    year: int

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BookRecord":
        """Build from a validated payload or a result row; extra keys are ignored."""
        return cls(**{f.name: data[f.name] for f in fields(cls)})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
