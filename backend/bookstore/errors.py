from __future__ import annotations
from typing import List, Union


class BookstoreError(Exception):
    """
    Base for errors that map onto the JSON error envelope:
      {"error": {"message": [...], "status": <int>}}
    """
    status = 500

    def __init__(self, messages: Union[str, List[str]], status: int | None = None):
        if isinstance(messages, str):
            messages = [messages]
        self.messages = list(messages)
        if status is not None:
            self.status = status
        super().__init__("; ".join(self.messages))

    def to_body(self) -> dict:
        return {"error": {"message": self.messages, "status": self.status}}


class ValidationError(BookstoreError):
    status = 400


class NotFoundError(BookstoreError):
    status = 404


class ConflictError(BookstoreError):
    status = 409
