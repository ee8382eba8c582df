from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from bookstore.db import Base, make_session_factory
from bookstore.main import create_app
from bookstore.models.book import Book  # noqa: F401


@pytest.fixture
def engine() -> Engine:
    """In-memory SQLite shared by every connection of one test."""
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def db(engine: Engine) -> Generator[Session, None, None]:
    Base.metadata.create_all(bind=engine)
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine: Engine) -> Generator[TestClient, None, None]:
    with TestClient(create_app(engine)) as c:
        yield c


@pytest.fixture
def book_payload() -> dict:
    return {
        "isbn": "123456789",
        "amazon_url": "https://amazon.com/LaikaTheDogWriter",
        "author": "Laika",
        "language": "Doggo",
        "pages": 10,
        "publisher": "Puplisher",
        "title": "How to get more treats",
        "year": 2023,
    }


@pytest.fixture
def seeded_client(client: TestClient, book_payload: dict) -> TestClient:
    response = client.post("/books", json=book_payload)
    assert response.status_code == 200
    return client
