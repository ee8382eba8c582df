from __future__ import annotations
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookstore.config import DATABASE_URL


class Base(DeclarativeBase):
    pass


def make_engine(url: Optional[str] = None) -> Engine:
    return create_engine(url or DATABASE_URL, future=True, pool_pre_ping=True)


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db(request: Request) -> Iterator[Session]:
    """
    One session per request, taken from the factory the app was built with.
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
