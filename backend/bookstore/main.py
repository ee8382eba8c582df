from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookstore.config import CREATE_TABLES, FRONTEND_ORIGIN, HOST, LOG_LEVEL, PORT
from bookstore.db import Base, get_db, make_engine, make_session_factory
from bookstore.errors import BookstoreError
from bookstore.models.book import Book  # noqa: F401
from bookstore.api.books import router as books_router

log = logging.getLogger(__name__)


def _error(status: int, messages: list[str]) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": {"message": messages, "status": status}})


def _describe(err: dict) -> str:
    where = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
    return f"{where}: {err.get('msg')}" if where else str(err.get("msg"))


def create_app(engine: Optional[Engine] = None) -> FastAPI:
    """
    Build the API around a single engine (connection pool). Tests pass their
    own engine; otherwise one is created from DATABASE_URL.
    """
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    engine = engine or make_engine()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # CREATE_TABLES=0 leaves the schema to migrate.py
        if CREATE_TABLES:
            Base.metadata.create_all(bind=engine)
        yield
        engine.dispose()

    app = FastAPI(title="Bookstore API", lifespan=lifespan)
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[FRONTEND_ORIGIN],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        try:
            response = await call_next(request)
        except Exception:
            log.error("%s %s -> 500", request.method, request.url.path)
            raise
        log.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response

    @app.exception_handler(BookstoreError)
    async def bookstore_error_handler(request: Request, exc: BookstoreError):
        log.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error(400, [_describe(e) for e in exc.errors()])

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, [str(exc.detail)])

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        log.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, ["Internal Server Error"])

    app.include_router(books_router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/db-ping")
    def db_ping(db: Session = Depends(get_db)):
        db.execute(text("SELECT 1")).scalar()
        return {"db": "ok", "dialect": db.get_bind().dialect.name}

    return app


app = create_app()


def run():
    uvicorn.run("bookstore.main:app", host=HOST, port=PORT)
