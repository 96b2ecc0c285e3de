"""In-memory books backend for local runs and tests.

Serves the same contract the client talks to:
    GET    /books      -> {"books": [...]}
    POST   /books      -> 201, created record
    PUT    /books/{id} -> updated record, 404 if unknown
    DELETE /books/{id} -> 204, 404 if unknown
Write bodies may be JSON or application/x-www-form-urlencoded.
"""

import itertools
import json
import logging
from threading import RLock
from typing import Dict

from fastapi import FastAPI, HTTPException, Request, Response
from pydantic import BaseModel, ValidationError

from booklist.config import settings

logger = logging.getLogger(__name__)


class BookIn(BaseModel):
    name: str
    price: int


class BookOut(BookIn):
    id: int


class BookStore:
    """Thread-safe in-memory records keyed by server-assigned id."""

    def __init__(self) -> None:
        self._books: Dict[int, BookOut] = {}
        self._ids = itertools.count(1)
        self._lock = RLock()

    def list_books(self) -> list:
        with self._lock:
            return [self._books[key] for key in sorted(self._books)]

    def create(self, data: BookIn) -> BookOut:
        with self._lock:
            book = BookOut(id=next(self._ids), name=data.name, price=data.price)
            self._books[book.id] = book
            return book

    def update(self, book_id: int, data: BookIn) -> BookOut:
        with self._lock:
            if book_id not in self._books:
                raise KeyError(book_id)
            book = BookOut(id=book_id, name=data.name, price=data.price)
            self._books[book_id] = book
            return book

    def delete(self, book_id: int) -> None:
        with self._lock:
            if self._books.pop(book_id, None) is None:
                raise KeyError(book_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._books)


async def _read_book_payload(request: Request) -> BookIn:
    """Accept the JSON body or its url-encoded form twin."""
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/json"):
            raw = await request.json()
        else:
            raw = dict(await request.form())
        return BookIn.model_validate(raw)
    except json.JSONDecodeError:
        raise HTTPException(status_code=422, detail="Body is not valid JSON")
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=json.loads(e.json()))


def create_app() -> FastAPI:
    app = FastAPI(title=f"{settings.app_name} stub backend", version=settings.app_version)
    store = BookStore()
    app.state.store = store

    @app.get("/health")
    async def health():
        return {"status": "ok", "books": len(store)}

    @app.get("/books")
    async def list_books():
        return {"books": [book.model_dump() for book in store.list_books()]}

    @app.post("/books", status_code=201)
    async def create_book(request: Request):
        book = store.create(await _read_book_payload(request))
        logger.info("Created book %s", book.id)
        return book.model_dump()

    @app.put("/books/{book_id}")
    async def update_book(book_id: int, request: Request):
        data = await _read_book_payload(request)
        try:
            book = store.update(book_id, data)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Book {book_id} not found")
        logger.info("Updated book %s", book_id)
        return book.model_dump()

    @app.delete("/books/{book_id}", status_code=204)
    async def delete_book(book_id: int):
        try:
            store.delete(book_id)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Book {book_id} not found")
        logger.info("Deleted book %s", book_id)
        return Response(status_code=204)

    return app


app = create_app()
