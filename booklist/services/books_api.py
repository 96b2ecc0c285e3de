"""Typed client for the books REST backend.

    GET    /books      list all records
    POST   /books      create a record
    PUT    /books/:id  update a record
    DELETE /books/:id  delete a record
"""

import inspect
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, List, Optional, Union

import httpx

from booklist.book import Book
from booklist.services.http_client import HTTPClient, RequestResult, ResponseCallback

logger = logging.getLogger(__name__)

BooksCallback = Callable[[List[Book]], Union[Any, Awaitable[Any]]]

COLLECTION_PATH = "/books"


class RequestEncoding(str, Enum):
    JSON = "json"
    FORM = "form"

    @classmethod
    def parse(cls, value: Union[str, "RequestEncoding", None]) -> "RequestEncoding":
        if isinstance(value, RequestEncoding):
            return value
        try:
            return cls((value or cls.JSON.value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown request encoding: {value!r}. Use json or form.") from None


def item_path(book_id: Union[int, str]) -> str:
    return f"{COLLECTION_PATH}/{book_id}"


class BooksAPI:
    """Builds the four books requests and dispatches them through one HTTP client."""

    def __init__(self, http_client: HTTPClient, encoding: Union[str, RequestEncoding] = RequestEncoding.JSON):
        self.http = http_client
        self.encoding = RequestEncoding.parse(encoding)

    # ------------------------- Request builders ------------------------- #
    def build_list_request(self) -> httpx.Request:
        return self.http.build_request("GET", COLLECTION_PATH)

    def build_write_request(self, method: str, path: str, book: Book) -> httpx.Request:
        """Body is JSON by default; the form variant sends the same fields url-encoded."""
        payload = book.to_payload()
        if self.encoding is RequestEncoding.FORM:
            form = {key: str(value) for key, value in payload.items()}
            return self.http.build_request(method, path, data=form)
        return self.http.build_request(method, path, json=payload)

    def build_delete_request(self, book_id: Union[int, str]) -> httpx.Request:
        return self.http.build_request("DELETE", item_path(book_id))

    # ------------------------- Operations ------------------------- #
    async def list_books(self, on_success: Optional[BooksCallback] = None) -> RequestResult:
        async def decode(body: str) -> None:
            books = Book.list_from_json(body)
            logger.debug("Fetched %d books", len(books))
            if on_success is not None:
                outcome = on_success(books)
                if inspect.isawaitable(outcome):
                    await outcome

        return await self.http.send_request(self.build_list_request(), decode)

    async def create_book(self, name: str, price: int, on_success: Optional[ResponseCallback] = None) -> RequestResult:
        request = self.build_write_request("POST", COLLECTION_PATH, Book(None, name, price))
        return await self.http.send_request(request, on_success)

    async def update_book(
        self, book_id: Union[int, str], name: str, price: int, on_success: Optional[ResponseCallback] = None
    ) -> RequestResult:
        request = self.build_write_request("PUT", item_path(book_id), Book(None, name, price))
        return await self.http.send_request(request, on_success)

    async def delete_book(self, book_id: Union[int, str], on_success: Optional[ResponseCallback] = None) -> RequestResult:
        return await self.http.send_request(self.build_delete_request(book_id), on_success)
