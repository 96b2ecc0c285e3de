from __future__ import annotations

import json


class MalformedResponseError(ValueError):
    """Raised when a books response body cannot be decoded."""


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Book:
    """Represents a single book record served by the books backend."""

    def __init__(self, id: int | None, name: str, price: int) -> None:
        self.id = id
        self.name = name
        self.price = price

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"#{self.id} {self.name} ({self.price})"

    def __repr__(self) -> str:
        return f"Book(id={self.id!r}, name={self.name!r}, price={self.price!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return (self.id, self.name, self.price) == (other.id, other.name, other.price)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "price": self.price}

    def to_payload(self) -> dict:
        """Request body for create/update; the id is assigned by the server."""
        return {"name": self.name, "price": self.price}

    @staticmethod
    def from_dict(data: dict) -> "Book":
        if not isinstance(data, dict):
            raise MalformedResponseError(f"Invalid book record: {data!r}")
        book_id, name, price = data.get("id"), data.get("name"), data.get("price")
        # Values are shown verbatim, so nothing is coerced: bools are not ints
        if not (_is_int(book_id) and isinstance(name, str) and _is_int(price)):
            raise MalformedResponseError(f"Invalid book record: {data!r}")
        return Book(id=book_id, name=name, price=price)

    @staticmethod
    def list_from_json(body: str | None) -> list["Book"]:
        """Decode a ``{"books": [...]}`` body. A missing ``books`` key means no books."""
        try:
            data = json.loads(body or "")
        except json.JSONDecodeError as e:
            raise MalformedResponseError(f"Response is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise MalformedResponseError("Expected a JSON object with a 'books' array.")

        records = data.get("books")
        if records is None:
            return []
        if not isinstance(records, list):
            raise MalformedResponseError("'books' must be an array.")
        return [Book.from_dict(record) for record in records]
