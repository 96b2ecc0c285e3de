import logging
from typing import List, Optional, Union

from booklist.book import Book
from booklist.services.books_api import BooksAPI
from booklist.services.http_client import RequestResult
from booklist.validators import PriceValidator, TextValidator
from booklist.views import BookListPanel, BookRow

logger = logging.getLogger(__name__)


class BookListManager:
    """Drives the book list: fetches records into rows and runs create/update/delete.

    Every successful mutation clears the rows and issues exactly one list
    request to rebuild them. A failed mutation is logged by the HTTP client
    and leaves the rows as they were.
    """

    def __init__(self, api: BooksAPI, panel: Optional[BookListPanel] = None) -> None:
        self.api = api
        self.panel = panel if panel is not None else BookListPanel()
        self.last_list_result: Optional[RequestResult] = None

    async def start(self) -> RequestResult:
        return await self.get_book_list()

    # ------------------------- Read ------------------------- #
    async def get_book_list(self) -> RequestResult:
        """Fetch all records and add one row per record."""
        result = await self.api.list_books(self._populate)
        self.last_list_result = result
        return result

    def _populate(self, books: List[Book]) -> None:
        for book in books:
            row = self.panel.instantiate_row()
            row.id_text = str(book.id)
            row.name_input = book.name
            row.price_input = str(book.price)
            self._bind_row(row, book.id)
        logger.info("Showing %d books", len(books))

    def _bind_row(self, row: BookRow, book_id: int) -> None:
        row.update_button.add_listener(lambda: self.update_book_item(row, book_id))
        row.delete_button.add_listener(lambda: self.delete_book_item(book_id))

    # ------------------------- Create / Update / Delete ------------------------- #
    async def add_book_item(self, row: BookRow) -> RequestResult:
        return await self.create_book(row.name_input, row.price_input)

    async def create_book(self, name: str, price: Union[str, int]) -> RequestResult:
        # Price is parsed before any request exists; InvalidPriceError aborts the operation
        parsed_price = PriceValidator.parse_price(price)
        return await self.api.create_book(TextValidator.normalize_name(name), parsed_price, self._on_mutated)

    async def update_book_item(self, row: BookRow, book_id: Optional[int] = None) -> RequestResult:
        target = book_id if book_id is not None else row.id_text
        return await self.update_book(target, row.name_input, row.price_input)

    async def update_book(self, book_id: Union[int, str], name: str, price: Union[str, int]) -> RequestResult:
        parsed_price = PriceValidator.parse_price(price)
        return await self.api.update_book(book_id, TextValidator.normalize_name(name), parsed_price, self._on_mutated)

    async def delete_book_item(self, book_id: Union[int, str]) -> RequestResult:
        return await self.api.delete_book(book_id, self._on_mutated)

    async def refresh(self) -> RequestResult:
        """Clear the rows, then list again; a failed list leaves the panel empty."""
        self.panel.clear()
        return await self.get_book_list()

    async def _on_mutated(self, _body: str) -> None:
        await self.refresh()

    # ------------------------- Button handlers ------------------------- #
    async def push_reload_button(self) -> RequestResult:
        return await self.refresh()

    async def push_add_button(self, row: BookRow) -> RequestResult:
        return await self.add_book_item(row)
