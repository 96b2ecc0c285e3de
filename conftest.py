import os

import httpx
import pytest

from booklist.services.books_api import BooksAPI
from booklist.services.http_client import HTTPClient
from booklist.manager import BookListManager
from booklist.stub_api import BookIn, create_app
from booklist.ui_helpers import OUTPUT_MODE_ENV

TEST_BASE_URL = "http://books.test"


class RecordingTransport(httpx.AsyncBaseTransport):
    """Passes requests to an inner transport and keeps every request sent."""

    def __init__(self, inner: httpx.AsyncBaseTransport):
        self.inner = inner
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return await self.inner.handle_async_request(request)

    def calls(self, method: str, path: str = None) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and (path is None or r.url.path == path)
        ]


@pytest.fixture(autouse=True)
def _plain_output():
    # Her test düz çıktı moduyla başlar
    os.environ.pop(OUTPUT_MODE_ENV, None)
    yield
    os.environ.pop(OUTPUT_MODE_ENV, None)


@pytest.fixture
def stub_app():
    return create_app()


@pytest.fixture
def seed(stub_app):
    def _seed(name: str, price: int):
        return stub_app.state.store.create(BookIn(name=name, price=price))
    return _seed


@pytest.fixture
def transport(stub_app):
    return RecordingTransport(httpx.ASGITransport(app=stub_app))


@pytest.fixture
def make_manager():
    """Build a manager over the given transport; call it inside the running event loop."""
    def _make(transport: httpx.AsyncBaseTransport, encoding: str = "json") -> BookListManager:
        http = HTTPClient(base_url=TEST_BASE_URL, transport=transport)
        return BookListManager(BooksAPI(http, encoding))
    return _make


@pytest.fixture
def recording():
    """Wrap any transport to see which requests went out."""
    return RecordingTransport
