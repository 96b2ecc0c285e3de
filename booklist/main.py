import asyncio
import logging
import subprocess
import sys
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from booklist.book import MalformedResponseError
from booklist.config import settings
from booklist.manager import BookListManager
from booklist.services.books_api import BooksAPI, RequestEncoding
from booklist.services.http_client import HTTPClient, RequestResult
from booklist.ui_helpers import build_rows_table, print_request_failure, print_rows, set_output_mode
from booklist.validators import InvalidPriceError
from booklist.views import BookRow

APP_NAME = settings.app_name

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
logger = logging.getLogger(__name__)

console = Console()


class ClientOptions:
    """Per-invocation overrides set by the global CLI options."""
    base_url: Optional[str] = None
    encoding: str = settings.request_encoding


def _make_http_client() -> HTTPClient:
    logger.debug("Using %s bodies against %s", ClientOptions.encoding, ClientOptions.base_url or settings.api_base_url)
    return HTTPClient(base_url=ClientOptions.base_url)


def _run_with_manager(operation) -> BookListManager:
    """Run one coroutine against a fresh manager and close the client afterwards."""
    async def runner() -> BookListManager:
        async with _make_http_client() as http:
            manager = BookListManager(BooksAPI(http, ClientOptions.encoding))
            await operation(manager)
            return manager
    return asyncio.run(runner())


def _report(result: RequestResult, manager: BookListManager) -> None:
    """Print rows after a mutation, or the failure and exit 1."""
    if not result.ok:
        print_request_failure(result)
        raise typer.Exit(code=1)
    follow_up = manager.last_list_result
    if follow_up is not None and not follow_up.ok:
        print_request_failure(follow_up)
        raise typer.Exit(code=1)
    print_rows(manager.panel)


# --- Typer CLI Uygulaması ---
app = typer.Typer(help="Book list CLI for the /books backend")

@app.callback(invoke_without_command=True)
def _global_options(
    ctx: typer.Context,
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Backend base URL"),
    encoding: Optional[str] = typer.Option(None, "--encoding", "-e", help="Request body encoding: json | form"),
):
    """Global options (output mode, backend, body encoding)."""
    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO), format=LOG_FORMAT)
    if output:
        set_output_mode(output)
    ClientOptions.base_url = base_url
    try:
        ClientOptions.encoding = RequestEncoding.parse(encoding or settings.request_encoding).value
    except ValueError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=2)
    if ctx.invoked_subcommand is None:
        run_menu()

@app.command("list")
def cli_list():
    """List all books."""
    result_holder = {}

    async def operation(manager: BookListManager):
        result_holder["result"] = await manager.start()

    try:
        manager = _run_with_manager(operation)
    except MalformedResponseError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)
    result = result_holder["result"]
    if not result.ok:
        print_request_failure(result)
        raise typer.Exit(code=1)
    print_rows(manager.panel)

@app.command("add")
def cli_add(name: str, price: str):
    """Create a book and show the refreshed list."""
    _mutate(lambda manager: manager.create_book(name, price))

@app.command("update")
def cli_update(book_id: int, name: str, price: str):
    """Update a book by id and show the refreshed list."""
    _mutate(lambda manager: manager.update_book(book_id, name, price))

@app.command("delete")
def cli_delete(book_id: int):
    """Delete a book by id and show the refreshed list."""
    _mutate(lambda manager: manager.delete_book_item(book_id))

def _mutate(action) -> None:
    result_holder = {}

    async def operation(manager: BookListManager):
        result_holder["result"] = await action(manager)

    try:
        manager = _run_with_manager(operation)
    except (InvalidPriceError, MalformedResponseError) as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)
    _report(result_holder["result"], manager)

@app.command("serve")
def cli_serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Start the in-memory stub backend with uvicorn."""
    host = host or settings.stub_api_host
    port = int(port or settings.stub_api_port)
    print(f"Starting stub backend on http://{host}:{port}/books")
    args = [
        sys.executable,
        "-m", "uvicorn",
        "booklist.stub_api:app",
        "--host", host,
        "--port", str(port),
    ]
    if reload:
        args.append("--reload")
    try:
        subprocess.run(args)
    except FileNotFoundError:
        print("Error: uvicorn could not be started. Make sure it is installed.")
        raise typer.Exit(code=1)


# --- Etkileşimli menü ---
async def _menu_loop(manager: BookListManager) -> None:
    def render() -> None:
        console.print(build_rows_table(manager.panel, title=f"📚 {APP_NAME}"))
        menu_items = [
            ("1", "Reload", "🔄"),
            ("2", "Add book", "➕"),
            ("3", "Update book", "✏️"),
            ("4", "Delete book", "🗑️"),
            ("0", "Exit", "🚪"),
        ]
        table = Table.grid(padding=(0, 2))
        table.add_column(justify="right", style="bold cyan", width=4)
        table.add_column(justify="left", style="white")
        for key, label, icon in menu_items:
            table.add_row(f"[reverse]{key}[/]", f"{icon} {label}")
        console.print(Panel(table, title=APP_NAME, border_style="cyan", box=box.HEAVY, padding=(1, 2)))

    def report(*results) -> None:
        for result in _failed_requests(manager, results):
            console.print(f"[bold red]{escape(result.error or '')}[/] [dim]({result.method} {escape(result.url)})[/]")

    report(await manager.start())
    while True:
        render()
        choice = Prompt.ask("Choose an option", choices=["1", "2", "3", "4", "0"], default="1").strip()

        try:
            if choice == "1":
                report(await manager.push_reload_button())
            elif choice == "2":
                draft = BookRow()
                draft.name_input = Prompt.ask("Name")
                draft.price_input = Prompt.ask("Price")
                report(await manager.push_add_button(draft))
            elif choice == "3":
                row = _pick_row(manager)
                if row:
                    row.name_input = Prompt.ask("Name", default=row.name_input)
                    row.price_input = Prompt.ask("Price", default=row.price_input)
                    report(*await row.update_button.click())
            elif choice == "4":
                row = _pick_row(manager)
                if row and Confirm.ask(f"Delete '{row.name_input}'?", default=False):
                    report(*await row.delete_button.click())
            elif choice == "0":
                console.print("[green]Bye![/]")
                break
        except (InvalidPriceError, MalformedResponseError) as e:
            console.print(f"[bold red]Error:[/] {e}")
        console.print()

def _failed_requests(manager: BookListManager, results) -> List[RequestResult]:
    """Failed requests behind a menu action: the action itself, or the relist it triggered."""
    failed = []
    follow_up = manager.last_list_result
    for result in results:
        if not isinstance(result, RequestResult):
            continue
        if not result.ok:
            failed.append(result)
        elif follow_up is not None and follow_up is not result and not follow_up.ok:
            failed.append(follow_up)
    return failed

def _pick_row(manager: BookListManager) -> Optional[BookRow]:
    book_id = Prompt.ask("Book id").strip()
    row = manager.panel.find_row(book_id)
    if row is None:
        console.print(f"[yellow]No book with id {book_id}.[/]")
    return row

def run_menu() -> None:
    """Interactive menu over the book list."""
    async def runner() -> None:
        async with _make_http_client() as http:
            await _menu_loop(BookListManager(BooksAPI(http, ClientOptions.encoding)))
    asyncio.run(runner())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
