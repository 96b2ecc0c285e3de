import os
import json
from typing import Iterable
from rich.console import Console
from rich.table import Table
from rich.markup import escape

from booklist.services.http_client import RequestOutcome, RequestResult
from booklist.views import BookRow

# Environment variable to control CLI output mode
# İzin verilen değerler: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "BOOKLIST_OUTPUT"

_console = Console()

def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode

def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()

def build_rows_table(rows: Iterable[BookRow], title: str = "📚 Books") -> Table:
    table = Table(title=title, show_lines=True, header_style="bold cyan")
    table.add_column("ID", style="magenta", no_wrap=True, justify="right")
    table.add_column("Name", style="white")
    table.add_column("Price", style="green", justify="right")
    for row in rows:
        table.add_row(row.id_text, escape(row.name_input), row.price_input)
    return table

def print_rows(rows: Iterable[BookRow]) -> None:
    """Book rows in the current output mode.
    - plain: '<id> - <name> (<price>)' lines, or 'No books.'
    - json: {"books": [...]} using the same shape as the backend
    - rich: Rich table
    """
    rows = list(rows)
    mode = get_output_mode()

    if mode == "json":
        payload = {"books": [_row_to_dict(row) for row in rows]}
        print(json.dumps(payload, ensure_ascii=False))
        return

    if not rows:
        print("No books.")
        return

    if mode == "rich":
        _console.print(build_rows_table(rows))
    else:
        for row in rows:
            print(f"{row.id_text} - {row.name_input} ({row.price_input})")

def print_request_failure(result: RequestResult) -> None:
    kind = "Connection error" if result.outcome is RequestOutcome.CONNECTION_ERROR else "Request failed"
    message = f"{kind}: {result.method} {result.url}: {result.error}"
    if get_output_mode() == "rich":
        _console.print(f"[bold red]{escape(message)}[/]")
    else:
        print(message)

def _row_to_dict(row: BookRow) -> dict:
    # Rows built from a list response always hold numeric text
    try:
        book_id = int(row.id_text)
    except ValueError:
        book_id = row.id_text
    try:
        price = int(row.price_input)
    except ValueError:
        price = row.price_input
    return {"id": book_id, "name": row.name_input, "price": price}
