from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Optional


class Button:
    """A clickable control; listeners run in the order they were added."""

    def __init__(self, label: str) -> None:
        self.label = label
        self._listeners: List[Callable[[], Any]] = []

    def add_listener(self, listener: Callable[[], Any]) -> None:
        self._listeners.append(listener)

    def remove_all_listeners(self) -> None:
        self._listeners.clear()

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    async def click(self) -> List[Any]:
        """Run every listener and return what each one returned."""
        results = []
        for listener in list(self._listeners):
            outcome = listener()
            if inspect.isawaitable(outcome):
                outcome = await outcome
            results.append(outcome)
        return results


@dataclass
class BookRow:
    """Widgets of one book row: id label, name/price fields and the two buttons."""
    id_text: str = ""
    name_input: str = ""
    price_input: str = ""
    update_button: Button = field(default_factory=lambda: Button("Update"))
    delete_button: Button = field(default_factory=lambda: Button("Delete"))


class BookListPanel:
    """Scrollable list area holding the rows in display order."""

    def __init__(self) -> None:
        self._rows: List[BookRow] = []

    def instantiate_row(self) -> BookRow:
        row = BookRow()
        self._rows.append(row)
        return row

    def clear(self) -> None:
        for row in self._rows:
            row.update_button.remove_all_listeners()
            row.delete_button.remove_all_listeners()
        self._rows.clear()

    def find_row(self, book_id) -> Optional[BookRow]:
        key = str(book_id).strip()
        for row in self._rows:
            if row.id_text == key:
                return row
        return None

    @property
    def rows(self) -> List[BookRow]:
        return list(self._rows)

    def __iter__(self) -> Iterator[BookRow]:
        return iter(list(self._rows))

    def __len__(self) -> int:
        return len(self._rows)
