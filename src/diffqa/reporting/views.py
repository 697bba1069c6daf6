# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pull-based results views rendering presenter rows to the console."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Final, Literal, Protocol

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .presenter import ResultPresenter, ResultRow, jump_target

OutputFormat = Literal["table", "concise", "json"]

SEVERITY_STYLES: Final[dict[str, str]] = {
    "error": "bold red",
    "warning": "yellow",
    "notice": "cyan",
    "note": "dim",
}
MISSING_CELL: Final[str] = "-"


class ResultsView(Protocol):
    """Results consumer that asks the presenter for rows whenever it redraws."""

    def refresh(self) -> None:
        """Pull the latest rows and redraw."""
        ...


class _ConsoleView(ABC):
    """Base for views drawing presenter rows on a Rich console."""

    def __init__(self, presenter: ResultPresenter, console: Console, *, root: Path) -> None:
        self._presenter = presenter
        self._console = console
        self._root = root

    def refresh(self) -> None:
        self.render(self._presenter.refresh())

    @abstractmethod
    def render(self, rows: list[ResultRow]) -> None:
        """Draw ``rows`` on the console."""


class TableView(_ConsoleView):
    """Render rows as a Rich table grouped visually by file."""

    def render(self, rows: list[ResultRow]) -> None:
        if not rows:
            return
        table = Table(show_header=True, header_style="bold", expand=False)
        table.add_column("File", overflow="fold")
        table.add_column("Line", justify="right")
        table.add_column("Col", justify="right")
        table.add_column("Severity")
        table.add_column("Code")
        table.add_column("Message", overflow="fold")
        table.add_column("Tool")
        previous_file: str | None = None
        for row in rows:
            file_cell = row.file if row.file != previous_file else ""
            previous_file = row.file
            table.add_row(
                file_cell,
                str(row.line) if row.line is not None else MISSING_CELL,
                str(row.column) if row.column is not None else MISSING_CELL,
                Text(row.severity.value, style=SEVERITY_STYLES.get(row.severity.value, "")),
                row.code or MISSING_CELL,
                Text(row.message),
                row.tool,
            )
        self._console.print(table)


class ConciseView(_ConsoleView):
    """Render one ``path:line:col: severity [code] message`` line per row."""

    def render(self, rows: list[ResultRow]) -> None:
        for row in rows:
            code = f" [{row.code}]" if row.code else ""
            line = f"{row.location}: {row.severity.value}{code} {row.message}"
            self._console.print(Text(line), soft_wrap=True, highlight=False)


class JsonView(_ConsoleView):
    """Render rows and skipped files as a JSON document."""

    def render(self, rows: list[ResultRow]) -> None:
        payload = {
            "diagnostics": [
                {
                    "file": row.file,
                    "line": row.line,
                    "column": row.column,
                    "severity": row.severity.value,
                    "code": row.code,
                    "message": row.message,
                    "tool": row.tool,
                    "target": str(jump_target(row, root=self._root).path),
                }
                for row in rows
            ],
            "skipped": [{"file": path, "reason": reason} for path, reason in self._presenter.skipped()],
        }
        self._console.print(json.dumps(payload, indent=2), markup=False, highlight=False, soft_wrap=True)


_VIEWS: Final[dict[str, type[_ConsoleView]]] = {
    "table": TableView,
    "concise": ConciseView,
    "json": JsonView,
}


def build_view(output: OutputFormat, presenter: ResultPresenter, console: Console, *, root: Path) -> ResultsView:
    """Return the view implementing ``output``.

    Raises:
        ValueError: If ``output`` is not a known format.
    """

    try:
        view_cls = _VIEWS[output]
    except KeyError as exc:
        raise ValueError(f"unknown output format '{output}'") from exc
    return view_cls(presenter, console, root=root)


__all__ = [
    "ConciseView",
    "JsonView",
    "OutputFormat",
    "ResultsView",
    "TableView",
    "build_view",
]
