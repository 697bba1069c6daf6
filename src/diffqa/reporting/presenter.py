# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Turn aggregated diagnostics into ordered rows for results views."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Protocol

from ..models import Diagnostic, RunState
from ..severity import Severity, severity_rank

MISSING_POSITION: Final[int] = 0


@dataclass(frozen=True, slots=True)
class ResultRow:
    """One display row of the results table."""

    file: str
    line: int | None
    column: int | None
    severity: Severity
    code: str | None
    message: str
    tool: str

    @classmethod
    def from_diagnostic(cls, diagnostic: Diagnostic) -> ResultRow:
        return cls(
            file=diagnostic.file or "",
            line=diagnostic.line,
            column=diagnostic.column,
            severity=diagnostic.severity,
            code=diagnostic.code,
            message=diagnostic.message,
            tool=diagnostic.tool,
        )

    @property
    def location(self) -> str:
        """Return ``file:line:column`` omitting unknown parts."""

        parts = [self.file]
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        return ":".join(parts)


@dataclass(frozen=True, slots=True)
class Location:
    """Navigation target for a row."""

    path: Path
    line: int
    column: int


def row_sort_key(row: ResultRow) -> tuple[str, int, int, int]:
    """Return the ordering key: file name (case-insensitive), line, column, severity."""

    return (
        row.file.casefold(),
        row.line if row.line is not None else MISSING_POSITION,
        row.column if row.column is not None else MISSING_POSITION,
        severity_rank(row.severity),
    )


def compare(left: ResultRow, right: ResultRow) -> bool:
    """Return ``True`` when ``left`` sorts strictly before ``right``.

    Rows are ordered by file name first, ignoring case; ties fall back to the
    per-entry ordering of line, column and severity.
    """

    return row_sort_key(left) < row_sort_key(right)


def jump_target(row: ResultRow, *, root: Path, current_buffer: Path | None = None) -> Location:
    """Return where navigation to ``row`` should land.

    Args:
        row: Row selected in the results view.
        root: Directory relative file names are resolved against.
        current_buffer: When given, resolve the position against this file
            instead of the row's own file name.

    Returns:
        Location: Path with 1-based line and column.
    """

    if current_buffer is not None:
        path = current_buffer
    else:
        path = Path(row.file)
        if not path.is_absolute():
            path = root / path
    return Location(path=path, line=row.line or 1, column=row.column or 1)


class RunStateSource(Protocol):
    """Anything exposing the latest :class:`RunState`."""

    @property
    def state(self) -> RunState | None:
        """Return the latest run state, or ``None`` before any run."""
        ...


class ResultPresenter:
    """Supply sorted, de-duplicated rows to pull-based results views.

    The presenter never mutates the aggregated collection; it derives a new
    ordering each time rows are requested.
    """

    def __init__(self, source: RunStateSource) -> None:
        self._source = source
        self._rows: list[ResultRow] | None = None

    @staticmethod
    def compare(left: ResultRow, right: ResultRow) -> bool:
        return compare(left, right)

    def present(self, diagnostics: Iterable[Diagnostic]) -> list[ResultRow]:
        """Return display rows for ``diagnostics``.

        Exact duplicates are removed, keeping the first occurrence, and the
        remainder is stably sorted with :func:`row_sort_key`.
        """

        seen: set[ResultRow] = set()
        unique: list[ResultRow] = []
        for diagnostic in diagnostics:
            row = ResultRow.from_diagnostic(diagnostic)
            if row in seen:
                continue
            seen.add(row)
            unique.append(row)
        return sorted(unique, key=row_sort_key)

    def refresh(self) -> list[ResultRow]:
        """Recompute rows from the source's latest state and return them."""

        state = self._source.state
        self._rows = [] if state is None else self.present(state.diagnostics)
        return list(self._rows)

    def rows(self) -> list[ResultRow]:
        """Return the current rows, computing them lazily on first request."""

        if self._rows is None:
            return self.refresh()
        return list(self._rows)

    def skipped(self) -> Sequence[tuple[str, str]]:
        """Return ``(path, reason)`` pairs for files that contributed nothing."""

        state = self._source.state
        if state is None:
            return ()
        return tuple(sorted(state.skipped.items()))


__all__ = [
    "Location",
    "ResultPresenter",
    "ResultRow",
    "RunStateSource",
    "compare",
    "jump_target",
    "row_sort_key",
]
