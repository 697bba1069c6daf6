# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the diffqa package."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from threading import Lock

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigurationError
from .severity import Severity


class Scope(str, Enum):
    """Filtering policy applied to the diagnostics of a changed file."""

    LINES = "lines"
    FILES = "files"

    @classmethod
    def parse(cls, value: Scope | str) -> Scope:
        """Return the scope named by ``value``.

        Args:
            value: Scope instance or case-insensitive scope name.

        Returns:
            Scope: Matching scope member.

        Raises:
            ConfigurationError: If ``value`` does not name a known scope.
        """

        if isinstance(value, Scope):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(member.value for member in cls)
            raise ConfigurationError(f"unknown scope '{value}' (expected one of: {choices})") from exc


class Diagnostic(BaseModel):
    """Standardize lint diagnostics returned by linters into a common schema."""

    model_config = ConfigDict(validate_assignment=True)

    file: str | None = None
    line: int | None = Field(default=None, ge=1)
    column: int | None = None
    severity: Severity = Severity.WARNING
    message: str
    code: str | None = None
    tool: str = ""


class ChangedRange(BaseModel):
    """Post-change line span derived from a single diff hunk.

    ``length`` of ``None`` means the range extends to the end of the file.
    """

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=1)
    length: int | None = Field(default=None, ge=1)

    @property
    def end(self) -> int | None:
        """Return the last covered line, or ``None`` when unbounded."""

        if self.length is None:
            return None
        return self.start + self.length - 1

    def contains(self, line: int) -> bool:
        """Return ``True`` when ``line`` falls inside this range."""

        end = self.end
        return self.start <= line and (end is None or line <= end)

    def expand(self, context_lines: int) -> ChangedRange:
        """Return the range widened by ``context_lines`` on both ends.

        Args:
            context_lines: Number of unchanged lines retained around the hunk.

        Returns:
            ChangedRange: Widened range; the start is clamped to line ``1``.
        """

        if context_lines <= 0:
            return self
        start = max(1, self.start - context_lines)
        length = None if self.length is None else self.length + 2 * context_lines
        return ChangedRange(start=start, length=length)


class FileChangeSet(BaseModel):
    """Changed-line ranges for one file of the diff."""

    model_config = ConfigDict(frozen=True)

    path: str
    ranges: tuple[ChangedRange, ...] = ()


@dataclass(slots=True)
class FileResult:
    """Diagnostics retained for a single file after scope filtering."""

    path: str
    diagnostics: list[Diagnostic]


@dataclass(slots=True)
class RunState:
    """Scope and aggregated diagnostics owned by one invocation.

    Results are stored per diff position so the flattened collection keeps
    diff-file order regardless of the order in which checks complete.
    """

    scope: Scope
    change_sets: tuple[FileChangeSet, ...] = ()
    results: dict[int, FileResult] = field(default_factory=dict)
    skipped: dict[str, str] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock, repr=False)

    def record(self, order: int, result: FileResult) -> None:
        """Store the filtered diagnostics for the file at diff position ``order``."""

        with self._lock:
            self.results[order] = result

    def skip(self, path: str, reason: str) -> None:
        """Record that ``path`` contributed no diagnostics because of ``reason``."""

        with self._lock:
            self.skipped[path] = reason

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Return the aggregated diagnostics in diff order then linter order."""

        with self._lock:
            ordered = [self.results[index] for index in sorted(self.results)]
        return [diagnostic for result in ordered for diagnostic in result.diagnostics]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)

    def __len__(self) -> int:
        with self._lock:
            return sum(len(result.diagnostics) for result in self.results.values())


__all__ = [
    "ChangedRange",
    "Diagnostic",
    "FileChangeSet",
    "FileResult",
    "RunState",
    "Scope",
]
