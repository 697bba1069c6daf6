# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Structured representation of a parsed unified diff."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(slots=True)
class DiffHunk:
    """One contiguous change region of a file.

    The ``new_*`` fields describe the destination side, i.e. post-change
    line numbers.
    """

    old_start: int
    old_count: int
    new_start: int
    new_count: int


@dataclass(slots=True)
class DiffFile:
    """A file touched by the diff."""

    old_path: str | None
    new_path: str | None
    hunks: list[DiffHunk] = field(default_factory=list)
    is_new: bool = False
    is_deleted: bool = False
    is_renamed: bool = False

    @property
    def path(self) -> str | None:
        """Return the post-change path, or ``None`` for deleted files."""

        if self.is_deleted:
            return None
        return self.new_path


@dataclass(slots=True)
class DiffModel:
    """Parsed diff with files kept in diff order."""

    files: list[DiffFile] = field(default_factory=list)

    @property
    def changed_paths(self) -> list[str]:
        """Return post-change paths of every non-deleted file."""

        return [entry.path for entry in self.files if entry.path]


@runtime_checkable
class DiffModelProvider(Protocol):
    """Source of diff models with a transactional context override."""

    @property
    def context_lines(self) -> int:
        """Return the number of context lines currently requested."""
        ...

    def is_active(self) -> bool:
        """Return ``True`` when a diff is available to act on."""
        ...

    def load(self) -> DiffModel:
        """Return the parsed diff."""
        ...

    def set_context(self, lines: int) -> None:
        """Request ``lines`` unchanged lines of context around each hunk."""
        ...

    def reset_context(self) -> None:
        """Restore the context width in effect before :meth:`set_context`."""
        ...


__all__ = ["DiffFile", "DiffHunk", "DiffModel", "DiffModelProvider"]
