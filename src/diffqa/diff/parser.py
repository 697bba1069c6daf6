# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Unified diff parsing utilities."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from .model import DiffFile, DiffHunk, DiffModel

HUNK_HEADER_RE: Final[re.Pattern[str]] = re.compile(
    r"^@@\s+-(?P<old_start>\d+)(?:,(?P<old_count>\d+))?\s+\+(?P<new_start>\d+)(?:,(?P<new_count>\d+))?\s+@@"
)
_DEV_NULL: Final[str] = "/dev/null"
_GIT_HEADER: Final[str] = "diff --git "
_OLD_HEADER: Final[str] = "--- "
_NEW_HEADER: Final[str] = "+++ "
_RENAME_FROM: Final[str] = "rename from "
_RENAME_TO: Final[str] = "rename to "
_NO_NEWLINE_MARKER: Final[str] = "\\"


def _strip_diff_prefix(path: str) -> str | None:
    """Return ``path`` without the ``a/``/``b/`` prefix, or ``None`` for ``/dev/null``."""

    path = path.split("\t", 1)[0].strip()
    if len(path) > 1 and path.startswith('"') and path.endswith('"'):
        path = path[1:-1]
    if path in (_DEV_NULL, _DEV_NULL.lstrip("/")):
        return None
    if path.startswith(("a/", "b/")):
        path = path[2:]
    return path or None


def parse_hunk_header(line: str) -> DiffHunk | None:
    """Return the hunk described by an ``@@`` header line.

    Omitted counts default to ``1`` as in GNU diff output.

    Args:
        line: Raw diff line.

    Returns:
        DiffHunk | None: Parsed hunk, or ``None`` when ``line`` is not a hunk header.
    """

    match = HUNK_HEADER_RE.match(line)
    if not match:
        return None
    old_count = match.group("old_count")
    new_count = match.group("new_count")
    return DiffHunk(
        old_start=int(match.group("old_start")),
        old_count=int(old_count) if old_count is not None else 1,
        new_start=int(match.group("new_start")),
        new_count=int(new_count) if new_count is not None else 1,
    )


@dataclass(slots=True)
class _ParserState:
    """Mutable cursor used while walking diff lines."""

    current: DiffFile | None = None
    saw_old_header: bool = False
    old_remaining: int = 0
    new_remaining: int = 0

    @property
    def in_body(self) -> bool:
        return self.old_remaining > 0 or self.new_remaining > 0

    def consume_body(self, line: str) -> None:
        """Account for one hunk body line."""

        marker = line[:1]
        if marker == "+":
            self.new_remaining -= 1
        elif marker == "-":
            self.old_remaining -= 1
        elif marker != _NO_NEWLINE_MARKER:
            self.old_remaining -= 1
            self.new_remaining -= 1


def _start_file(state: _ParserState, files: list[DiffFile], old_path: str | None, new_path: str | None) -> DiffFile:
    entry = DiffFile(old_path=old_path, new_path=new_path)
    files.append(entry)
    state.current = entry
    state.saw_old_header = False
    state.old_remaining = state.new_remaining = 0
    return entry


def _apply_metadata(entry: DiffFile, line: str) -> None:
    """Update ``entry`` from git extended header lines."""

    if line.startswith("new file mode"):
        entry.is_new = True
    elif line.startswith("deleted file mode"):
        entry.is_deleted = True
    elif line.startswith(_RENAME_FROM):
        entry.old_path = line[len(_RENAME_FROM) :].strip()
        entry.is_renamed = True
    elif line.startswith(_RENAME_TO):
        entry.new_path = line[len(_RENAME_TO) :].strip()
        entry.is_renamed = True


def parse_unified_diff(diff_content: str) -> DiffModel:
    """Parse unified diff content into a :class:`DiffModel`.

    Both ``git diff`` output and plain ``diff -u`` output are accepted. Hunk
    bodies are consumed using the counts from their headers so body lines that
    happen to look like file headers are never misread.

    Args:
        diff_content: Unified diff text.

    Returns:
        DiffModel: Files in diff order with their hunks.
    """

    files: list[DiffFile] = []
    state = _ParserState()

    for line in diff_content.splitlines():
        if state.in_body and not line.startswith(_GIT_HEADER):
            state.consume_body(line)
            continue

        if line.startswith(_GIT_HEADER):
            parts = line[len(_GIT_HEADER) :].split()
            old_path = _strip_diff_prefix(parts[0]) if parts else None
            new_path = _strip_diff_prefix(parts[1]) if len(parts) > 1 else None
            _start_file(state, files, old_path, new_path)
            continue

        if line.startswith(_OLD_HEADER):
            entry = state.current
            if entry is None or entry.hunks or state.saw_old_header:
                entry = _start_file(state, files, None, None)
            entry.old_path = _strip_diff_prefix(line[len(_OLD_HEADER) :])
            entry.is_new = entry.is_new or entry.old_path is None
            state.saw_old_header = True
            continue

        entry = state.current
        if entry is None:
            continue

        if line.startswith(_NEW_HEADER) and not entry.hunks:
            new_path = _strip_diff_prefix(line[len(_NEW_HEADER) :])
            if new_path is None:
                entry.is_deleted = True
            else:
                entry.new_path = new_path
            continue

        hunk = parse_hunk_header(line)
        if hunk is not None:
            entry.hunks.append(hunk)
            state.old_remaining = hunk.old_count
            state.new_remaining = hunk.new_count
            continue

        if not entry.hunks:
            _apply_metadata(entry, line)

    return DiffModel(files=files)


__all__ = ["HUNK_HEADER_RE", "parse_hunk_header", "parse_unified_diff"]
