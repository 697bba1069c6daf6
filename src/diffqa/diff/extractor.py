# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Derive per-file changed-line ranges from a diff model."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from pydantic import ValidationError

from ..models import ChangedRange, FileChangeSet
from .model import DiffModel


class _HunkLike(Protocol):
    new_start: int
    new_count: int


def hunk_range(hunk: _HunkLike, context_lines: int = 0) -> ChangedRange | None:
    """Return the post-change range covered by ``hunk`` widened by ``context_lines``.

    Deletion-only hunks touch no post-change line and yield ``None``.

    Args:
        hunk: Hunk exposing the destination ``new_start``/``new_count`` pair.
        context_lines: Unchanged lines retained on both sides of the hunk.

    Returns:
        ChangedRange | None: Covered range, or ``None`` for deletion-only hunks.
    """

    if hunk.new_count <= 0:
        return None
    return ChangedRange(start=max(1, hunk.new_start), length=hunk.new_count).expand(context_lines)


def _iter_hunks(entry: object) -> Iterable[_HunkLike]:
    hunks = getattr(entry, "hunks", None)
    if not hunks:
        return ()
    try:
        return tuple(hunks)
    except TypeError:
        return ()


def _entry_path(entry: object) -> str | None:
    path = getattr(entry, "path", None)
    return str(path) if path else None


def _ranges_for(entry: object, context_lines: int) -> list[ChangedRange]:
    """Return the ranges of ``entry``, degrading malformed hunks to nothing."""

    ranges: list[ChangedRange] = []
    for hunk in _iter_hunks(entry):
        try:
            changed = hunk_range(hunk, context_lines)
        except (AttributeError, TypeError, ValidationError):
            continue
        if changed is not None:
            ranges.append(changed)
    return ranges


def extract_change_sets(diff_model: DiffModel, context_lines: int = 0) -> list[FileChangeSet]:
    """Return one :class:`FileChangeSet` per changed file, in diff order.

    Files without hunks (renames, mode changes) yield an empty range tuple.
    Deleted files are omitted since there is no post-change content to lint.
    Repeated entries for the same path are merged into the first one.

    Args:
        diff_model: Parsed diff.
        context_lines: Context margin added around every hunk.

    Returns:
        list[FileChangeSet]: Change sets with unique paths.

    Raises:
        ValueError: If ``context_lines`` is negative.
    """

    if context_lines < 0:
        raise ValueError("context_lines must be non-negative")
    collected: dict[str, list[ChangedRange]] = {}
    for entry in diff_model.files:
        path = _entry_path(entry)
        if path is None:
            continue
        collected.setdefault(path, []).extend(_ranges_for(entry, context_lines))
    return [FileChangeSet(path=path, ranges=tuple(ranges)) for path, ranges in collected.items()]


__all__ = ["extract_change_sets", "hunk_range"]
