# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Containment checks between diagnostic lines and changed-line ranges."""

from __future__ import annotations

from collections.abc import Iterable

from .models import ChangedRange


def contains(line: int | None, ranges: Iterable[ChangedRange]) -> bool:
    """Return whether ``line`` falls inside any of ``ranges``.

    Ranges are scanned in the order supplied and the scan stops at the first
    match; no ordering between ranges is assumed.

    Args:
        line: 1-based line number reported by a linter. ``None`` never matches.
        ranges: Changed-line ranges of a single file.

    Returns:
        bool: ``True`` when at least one range covers ``line``.
    """

    if line is None:
        return False
    return any(changed.contains(line) for changed in ranges)


__all__ = ["contains"]
