# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels normalising different linter vocabularies."""

    ERROR = "error"
    WARNING = "warning"
    NOTICE = "notice"
    NOTE = "note"


SEVERITY_RANK: Final[Mapping[Severity, int]] = {
    Severity.ERROR: 0,
    Severity.WARNING: 1,
    Severity.NOTICE: 2,
    Severity.NOTE: 3,
}

_SEVERITY_ALIASES: Final[Mapping[str, Severity]] = {
    "error": Severity.ERROR,
    "fatal": Severity.ERROR,
    "e": Severity.ERROR,
    "f": Severity.ERROR,
    "warning": Severity.WARNING,
    "warn": Severity.WARNING,
    "w": Severity.WARNING,
    "notice": Severity.NOTICE,
    "info": Severity.NOTICE,
    "information": Severity.NOTICE,
    "convention": Severity.NOTICE,
    "refactor": Severity.NOTICE,
    "c": Severity.NOTICE,
    "r": Severity.NOTICE,
    "note": Severity.NOTE,
    "hint": Severity.NOTE,
}


def coerce_severity(value: Severity | str | None, default: Severity = Severity.WARNING) -> Severity:
    """Return a :class:`Severity` for ``value``.

    Args:
        value: Raw severity which may already be an enum, a linter-specific
            string such as ``"convention"``, or ``None``.
        default: Severity returned when ``value`` is missing or unknown.

    Returns:
        Severity: Coerced severity value.
    """

    if isinstance(value, Severity):
        return value
    if not value:
        return default
    return _SEVERITY_ALIASES.get(value.strip().lower(), default)


def severity_from_code(code: str | None, default: Severity = Severity.WARNING) -> Severity:
    """Infer a severity from a pycodestyle/pylint style rule code prefix.

    Args:
        code: Rule identifier such as ``E501`` or ``C0114``.
        default: Severity used when the prefix is not recognised.

    Returns:
        Severity: Severity implied by the code prefix.
    """

    if not code:
        return default
    return _SEVERITY_ALIASES.get(code[:1].lower(), default)


def severity_rank(severity: Severity) -> int:
    """Return the ordering rank of ``severity`` (errors sort first)."""

    return SEVERITY_RANK.get(severity, len(SEVERITY_RANK))


__all__ = [
    "SEVERITY_RANK",
    "Severity",
    "coerce_severity",
    "severity_from_code",
    "severity_rank",
]
