# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Scope policies deciding which diagnostics of a changed file are kept."""

from __future__ import annotations

from collections.abc import Sequence

from .errors import ConfigurationError
from .models import Diagnostic, FileChangeSet, Scope
from .ranges import contains


def require_scope(scope: Scope | str | None) -> Scope:
    """Return ``scope`` as a :class:`Scope`, rejecting unset values.

    Args:
        scope: Scope requested by the caller.

    Returns:
        Scope: Validated scope.

    Raises:
        ConfigurationError: If ``scope`` is ``None`` or not a known scope.
    """

    if scope is None:
        raise ConfigurationError("no scope selected; set 'lines' or 'files' before filtering")
    return Scope.parse(scope)


def filter_diagnostics(
    diagnostics: Sequence[Diagnostic],
    change_set: FileChangeSet,
    scope: Scope | str | None,
) -> list[Diagnostic]:
    """Return the diagnostics of one file that survive ``scope``.

    Args:
        diagnostics: Diagnostics reported for ``change_set.path`` in linter order.
        change_set: Changed-line ranges of the file.
        scope: ``Scope.LINES`` keeps diagnostics on changed lines only;
            ``Scope.FILES`` keeps every diagnostic.

    Returns:
        list[Diagnostic]: Retained diagnostics, linter order preserved.

    Raises:
        ConfigurationError: If ``scope`` is unset or invalid.
    """

    active = require_scope(scope)
    if active is Scope.FILES:
        return list(diagnostics)
    return [diagnostic for diagnostic in diagnostics if contains(diagnostic.line, change_set.ranges)]


__all__ = ["filter_diagnostics", "require_scope"]
