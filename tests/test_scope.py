# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for scope-based diagnostic filtering."""

from __future__ import annotations

import pytest

from diffqa.errors import ConfigurationError
from diffqa.models import ChangedRange, FileChangeSet, Scope
from diffqa.scope import filter_diagnostics, require_scope
from support import diagnostic

A_TXT = FileChangeSet(path="a.txt", ranges=(ChangedRange(start=10, length=3),))
B_TXT = FileChangeSet(path="b.txt", ranges=(ChangedRange(start=1, length=5).expand(2),))


def _lines(diagnostics) -> list[int | None]:
    return [item.line for item in diagnostics]


def test_lines_scope_keeps_changed_lines_only() -> None:
    reported_a = [diagnostic(line, file="a.txt") for line in (9, 10, 12, 14)]
    reported_b = [diagnostic(line, file="b.txt") for line in (8, 9, 9)]

    assert _lines(filter_diagnostics(reported_a, A_TXT, Scope.LINES)) == [10, 12]
    assert _lines(filter_diagnostics(reported_b, B_TXT, Scope.LINES)) == [8, 9, 9]


def test_files_scope_keeps_everything() -> None:
    reported_a = [diagnostic(line, file="a.txt") for line in (9, 10, 12, 14)]
    reported_b = [diagnostic(line, file="b.txt") for line in (8, 9, 9)]

    assert filter_diagnostics(reported_a, A_TXT, Scope.FILES) == reported_a
    assert filter_diagnostics(reported_b, B_TXT, Scope.FILES) == reported_b


def test_file_without_ranges() -> None:
    renamed = FileChangeSet(path="renamed.txt")
    reported = [diagnostic(1), diagnostic(2)]

    assert filter_diagnostics(reported, renamed, Scope.LINES) == []
    assert filter_diagnostics(reported, renamed, Scope.FILES) == reported


def test_lines_result_is_subset_of_files_result() -> None:
    reported = [diagnostic(line) for line in range(1, 20)]

    lines = filter_diagnostics(reported, A_TXT, Scope.LINES)
    files = filter_diagnostics(reported, A_TXT, Scope.FILES)

    assert all(item in files for item in lines)
    assert files == reported


def test_diagnostic_without_line_only_survives_files_scope() -> None:
    reported = [diagnostic(None, message="module level")]

    assert filter_diagnostics(reported, A_TXT, Scope.LINES) == []
    assert filter_diagnostics(reported, A_TXT, Scope.FILES) == reported


def test_filtering_preserves_linter_order() -> None:
    reported = [diagnostic(12, message="late"), diagnostic(10, message="early"), diagnostic(11)]

    kept = filter_diagnostics(reported, A_TXT, Scope.LINES)

    assert [item.message for item in kept] == ["late", "early", "issue at 11"]


def test_filter_does_not_mutate_input() -> None:
    reported = [diagnostic(1), diagnostic(10)]
    snapshot = list(reported)

    filter_diagnostics(reported, A_TXT, Scope.LINES)

    assert reported == snapshot


def test_scope_names_are_accepted() -> None:
    assert require_scope("Lines") is Scope.LINES
    assert require_scope(" files ") is Scope.FILES
    assert require_scope(Scope.FILES) is Scope.FILES


@pytest.mark.parametrize("scope", [None, "hunks", ""])
def test_invalid_scope_is_a_configuration_error(scope: str | None) -> None:
    with pytest.raises(ConfigurationError):
        filter_diagnostics([diagnostic(10)], A_TXT, scope)
