# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for result presentation and ordering."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

from diffqa.models import FileResult, RunState, Scope
from diffqa.reporting.presenter import ResultPresenter, ResultRow, jump_target
from diffqa.severity import Severity
from support import diagnostic


def _state(*results: FileResult) -> RunState:
    state = RunState(scope=Scope.LINES)
    for order, result in enumerate(results):
        state.record(order, result)
    return state


def _row(file: str, line: int | None = 1, column: int | None = 1, severity: Severity = Severity.WARNING) -> ResultRow:
    return ResultRow(file=file, line=line, column=column, severity=severity, code=None, message="m", tool="fake")


def test_rows_are_empty_before_any_run() -> None:
    presenter = ResultPresenter(SimpleNamespace(state=None))

    assert presenter.rows() == []
    assert presenter.refresh() == []
    assert presenter.skipped() == ()


def test_rows_sort_by_file_name_ignoring_case_then_position() -> None:
    state = _state(
        FileResult("zeta.py", [diagnostic(3, file="zeta.py")]),
        FileResult(
            "Alpha.py",
            [
                diagnostic(9, file="Alpha.py"),
                diagnostic(2, file="Alpha.py", column=8),
                diagnostic(2, file="Alpha.py", column=4),
            ],
        ),
        FileResult("beta.py", [diagnostic(1, file="beta.py")]),
    )

    rows = ResultPresenter(SimpleNamespace(state=state)).rows()

    assert [(row.file, row.line, row.column) for row in rows] == [
        ("Alpha.py", 2, 4),
        ("Alpha.py", 2, 8),
        ("Alpha.py", 9, None),
        ("beta.py", 1, None),
        ("zeta.py", 3, None),
    ]


def test_severity_breaks_remaining_ties() -> None:
    state = _state(
        FileResult(
            "x.py",
            [
                diagnostic(4, file="x.py", severity=Severity.NOTE, message="same"),
                diagnostic(4, file="x.py", severity=Severity.ERROR, message="same"),
            ],
        )
    )

    rows = ResultPresenter(SimpleNamespace(state=state)).rows()

    assert [row.severity for row in rows] == [Severity.ERROR, Severity.NOTE]


def test_exact_duplicates_are_collapsed() -> None:
    state = _state(FileResult("x.py", [diagnostic(4, file="x.py"), diagnostic(4, file="x.py")]))

    assert len(ResultPresenter(SimpleNamespace(state=state)).rows()) == 1


def test_compare_orders_by_file_first() -> None:
    assert ResultPresenter.compare(_row("A.py", line=50), _row("b.py", line=1))
    assert not ResultPresenter.compare(_row("b.py", line=1), _row("A.py", line=50))
    assert ResultPresenter.compare(_row("a.py", line=1), _row("A.py", line=2))
    assert not ResultPresenter.compare(_row("a.py"), _row("a.py"))


def test_present_is_idempotent_and_does_not_mutate_state() -> None:
    state = _state(FileResult("b.py", [diagnostic(5, file="b.py"), diagnostic(1, file="b.py")]))
    before = list(state.diagnostics)
    presenter = ResultPresenter(SimpleNamespace(state=state))

    first = presenter.refresh()
    second = presenter.refresh()

    assert first == second
    assert [row.line for row in first] == [1, 5]
    assert state.diagnostics == before


def test_refresh_follows_the_latest_state() -> None:
    source = SimpleNamespace(state=_state(FileResult("a.py", [diagnostic(1, file="a.py")])))
    presenter = ResultPresenter(source)
    assert len(presenter.rows()) == 1

    source.state = _state()

    assert presenter.refresh() == []
    assert presenter.rows() == []


def test_skipped_files_are_listed_sorted() -> None:
    state = _state()
    state.skip("z.py", "timed out")
    state.skip("a.py", "file is not accessible")

    assert ResultPresenter(SimpleNamespace(state=state)).skipped() == (
        ("a.py", "file is not accessible"),
        ("z.py", "timed out"),
    )


def test_location_omits_unknown_parts() -> None:
    assert _row("a.py", line=3, column=7).location == "a.py:3:7"
    assert _row("a.py", line=3, column=None).location == "a.py:3"
    assert _row("a.py", line=None, column=None).location == "a.py"


def test_jump_target_resolves_relative_paths_against_root(tmp_path: Path) -> None:
    target = jump_target(_row("pkg/mod.py", line=12, column=3), root=tmp_path)

    assert target.path == tmp_path / "pkg" / "mod.py"
    assert (target.line, target.column) == (12, 3)


def test_jump_target_can_resolve_against_current_buffer(tmp_path: Path) -> None:
    buffer = tmp_path / "scratch" / "edited.py"

    target = jump_target(_row("elsewhere.py", line=None, column=None), root=tmp_path, current_buffer=buffer)

    assert target.path == buffer
    assert (target.line, target.column) == (1, 1)
