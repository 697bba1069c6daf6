# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for console result views."""

from __future__ import annotations

import json
from io import StringIO
from pathlib import Path
from types import SimpleNamespace

import pytest
from rich.console import Console

from diffqa.models import FileResult, RunState, Scope
from diffqa.reporting.presenter import ResultPresenter
from diffqa.reporting.views import ConciseView, JsonView, TableView, _ConsoleView, build_view
from diffqa.severity import Severity
from support import diagnostic


def _console() -> tuple[Console, StringIO]:
    buffer = StringIO()
    return Console(file=buffer, width=160, color_system=None, force_terminal=False), buffer


def _presenter() -> ResultPresenter:
    state = RunState(scope=Scope.LINES)
    state.record(
        0,
        FileResult(
            "src/app.py",
            [
                diagnostic(12, file="src/app.py", column=5, code="E501", severity=Severity.ERROR, message="line too long"),
                diagnostic(3, file="src/app.py", message="unused import"),
            ],
        ),
    )
    state.skip("docs/readme.md", "file is not accessible")
    return ResultPresenter(SimpleNamespace(state=state))


def test_concise_view_prints_one_line_per_row(tmp_path: Path) -> None:
    console, buffer = _console()

    ConciseView(_presenter(), console, root=tmp_path).refresh()

    assert buffer.getvalue().splitlines() == [
        "src/app.py:3: warning unused import",
        "src/app.py:12:5: error [E501] line too long",
    ]


def test_table_view_lists_rows(tmp_path: Path) -> None:
    console, buffer = _console()

    TableView(_presenter(), console, root=tmp_path).refresh()

    output = buffer.getvalue()
    assert "src/app.py" in output
    assert "E501" in output
    assert "line too long" in output
    assert output.count("src/app.py") == 1


def test_table_view_prints_nothing_without_rows(tmp_path: Path) -> None:
    console, buffer = _console()

    TableView(ResultPresenter(SimpleNamespace(state=None)), console, root=tmp_path).refresh()

    assert buffer.getvalue() == ""


def test_json_view_includes_targets_and_skipped_files(tmp_path: Path) -> None:
    console, buffer = _console()

    JsonView(_presenter(), console, root=tmp_path).refresh()

    payload = json.loads(buffer.getvalue())
    assert [item["line"] for item in payload["diagnostics"]] == [3, 12]
    assert payload["diagnostics"][1]["code"] == "E501"
    assert payload["diagnostics"][1]["target"] == str(tmp_path / "src" / "app.py")
    assert payload["skipped"] == [{"file": "docs/readme.md", "reason": "file is not accessible"}]


def test_build_view_selects_implementation(tmp_path: Path) -> None:
    console, _buffer = _console()
    presenter = _presenter()

    assert isinstance(build_view("table", presenter, console, root=tmp_path), TableView)
    assert isinstance(build_view("concise", presenter, console, root=tmp_path), ConciseView)
    assert isinstance(build_view("json", presenter, console, root=tmp_path), JsonView)
    with pytest.raises(ValueError):
        build_view("sarif", presenter, console, root=tmp_path)  # type: ignore[arg-type]


def test_views_must_implement_render(tmp_path: Path) -> None:
    class Unfinished(_ConsoleView):
        pass

    console, _buffer = _console()

    with pytest.raises(TypeError):
        Unfinished(_presenter(), console, root=tmp_path)  # type: ignore[abstract]
