# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for invocation sessions and change-set resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from diffqa.config import DiffScopeConfig
from diffqa.diff.model import DiffModel
from diffqa.errors import ConfigurationError, PreconditionError
from diffqa.logging import HostMessages
from diffqa.models import Scope
from diffqa.orchestration.session import DiffLintSession, resolve_change_sets
from support import FakeDiffProvider, FakeLinter, diagnostic


class RecordingView:
    def __init__(self, session: DiffLintSession) -> None:
        self.session = session
        self.snapshots: list[int] = []

    def refresh(self) -> None:
        state = self.session.state
        self.snapshots.append(-1 if state is None else len(state))


def _session(
    model: DiffModel,
    linter: FakeLinter,
    messages: HostMessages,
    tmp_path: Path,
    *,
    config: DiffScopeConfig | None = None,
    active: bool = True,
) -> tuple[DiffLintSession, FakeDiffProvider]:
    provider = FakeDiffProvider(model, active=active)
    session = DiffLintSession(provider, linter, config, root=tmp_path, messages=messages)
    return session, provider


def test_inactive_diff_is_a_precondition_error(sample_model: DiffModel, messages: HostMessages, tmp_path: Path) -> None:
    with FakeLinter() as linter:
        session, provider = _session(sample_model, linter, messages, tmp_path, active=False)

        with pytest.raises(PreconditionError):
            session.invoke()

        assert linter.checked == []
    assert provider.loads == 0
    assert session.state is None


def test_precondition_is_checked_before_scope(sample_model: DiffModel, messages: HostMessages, tmp_path: Path) -> None:
    with FakeLinter() as linter:
        session, _provider = _session(sample_model, linter, messages, tmp_path, active=False)

        with pytest.raises(PreconditionError):
            session.invoke("bogus")


def test_invalid_scope_is_a_configuration_error(sample_model: DiffModel, messages: HostMessages, tmp_path: Path) -> None:
    with FakeLinter() as linter:
        session, _provider = _session(sample_model, linter, messages, tmp_path)

        with pytest.raises(ConfigurationError):
            session.invoke("hunks")

        assert linter.checked == []


def test_invoke_uses_configured_scope_and_context(sample_model: DiffModel, messages: HostMessages, tmp_path: Path) -> None:
    reports = {"a.txt": [diagnostic(line, file="a.txt") for line in (7, 8, 14, 15)]}
    config = DiffScopeConfig(context_lines=2)

    with FakeLinter(reports) as linter:
        session, provider = _session(sample_model, linter, messages, tmp_path, config=config)
        state = session.invoke()

    assert state.scope is Scope.LINES
    assert [item.line for item in state.diagnostics] == [8, 14]
    assert provider.context_history == [2]
    assert [change_set.path for change_set in state.change_sets] == ["a.txt", "b.txt"]


def test_new_invocation_replaces_previous_state(sample_model: DiffModel, messages: HostMessages, tmp_path: Path) -> None:
    reports = {"a.txt": [diagnostic(11, file="a.txt"), diagnostic(30, file="a.txt")]}

    with FakeLinter(reports) as linter:
        session, _provider = _session(sample_model, linter, messages, tmp_path)
        first = session.invoke(Scope.FILES)
        second = session.invoke(Scope.LINES)

    assert session.state is second
    assert first is not second
    assert len(first) == 2
    assert [item.line for item in second.diagnostics] == [11]


def test_attached_view_is_refreshed_after_each_run(sample_model: DiffModel, messages: HostMessages, tmp_path: Path) -> None:
    reports = {"b.txt": [diagnostic(2, file="b.txt")]}

    with FakeLinter(reports) as linter:
        session, _provider = _session(sample_model, linter, messages, tmp_path)
        view = RecordingView(session)
        session.attach_view(view)
        session.invoke()
        session.invoke("files")

    assert view.snapshots == [1, 1]


def test_resolve_change_sets_drops_context_for_files_scope(sample_model: DiffModel) -> None:
    provider = FakeDiffProvider(sample_model)
    config = DiffScopeConfig(context_lines=4)

    widened = resolve_change_sets(provider, config, Scope.LINES)
    exact = resolve_change_sets(provider, config, Scope.FILES)

    assert widened[0].ranges[0].start == 6
    assert exact[0].ranges[0].start == 10
