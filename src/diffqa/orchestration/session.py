# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Invocation entry point tying diff extraction, checking and presentation together."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from ..config import DiffScopeConfig
from ..diff.extractor import extract_change_sets
from ..diff.model import DiffModelProvider
from ..errors import PreconditionError
from ..linters.base import LinterEngine
from ..logging import HostMessages
from ..models import FileChangeSet, RunState, Scope
from ..scope import require_scope
from .orchestrator import CheckOrchestrator


class RefreshableView(Protocol):
    """Results view that re-pulls its rows on request."""

    def refresh(self) -> None:
        """Redraw using the latest rows."""
        ...


def resolve_change_sets(
    provider: DiffModelProvider,
    config: DiffScopeConfig,
    scope: Scope | str | None = None,
) -> list[FileChangeSet]:
    """Return the change sets of the active diff, widened for ``scope``.

    Args:
        provider: Source of the diff.
        config: Options supplying the default scope and context width.
        scope: Scope of the invocation; defaults to ``config.default_scope``.

    Returns:
        list[FileChangeSet]: Changed files in diff order.

    Raises:
        PreconditionError: If ``provider`` has no active diff.
        ConfigurationError: If ``scope`` is invalid.
    """

    if not provider.is_active():
        raise PreconditionError("no active diff: run inside a git work tree or pass a diff file")
    active = require_scope(config.default_scope if scope is None else scope)
    return extract_change_sets(provider.load(), config.effective_context(active))


class DiffLintSession:
    """Own the current :class:`RunState` and replace it on every invocation."""

    def __init__(
        self,
        provider: DiffModelProvider,
        linter: LinterEngine,
        config: DiffScopeConfig | None = None,
        *,
        root: Path | None = None,
        messages: HostMessages | None = None,
        view: RefreshableView | None = None,
    ) -> None:
        self._provider = provider
        self._linter = linter
        self._config = config or DiffScopeConfig()
        self._root = root or Path.cwd()
        self._messages = messages or HostMessages()
        self._view = view
        self._state: RunState | None = None

    @property
    def state(self) -> RunState | None:
        """Return the state of the latest run, or ``None`` before the first one."""

        return self._state

    @property
    def config(self) -> DiffScopeConfig:
        return self._config

    def attach_view(self, view: RefreshableView | None) -> None:
        """Register the view refreshed after each completed run."""

        self._view = view

    def invoke(self, scope: Scope | str | None = None) -> RunState:
        """Run the linter over the active diff and replace the current state.

        Args:
            scope: Scope for this invocation; defaults to the configured one.

        Returns:
            RunState: State of the completed run.

        Raises:
            PreconditionError: If no diff is active. Nothing is checked.
            ConfigurationError: If the scope is invalid.
        """

        change_sets = resolve_change_sets(self._provider, self._config, scope)
        active = require_scope(self._config.default_scope if scope is None else scope)
        self._messages.debug(f"diff lists {len(change_sets)} file(s) for scope={active.value}")
        orchestrator = CheckOrchestrator(
            self._linter,
            root=self._root,
            diff_provider=self._provider,
            messages=self._messages,
            config=self._config,
        )
        self._state = orchestrator.run(change_sets, active)
        if self._view is not None:
            self._view.refresh()
        return self._state


__all__ = ["DiffLintSession", "RefreshableView", "resolve_change_sets"]
