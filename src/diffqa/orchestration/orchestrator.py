# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run a linter over the files of a diff and aggregate scope-filtered diagnostics."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from concurrent.futures import CancelledError, Future, as_completed
from contextlib import contextmanager
from dataclasses import dataclass
from functools import partial
from pathlib import Path

from ..config import DiffScopeConfig
from ..diff.model import DiffModelProvider
from ..errors import FileCheckError, TeardownError
from ..linters.base import CheckCompletion, LinterEngine
from ..logging import HostMessages
from ..models import Diagnostic, FileChangeSet, FileResult, RunState, Scope
from ..scope import filter_diagnostics, require_scope

type PendingChecks = Mapping[Future[list[Diagnostic]], tuple[int, FileChangeSet]]


@dataclass(frozen=True, slots=True)
class _Restore:
    """Undo action registered during setup."""

    label: str
    action: Callable[[], object]


def _same_file(reported: str, target: str, root: Path) -> bool:
    """Return whether the linter-reported path ``reported`` names ``target``."""

    if reported == target:
        return True
    reported_path = Path(reported)
    if not reported_path.is_absolute():
        reported_path = root / reported_path
    try:
        return reported_path.resolve() == (root / target).resolve()
    except (OSError, RuntimeError):
        return False


class CheckOrchestrator:
    """Drive per-file linter checks for one invocation.

    Each :meth:`run` walks ``Setup -> Running -> Teardown``. Setup applies the
    host overrides (diff context, unlimited diagnostics, message inhibition)
    and teardown always undoes them, even when the run fails or is
    interrupted. Checks are requested for every file up front and joined
    before the aggregated :class:`RunState` is returned.
    """

    def __init__(
        self,
        linter: LinterEngine,
        *,
        root: Path | None = None,
        diff_provider: DiffModelProvider | None = None,
        messages: HostMessages | None = None,
        config: DiffScopeConfig | None = None,
    ) -> None:
        """Create an orchestrator.

        Args:
            linter: Engine used to check each changed file.
            root: Directory the linter resolves relative paths against.
            diff_provider: Diff source whose context override is applied
                for the duration of a run.
            messages: Host message channel used for progress and warnings.
            config: Invocation options (context width, inhibition, timeout).
        """

        self._linter = linter
        self._root = root or Path.cwd()
        self._diff_provider = diff_provider
        self._messages = messages or HostMessages()
        self._config = config or DiffScopeConfig()

    def run(self, change_sets: Sequence[FileChangeSet], scope: Scope | str | None) -> RunState:
        """Check every file of ``change_sets`` and aggregate the kept diagnostics.

        Args:
            change_sets: Changed files in diff order.
            scope: Filtering policy; must be set.

        Returns:
            RunState: Fresh state holding diagnostics in diff order then linter order.

        Raises:
            ConfigurationError: If ``scope`` is unset or invalid. Raised before
                any host state is touched.
        """

        active = require_scope(scope)
        state = RunState(scope=active, change_sets=tuple(change_sets))
        with self._host_overrides(active):
            self._check_all(state)
        return state

    @contextmanager
    def _host_overrides(self, scope: Scope) -> Iterator[None]:
        restores: list[_Restore] = []
        try:
            if self._diff_provider is not None:
                self._diff_provider.set_context(self._config.effective_context(scope))
                restores.append(_Restore("diff context", self._diff_provider.reset_context))
            previous_threshold = self._linter.override_max_diagnostics(None)
            restores.append(
                _Restore("diagnostic threshold", partial(self._linter.override_max_diagnostics, previous_threshold))
            )
            if self._config.inhibit_messages:
                previous_visibility = self._messages.suppress()
                restores.append(_Restore("message visibility", partial(self._messages.restore, previous_visibility)))
            yield
        finally:
            self._teardown(restores)

    def _teardown(self, restores: Sequence[_Restore]) -> None:
        for restore in reversed(restores):
            try:
                restore.action()
            except Exception as exc:  # noqa: BLE001
                error = TeardownError(f"failed to restore {restore.label}: {exc}")
                self._messages.warn(str(error))

    def _check_all(self, state: RunState) -> None:
        pending: dict[Future[list[Diagnostic]], tuple[int, FileChangeSet]] = {}
        self._linter.subscribe(self._on_completion)
        try:
            for order, change_set in enumerate(state.change_sets):
                self._messages.info(f"Checking {change_set.path}")
                try:
                    future = self._linter.check_file(change_set.path)
                except FileCheckError as exc:
                    self._skip(state, change_set.path, exc.reason)
                    continue
                pending[future] = (order, change_set)
            self._await_all(pending, state)
        finally:
            self._linter.unsubscribe(self._on_completion)
            for future in pending:
                future.cancel()

    def _await_all(self, pending: PendingChecks, state: RunState) -> None:
        """Collect every check as it completes; return once all have signalled."""

        collected: set[Future[list[Diagnostic]]] = set()
        try:
            for future in as_completed(pending, timeout=self._config.check_timeout):
                collected.add(future)
                order, change_set = pending[future]
                self._collect(state, order, change_set, future)
        except TimeoutError:
            for future, (order, change_set) in pending.items():
                if future in collected:
                    continue
                if future.done():
                    self._collect(state, order, change_set, future)
                    continue
                future.cancel()
                self._skip(state, change_set.path, f"check timed out after {self._config.check_timeout}s")

    def _collect(
        self,
        state: RunState,
        order: int,
        change_set: FileChangeSet,
        future: Future[list[Diagnostic]],
    ) -> None:
        try:
            reported = future.result()
        except CancelledError:
            self._skip(state, change_set.path, "check was cancelled")
            return
        except FileCheckError as exc:
            self._skip(state, change_set.path, exc.reason)
            return
        except OSError as exc:
            self._skip(state, change_set.path, str(exc))
            return
        claimed = self._claim(reported, change_set)
        kept = filter_diagnostics(claimed, change_set, state.scope)
        state.record(order, FileResult(path=change_set.path, diagnostics=kept))

    def _claim(self, reported: Sequence[Diagnostic], change_set: FileChangeSet) -> list[Diagnostic]:
        """Return the diagnostics that belong to ``change_set``, paths filled in.

        Diagnostics without a file are attributed to the checked file; those
        naming another file (e.g. from followed imports) are dropped.
        """

        claimed: list[Diagnostic] = []
        for diagnostic in reported:
            if not diagnostic.file:
                diagnostic.file = change_set.path
            elif diagnostic.file != change_set.path:
                if not _same_file(diagnostic.file, change_set.path, self._root):
                    self._messages.debug(f"ignoring diagnostic for {diagnostic.file} while checking {change_set.path}")
                    continue
                diagnostic = diagnostic.model_copy(update={"file": change_set.path})
            claimed.append(diagnostic)
        return claimed

    def _skip(self, state: RunState, path: str, reason: str) -> None:
        state.skip(path, reason)
        self._messages.warn(f"Skipped {path}: {reason}")

    def _on_completion(self, event: CheckCompletion) -> None:
        status = "ok" if event.ok else f"failed ({event.error})"
        self._messages.debug(f"{self._linter.name} finished {event.path}: {status}, {len(event.diagnostics)} reported")


__all__ = ["CheckOrchestrator"]
