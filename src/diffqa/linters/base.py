# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Linter engine abstraction consumed by the check orchestrator."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from threading import Lock
from types import TracebackType

from ..models import Diagnostic


@dataclass(frozen=True, slots=True)
class CheckCompletion:
    """Completion event published once per checked file."""

    path: str
    diagnostics: tuple[Diagnostic, ...] = ()
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


CompletionListener = Callable[[CheckCompletion], None]


class LinterEngine(ABC):
    """Run per-file checks and signal completion through futures.

    Each :meth:`check_file` call returns its own :class:`~concurrent.futures.Future`
    so callers can join on all outstanding checks. Subscribed listeners are
    additionally notified once per finished file.
    """

    name: str = "linter"

    def __init__(self, *, jobs: int = 1, max_diagnostics: int | None = None) -> None:
        """Initialise shared engine state.

        Args:
            jobs: Number of worker threads used to run checks concurrently.
            max_diagnostics: Per-check diagnostic threshold; ``None`` disables it.
        """

        self._jobs = max(1, jobs)
        self._max_diagnostics = max_diagnostics
        self._listeners: list[CompletionListener] = []
        self._listener_lock = Lock()
        self._executor: ThreadPoolExecutor | None = None

    @property
    def max_diagnostics(self) -> int | None:
        """Return the active per-check diagnostic threshold."""

        return self._max_diagnostics

    def override_max_diagnostics(self, value: int | None) -> int | None:
        """Replace the per-check threshold and return the previous one.

        Args:
            value: New threshold, or ``None`` to report every diagnostic.

        Returns:
            int | None: Threshold in effect before the override.
        """

        previous = self._max_diagnostics
        self._max_diagnostics = value
        return previous

    def subscribe(self, listener: CompletionListener) -> None:
        with self._listener_lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: CompletionListener) -> None:
        with self._listener_lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def check_file(self, path: str) -> Future[list[Diagnostic]]:
        """Schedule a check of ``path`` and return its completion future.

        Args:
            path: File to check, relative to the engine's working directory.

        Returns:
            Future[list[Diagnostic]]: Future resolving to the reported
            diagnostics, or failing with the error raised by the check.
        """

        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=self._jobs, thread_name_prefix=f"diffqa-{self.name}")
        future = self._executor.submit(self._run_check, path)
        future.add_done_callback(lambda done: self._notify(path, done))
        return future

    def _run_check(self, path: str) -> list[Diagnostic]:
        diagnostics = list(self.check(path))
        threshold = self._max_diagnostics
        if threshold is not None and len(diagnostics) > threshold:
            return diagnostics[:threshold]
        return diagnostics

    def _notify(self, path: str, future: Future[list[Diagnostic]]) -> None:
        if future.cancelled():
            return
        error = future.exception()
        event = CheckCompletion(
            path=path,
            diagnostics=tuple(future.result()) if error is None else (),
            error=error,
        )
        with self._listener_lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(event)

    @abstractmethod
    def check(self, path: str) -> list[Diagnostic]:
        """Check ``path`` synchronously and return its diagnostics in report order.

        Raises:
            FileCheckError: If the file cannot be checked.
        """

    def close(self) -> None:
        """Shut down worker threads, cancelling checks that have not started."""

        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None

    def __enter__(self) -> LinterEngine:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["CheckCompletion", "CompletionListener", "LinterEngine"]
