# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Test doubles shared across the diffqa test-suite."""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping, Sequence

from diffqa.diff.model import DiffModel
from diffqa.linters.base import LinterEngine
from diffqa.models import Diagnostic

SAMPLE_DIFF = """\
diff --git a/a.txt b/a.txt
index 1111111..2222222 100644
--- a/a.txt
+++ b/a.txt
@@ -10,2 +10,3 @@ def first():
-old ten
-old eleven
+new ten
+new eleven
+new twelve
diff --git a/b.txt b/b.txt
index 3333333..4444444 100644
--- a/b.txt
+++ b/b.txt
@@ -1,4 +1,5 @@
-one
-two
-three
-four
+uno
+dos
+tres
+cuatro
+cinco
"""


def diagnostic(line: int | None, *, file: str | None = None, message: str | None = None, **extra: object) -> Diagnostic:
    """Build a diagnostic with a message derived from its line."""

    return Diagnostic(file=file, line=line, message=message or f"issue at {line}", tool="fake", **extra)


class FakeLinter(LinterEngine):
    """In-memory linter returning canned diagnostics per path."""

    name = "fake"

    def __init__(
        self,
        reports: Mapping[str, Sequence[Diagnostic]] | None = None,
        *,
        failures: Mapping[str, Exception] | None = None,
        gates: Mapping[str, threading.Event] | None = None,
        jobs: int = 4,
        max_diagnostics: int | None = None,
        on_check: Callable[[str], None] | None = None,
    ) -> None:
        super().__init__(jobs=jobs, max_diagnostics=max_diagnostics)
        self.reports = dict(reports or {})
        self.failures = dict(failures or {})
        self.gates = dict(gates or {})
        self.on_check = on_check
        self.checked: list[str] = []
        self.thresholds_seen: list[int | None] = []
        self._checked_lock = threading.Lock()

    def check(self, path: str) -> list[Diagnostic]:
        with self._checked_lock:
            self.checked.append(path)
            self.thresholds_seen.append(self.max_diagnostics)
        if self.on_check is not None:
            self.on_check(path)
        gate = self.gates.get(path)
        if gate is not None:
            gate.wait(timeout=5)
        failure = self.failures.get(path)
        if failure is not None:
            raise failure
        return [item.model_copy() for item in self.reports.get(path, ())]


class FakeDiffProvider:
    """Diff provider serving a fixed model and recording context overrides."""

    def __init__(self, model: DiffModel | None = None, *, active: bool = True) -> None:
        self.model = model or DiffModel()
        self.active = active
        self.loads = 0
        self.context_history: list[int] = []
        self._stack: list[int] = [0]

    @property
    def context_lines(self) -> int:
        return self._stack[-1]

    def is_active(self) -> bool:
        return self.active

    def load(self) -> DiffModel:
        self.loads += 1
        return self.model

    def set_context(self, lines: int) -> None:
        self.context_history.append(lines)
        self._stack.append(lines)

    def reset_context(self) -> None:
        if len(self._stack) > 1:
            self._stack.pop()
