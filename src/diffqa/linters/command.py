# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Linter engine running an external command once per file."""

from __future__ import annotations

# Bandit: commands are executed without a shell from validated argv lists.
import subprocess  # nosec B404
from collections.abc import Callable, Sequence
from pathlib import Path

from ..errors import FileCheckError
from ..models import Diagnostic
from .base import LinterEngine
from .presets import LinterPreset

CommandRunner = Callable[..., subprocess.CompletedProcess[str]]


class CommandLinter(LinterEngine):
    """Check files by invoking a linter preset's command in ``root``."""

    def __init__(
        self,
        preset: LinterPreset,
        *,
        root: Path,
        jobs: int = 1,
        max_diagnostics: int | None = None,
        timeout: float | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        """Create a command-backed linter.

        Args:
            preset: Command template and parser to use.
            root: Working directory for the linter; checked paths are relative to it.
            jobs: Number of files checked concurrently.
            max_diagnostics: Default per-check diagnostic threshold.
            timeout: Optional per-process timeout in seconds.
            runner: Optional replacement for :func:`subprocess.run`.
        """

        super().__init__(jobs=jobs, max_diagnostics=max_diagnostics)
        self.preset = preset
        self.name = preset.name
        self.root = root
        self._timeout = timeout
        self._runner = runner or subprocess.run

    def _execute(self, cmd: Sequence[str], path: str) -> subprocess.CompletedProcess[str]:
        try:
            return self._runner(
                list(cmd),
                cwd=self.root,
                check=False,
                capture_output=True,
                text=True,
                stdin=subprocess.DEVNULL,
                timeout=self._timeout,
            )
        except FileNotFoundError as exc:
            raise FileCheckError(path, f"linter executable '{cmd[0]}' not found") from exc
        except subprocess.TimeoutExpired as exc:
            raise FileCheckError(path, f"{self.name} timed out after {exc.timeout}s") from exc
        except OSError as exc:
            raise FileCheckError(path, f"unable to run {self.name}: {exc}") from exc

    def check(self, path: str) -> list[Diagnostic]:
        if not (self.root / path).is_file():
            raise FileCheckError(path, "file is not accessible")
        completed = self._execute(self.preset.build(path), path)
        try:
            diagnostics = self.preset.parse(completed.stdout or "")
        except ValueError as exc:
            raise FileCheckError(path, str(exc)) from exc
        if completed.returncode not in self.preset.ok_codes and not diagnostics:
            detail = (completed.stderr or "").strip().splitlines()
            reason = detail[-1] if detail else f"exit code {completed.returncode}"
            raise FileCheckError(path, f"{self.name} failed: {reason}")
        return diagnostics


__all__ = ["CommandLinter", "CommandRunner"]
