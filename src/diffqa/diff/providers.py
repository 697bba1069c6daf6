# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Concrete diff model providers backed by diff text or a Git work tree."""

from __future__ import annotations

import re

# Bandit: git is invoked without a shell and with validated refs.
import subprocess  # nosec B404
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Final

from ..errors import PreconditionError
from .model import DiffModel
from .parser import parse_unified_diff

GIT_REF_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[\w./@^~-]+$")
STDIN_MARKER: Final[str] = "-"
_GIT_OK_CODES: Final[frozenset[int]] = frozenset({0, 1})

GitRunner = Callable[[Sequence[str], Path], subprocess.CompletedProcess[str]]


def validate_git_ref(ref: str) -> None:
    """Validate a git ref before it is passed to ``git diff``.

    Args:
        ref: Branch name, commit hash, or range such as ``main...HEAD``.

    Raises:
        ValueError: If the ref is empty, option-like, or contains characters
            outside the accepted set.
    """

    if not ref:
        raise ValueError("Git ref cannot be empty")
    for part in re.split(r"\.{2,3}", ref):
        if not part:
            raise ValueError(f"Invalid git ref: {ref!r} (malformed range syntax)")
        if part.startswith("-"):
            raise ValueError(f"Invalid git ref: {ref!r} (option-style refs are not allowed)")
        if not GIT_REF_PATTERN.match(part):
            raise ValueError(f"Invalid git ref: {ref!r} (contains invalid characters)")


def _default_git_runner(cmd: Sequence[str], root: Path) -> subprocess.CompletedProcess[str]:
    return subprocess.run(  # nosec B603
        list(cmd),
        cwd=root,
        check=False,
        capture_output=True,
        text=True,
    )


class _ContextOverride:
    """Stack of context widths so overrides can be reset transactionally."""

    def __init__(self) -> None:
        self._stack: list[int] = [0]

    @property
    def context_lines(self) -> int:
        return self._stack[-1]

    def set_context(self, lines: int) -> None:
        if lines < 0:
            raise ValueError("context lines must be non-negative")
        self._stack.append(lines)

    def reset_context(self) -> None:
        if len(self._stack) > 1:
            self._stack.pop()


class TextDiffProvider(_ContextOverride):
    """Provide a diff model parsed from unified diff text.

    The text can come from a string, a file, or stdin (``-``). A provider built
    from a path that does not exist is inactive.
    """

    def __init__(self, text: str | None = None, *, source: Path | str | None = None) -> None:
        """Create a provider from literal ``text`` or a ``source`` path.

        Args:
            text: Diff content supplied directly.
            source: Path of a diff file, or ``-`` to read stdin on first load.
        """

        super().__init__()
        self._text = text
        self._source = source
        self._model: DiffModel | None = None

    @property
    def source(self) -> str:
        """Return a human-readable description of the diff origin."""

        if self._source is None:
            return "<text>"
        return "<stdin>" if str(self._source) == STDIN_MARKER else str(self._source)

    def is_active(self) -> bool:
        if self._text is not None:
            return True
        if self._source is None:
            return False
        return str(self._source) == STDIN_MARKER or Path(self._source).is_file()

    def _read(self) -> str:
        if self._text is not None:
            return self._text
        if not self.is_active():
            raise PreconditionError(f"no diff available at {self.source}")
        if str(self._source) == STDIN_MARKER:
            self._text = sys.stdin.read()
        else:
            self._text = Path(str(self._source)).read_text(encoding="utf-8", errors="replace")
        return self._text

    def load(self) -> DiffModel:
        if self._model is None:
            self._model = parse_unified_diff(self._read())
        return self._model

    def render(self) -> str:
        """Return the diff text as supplied."""

        return self._read()


class GitDiffProvider(_ContextOverride):
    """Provide a diff model computed by ``git diff`` inside a work tree.

    Hunks are always read from a zero-context diff so changed-line ranges
    cover exactly the edited lines. The context override only widens the
    human-facing output of :meth:`render`.
    """

    def __init__(
        self,
        root: Path,
        *,
        ref: str | None = None,
        staged: bool = False,
        runner: GitRunner | None = None,
    ) -> None:
        """Create a Git-backed provider.

        Args:
            root: Directory inside the repository work tree.
            ref: Optional ref or range to diff against (defaults to the index).
            staged: When ``True`` diff the staged changes (``--cached``).
            runner: Optional command runner used in place of :mod:`subprocess`.

        Raises:
            ValueError: If ``ref`` is not an acceptable git ref.
        """

        super().__init__()
        if ref is not None:
            validate_git_ref(ref)
        self._root = root
        self._ref = ref
        self._staged = staged
        self._runner = runner or _default_git_runner
        self._model: DiffModel | None = None

    @property
    def root(self) -> Path:
        return self._root

    def is_active(self) -> bool:
        try:
            completed = self._runner(["git", "rev-parse", "--is-inside-work-tree"], self._root)
        except OSError:
            return False
        return completed.returncode == 0 and completed.stdout.strip() == "true"

    def _diff_command(self, unified: int) -> list[str]:
        # --relative: paths relative to root, changes outside root omitted
        cmd = ["git", "diff", f"--unified={unified}", "--relative", "--no-color", "--no-ext-diff", "-M"]
        if self._staged:
            cmd.append("--cached")
        if self._ref:
            cmd.append(self._ref)
        cmd.append("--")
        return cmd

    def _run_diff(self, unified: int) -> str:
        if not self.is_active():
            raise PreconditionError(f"{self._root} is not inside a git work tree")
        try:
            completed = self._runner(self._diff_command(unified), self._root)
        except OSError as exc:
            raise PreconditionError(f"unable to run git diff: {exc}") from exc
        if completed.returncode not in _GIT_OK_CODES:
            detail = completed.stderr.strip() or f"exit code {completed.returncode}"
            raise PreconditionError(f"git diff failed: {detail}")
        return completed.stdout

    def load(self) -> DiffModel:
        if self._model is None:
            self._model = parse_unified_diff(self._run_diff(0))
        return self._model

    def render(self) -> str:
        """Return the diff text using the current context override."""

        return self._run_diff(self.context_lines)


__all__ = [
    "GIT_REF_PATTERN",
    "GitDiffProvider",
    "GitRunner",
    "STDIN_MARKER",
    "TextDiffProvider",
    "validate_git_ref",
]
