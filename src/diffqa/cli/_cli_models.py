# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared option declarations and input models for the diffqa CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Final, Literal, cast

import typer

from ..diff.model import DiffModelProvider
from ..diff.providers import GitDiffProvider, TextDiffProvider
from ..errors import ConfigurationError
from ..logging import HostMessages

OutputFormatLiteral = Literal["table", "concise", "json"]
OUTPUT_FORMAT_CHOICES: Final[tuple[OutputFormatLiteral, ...]] = ("table", "concise", "json")

ROOT_HELP: Final[str] = "Project root (git work tree and linter working directory)."
DIFF_HELP: Final[str] = "Read the diff from a file instead of git ('-' reads stdin)."
REF_HELP: Final[str] = "Diff the work tree against this ref or range (e.g. main...HEAD)."
STAGED_HELP: Final[str] = "Diff staged changes only."
SCOPE_HELP: Final[str] = "Filtering scope: 'lines' (changed lines only) or 'files' (whole changed files)."
CONTEXT_HELP: Final[str] = "Unchanged lines around each hunk that still count as changed."
LINTER_HELP: Final[str] = "Linter preset to run (ruff, pylint, flake8, mypy, generic)."
COMMAND_HELP: Final[str] = "Custom linter command; '{file}' is replaced by the checked path."
JOBS_HELP: Final[str] = "Max parallel checks (defaults to 75% of available CPU cores)."
TIMEOUT_HELP: Final[str] = "Seconds to wait for all checks before skipping the unfinished ones."
FORMAT_HELP: Final[str] = "Output format: table, concise, or json."
SHOW_PROGRESS_HELP: Final[str] = "Keep progress messages visible while checks run."

ROOT_OPTION = Annotated[Path, typer.Option("--root", "-r", help=ROOT_HELP)]
DIFF_OPTION = Annotated[str | None, typer.Option("--diff", help=DIFF_HELP)]
REF_OPTION = Annotated[str | None, typer.Option("--ref", help=REF_HELP)]
STAGED_OPTION = Annotated[bool, typer.Option("--staged", help=STAGED_HELP)]
SCOPE_OPTION = Annotated[str | None, typer.Option("--scope", "-s", help=SCOPE_HELP)]
CONTEXT_OPTION = Annotated[int | None, typer.Option("--context", "-C", min=0, help=CONTEXT_HELP)]
LINTER_OPTION = Annotated[str | None, typer.Option("--linter", "-l", help=LINTER_HELP)]
COMMAND_OPTION = Annotated[str | None, typer.Option("--command", help=COMMAND_HELP)]
JOBS_OPTION = Annotated[int | None, typer.Option("--jobs", "-j", min=1, help=JOBS_HELP)]
TIMEOUT_OPTION = Annotated[float | None, typer.Option("--timeout", min=0.0, help=TIMEOUT_HELP)]
FORMAT_OPTION = Annotated[str, typer.Option("--format", "-f", help=FORMAT_HELP)]
SHOW_PROGRESS_OPTION = Annotated[bool, typer.Option("--show-progress", help=SHOW_PROGRESS_HELP)]
EMOJI_OPTION = Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji output.")]
COLOR_OPTION = Annotated[bool, typer.Option("--color/--no-color", help="Toggle colour output.")]
DEBUG_OPTION = Annotated[bool, typer.Option("--debug", help="Show debug messages.")]


@dataclass(slots=True)
class DiffSourceOptions:
    """Where the diff comes from."""

    root: Path
    diff: str | None = None
    ref: str | None = None
    staged: bool = False

    def build_provider(self) -> DiffModelProvider:
        """Return the provider for these options.

        Raises:
            ConfigurationError: If the options conflict or the ref is invalid.
        """

        if self.diff is not None:
            if self.ref or self.staged:
                raise ConfigurationError("--diff cannot be combined with --ref or --staged")
            return TextDiffProvider(source=self.diff)
        try:
            return GitDiffProvider(self.root, ref=self.ref, staged=self.staged)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc


@dataclass(slots=True)
class RenderingOptions:
    """Console presentation preferences."""

    emoji: bool = True
    color: bool = True
    debug: bool = False

    def build_messages(self) -> HostMessages:
        return HostMessages(use_emoji=self.emoji, use_color=self.color, debug_enabled=self.debug)


def coerce_output_format(value: str) -> OutputFormatLiteral:
    """Lower-case ``value`` and ensure it names a known output format."""

    normalized = value.lower()
    if normalized not in OUTPUT_FORMAT_CHOICES:
        allowed = ", ".join(OUTPUT_FORMAT_CHOICES)
        raise typer.BadParameter(f"--format must be one of: {allowed}")
    return cast(OutputFormatLiteral, normalized)


__all__ = [
    "COLOR_OPTION",
    "COMMAND_OPTION",
    "CONTEXT_OPTION",
    "DEBUG_OPTION",
    "DIFF_OPTION",
    "EMOJI_OPTION",
    "FORMAT_OPTION",
    "JOBS_OPTION",
    "LINTER_OPTION",
    "OUTPUT_FORMAT_CHOICES",
    "REF_OPTION",
    "ROOT_OPTION",
    "SCOPE_OPTION",
    "SHOW_PROGRESS_OPTION",
    "STAGED_OPTION",
    "TIMEOUT_OPTION",
    "DiffSourceOptions",
    "OutputFormatLiteral",
    "RenderingOptions",
    "coerce_output_format",
]
