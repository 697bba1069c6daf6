# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in linter command presets."""

from __future__ import annotations

import shlex
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Final

from ..errors import ConfigurationError
from ..models import Diagnostic
from .parsers import OutputParser, parse_pylint_json, parse_ruff_json, parse_text

FILE_PLACEHOLDER: Final[str] = "{file}"
GENERIC_PRESET: Final[str] = "generic"


@dataclass(frozen=True, slots=True)
class LinterPreset:
    """Command template and output parser for one linter."""

    name: str
    argv: tuple[str, ...]
    parser: OutputParser
    ok_codes: frozenset[int] = field(default_factory=lambda: frozenset({0, 1}))

    def build(self, path: str) -> list[str]:
        """Return the command line checking ``path``.

        ``{file}`` placeholders are substituted; when the template has none the
        path is appended as the final argument.
        """

        if any(FILE_PLACEHOLDER in arg for arg in self.argv):
            return [arg.replace(FILE_PLACEHOLDER, path) for arg in self.argv]
        return [*self.argv, path]

    def parse(self, stdout: str) -> list[Diagnostic]:
        return self.parser(stdout, self.name)


PRESETS: Final[Mapping[str, LinterPreset]] = {
    "ruff": LinterPreset(
        name="ruff",
        argv=("ruff", "check", "--output-format=json", "--no-fix", "--force-exclude", FILE_PLACEHOLDER),
        parser=parse_ruff_json,
    ),
    "pylint": LinterPreset(
        name="pylint",
        argv=("pylint", "--output-format=json", "--score=n", FILE_PLACEHOLDER),
        parser=parse_pylint_json,
        ok_codes=frozenset(range(32)),
    ),
    "flake8": LinterPreset(
        name="flake8",
        argv=("flake8", FILE_PLACEHOLDER),
        parser=parse_text,
    ),
    "mypy": LinterPreset(
        name="mypy",
        argv=(
            "mypy",
            "--show-column-numbers",
            "--no-error-summary",
            "--no-color-output",
            "--follow-imports=silent",
            FILE_PLACEHOLDER,
        ),
        parser=parse_text,
    ),
}


def resolve_preset(name: str, command: str | None = None) -> LinterPreset:
    """Return the preset for ``name``, or a generic preset built from ``command``.

    Args:
        name: Preset name such as ``ruff``; ``generic`` requires ``command``.
        command: Custom command template (``{file}`` marks the checked path).
            When supplied it takes precedence over the named preset's command
            while keeping that preset's parser.

    Returns:
        LinterPreset: Resolved preset.

    Raises:
        ConfigurationError: If the preset is unknown or a generic preset has no command.
    """

    key = name.strip().lower()
    if command:
        argv = tuple(shlex.split(command))
        if not argv:
            raise ConfigurationError("linter command must not be empty")
        base = PRESETS.get(key)
        if base is None and key != GENERIC_PRESET:
            raise ConfigurationError(f"unknown linter preset '{name}'")
        if base is None:
            return LinterPreset(name=PurePath(argv[0]).name, argv=argv, parser=parse_text)
        return LinterPreset(name=base.name, argv=argv, parser=base.parser, ok_codes=base.ok_codes)
    if key == GENERIC_PRESET:
        raise ConfigurationError("the generic linter preset requires a command template")
    try:
        return PRESETS[key]
    except KeyError as exc:
        choices = ", ".join(sorted([*PRESETS, GENERIC_PRESET]))
        raise ConfigurationError(f"unknown linter preset '{name}' (expected one of: {choices})") from exc


__all__ = ["FILE_PLACEHOLDER", "GENERIC_PRESET", "PRESETS", "LinterPreset", "resolve_preset"]
