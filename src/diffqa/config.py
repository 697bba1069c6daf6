# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders for diff-scoped lint runs."""

from __future__ import annotations

import math
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError
from .models import Scope

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PROJECT_CONFIG_FILENAME: Final[str] = ".diffqa.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "diffqa"
DEFAULT_MAX_DIAGNOSTICS: Final[int] = 400
DEFAULT_LINTER: Final[str] = "ruff"
GENERIC_LINTER: Final[str] = "generic"


def default_parallel_jobs() -> int:
    """Return 75% of available CPU cores (minimum of 1)."""

    cores = os.cpu_count() or 1
    return max(1, math.floor(cores * 0.75))


class DiffScopeConfig(BaseModel):
    """Caller-facing options controlling a diff-scoped lint invocation."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    default_scope: Scope = Scope.LINES
    context_lines: int = Field(default=0, ge=0)
    inhibit_messages: bool = True
    linter: str | None = None
    command: str | None = None
    jobs: int = Field(default_factory=default_parallel_jobs, ge=1)
    check_timeout: float | None = Field(default=None, gt=0)
    max_diagnostics: int = Field(default=DEFAULT_MAX_DIAGNOSTICS, ge=1)

    @field_validator("default_scope", mode="before")
    @classmethod
    def _parse_scope(cls, value: Scope | str) -> Scope:
        """Accept scope names case-insensitively."""

        return Scope.parse(value)

    def effective_context(self, scope: Scope) -> int:
        """Return the context width applied for ``scope`` (always ``0`` for files)."""

        return self.context_lines if scope is Scope.LINES else 0

    @property
    def linter_name(self) -> str:
        """Return the linter preset to use.

        An explicit ``linter`` wins; otherwise a custom ``command`` selects the
        generic text preset and the default is Ruff.
        """

        if self.linter:
            return self.linter
        return GENERIC_LINTER if self.command else DEFAULT_LINTER


def _normalise_keys(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``payload`` with dashed TOML keys converted to attribute names."""

    return {str(key).replace("-", "_"): value for key, value in payload.items()}


def _read_toml(path: Path) -> dict[str, Any]:
    """Load the TOML document at ``path``.

    Raises:
        ConfigurationError: If the document cannot be read or parsed.
    """

    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"unable to read configuration at {path}: {exc}") from exc


def _pyproject_section(path: Path) -> dict[str, Any]:
    """Return the ``[tool.diffqa]`` table of ``pyproject.toml`` when present."""

    if not path.is_file():
        return {}
    tool_section = _read_toml(path).get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigurationError(f"[tool.{PYPROJECT_SECTION_KEY}] in {path} must be a table")
    return _normalise_keys(section)


def _project_file(path: Path) -> dict[str, Any]:
    """Return the contents of ``.diffqa.toml`` when present."""

    if not path.is_file():
        return {}
    return _normalise_keys(_read_toml(path))


def build_config(payload: Mapping[str, Any]) -> DiffScopeConfig:
    """Validate ``payload`` into a :class:`DiffScopeConfig`.

    Raises:
        ConfigurationError: If any value is invalid.
    """

    try:
        return DiffScopeConfig.model_validate(dict(payload))
    except ValidationError as exc:
        raise ConfigurationError(f"invalid diffqa configuration: {exc}") from exc


def load_config(root: Path, overrides: Mapping[str, Any] | None = None) -> DiffScopeConfig:
    """Load configuration for ``root`` honouring source precedence.

    Sources are merged from lowest to highest precedence: built-in defaults,
    ``[tool.diffqa]`` in ``pyproject.toml``, ``.diffqa.toml`` and finally
    ``overrides`` (``None`` values are ignored so unset CLI flags do not
    clobber file settings).

    Args:
        root: Project root containing the configuration files.
        overrides: Explicit values supplied by the caller.

    Returns:
        DiffScopeConfig: Effective configuration.

    Raises:
        ConfigurationError: If a source cannot be read or holds invalid values.
    """

    merged: dict[str, Any] = {}
    merged.update(_pyproject_section(root / PYPROJECT_FILENAME))
    merged.update(_project_file(root / PROJECT_CONFIG_FILENAME))
    if overrides:
        merged.update({key: value for key, value in overrides.items() if value is not None})
    return build_config(merged)


__all__ = [
    "DEFAULT_MAX_DIAGNOSTICS",
    "DiffScopeConfig",
    "build_config",
    "default_parallel_jobs",
    "load_config",
]
