# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the diff-scoped lint pipeline."""

from __future__ import annotations

from pathlib import Path


class DiffQAError(Exception):
    """Base class for errors raised by diffqa."""


class PreconditionError(DiffQAError):
    """Raised when an invocation happens outside an active diff context."""


class ConfigurationError(DiffQAError):
    """Raised when configuration input or the requested scope is invalid."""


class FileCheckError(DiffQAError):
    """Raised when checking a single file fails.

    The orchestrator recovers from this error locally: the affected file
    contributes no diagnostics and the run continues with the remaining files.
    """

    def __init__(self, path: str | Path, reason: str) -> None:
        """Initialise the error with the failing path and a reason.

        Args:
            path: File whose check failed.
            reason: Human-readable description of the failure.
        """

        super().__init__(f"{path}: {reason}")
        self.path = str(path)
        self.reason = reason


class TeardownError(DiffQAError):
    """Raised when restoring host state after a run fails."""


__all__ = [
    "ConfigurationError",
    "DiffQAError",
    "FileCheckError",
    "PreconditionError",
    "TeardownError",
]
