# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Linter engines, presets and output parsers."""

from __future__ import annotations

from .base import CheckCompletion, CompletionListener, LinterEngine
from .command import CommandLinter
from .presets import PRESETS, LinterPreset, resolve_preset

__all__ = [
    "PRESETS",
    "CheckCompletion",
    "CommandLinter",
    "CompletionListener",
    "LinterEngine",
    "LinterPreset",
    "resolve_preset",
]
