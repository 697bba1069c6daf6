# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diff parsing, providers and changed-range extraction."""

from __future__ import annotations

from .extractor import extract_change_sets, hunk_range
from .model import DiffFile, DiffHunk, DiffModel, DiffModelProvider
from .parser import parse_unified_diff
from .providers import GitDiffProvider, TextDiffProvider, validate_git_ref

__all__ = [
    "DiffFile",
    "DiffHunk",
    "DiffModel",
    "DiffModelProvider",
    "GitDiffProvider",
    "TextDiffProvider",
    "extract_change_sets",
    "hunk_range",
    "parse_unified_diff",
    "validate_git_ref",
]
