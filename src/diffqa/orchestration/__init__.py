# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Check orchestration and invocation sessions."""

from __future__ import annotations

from .orchestrator import CheckOrchestrator
from .session import DiffLintSession, RefreshableView, resolve_change_sets

__all__ = ["CheckOrchestrator", "DiffLintSession", "RefreshableView", "resolve_change_sets"]
