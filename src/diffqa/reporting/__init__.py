# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Result presentation and console views."""

from __future__ import annotations

from .presenter import Location, ResultPresenter, ResultRow, compare, jump_target, row_sort_key
from .views import ConciseView, JsonView, OutputFormat, ResultsView, TableView, build_view

__all__ = [
    "ConciseView",
    "JsonView",
    "Location",
    "OutputFormat",
    "ResultPresenter",
    "ResultRow",
    "ResultsView",
    "TableView",
    "build_view",
    "compare",
    "jump_target",
    "row_sort_key",
]
