# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from diffqa.console import get_console_manager
from diffqa.diff.model import DiffModel
from diffqa.diff.parser import parse_unified_diff
from diffqa.logging import HostMessages
from support import SAMPLE_DIFF


@pytest.fixture(autouse=True)
def _fresh_consoles() -> None:
    """Drop cached Rich consoles so each test writes to its own captured streams."""

    get_console_manager().clear()


@pytest.fixture
def sample_model() -> DiffModel:
    return parse_unified_diff(SAMPLE_DIFF)


@pytest.fixture
def messages() -> HostMessages:
    return HostMessages(use_emoji=False, use_color=False)
