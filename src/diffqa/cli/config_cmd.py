# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command printing the effective configuration."""

from __future__ import annotations

from pathlib import Path

from ..config import load_config
from ..console import get_console_manager
from ._cli_models import COLOR_OPTION, EMOJI_OPTION, ROOT_OPTION, RenderingOptions
from .shared import exit_on_error


def config_command(
    root: ROOT_OPTION = Path("."),
    emoji: EMOJI_OPTION = True,
    color: COLOR_OPTION = True,
) -> None:
    """Print the configuration resolved for ``--root`` as JSON."""

    messages = RenderingOptions(emoji=emoji, color=color).build_messages()
    with exit_on_error(messages):
        config = load_config(root.resolve())
    console = get_console_manager().results(color=color, emoji=emoji)
    console.print(config.model_dump_json(indent=2), markup=False, highlight=False, soft_wrap=True)


__all__ = ["config_command"]
