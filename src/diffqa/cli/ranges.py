# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command listing the changed-line ranges of the active diff."""

from __future__ import annotations

from pathlib import Path

from rich.table import Table

from ..config import load_config
from ..console import get_console_manager
from ..models import ChangedRange, Scope
from ..orchestration.session import resolve_change_sets
from ..scope import require_scope
from ._cli_models import (
    COLOR_OPTION,
    CONTEXT_OPTION,
    DEBUG_OPTION,
    DIFF_OPTION,
    EMOJI_OPTION,
    REF_OPTION,
    ROOT_OPTION,
    SCOPE_OPTION,
    STAGED_OPTION,
    DiffSourceOptions,
    RenderingOptions,
)
from .shared import exit_on_error


def _describe(changed: ChangedRange) -> str:
    if changed.end is None:
        return f"{changed.start}-"
    if changed.end == changed.start:
        return str(changed.start)
    return f"{changed.start}-{changed.end}"


def ranges_command(
    root: ROOT_OPTION = Path("."),
    diff: DIFF_OPTION = None,
    ref: REF_OPTION = None,
    staged: STAGED_OPTION = False,
    scope: SCOPE_OPTION = None,
    context: CONTEXT_OPTION = None,
    emoji: EMOJI_OPTION = True,
    color: COLOR_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Show which lines of each changed file count as changed."""

    messages = RenderingOptions(emoji=emoji, color=color, debug=debug).build_messages()
    root = root.resolve()
    with exit_on_error(messages):
        config = load_config(root, overrides={"default_scope": scope, "context_lines": context})
        provider = DiffSourceOptions(root=root, diff=diff, ref=ref, staged=staged).build_provider()
        active = require_scope(config.default_scope)
        change_sets = resolve_change_sets(provider, config, active)

    messages.section(f"Changed files ({active.value} scope, context {config.effective_context(active)})")
    if not change_sets:
        messages.ok("The diff lists no changed files")
        return
    table = Table(show_header=True, header_style="bold")
    table.add_column("File", overflow="fold")
    table.add_column("Changed lines")
    for change_set in change_sets:
        if active is Scope.FILES:
            described = "whole file"
        else:
            described = ", ".join(_describe(changed) for changed in change_set.ranges) or "-"
        table.add_row(change_set.path, described)
    get_console_manager().results(color=color, emoji=emoji).print(table)


__all__ = ["ranges_command"]
