# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command linting only what a diff changed."""

from __future__ import annotations

from pathlib import Path

import typer

from ..config import load_config
from ..console import get_console_manager
from ..linters.command import CommandLinter
from ..linters.presets import resolve_preset
from ..orchestration.session import DiffLintSession
from ..reporting.presenter import ResultPresenter
from ..reporting.views import build_view
from ._cli_models import (
    COLOR_OPTION,
    COMMAND_OPTION,
    CONTEXT_OPTION,
    DEBUG_OPTION,
    DIFF_OPTION,
    EMOJI_OPTION,
    FORMAT_OPTION,
    JOBS_OPTION,
    LINTER_OPTION,
    REF_OPTION,
    ROOT_OPTION,
    SCOPE_OPTION,
    SHOW_PROGRESS_OPTION,
    STAGED_OPTION,
    TIMEOUT_OPTION,
    DiffSourceOptions,
    RenderingOptions,
    coerce_output_format,
)
from .shared import EXIT_CLEAN, EXIT_DIAGNOSTICS, exit_on_error


def lint_command(
    root: ROOT_OPTION = Path("."),
    diff: DIFF_OPTION = None,
    ref: REF_OPTION = None,
    staged: STAGED_OPTION = False,
    scope: SCOPE_OPTION = None,
    context: CONTEXT_OPTION = None,
    linter: LINTER_OPTION = None,
    command: COMMAND_OPTION = None,
    jobs: JOBS_OPTION = None,
    timeout: TIMEOUT_OPTION = None,
    output_format: FORMAT_OPTION = "table",
    show_progress: SHOW_PROGRESS_OPTION = False,
    emoji: EMOJI_OPTION = True,
    color: COLOR_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Lint the files of the active diff and report diagnostics on changed lines."""

    output = coerce_output_format(output_format)
    rendering = RenderingOptions(emoji=emoji, color=color, debug=debug)
    messages = rendering.build_messages()
    root = root.resolve()

    with exit_on_error(messages):
        config = load_config(
            root,
            overrides={
                "default_scope": scope,
                "context_lines": context,
                "linter": linter,
                "command": command,
                "jobs": jobs,
                "check_timeout": timeout,
                "inhibit_messages": False if show_progress else None,
            },
        )
        provider = DiffSourceOptions(root=root, diff=diff, ref=ref, staged=staged).build_provider()
        preset = resolve_preset(config.linter_name, config.command)
        console = get_console_manager().results(color=color, emoji=emoji)
        with CommandLinter(
            preset,
            root=root,
            jobs=config.jobs,
            max_diagnostics=config.max_diagnostics,
            timeout=config.check_timeout,
        ) as engine:
            session = DiffLintSession(provider, engine, config, root=root, messages=messages)
            presenter = ResultPresenter(session)
            session.attach_view(build_view(output, presenter, console, root=root))
            state = session.invoke()

    rows = presenter.rows()
    checked = len(state.change_sets) - len(state.skipped)
    if state.skipped:
        messages.warn(f"{len(state.skipped)} changed file(s) could not be checked")
    if rows:
        messages.fail(f"{len(rows)} diagnostic(s) in {checked} checked file(s)")
    else:
        messages.ok(f"No diagnostics in {checked} checked file(s)")
    raise typer.Exit(code=EXIT_DIAGNOSTICS if rows else EXIT_CLEAN)


__all__ = ["lint_command"]
