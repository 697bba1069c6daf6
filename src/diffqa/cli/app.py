# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

import typer

from .config_cmd import config_command
from .lint import lint_command
from .ranges import ranges_command

app = typer.Typer(
    help="Run linters on changed files and keep only diagnostics on changed lines.",
    no_args_is_help=True,
    add_completion=False,
)
app.command("lint")(lint_command)
app.command("ranges")(ranges_command)
app.command("config")(config_command)


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "main"]
