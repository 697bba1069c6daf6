# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Exit codes and error translation shared by CLI commands."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Final

import typer

from ..errors import DiffQAError
from ..logging import HostMessages

EXIT_CLEAN: Final[int] = 0
EXIT_DIAGNOSTICS: Final[int] = 1
EXIT_USAGE: Final[int] = 2


@contextmanager
def exit_on_error(messages: HostMessages) -> Iterator[None]:
    """Report diffqa failures raised in the block and exit with status 2.

    Args:
        messages: Channel used to print the failure.

    Raises:
        typer.Exit: When a :class:`DiffQAError` escapes the block.
    """

    try:
        yield
    except DiffQAError as exc:
        messages.fail(str(exc))
        raise typer.Exit(code=EXIT_USAGE) from exc


__all__ = ["EXIT_CLEAN", "EXIT_DIAGNOSTICS", "EXIT_USAGE", "exit_on_error"]
