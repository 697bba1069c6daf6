# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich consoles for the two diffqa output streams.

Results (tables, concise lines, JSON documents) go to stdout so they can be
piped or parsed. Progress, warnings and failures go to stderr.
"""

from __future__ import annotations

import sys
from functools import lru_cache
from typing import Final, Literal

from rich.console import Console

ConsoleStream = Literal["results", "messages"]
RESULTS_STREAM: Final[ConsoleStream] = "results"
MESSAGES_STREAM: Final[ConsoleStream] = "messages"


def stream_is_tty(stream: ConsoleStream) -> bool:
    """Return ``True`` when the file behind ``stream`` is a terminal."""

    handle = sys.stderr if stream == MESSAGES_STREAM else sys.stdout
    try:
        return handle.isatty()
    except (AttributeError, ValueError):
        return False


class RichConsoleManager:
    """Hand out one cached Rich :class:`Console` per stream and rendering preference."""

    def __init__(self) -> None:
        self._cache: dict[tuple[ConsoleStream, bool, bool, bool], Console] = {}

    def get(self, stream: ConsoleStream, *, color: bool, emoji: bool) -> Console:
        """Return the console writing to ``stream``.

        Colour is only enabled when requested and the stream is a terminal,
        so redirected output never carries ANSI escapes.

        Args:
            stream: ``"results"`` for stdout or ``"messages"`` for stderr.
            color: Whether colour output is wanted.
            emoji: Whether Rich should render emoji codes.

        Returns:
            Console: Console bound to the requested stream.
        """

        tty = stream_is_tty(stream)
        key = (stream, color, emoji, tty)
        console = self._cache.get(key)
        if console is None:
            colored = color and tty
            console = Console(
                stderr=stream == MESSAGES_STREAM,
                color_system="auto" if colored else None,
                no_color=not colored,
                emoji=emoji,
                highlight=False,
                soft_wrap=True,
            )
            self._cache[key] = console
        return console

    def results(self, *, color: bool, emoji: bool) -> Console:
        return self.get(RESULTS_STREAM, color=color, emoji=emoji)

    def messages(self, *, color: bool, emoji: bool) -> Console:
        return self.get(MESSAGES_STREAM, color=color, emoji=emoji)

    def clear(self) -> None:
        """Forget cached consoles so the next request rebinds to the current streams."""

        self._cache.clear()


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager`."""

    return RichConsoleManager()


__all__ = [
    "MESSAGES_STREAM",
    "RESULTS_STREAM",
    "ConsoleStream",
    "RichConsoleManager",
    "get_console_manager",
    "stream_is_tty",
]
