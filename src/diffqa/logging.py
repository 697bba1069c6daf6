# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Host message channel for progress, warnings and failures.

Every message goes to the stderr console so the results stream stays
machine-readable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from rich.console import Console
from rich.text import Text

from .console import MESSAGES_STREAM, get_console_manager, stream_is_tty


@dataclass(frozen=True, slots=True)
class _Level:
    glyph: str
    style: str
    quiet: bool


# quiet levels are dropped while the channel is suppressed
_LEVELS: Final[dict[str, _Level]] = {
    "info": _Level(glyph="ℹ️ ", style="cyan", quiet=True),
    "ok": _Level(glyph="✅ ", style="green", quiet=True),
    "warn": _Level(glyph="⚠️ ", style="yellow", quiet=False),
    "fail": _Level(glyph="❌ ", style="red", quiet=False),
    "debug": _Level(glyph="", style="dim", quiet=False),
}


@dataclass(slots=True)
class HostMessages:
    """Message channel with a global suppress/unsuppress toggle.

    While suppressed, informational and success messages are dropped.
    Warnings, failures and debug output are always shown.

    Attributes:
        use_emoji: Prefix messages with a level glyph.
        use_color: Colour preference; ``None`` follows whether stderr is a terminal.
        debug_enabled: Emit :meth:`debug` messages.
        suppressed: Current suppression state.
    """

    use_emoji: bool = True
    use_color: bool | None = None
    debug_enabled: bool = False
    suppressed: bool = False

    def suppress(self) -> bool:
        """Suppress informational messages and return the previous state."""

        previous = self.suppressed
        self.suppressed = True
        return previous

    def restore(self, previous: bool) -> None:
        """Reinstate the suppression state returned by :meth:`suppress`."""

        self.suppressed = previous

    @property
    def color_enabled(self) -> bool:
        return stream_is_tty(MESSAGES_STREAM) if self.use_color is None else self.use_color

    def _console(self) -> Console:
        return get_console_manager().messages(color=self.color_enabled, emoji=self.use_emoji)

    def _emit(self, level: str, message: str) -> None:
        spec = _LEVELS[level]
        if spec.quiet and self.suppressed:
            return
        prefix = spec.glyph if self.use_emoji else ""
        text = Text(f"{prefix}{message}")
        if self.color_enabled:
            text.stylize(spec.style)
        self._console().print(text)

    def info(self, message: str) -> None:
        self._emit("info", message)

    def ok(self, message: str) -> None:
        self._emit("ok", message)

    def warn(self, message: str) -> None:
        self._emit("warn", message)

    def fail(self, message: str) -> None:
        self._emit("fail", message)

    def debug(self, message: str) -> None:
        if self.debug_enabled:
            self._emit("debug", f"[debug] {message}")

    def section(self, title: str) -> None:
        """Print a heading that introduces the next block of output."""

        console = self._console()
        if self.color_enabled:
            console.rule(title)
        else:
            console.print(f"--- {title} ---", markup=False)


__all__ = ["HostMessages"]
