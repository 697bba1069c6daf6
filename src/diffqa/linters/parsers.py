# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers turning linter output into :class:`~diffqa.models.Diagnostic` lists."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Final, cast

from ..models import Diagnostic
from ..severity import Severity, coerce_severity, severity_from_code

type JsonScalar = str | int | float | bool | None
type JsonValue = JsonScalar | list[JsonValue] | dict[str, JsonValue]

OutputParser = Callable[[str, str], list[Diagnostic]]

TEXT_DIAGNOSTIC_RE: Final[re.Pattern[str]] = re.compile(
    r"^(?P<file>[^:\n]+?):(?P<line>\d+)(?::(?P<column>\d+))?:\s*"
    r"(?:(?P<severity>error|warning|note|notice|info|fatal)\s*:\s*)?"
    r"(?:(?P<code>[A-Z]{1,4}\d{2,5})\s+)?"
    r"(?P<message>.*\S)\s*$",
    re.IGNORECASE,
)
_TRAILING_CODE_RE: Final[re.Pattern[str]] = re.compile(r"\s+\[(?P<code>[\w.-]+)\]$")


def _load_json(stdout: str) -> JsonValue:
    """Decode ``stdout`` as JSON, treating blank output as an empty list.

    Raises:
        ValueError: If ``stdout`` is not valid JSON.
    """

    stripped = stdout.strip()
    if not stripped:
        return []
    try:
        return cast(JsonValue, json.loads(stripped))
    except json.JSONDecodeError as exc:
        raise ValueError(f"linter output is not valid JSON: {exc}") from exc


def iter_dicts(value: JsonValue) -> Iterator[Mapping[str, JsonValue]]:
    """Yield mapping items from ``value`` when it is a sequence of dict-like objects."""

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        for item in value:
            if isinstance(item, Mapping):
                yield item


def _optional_int(value: JsonValue | None) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _optional_str(value: JsonValue | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _line(value: JsonValue | None) -> int | None:
    line = _optional_int(value)
    return line if line is not None and line >= 1 else None


def parse_ruff_json(stdout: str, tool: str = "ruff") -> list[Diagnostic]:
    """Parse ``ruff check --output-format=json`` output.

    Args:
        stdout: Raw JSON emitted by Ruff.
        tool: Tool name recorded on each diagnostic.

    Returns:
        list[Diagnostic]: Diagnostics in report order.
    """

    payload = _load_json(stdout)
    source: JsonValue = payload.get("diagnostics", []) if isinstance(payload, dict) else payload
    results: list[Diagnostic] = []
    for item in iter_dicts(source):
        location = item.get("location")
        location_map = location if isinstance(location, Mapping) else {}
        code = _optional_str(item.get("code"))
        results.append(
            Diagnostic(
                file=_optional_str(item.get("filename")),
                line=_line(location_map.get("row")),
                column=_optional_int(location_map.get("column")),
                severity=severity_from_code(code) if code else Severity.ERROR,
                message=_optional_str(item.get("message")) or "",
                code=code,
                tool=tool,
            )
        )
    return results


def parse_pylint_json(stdout: str, tool: str = "pylint") -> list[Diagnostic]:
    """Parse ``pylint --output-format=json`` output.

    Pylint columns are 0-based; they are shifted to the 1-based convention
    used by every other parser.
    """

    results: list[Diagnostic] = []
    for item in iter_dicts(_load_json(stdout)):
        column = _optional_int(item.get("column"))
        symbol = _optional_str(item.get("symbol"))
        results.append(
            Diagnostic(
                file=_optional_str(item.get("path")) or _optional_str(item.get("module")),
                line=_line(item.get("line")),
                column=column + 1 if column is not None else None,
                severity=coerce_severity(_optional_str(item.get("type"))),
                message=_optional_str(item.get("message")) or "",
                code=symbol or _optional_str(item.get("message-id")),
                tool=tool,
            )
        )
    return results


def parse_text(stdout: str, tool: str = "generic") -> list[Diagnostic]:
    """Parse ``path:line[:col]: [severity:] [CODE] message`` lines.

    This covers flake8, mypy, pycodestyle and most compiler-style output.
    Lines that do not match are ignored. A trailing ``[code]`` (mypy error
    codes) is used as the rule id when no leading code is present.
    """

    results: list[Diagnostic] = []
    for raw_line in stdout.splitlines():
        match = TEXT_DIAGNOSTIC_RE.match(raw_line.strip())
        if not match:
            continue
        message = match.group("message")
        code = match.group("code")
        if code is None:
            trailing = _TRAILING_CODE_RE.search(message)
            if trailing:
                code = trailing.group("code")
                message = message[: trailing.start()]
        severity_text = match.group("severity")
        severity = coerce_severity(severity_text) if severity_text else severity_from_code(code)
        column = match.group("column")
        results.append(
            Diagnostic(
                file=match.group("file").strip(),
                line=_line(int(match.group("line"))),
                column=int(column) if column is not None else None,
                severity=severity,
                message=message.strip(),
                code=code,
                tool=tool,
            )
        )
    return results


__all__ = [
    "OutputParser",
    "TEXT_DIAGNOSTIC_RE",
    "iter_dicts",
    "parse_pylint_json",
    "parse_ruff_json",
    "parse_text",
]
