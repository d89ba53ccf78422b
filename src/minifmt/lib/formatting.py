"""Protocols and context for rendering operation outputs on the command line.

Lives in the lib layer so operation outputs (lib/) and CLI code (cli/) can
share it without lib -> cli imports.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class FormatContext:
    """Parameters passed to text formatters."""

    verbosity: int = 0


@runtime_checkable
class TextFormattable(Protocol):
    """Output with a human-readable text form."""

    def format_text(self, ctx: FormatContext | None = None) -> str: ...


@runtime_checkable
class PorcelainRows(Protocol):
    """Output that spans several porcelain lines, one mapping per line."""

    def porcelain_rows(self) -> list[dict[str, object]]: ...
