"""Emission of operation results in text, json, or porcelain form."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, cast

from minifmt.lib.formatting import FormatContext, PorcelainRows, TextFormattable
from minifmt.lib.serialization import to_jsonable

if TYPE_CHECKING:
    from typing import TextIO

OutputFormat = Literal["text", "json", "porcelain"]
OUTPUT_FORMATS: tuple[OutputFormat, ...] = ("text", "json", "porcelain")


@dataclass(frozen=True, slots=True)
class OutputConfig:
    format: OutputFormat = "text"
    verbosity: int = 0


def normalize_output_format(
    *,
    requested: str | None,
    json_mode: bool,
    porcelain_mode: bool,
) -> OutputFormat:
    """Resolve the output format; ``--json`` wins over ``--porcelain`` and ``--format``."""

    if json_mode:
        return "json"
    if porcelain_mode:
        return "porcelain"
    if not requested:
        return "text"
    choice = requested.strip().lower()
    if choice not in OUTPUT_FORMATS:
        raise SystemExit(f"--format must be one of: {', '.join(OUTPUT_FORMATS)}")
    return cast("OutputFormat", choice)


def _porcelain_field(value: object) -> str:
    # Strings stay bare so rendered text is not quoted; everything else is JSON.
    if isinstance(value, str):
        return value
    return json.dumps(value, sort_keys=True)


def porcelain_line(row: dict[str, object]) -> str:
    """Render one mapping as sorted, tab-separated ``key=value`` pairs."""

    return "\t".join(f"{key}={_porcelain_field(row[key])}" for key in sorted(row))


def format_porcelain(value: object) -> str:
    if isinstance(value, PorcelainRows):
        rows = [cast("dict[str, object]", to_jsonable(row)) for row in value.porcelain_rows()]
    else:
        payload = to_jsonable(value)
        if not isinstance(payload, dict):
            return _porcelain_field(payload)
        rows = [cast("dict[str, object]", payload)]
    return "\n".join(porcelain_line(row) for row in rows)


def render_output(value: object, config: OutputConfig) -> str:
    if config.format == "json":
        return json.dumps(to_jsonable(value), sort_keys=True)
    if config.format == "porcelain":
        return format_porcelain(value)
    if isinstance(value, TextFormattable):
        return value.format_text(FormatContext(verbosity=config.verbosity))
    return json.dumps(to_jsonable(value), sort_keys=True, indent=2)


def emit(value: object, config: OutputConfig, stream: TextIO | None = None) -> None:
    """Write ``value`` followed by a newline in the configured format."""

    print(render_output(value, config), file=stream or sys.stdout)
