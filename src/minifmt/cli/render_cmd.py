"""CLI commands under ``minifmt render``."""

from __future__ import annotations

import sys
from collections.abc import Callable
from functools import partial
from typing import TYPE_CHECKING, Annotated, Any

from cyclopts import Parameter

from minifmt.lib.ops.render import (
    RenderFormatInput,
    RenderIntoInput,
    render_format,
    render_into,
    render_to_stream,
)

if TYPE_CHECKING:
    from cyclopts import App

Emitter = Callable[[Any], None]
TextModeProbe = Callable[[], bool]

LITERAL_ARGS_NOTE = (
    "Put arguments that start with '-' (negative numbers, a literal -v) after '--'."
)
RENDER_FORMAT_HELP = f"Render a format string with arguments. {LITERAL_ARGS_NOTE}"
RENDER_INTO_HELP = (
    f"Render a format string into a fixed-capacity buffer. {LITERAL_ARGS_NOTE}"
)


def _render_format(emit: Emitter, text_mode: TextModeProbe, fmt: str, *args: str) -> None:
    payload = RenderFormatInput(format=fmt, args=tuple(args))
    if text_mode():
        # Raw bytes, no trailing newline, like printf(1).
        render_to_stream(payload, sys.stdout.buffer)
        sys.stdout.buffer.flush()
        return
    emit(render_format(payload))


def _render_into(
    emit: Emitter,
    fmt: str,
    *args: str,
    capacity: Annotated[
        int,
        Parameter(name="--capacity", help="Buffer size in bytes, including the NUL byte."),
    ] = 0,
) -> None:
    emit(render_into(RenderIntoInput(format=fmt, args=tuple(args), capacity=capacity)))


def register_render_commands(app: App, emit: Emitter, text_mode: TextModeProbe) -> None:
    commands: tuple[tuple[str, Callable[..., None], str], ...] = (
        ("format", partial(_render_format, emit, text_mode), RENDER_FORMAT_HELP),
        ("into", partial(_render_into, emit), RENDER_INTO_HELP),
    )
    for name, handler, help_text in commands:
        handler.__name__ = f"cmd_render_{name}"
        app.command(handler, name=name, help=help_text)
