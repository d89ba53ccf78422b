"""Rendering operations over command-line style arguments."""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from minifmt.lib.args import ArgumentList
from minifmt.lib.config import FormatterConfig, load_config, resolve_root
from minifmt.lib.engine import vformat, vformat_into
from minifmt.lib.sinks import StreamSink

if TYPE_CHECKING:
    from minifmt.lib.formatting import FormatContext
    from minifmt.lib.sinks import Writable

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RenderFormatInput:
    format: str = ""
    args: tuple[str, ...] = ()
    root: str | None = None


@dataclass(frozen=True, slots=True)
class RenderIntoInput:
    format: str = ""
    args: tuple[str, ...] = ()
    capacity: int = 0
    root: str | None = None


@dataclass(frozen=True, slots=True)
class RenderOutput:
    text: str
    length: int

    def format_text(self, ctx: FormatContext | None = None) -> str:
        _ = ctx
        return self.text


@dataclass(frozen=True, slots=True)
class RenderIntoOutput:
    text: str
    length: int
    capacity: int
    written: int
    truncated: bool

    def format_text(self, ctx: FormatContext | None = None) -> str:
        from minifmt.cli.format_helpers import kv_block

        _ = ctx
        return kv_block(
            [
                ("text", self.text),
                ("length", str(self.length)),
                ("capacity", str(self.capacity)),
                ("written", str(self.written)),
                ("truncated", "yes" if self.truncated else "no"),
            ]
        )


def _resolve_config(root: str | None) -> FormatterConfig:
    explicit = Path(root) if root is not None else None
    return load_config(resolve_root(explicit))


def render_to_stream(payload: RenderFormatInput, stream: Writable) -> int:
    """Stream the rendered bytes of ``payload`` into ``stream``."""

    config = _resolve_config(payload.root)
    length = vformat(
        StreamSink(stream),
        payload.format,
        ArgumentList.from_text(payload.args),
        config=config,
    )
    logger.info("rendered format", length=length, args=len(payload.args))
    return length


def render_format(payload: RenderFormatInput) -> RenderOutput:
    config = _resolve_config(payload.root)
    buffer = io.BytesIO()
    length = vformat(
        StreamSink(buffer),
        payload.format,
        ArgumentList.from_text(payload.args),
        config=config,
    )
    logger.info("rendered format", length=length, args=len(payload.args))
    return RenderOutput(
        text=buffer.getvalue().decode(config.encoding, errors="replace"),
        length=length,
    )


def render_into(payload: RenderIntoInput) -> RenderIntoOutput:
    if payload.capacity < 0:
        raise ValueError(f"Capacity must be non-negative, got {payload.capacity}.")

    config = _resolve_config(payload.root)
    buffer = bytearray(payload.capacity)
    length = vformat_into(
        buffer,
        payload.capacity,
        payload.format,
        ArgumentList.from_text(payload.args),
        config=config,
    )
    written = min(length, payload.capacity - 1) if payload.capacity > 0 else 0
    truncated = length > written
    if truncated:
        logger.info("rendered output truncated", length=length, capacity=payload.capacity)
    return RenderIntoOutput(
        text=bytes(buffer[:written]).decode(config.encoding, errors="replace"),
        length=length,
        capacity=payload.capacity,
        written=written,
        truncated=truncated,
    )
