"""Minimal printf-style formatted output over byte sinks."""

from minifmt.lib import (
    ArgKind,
    ArgumentList,
    BoundedSink,
    ByteSink,
    FormatArg,
    StreamSink,
    format,
    format_into,
    render_float,
    render_int,
    vformat,
    vformat_into,
)

__version__ = "0.1.0"

__all__ = [
    "ArgKind",
    "ArgumentList",
    "BoundedSink",
    "ByteSink",
    "FormatArg",
    "StreamSink",
    "__version__",
    "format",
    "format_into",
    "render_float",
    "render_int",
    "vformat",
    "vformat_into",
]
