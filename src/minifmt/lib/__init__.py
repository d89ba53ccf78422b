"""Core minifmt library exports."""

from minifmt.lib.args import ArgKind, ArgumentList, FormatArg
from minifmt.lib.directive import Directive
from minifmt.lib.engine import format, format_into, vformat, vformat_into
from minifmt.lib.numeric import render_float, render_int, write_float, write_int
from minifmt.lib.sinks import BoundedSink, ByteSink, StreamSink

__all__ = [
    "ArgKind",
    "ArgumentList",
    "BoundedSink",
    "ByteSink",
    "Directive",
    "FormatArg",
    "StreamSink",
    "format",
    "format_into",
    "render_float",
    "render_int",
    "vformat",
    "vformat_into",
    "write_float",
    "write_int",
]
