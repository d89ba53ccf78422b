"""Format string interpreter.

The engine copies literal bytes to a :class:`~minifmt.lib.sinks.ByteSink` and
expands every ``%`` directive through the integer and float renderers. It
never rejects a format string: unknown conversions are emitted literally and
a directive cut short by the end of the string is dropped. The returned
count is the number of bytes an unbounded sink would have received.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeAlias

from minifmt.lib.args import INT_BITS, ArgumentList
from minifmt.lib.config.settings import FormatterConfig
from minifmt.lib.directive import Directive, FormatCursor, parse_directive
from minifmt.lib.numeric import WORK_BUFFER_SIZE, write_float, write_int
from minifmt.lib.sinks import BoundedSink, check_capacity

if TYPE_CHECKING:
    from collections.abc import Iterable

    from minifmt.lib.sinks import ByteSink

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = FormatterConfig()

_PERCENT = ord("%")
_MINUS = ord("-")
_SPACE = ord(" ")
_ZERO = ord("0")
_NUL = 0

_NULL_TEXT = b"(null)"
STRING_PRECISION_DEFAULT = 32767

_CHAR = ord("c")
_STRING = ord("s")
_FLOAT = ord("f")
_SIGNED = frozenset(b"dDiI")
_UNSIGNED_RADIX: dict[int, int] = {
    ord("x"): 16,
    ord("X"): 16,
    ord("u"): 10,
    ord("U"): 10,
    ord("o"): 8,
    ord("O"): 8,
}

FormatArgs: TypeAlias = "ArgumentList | Iterable[object]"
Rendered: TypeAlias = "bytes | memoryview"


class _CountingOutput:
    __slots__ = ("_sink", "count")

    def __init__(self, sink: ByteSink) -> None:
        self._sink = sink
        self.count = 0

    def put(self, byte: int) -> None:
        self._sink.put(byte)
        self.count += 1

    def put_all(self, data: Rendered) -> None:
        for byte in data:
            self.put(byte)

    def fill(self, byte: int, times: int) -> None:
        for _ in range(times):
            self.put(byte)


def _string_text(value: bytes | None, precision: int) -> bytes:
    if value is None:
        logger.debug("Null string argument rendered as %r.", _NULL_TEXT)
        value = _NULL_TEXT
    terminator = value.find(_NUL)
    if terminator >= 0:
        value = value[:terminator]
    if precision == 0:
        precision = STRING_PRECISION_DEFAULT
    if precision < 0:
        return b""
    return value[:precision]


def _render(
    directive: Directive,
    args: ArgumentList,
    work: bytearray,
    config: FormatterConfig,
) -> tuple[Rendered, int]:
    """Render one directive into ``work``; return the text and its filler byte."""

    conversion = directive.conversion
    filler = _ZERO if directive.zero_pad and not directive.left_align else _SPACE
    bits = config.long_bits if directive.is_long else INT_BITS
    pos = 0

    if conversion == _CHAR:
        return args.next_char(config.encoding), _SPACE
    if conversion == _STRING:
        return _string_text(args.next_string(config.encoding), directive.precision), _SPACE

    if conversion in _SIGNED:
        value = args.next_int(bits=bits)
        if value < 0:
            work[pos] = _MINUS
            pos += 1
            value = -value
        pos = write_int(work, pos, value, 10)
    elif conversion == _FLOAT and config.float_support:
        number = args.next_double()
        if number < 0:
            work[pos] = _MINUS
            pos += 1
            number = -number
        pos = write_float(work, pos, number, directive.precision)
    elif conversion in _UNSIGNED_RADIX:
        value = args.next_unsigned(bits=bits)
        pos = write_int(work, pos, value, _UNSIGNED_RADIX[conversion])
    else:
        if conversion != _PERCENT:
            logger.debug("Unknown conversion %r emitted literally.", directive.conversion_char)
        work[pos] = conversion
        pos += 1
    return memoryview(work)[:pos], filler


def _emit_field(out: _CountingOutput, directive: Directive, text: Rendered, filler: int) -> None:
    pad = directive.width - len(text)
    if pad <= 0:
        out.put_all(text)
        return
    if directive.left_align:
        out.put_all(text)
        out.fill(filler, pad)
        return
    if filler == _ZERO and len(text) > 0 and text[0] == _MINUS:
        out.put(_MINUS)
        text = text[1:]
    out.fill(filler, pad)
    out.put_all(text)


def _format_bytes(fmt: str | bytes, encoding: str) -> bytes:
    if isinstance(fmt, str):
        return fmt.encode(encoding)
    return bytes(fmt)


def vformat(
    sink: ByteSink,
    fmt: str | bytes,
    args: FormatArgs,
    *,
    config: FormatterConfig | None = None,
) -> int:
    """Render ``fmt`` with ``args`` to ``sink``; return the number of bytes emitted."""

    config = config or _DEFAULT_CONFIG
    arguments = args if isinstance(args, ArgumentList) else ArgumentList(args)
    cursor = FormatCursor(_format_bytes(fmt, config.encoding))
    out = _CountingOutput(sink)
    work = bytearray(WORK_BUFFER_SIZE)

    while True:
        byte = cursor.next()
        if byte is None:
            return out.count
        if byte != _PERCENT:
            out.put(byte)
            continue

        directive = parse_directive(cursor, arguments)
        if directive is None:
            return out.count
        text, filler = _render(directive, arguments, work, config)
        _emit_field(out, directive, text, filler)


def format(
    sink: ByteSink,
    fmt: str | bytes,
    *args: object,
    config: FormatterConfig | None = None,
) -> int:
    """Render ``fmt`` with positional ``args`` to ``sink``."""

    return vformat(sink, fmt, args, config=config)


def vformat_into(
    buffer: bytearray | memoryview | None,
    capacity: int,
    fmt: str | bytes,
    args: FormatArgs,
    *,
    config: FormatterConfig | None = None,
) -> int:
    """Render into ``buffer`` like ``vsnprintf``.

    At most ``capacity - 1`` bytes are stored, followed by a NUL byte unless
    ``capacity`` is 0, in which case ``buffer`` is not touched. The return
    value is the untruncated length, so ``result >= capacity`` signals that
    the output was cut.
    """

    check_capacity(buffer, capacity)
    sink = BoundedSink(buffer, capacity - 1 if capacity > 0 else 0)
    try:
        length = vformat(sink, fmt, args, config=config)
    finally:
        # Terminate whatever was stored, also when an argument error escapes.
        if buffer is not None and sink.eos < capacity:
            buffer[sink.eos] = _NUL
    if length > sink.eos:
        logger.debug("Output truncated to %d of %d bytes.", sink.eos, length)
    return length


def format_into(
    buffer: bytearray | memoryview | None,
    capacity: int,
    fmt: str | bytes,
    *args: object,
    config: FormatterConfig | None = None,
) -> int:
    """Render ``fmt`` with positional ``args`` into ``buffer``."""

    return vformat_into(buffer, capacity, fmt, args, config=config)
