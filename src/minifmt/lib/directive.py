"""Parsing of one ``%[-][0][width|*][.precision|*][l|L]<conv>`` directive."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from minifmt.lib.args import ArgumentList

logger = logging.getLogger(__name__)

_MINUS = ord("-")
_ZERO = ord("0")
_NINE = ord("9")
_STAR = ord("*")
_DOT = ord(".")
_LONG_MARKERS = frozenset(b"lL")
_UPPER_A = ord("A")
_UPPER_Z = ord("Z")


class FormatCursor:
    """Forward-only position within an encoded format string."""

    __slots__ = ("_data", "pos")

    def __init__(self, data: bytes) -> None:
        self._data = data
        self.pos = 0

    def next(self) -> int | None:
        if self.pos >= len(self._data):
            return None
        byte = self._data[self.pos]
        self.pos += 1
        return byte

    def peek(self) -> int | None:
        if self.pos >= len(self._data):
            return None
        return self._data[self.pos]


@dataclass(frozen=True, slots=True)
class Directive:
    left_align: bool
    zero_pad: bool
    width: int
    precision: int
    is_long: bool
    conversion: int

    @property
    def conversion_char(self) -> str:
        return chr(self.conversion)


def _read_number(cursor: FormatCursor, args: ArgumentList, field: str) -> tuple[int, int | None]:
    """Accumulate digits and ``*`` values; return the total and the stop byte."""

    total = 0
    while True:
        byte = cursor.next()
        if byte is not None and _ZERO <= byte <= _NINE:
            step = byte - _ZERO
        elif byte == _STAR:
            step = args.next_int()
            if step < 0:
                logger.debug("Negative %s %d taken from argument list.", field, step)
        else:
            return total, byte
        total = total * 10 + step


def parse_directive(cursor: FormatCursor, args: ArgumentList) -> Directive | None:
    """Consume one directive following ``%``.

    Returns ``None`` when the format string ends before a conversion byte.
    """

    left_align = False
    if cursor.peek() == _MINUS:
        cursor.next()
        left_align = True
    zero_pad = False
    if cursor.peek() == _ZERO:
        cursor.next()
        zero_pad = True

    width, byte = _read_number(cursor, args, "width")
    precision = 0
    if byte == _DOT:
        precision, byte = _read_number(cursor, args, "precision")
    if byte is None:
        logger.debug("Format string ended inside a directive at offset %d.", cursor.pos)
        return None

    if byte in _LONG_MARKERS:
        is_long = True
        following = cursor.next()
        if following is not None:
            byte = following
    else:
        is_long = _UPPER_A <= byte <= _UPPER_Z

    return Directive(
        left_align=left_align,
        zero_pad=zero_pad,
        width=width,
        precision=precision,
        is_long=is_long,
        conversion=byte,
    )
