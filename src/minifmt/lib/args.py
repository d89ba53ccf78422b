"""Tagged argument values consumed in order by the format engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, cast

from minifmt.lib.errors import FormatArgumentError, MissingArgumentError

if TYPE_CHECKING:
    from collections.abc import Iterable

INT_BITS = 32


class ArgKind(StrEnum):
    INT = "int"
    UINT = "uint"
    LONG = "long"
    ULONG = "ulong"
    DOUBLE = "double"
    STRING = "string"
    CHAR = "char"
    # Untyped command-line text, converted when a conversion consumes it.
    TEXT = "text"


_INTEGER_KINDS = frozenset({ArgKind.INT, ArgKind.UINT, ArgKind.LONG, ArgKind.ULONG})


@dataclass(frozen=True, slots=True)
class FormatArg:
    kind: ArgKind
    value: object


def int_arg(value: int) -> FormatArg:
    return FormatArg(ArgKind.INT, value)


def uint_arg(value: int) -> FormatArg:
    return FormatArg(ArgKind.UINT, value)


def long_arg(value: int) -> FormatArg:
    return FormatArg(ArgKind.LONG, value)


def ulong_arg(value: int) -> FormatArg:
    return FormatArg(ArgKind.ULONG, value)


def double_arg(value: float) -> FormatArg:
    return FormatArg(ArgKind.DOUBLE, float(value))


def str_arg(value: str | bytes | None) -> FormatArg:
    return FormatArg(ArgKind.STRING, value)


def char_arg(value: int | str | bytes) -> FormatArg:
    if isinstance(value, (str, bytes)) and len(value) != 1:
        raise ValueError(f"char argument must be a single character, got {value!r}.")
    return FormatArg(ArgKind.CHAR, value)


def text_arg(value: str) -> FormatArg:
    return FormatArg(ArgKind.TEXT, value)


def tag_value(value: object) -> FormatArg:
    """Attach a kind to a plain Python value."""

    if isinstance(value, FormatArg):
        return value
    if isinstance(value, int):
        return FormatArg(ArgKind.INT, int(value))
    if isinstance(value, float):
        return FormatArg(ArgKind.DOUBLE, value)
    if value is None or isinstance(value, (str, bytes, bytearray, memoryview)):
        return FormatArg(ArgKind.STRING, value)
    raise TypeError(f"Unsupported format argument type: {type(value).__name__}")


def wrap_signed(value: int, bits: int) -> int:
    """Reduce ``value`` to a two's complement integer of ``bits`` width."""

    value &= (1 << bits) - 1
    if value >> (bits - 1):
        value -= 1 << bits
    return value


def wrap_unsigned(value: int, bits: int) -> int:
    return value & ((1 << bits) - 1)


def _parse_text_int(text: str) -> int:
    normalized = text.strip()
    lowered = normalized.lower().lstrip("+-")
    if lowered.startswith(("0x", "0o", "0b")):
        return int(normalized, 0)
    if "." in lowered or "e" in lowered or lowered in {"inf", "nan", "infinity"}:
        return int(float(normalized))
    return int(normalized, 10)


class ArgumentList:
    """Ordered argument values, each consumed exactly once."""

    __slots__ = ("_index", "_items")

    def __init__(self, values: Iterable[object] = ()) -> None:
        self._items: tuple[FormatArg, ...] = tuple(tag_value(value) for value in values)
        self._index = 0

    @classmethod
    def from_text(cls, values: Iterable[str]) -> ArgumentList:
        """Build a list of untyped strings, as received from a command line."""

        return cls(text_arg(value) for value in values)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def consumed(self) -> int:
        return self._index

    @property
    def remaining(self) -> int:
        return len(self._items) - self._index

    def _take(self, wanted: str) -> tuple[int, FormatArg]:
        index = self._index
        if index >= len(self._items):
            raise MissingArgumentError(index=index, wanted=wanted)
        self._index = index + 1
        return index, self._items[index]

    def _integer(self, wanted: str) -> int:
        index, arg = self._take(wanted)
        if arg.kind in _INTEGER_KINDS:
            return cast("int", arg.value)
        if arg.kind is ArgKind.CHAR:
            value = arg.value
            if isinstance(value, str):
                return ord(value)
            if isinstance(value, bytes):
                return value[0]
            return cast("int", value)
        if arg.kind is ArgKind.TEXT:
            try:
                return _parse_text_int(str(arg.value))
            except (ValueError, OverflowError) as error:
                raise FormatArgumentError(
                    f"expected {wanted}, got {arg.value!r}", index=index
                ) from error
        raise FormatArgumentError(f"expected {wanted}, got {arg.kind} argument", index=index)

    def next_int(self, *, bits: int = INT_BITS) -> int:
        """Consume one argument as a signed integer of ``bits`` width."""

        return wrap_signed(self._integer("integer"), bits)

    def next_unsigned(self, *, bits: int = INT_BITS) -> int:
        """Consume one argument as an unsigned integer of ``bits`` width."""

        return wrap_unsigned(self._integer("unsigned integer"), bits)

    def next_double(self) -> float:
        index, arg = self._take("double")
        if arg.kind is ArgKind.DOUBLE or arg.kind in _INTEGER_KINDS:
            return float(cast("float", arg.value))
        if arg.kind is ArgKind.TEXT:
            try:
                return float(str(arg.value).strip())
            except ValueError as error:
                raise FormatArgumentError(
                    f"expected double, got {arg.value!r}", index=index
                ) from error
        raise FormatArgumentError(f"expected double, got {arg.kind} argument", index=index)

    def next_string(self, encoding: str) -> bytes | None:
        """Consume one string argument; ``None`` stands for a null pointer."""

        index, arg = self._take("string")
        if arg.kind not in {ArgKind.STRING, ArgKind.TEXT}:
            raise FormatArgumentError(f"expected string, got {arg.kind} argument", index=index)
        value = arg.value
        if value is None:
            return None
        if isinstance(value, str):
            return value.encode(encoding)
        return bytes(cast("bytes", value))

    def next_char(self, encoding: str) -> bytes:
        """Consume one character argument and return its bytes."""

        index, arg = self._take("char")
        value = arg.value
        if arg.kind in _INTEGER_KINDS or (arg.kind is ArgKind.CHAR and isinstance(value, int)):
            return bytes((cast("int", value) & 0xFF,))
        if arg.kind is ArgKind.TEXT:
            return str(value)[:1].encode(encoding)
        if arg.kind in {ArgKind.CHAR, ArgKind.STRING} and isinstance(value, (str, bytes)):
            if len(value) == 1:
                return value.encode(encoding) if isinstance(value, str) else value
        raise FormatArgumentError(f"expected char, got {value!r}", index=index)
