"""Integer and floating point to text conversion.

Both renderers write ASCII bytes into a caller-owned working buffer by index
and return the position just past the last byte written. The buffer is never
grown: writing past its end raises ``IndexError``.
"""

from __future__ import annotations

import math

MAX_LONG_BITS = 64
# One digit per bit in radix 2.
INT_DIGITS_MAX = MAX_LONG_BITS
# "-" + digits.
INT_TEXT_MAX = 1 + INT_DIGITS_MAX

FLOAT_PRECISION = 9
# "-" + "d" + "." + 8 fraction digits + "E" + sign + 3 exponent digits.
FLOAT_TEXT_MAX = 1 + 1 + 1 + (FLOAT_PRECISION - 1) + 1 + 1 + 3

WORK_BUFFER_SIZE = INT_TEXT_MAX + FLOAT_TEXT_MAX

_DIGITS = b"0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_POW10: tuple[int, ...] = tuple(10**exp for exp in range(1, FLOAT_PRECISION + 1))

_DOT = ord(".")
_MINUS = ord("-")
_PLUS = ord("+")
_EXP = ord("E")
_ZERO = ord("0")


def _check_int_operand(value: int, name: str) -> None:
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}.")
    if value.bit_length() > MAX_LONG_BITS:
        raise ValueError(f"{name} does not fit in {MAX_LONG_BITS} bits: {value}.")


def write_int(buf: bytearray, pos: int, num: int, radix: int, divisor: int = 0) -> int:
    """Write ``num`` in ``radix`` at ``buf[pos]``, most significant digit first.

    When ``divisor`` is non-zero it decides how many digit positions are
    produced (one per ``radix`` digit of ``divisor``), so leading zeros are
    kept and digits of ``num`` beyond that range are dropped.
    """

    if not 2 <= radix <= 36:
        raise ValueError(f"radix must be between 2 and 36, got {radix}.")
    _check_int_operand(num, "num")
    _check_int_operand(divisor, "divisor")

    scratch = bytearray(INT_DIGITS_MAX)
    end = INT_DIGITS_MAX
    start = end
    value = num
    span = divisor if divisor != 0 else num
    while True:
        start -= 1
        scratch[start] = _DIGITS[value % radix]
        value //= radix
        span //= radix
        if span == 0:
            break

    for index in range(start, end):
        buf[pos] = scratch[index]
        pos += 1
    return pos


def render_int(num: int, radix: int = 10, divisor: int = 0) -> str:
    """Return ``num`` as digits in ``radix``."""

    buf = bytearray(INT_DIGITS_MAX)
    end = write_int(buf, 0, num, radix, divisor)
    return buf[:end].decode("ascii")


def _write_ascii(buf: bytearray, pos: int, text: bytes) -> int:
    for byte in text:
        buf[pos] = byte
        pos += 1
    return pos


def write_float(buf: bytearray, pos: int, num: float, precision: int) -> int:
    """Write ``num`` with ``precision`` significant digits at ``buf[pos]``.

    Values whose leading digit sits between exponent 0 and ``precision - 1``
    are written in plain notation, everything else as ``d.ddd...E+nn``.
    Digits are truncated, never rounded.
    """

    if math.isnan(num):
        return _write_ascii(buf, pos, b"NAN")
    if math.isinf(num):
        return _write_ascii(buf, pos, b"-INF" if num < 0 else b"INF")
    if num < 0:
        raise ValueError(f"num must be non-negative, got {num!r}.")

    exponent = 0
    if num != 0:
        while num >= 10.0:
            num /= 10.0
            exponent += 1
        while num < 1.0:
            num *= 10.0
            exponent -= 1

    if precision <= 0 or precision > FLOAT_PRECISION:
        precision = FLOAT_PRECISION

    if 0 <= exponent < precision:
        while precision > 0:
            digit = int(num)
            buf[pos] = _ZERO + digit
            pos += 1
            if exponent == 0 and precision > 1:
                buf[pos] = _DOT
                pos += 1
            num -= digit
            num *= 10
            exponent -= 1
            precision -= 1
        return pos

    whole = int(num)
    pos = write_int(buf, pos, whole, 10)
    if precision > 1:
        scale = _POW10[precision - 2]
        buf[pos] = _DOT
        pos += 1
        fraction = int((num - whole) * scale)
        pos = write_int(buf, pos, fraction, 10, scale // 10)

    buf[pos] = _EXP
    pos += 1
    if exponent >= 0:
        buf[pos] = _PLUS
    else:
        buf[pos] = _MINUS
        exponent = -exponent
    pos += 1
    return write_int(buf, pos, exponent, 10)


def render_float(num: float, precision: int = FLOAT_PRECISION) -> str:
    """Return ``num`` rendered by :func:`write_float`."""

    buf = bytearray(FLOAT_TEXT_MAX)
    end = write_float(buf, 0, num, precision)
    return buf[:end].decode("ascii")
