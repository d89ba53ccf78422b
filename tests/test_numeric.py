"""Integer and float renderer tests."""

from __future__ import annotations

import math

import pytest

from minifmt.lib.numeric import (
    FLOAT_TEXT_MAX,
    INT_TEXT_MAX,
    WORK_BUFFER_SIZE,
    render_float,
    render_int,
    write_float,
    write_int,
)


@pytest.mark.parametrize("radix", range(2, 37))
def test_zero_renders_single_digit_in_every_radix(radix: int) -> None:
    assert render_int(0, radix) == "0"


@pytest.mark.parametrize("radix", [8, 10, 16])
@pytest.mark.parametrize(
    "value",
    [1, 7, 8, 255, 4095, 123456789, 2**32 - 1, 2**63 - 1, 2**64 - 1],
)
def test_render_int_reparses_to_same_value(radix: int, value: int) -> None:
    assert int(render_int(value, radix), radix) == value


def test_render_int_uses_uppercase_letters_above_ten() -> None:
    assert render_int(255, 16) == "FF"
    assert render_int(35, 36) == "Z"
    assert render_int(5, 2) == "101"
    assert render_int(2**64 - 1, 2) == "1" * 64


def test_divisor_reserves_digit_positions() -> None:
    assert render_int(5, 10, divisor=100) == "005"
    assert render_int(0, 10, divisor=1000) == "0000"
    assert render_int(7, 10, divisor=1) == "7"


def test_divisor_drops_digits_beyond_its_range() -> None:
    assert render_int(1234, 10, divisor=10) == "34"


@pytest.mark.parametrize(
    "kwargs",
    [
        pytest.param({"num": 1, "radix": 1}, id="radix-too-small"),
        pytest.param({"num": 1, "radix": 37}, id="radix-too-large"),
        pytest.param({"num": -1, "radix": 10}, id="negative"),
        pytest.param({"num": 2**64, "radix": 10}, id="too-wide"),
        pytest.param({"num": 1, "radix": 10, "divisor": -10}, id="negative-divisor"),
    ],
)
def test_render_int_rejects_invalid_operands(kwargs: dict[str, int]) -> None:
    with pytest.raises(ValueError):
        render_int(**kwargs)


def test_write_int_writes_at_offset_and_returns_end() -> None:
    buf = bytearray(b"xx" + bytes(6))

    end = write_int(buf, 2, 42, 10)

    assert end == 4
    assert bytes(buf[:end]) == b"xx42"


def test_write_int_never_grows_the_buffer() -> None:
    buf = bytearray(1)

    with pytest.raises(IndexError):
        write_int(buf, 0, 42, 10)
    assert len(buf) == 1


def test_work_buffer_bound_covers_both_renderers() -> None:
    assert INT_TEXT_MAX == 65
    assert FLOAT_TEXT_MAX == 16
    assert WORK_BUFFER_SIZE == INT_TEXT_MAX + FLOAT_TEXT_MAX


@pytest.mark.parametrize(
    ("value", "precision", "expected"),
    [
        pytest.param(1.5, 9, "1.50000000", id="plain-default"),
        pytest.param(0.0, 9, "0.00000000", id="zero"),
        pytest.param(100.0, 9, "100.000000", id="plain-three-integer-digits"),
        pytest.param(250.0, 3, "250", id="no-point-after-last-digit"),
        pytest.param(5.0, 1, "5", id="single-digit"),
        pytest.param(250.0, 2, "2.5E+2", id="scientific-when-exponent-reaches-precision"),
        pytest.param(250.0, 1, "2E+2", id="scientific-precision-one"),
        pytest.param(1e10, 9, "1.00000000E+10", id="scientific-large"),
        pytest.param(0.5, 9, "5.00000000E-1", id="scientific-small"),
        pytest.param(0.25, 3, "2.50E-1", id="scientific-keeps-fraction-zeros"),
    ],
)
def test_render_float_notation(value: float, precision: int, expected: str) -> None:
    assert render_float(value, precision) == expected


def test_render_float_truncates_instead_of_rounding() -> None:
    assert render_float(9.9375, 3) == "9.93"
    assert render_float(1.99609375, 3) == "1.99"
    assert render_float(9.9999999, 8) == "9.9999999"


@pytest.mark.parametrize(
    ("value", "precision", "expected"),
    [
        pytest.param(0.0999999999, 3, "9.99E-2", id="negative-exponent"),
        pytest.param(99999.9, 3, "9.99E+4", id="positive-exponent"),
        pytest.param(0.0199999, 2, "1.9E-2", id="two-digits"),
    ],
)
def test_scientific_notation_truncates_fraction(
    value: float, precision: int, expected: str
) -> None:
    assert render_float(value, precision) == expected


@pytest.mark.parametrize("precision", [0, -1, 10, 42])
def test_out_of_range_precision_means_nine_digits(precision: int) -> None:
    assert render_float(1.5, precision) == render_float(1.5, 9)


def test_special_values() -> None:
    assert render_float(math.nan) == "NAN"
    assert render_float(math.inf) == "INF"
    assert render_float(-math.inf) == "-INF"


def test_render_float_rejects_negative_magnitude() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        render_float(-1.5)


def test_write_float_fits_in_float_text_bound() -> None:
    buf = bytearray(FLOAT_TEXT_MAX)
    # One slot is reserved for the sign the engine prepends.
    end = write_float(buf, 1, 5e-324, 9)
    assert bytes(buf[1:end]).endswith(b"E-324")
    assert end <= FLOAT_TEXT_MAX
