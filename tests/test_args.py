"""Tagged argument list tests."""

from __future__ import annotations

import pytest

from minifmt.lib.args import (
    ArgKind,
    ArgumentList,
    FormatArg,
    char_arg,
    double_arg,
    int_arg,
    str_arg,
    tag_value,
    ulong_arg,
    wrap_signed,
    wrap_unsigned,
)
from minifmt.lib.errors import FormatArgumentError, MissingArgumentError


def test_plain_values_are_tagged_by_python_type() -> None:
    assert tag_value(3) == FormatArg(ArgKind.INT, 3)
    assert tag_value(True) == FormatArg(ArgKind.INT, 1)
    assert tag_value(2.5) == FormatArg(ArgKind.DOUBLE, 2.5)
    assert tag_value("x") == FormatArg(ArgKind.STRING, "x")
    assert tag_value(None) == FormatArg(ArgKind.STRING, None)
    tagged = double_arg(1)
    assert tag_value(tagged) is tagged


def test_unsupported_values_are_rejected() -> None:
    with pytest.raises(TypeError, match="Unsupported format argument type"):
        tag_value(object())


def test_wrapping_follows_twos_complement() -> None:
    assert wrap_signed(2**31, 32) == -(2**31)
    assert wrap_signed(-1, 32) == -1
    assert wrap_signed(2**32 + 5, 32) == 5
    assert wrap_unsigned(-1, 8) == 255
    assert wrap_unsigned(-1, 64) == 2**64 - 1


def test_arguments_are_consumed_in_order() -> None:
    args = ArgumentList([1, "two", 3.0])

    assert args.next_int() == 1
    assert args.next_string("utf-8") == b"two"
    assert args.next_double() == 3.0
    assert args.consumed == 3
    assert args.remaining == 0


def test_missing_argument_reports_position() -> None:
    args = ArgumentList([1])
    args.next_int()

    with pytest.raises(MissingArgumentError) as excinfo:
        args.next_int()

    assert excinfo.value.index == 1
    assert "missing integer argument" in str(excinfo.value)


def test_kind_mismatch_is_rejected() -> None:
    with pytest.raises(FormatArgumentError, match="expected integer"):
        ArgumentList(["x"]).next_int()
    with pytest.raises(FormatArgumentError, match="expected string"):
        ArgumentList([5]).next_string("utf-8")
    with pytest.raises(FormatArgumentError, match="expected double"):
        ArgumentList([str_arg("1.5")]).next_double()


def test_integers_are_accepted_where_a_double_is_wanted() -> None:
    assert ArgumentList([int_arg(2)]).next_double() == 2.0


def test_explicit_tags_keep_their_value() -> None:
    args = ArgumentList([ulong_arg(2**64 - 1), char_arg("A"), char_arg(0x141)])

    assert args.next_unsigned(bits=64) == 2**64 - 1
    assert args.next_char("utf-8") == b"A"
    assert args.next_char("utf-8") == b"A"


def test_char_arg_requires_one_character() -> None:
    with pytest.raises(ValueError, match="single character"):
        char_arg("ab")


def test_char_from_string_value_uses_encoding() -> None:
    assert ArgumentList(["é"]).next_char("utf-8") == "é".encode()
    with pytest.raises(FormatArgumentError, match="expected char"):
        ArgumentList(["ab"]).next_char("utf-8")


def test_bytes_and_null_strings() -> None:
    args = ArgumentList([b"raw", None, bytearray(b"ba")])

    assert args.next_string("utf-8") == b"raw"
    assert args.next_string("utf-8") is None
    assert args.next_string("utf-8") == b"ba"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        pytest.param("12", 12, id="decimal"),
        pytest.param(" -3 ", -3, id="negative"),
        pytest.param("0x1F", 31, id="hex"),
        pytest.param("-0x10", -16, id="negative-hex"),
        pytest.param("0o17", 15, id="octal"),
        pytest.param("2.9", 2, id="float-truncates"),
    ],
)
def test_text_arguments_convert_to_integers(text: str, expected: int) -> None:
    assert ArgumentList.from_text([text]).next_int() == expected


def test_text_arguments_convert_on_demand() -> None:
    args = ArgumentList.from_text(["1.5", "hello", "hello", "4294967295"])

    assert args.next_double() == 1.5
    assert args.next_string("utf-8") == b"hello"
    assert args.next_char("utf-8") == b"h"
    assert args.next_int() == -1


def test_unparsable_text_raises_format_argument_error() -> None:
    with pytest.raises(FormatArgumentError, match="argument 0: expected integer"):
        ArgumentList.from_text(["abc"]).next_int()
    with pytest.raises(FormatArgumentError, match="expected double"):
        ArgumentList.from_text(["abc"]).next_double()
