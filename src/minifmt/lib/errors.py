"""Argument-list errors raised while a format string is being rendered."""

from __future__ import annotations


class FormatArgumentError(ValueError):
    """An argument cannot be used by the conversion that consumed it."""

    def __init__(self, message: str, *, index: int) -> None:
        super().__init__(f"argument {index}: {message}")
        self.index = index


class MissingArgumentError(FormatArgumentError):
    """The format string consumed more arguments than were supplied."""

    def __init__(self, *, index: int, wanted: str) -> None:
        super().__init__(f"missing {wanted} argument", index=index)
        self.wanted = wanted
