"""Byte sinks accepted by the format engine."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ByteSink(Protocol):
    """Accepts rendered output one byte at a time."""

    def put(self, byte: int) -> bool: ...


class Writable(Protocol):
    def write(self, data: bytes, /) -> object: ...


class StreamSink:
    """Unbounded sink forwarding every byte to a binary stream."""

    __slots__ = ("_stream",)

    def __init__(self, stream: Writable) -> None:
        self._stream = stream

    def put(self, byte: int) -> bool:
        self._stream.write(bytes((byte,)))
        return True


def check_capacity(buffer: bytearray | memoryview | None, capacity: int) -> None:
    """Reject a capacity that is negative or larger than ``buffer``."""

    if capacity < 0:
        raise ValueError(f"capacity must be non-negative, got {capacity}.")
    size = 0 if buffer is None else len(buffer)
    if capacity > size:
        raise ValueError(f"capacity {capacity} exceeds buffer size {size}.")


class BoundedSink:
    """Sink over a fixed-size buffer that drops bytes once it is full.

    ``eos`` is the number of bytes stored so far and never exceeds
    ``capacity``.
    """

    __slots__ = ("_buffer", "capacity", "eos")

    def __init__(self, buffer: bytearray | memoryview | None, capacity: int) -> None:
        check_capacity(buffer, capacity)
        self._buffer = buffer
        self.capacity = capacity
        self.eos = 0

    def put(self, byte: int) -> bool:
        if self.eos >= self.capacity or self._buffer is None:
            return False
        self._buffer[self.eos] = byte
        self.eos += 1
        return True

    @property
    def full(self) -> bool:
        return self.eos >= self.capacity
