"""
jsonscrub_core.buffering
~~~~~~~~~~~~~~~~~~~~~~~~
Output buffering for the transcoder.

:func:`buffered_writer` batches small writes into ``size``-byte blocks and
flushes on every exit path, including exceptions, so output produced
before an error still reaches the sink.  The sink may then hold a truncated
JSON fragment; nothing is retracted.

For in-memory transcoding :func:`reuse_scratch` provides the equivalent
contract over a caller-owned ``bytearray``.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol

DEFAULT_BUFFER_SIZE = 4096


class ByteSink(Protocol):
    """Anything with ``write(bytes)``; ``flush()`` is used when present."""

    def write(self, data: bytes, /) -> Any: ...


class OutputBuffer:
    """Accumulates writes and hands them to *sink* in blocks."""

    def __init__(self, sink: ByteSink, size: int = DEFAULT_BUFFER_SIZE) -> None:
        if size <= 0:
            raise ValueError("buffer size must be positive")
        self._sink = sink
        self._size = size
        self._pending = bytearray()
        self._written = 0

    @property
    def bytes_written(self) -> int:
        """Total bytes accepted by :meth:`write` so far."""
        return self._written

    def write(self, data: bytes) -> None:
        self._pending += data
        self._written += len(data)
        if len(self._pending) >= self._size:
            self._drain()

    def _drain(self) -> None:
        if self._pending:
            self._sink.write(bytes(self._pending))
            self._pending.clear()

    def flush(self) -> None:
        """Write everything pending and flush the sink if it can be flushed."""
        self._drain()
        flush = getattr(self._sink, "flush", None)
        if flush is not None:
            flush()


@contextmanager
def buffered_writer(sink: ByteSink, size: int = DEFAULT_BUFFER_SIZE) -> Iterator[OutputBuffer]:
    """Yield an :class:`OutputBuffer` over *sink*, flushed on exit."""
    buffer = OutputBuffer(sink, size)
    try:
        yield buffer
    finally:
        buffer.flush()


def reuse_scratch(scratch: bytearray | None) -> bytearray:
    """Return *scratch* emptied for reuse, or a fresh ``bytearray``."""
    if scratch is None:
        return bytearray()
    del scratch[:]
    return scratch
