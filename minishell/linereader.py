"""Buffered line reading from a file descriptor."""

import os
from collections.abc import Iterator

BUFFER_SIZE = 42


class LineReader:
    """Read newline-terminated lines from a file descriptor.

    Data is pulled with ``os.read`` in chunks of ``buffer_size`` bytes and
    kept between calls, so each call returns exactly one line.
    """

    def __init__(self, fd: int, buffer_size: int = BUFFER_SIZE) -> None:
        if fd < 0:
            raise ValueError(f"invalid file descriptor: {fd}")
        if buffer_size <= 0:
            raise ValueError(f"buffer size must be positive: {buffer_size}")
        self._fd = fd
        self._buffer_size = buffer_size
        self._stored = b""

    def next_line(self) -> str | None:
        """Return the next line with its newline, or None at end of input."""
        while b"\n" not in self._stored:
            try:
                chunk = os.read(self._fd, self._buffer_size)
            except OSError:
                self._stored = b""
                raise
            if not chunk:
                break
            self._stored += chunk
        if not self._stored:
            return None
        line, newline, self._stored = self._stored.partition(b"\n")
        return (line + newline).decode("utf-8", errors="replace")

    def __iter__(self) -> Iterator[str]:
        while (line := self.next_line()) is not None:
            yield line