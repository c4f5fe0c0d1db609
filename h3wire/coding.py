"""Byte reader used by the wire codecs."""

from __future__ import annotations


class UnexpectedEnd(Exception):
    """Raised when a buffer ends before a value could be read in full."""

    def __init__(self, size: int) -> None:
        super().__init__(f"unexpected end of buffer ({size})")
        self.size = size


class Reader:
    """A forward-only cursor over an immutable byte string."""

    def __init__(self, data: bytes | bytearray | memoryview = b"") -> None:
        self._data = bytes(data)
        self._pos = 0

    def __repr__(self) -> str:
        return f"Reader(position={self._pos}, remaining={self.remaining()})"

    def remaining(self) -> int:
        """Number of bytes not yet consumed."""
        return len(self._data) - self._pos

    def has_remaining(self) -> bool:
        return self.remaining() > 0

    def position(self) -> int:
        """Number of bytes consumed so far."""
        return self._pos

    def read(self, size: int) -> bytes:
        """Consume and return exactly ``size`` bytes."""
        if size < 0:
            raise ValueError("size must not be negative")
        if self.remaining() < size:
            raise UnexpectedEnd(size)
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def read_u8(self) -> int:
        if not self.has_remaining():
            raise UnexpectedEnd(1)
        value = self._data[self._pos]
        self._pos += 1
        return value

    def peek_u8(self) -> int:
        """Return the next byte without consuming it."""
        if not self.has_remaining():
            raise UnexpectedEnd(1)
        return self._data[self._pos]

    def advance(self, size: int) -> None:
        if size < 0:
            raise ValueError("size must not be negative")
        if self.remaining() < size:
            raise UnexpectedEnd(size)
        self._pos += size

    def rest(self) -> bytes:
        """Consume and return everything that is left."""
        chunk = self._data[self._pos :]
        self._pos = len(self._data)
        return chunk