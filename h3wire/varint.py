"""QUIC variable-length integers."""

from __future__ import annotations

from .coding import Reader, UnexpectedEnd

VARINT_MAX = (1 << 62) - 1
MAX_SIZE = 8

# tag -> (bytes following the first one, size reported when they are missing)
_TAILS = {0b00: (0, 0), 0b01: (1, 1), 0b10: (3, 2), 0b11: (7, 3)}


class VarIntBoundsExceeded(ValueError):
    """Raised for values that do not fit in a variable-length integer."""

    def __init__(self, value: int) -> None:
        super().__init__(f"value {value} exceeds varint bounds")
        self.value = value


def check_varint(value: int) -> int:
    """Return ``value`` if it is encodable, else raise VarIntBoundsExceeded."""
    if not 0 <= value <= VARINT_MAX:
        raise VarIntBoundsExceeded(value)
    return value


def varint_size(value: int) -> int:
    """Number of bytes needed to encode ``value``."""
    check_varint(value)
    if value < 1 << 6:
        return 1
    if value < 1 << 14:
        return 2
    if value < 1 << 30:
        return 4
    return 8


def encoded_size(first: int) -> int:
    """Length of an encoded value, from its first byte."""
    return 2 ** ((first & 0xFF) >> 6)


def decode_varint(reader: Reader) -> int:
    if not reader.has_remaining():
        raise UnexpectedEnd(0)
    first = reader.read_u8()
    extra, missing = _TAILS[first >> 6]
    value = first & 0x3F
    if extra:
        if reader.remaining() < extra:
            raise UnexpectedEnd(missing)
        value = int.from_bytes(bytes([value]) + reader.read(extra), "big")
    return value


def encode_varint(value: int) -> bytes:
    size = varint_size(value)
    tag = {1: 0b00, 2: 0b01, 4: 0b10, 8: 0b11}[size]
    return ((tag << (size * 8 - 2)) | value).to_bytes(size, "big")