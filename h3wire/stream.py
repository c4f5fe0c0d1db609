"""Stream types and stream identifiers."""

from __future__ import annotations

import enum
import random
from dataclasses import dataclass

from .coding import Reader
from .varint import MAX_SIZE, VARINT_MAX, decode_varint, encode_varint

_GREASE_LIMIT = (VARINT_MAX - 0x21) // 0x1F + 1


def _grease_value() -> int:
    return random.randrange(_GREASE_LIMIT) * 0x1F + 0x21


@dataclass(frozen=True)
class StreamType:
    """Type of a unidirectional stream, sent as its first varint."""

    value: int

    MAX_ENCODED_SIZE = MAX_SIZE

    @staticmethod
    def grease() -> StreamType:
        """A reserved stream type of the form 0x1f * N + 0x21."""
        return StreamType(_grease_value())

    def encode(self) -> bytes:
        return encode_varint(self.value)

    def __str__(self) -> str:
        name = _STREAM_TYPE_NAMES.get(self.value)
        return name if name is not None else f"StreamType({self.value})"


StreamType.CONTROL = StreamType(0x00)
StreamType.PUSH = StreamType(0x01)
StreamType.ENCODER = StreamType(0x02)
StreamType.DECODER = StreamType(0x03)
StreamType.WEBTRANSPORT_BIDI = StreamType(0x41)
StreamType.WEBTRANSPORT_UNI = StreamType(0x54)

_STREAM_TYPE_NAMES = {
    0x00: "Control",
    0x02: "Encoder",
    0x03: "Decoder",
    0x54: "WebTransportUni",
}


def decode_stream_type(reader: Reader) -> StreamType:
    return StreamType(decode_varint(reader))


class Side(enum.IntEnum):
    CLIENT = 0
    SERVER = 1


class Dir(enum.IntEnum):
    BI = 0
    UNI = 1


class InvalidStreamId(ValueError):
    """Raised for stream ids outside the varint range."""

    def __init__(self, value: int) -> None:
        super().__init__(f"invalid stream id: {value:x}")
        self.value = value


@dataclass(frozen=True, order=True)
class StreamId:
    """QUIC stream identifier."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= VARINT_MAX:
            raise InvalidStreamId(self.value)

    def __int__(self) -> int:
        return self.value

    def is_request(self) -> bool:
        """Whether this is a client-initiated bidirectional stream."""
        return self.dir() is Dir.BI and self.initiator() is Side.CLIENT

    def is_push(self) -> bool:
        """Whether this is a server-initiated unidirectional stream."""
        return self.dir() is Dir.UNI and self.initiator() is Side.SERVER

    def initiator(self) -> Side:
        return Side(self.value & 0x1)

    def index(self) -> int:
        """Position among streams of the same initiator and direction."""
        return self.value >> 2

    def dir(self) -> Dir:
        return Dir((self.value >> 1) & 0x1)

    def encode(self) -> bytes:
        return encode_varint(self.value)

    def __add__(self, other: object) -> StreamId:
        if not isinstance(other, int) or isinstance(other, bool):
            return NotImplemented
        if other < 0:
            raise ValueError("cannot step a stream id backwards")
        index = min(self.index() + other, VARINT_MAX >> 2)
        return make_stream_id(index, self.dir(), self.initiator())

    def __str__(self) -> str:
        initiator = "client" if self.initiator() is Side.CLIENT else "server"
        direction = "bi" if self.dir() is Dir.BI else "uni"
        return f"{initiator} {direction}directional stream {self.index()}"


def make_stream_id(index: int, direction: Dir, initiator: Side) -> StreamId:
    return StreamId(index << 2 | int(direction) << 1 | int(initiator))


FIRST_REQUEST = make_stream_id(0, Dir.BI, Side.CLIENT)