"""Extended CONNECT protocols and HTTP datagrams."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .coding import Reader, UnexpectedEnd
from .stream import InvalidStreamId, StreamId
from .varint import encode_varint, decode_varint

H3_DATAGRAM_ERROR = 0x33


class Protocol(enum.Enum):
    """Values of the ``:protocol`` pseudo-header."""

    WEB_TRANSPORT = "webtransport"
    CONNECT_UDP = "connect-udp"

    def as_str(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


class InvalidProtocol(ValueError):
    """Raised for an unknown ``:protocol`` value."""


def parse_protocol(text: str) -> Protocol:
    try:
        return Protocol(text)
    except ValueError:
        raise InvalidProtocol(f"unknown protocol: {text!r}") from None


class DatagramError(Exception):
    """Connection error of type H3_DATAGRAM_ERROR."""

    def __init__(self, cause: str) -> None:
        super().__init__(cause)
        self.code = H3_DATAGRAM_ERROR
        self.cause = cause


@dataclass(frozen=True)
class Datagram:
    """An HTTP datagram bound to a request stream."""

    stream_id: StreamId
    payload: bytes = b""

    def __post_init__(self) -> None:
        if self.stream_id.value % 4 != 0:
            raise ValueError("StreamId is not divisible by 4")

    def encode(self) -> bytes:
        return encode_varint(self.stream_id.value // 4) + bytes(self.payload)


def decode_datagram(data: bytes) -> Datagram:
    """Decode a datagram from the body of a QUIC datagram."""
    reader = Reader(data)
    try:
        quarter = decode_varint(reader)
    except UnexpectedEnd:
        raise DatagramError("Malformed datagram frame") from None
    try:
        stream_id = StreamId(quarter * 4)
    except InvalidStreamId:
        raise DatagramError("Invalid stream id") from None
    return Datagram(stream_id, reader.rest())