"""HTTP/3 frames: encoding and decoding of frame headers and bodies."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Callable

from .coding import Reader, UnexpectedEnd
from .push import PushId
from .settings import (
    FrameType,
    IncompleteFrame,
    Settings,
    UnknownFrame,
    UnsupportedFrame,
    decode_settings,
)
from .stream import StreamId
from .varint import MAX_SIZE, check_varint, decode_varint, encode_varint, varint_size

MAX_ENCODED_SIZE = MAX_SIZE * 7

_UNSUPPORTED = frozenset(
    {
        FrameType.H2_PRIORITY,
        FrameType.H2_PING,
        FrameType.H2_WINDOW_UPDATE,
        FrameType.H2_CONTINUATION,
    }
)


def _simple_frame(frame_type: FrameType, value: int) -> bytes:
    return frame_type.encode() + encode_varint(varint_size(value)) + encode_varint(value)


class Frame(abc.ABC):
    """Base class of all HTTP/3 frames."""

    MAX_ENCODED_SIZE = MAX_ENCODED_SIZE

    @abc.abstractmethod
    def encode(self) -> bytes:
        """Encode the frame; DATA and HEADERS frames give their header only."""

    def encode_with_payload(self) -> bytes:
        """Encode the frame including any payload that ``encode`` leaves out."""
        return self.encode()

    def payload(self) -> bytes | None:
        """The frame's opaque payload, for frames that carry one."""
        return None


@dataclass(frozen=True)
class DataFrame(Frame):
    """A DATA frame.

    Frames built for sending carry ``data``; decoded frames only know ``length``,
    since the payload is read from the stream separately.
    """

    data: bytes | None = None
    length: int | None = None

    def __post_init__(self) -> None:
        if self.data is None:
            if self.length is None:
                raise ValueError("a data frame needs data or a length")
        else:
            object.__setattr__(self, "data", bytes(self.data))
            if self.length is None:
                object.__setattr__(self, "length", len(self.data))
            elif self.length != len(self.data):
                raise ValueError("length does not match the data")
        check_varint(self.length)

    def encode(self) -> bytes:
        return FrameType.DATA.encode() + encode_varint(self.length)

    def encode_with_payload(self) -> bytes:
        if self.data is None:
            raise ValueError("payload of a decoded data frame is not available")
        return self.encode() + self.data

    def payload(self) -> bytes | None:
        return self.data

    def __str__(self) -> str:
        return f"Data: {self.length} bytes"


@dataclass(frozen=True)
class HeadersFrame(Frame):
    """A HEADERS frame holding an encoded field section."""

    block: bytes

    def encode(self) -> bytes:
        return FrameType.HEADERS.encode() + encode_varint(len(self.block))

    def encode_with_payload(self) -> bytes:
        return self.encode() + bytes(self.block)

    def payload(self) -> bytes | None:
        return bytes(self.block)

    def __str__(self) -> str:
        return f"Headers({len(self.block)} entries)"


@dataclass(frozen=True)
class CancelPushFrame(Frame):
    push_id: PushId

    def encode(self) -> bytes:
        return _simple_frame(FrameType.CANCEL_PUSH, self.push_id.value)

    def __str__(self) -> str:
        return f"CancelPush({self.push_id})"


@dataclass(frozen=True)
class SettingsFrame(Frame):
    settings: Settings

    def encode(self) -> bytes:
        return self.settings.encode()

    def __str__(self) -> str:
        return "Settings"


@dataclass(frozen=True)
class PushPromiseFrame(Frame):
    """A PUSH_PROMISE frame: a push id followed by an encoded field section."""

    push_id: int
    encoded: bytes

    def _payload_len(self) -> int:
        return varint_size(self.push_id) + len(self.encoded)

    def encode(self) -> bytes:
        return (
            FrameType.PUSH_PROMISE.encode()
            + encode_varint(self._payload_len())
            + encode_varint(self.push_id)
            + bytes(self.encoded)
        )

    def payload(self) -> bytes | None:
        return bytes(self.encoded)

    def __str__(self) -> str:
        return f"PushPromise({self.push_id})"


@dataclass(frozen=True)
class GoawayFrame(Frame):
    value: int

    def encode(self) -> bytes:
        return _simple_frame(FrameType.GOAWAY, self.value)

    def __str__(self) -> str:
        return f"GoAway({self.value})"


@dataclass(frozen=True)
class MaxPushIdFrame(Frame):
    push_id: PushId

    def encode(self) -> bytes:
        return _simple_frame(FrameType.MAX_PUSH_ID, self.push_id.value)

    def __str__(self) -> str:
        return f"MaxPushId({self.push_id})"


@dataclass(frozen=True)
class WebTransportStreamFrame(Frame):
    """Header of a WebTransport bidirectional stream.

    It has no length: the rest of the stream is its payload.
    """

    session_id: StreamId

    def encode(self) -> bytes:
        return FrameType.WEBTRANSPORT_BI_STREAM.encode() + self.session_id.encode()

    def __str__(self) -> str:
        return f"WebTransportStream({self.session_id!r})"


@dataclass(frozen=True)
class GreaseFrame(Frame):
    """A frame of a reserved type, sent to exercise unknown-frame handling."""

    def encode(self) -> bytes:
        return FrameType.grease().encode() + encode_varint(6) + b"grease"

    def __str__(self) -> str:
        return "Grease()"


def _decode_push_promise(payload: Reader) -> PushPromiseFrame:
    push_id = decode_varint(payload)
    return PushPromiseFrame(push_id, payload.rest())


_DECODERS: dict[FrameType, Callable[[Reader], Frame]] = {
    FrameType.HEADERS: lambda payload: HeadersFrame(payload.rest()),
    FrameType.SETTINGS: lambda payload: SettingsFrame(decode_settings(payload)),
    FrameType.CANCEL_PUSH: lambda payload: CancelPushFrame(PushId(decode_varint(payload))),
    FrameType.PUSH_PROMISE: _decode_push_promise,
    FrameType.GOAWAY: lambda payload: GoawayFrame(decode_varint(payload)),
    FrameType.MAX_PUSH_ID: lambda payload: MaxPushIdFrame(PushId(decode_varint(payload))),
}


def decode_frame(reader: Reader) -> Frame:
    """Decode one frame from ``reader``.

    For DATA and WebTransport frames only the header is consumed. Unknown frame
    types are skipped and reported with UnknownFrame. IncompleteFrame carries
    the buffer size to wait for; on any error the reader may be partly consumed.
    """
    remaining = reader.remaining()
    try:
        frame_type = FrameType(decode_varint(reader))
    except UnexpectedEnd:
        raise IncompleteFrame(remaining + 1) from None

    if frame_type == FrameType.WEBTRANSPORT_BI_STREAM:
        try:
            session = decode_varint(reader)
        except UnexpectedEnd as exc:
            raise IncompleteFrame(exc.size) from None
        return WebTransportStreamFrame(StreamId(session))

    try:
        length = decode_varint(reader)
    except UnexpectedEnd:
        raise IncompleteFrame(remaining + 1) from None

    if frame_type == FrameType.DATA:
        return DataFrame(length=length)

    if reader.remaining() < length:
        raise IncompleteFrame(2 + length)

    payload = Reader(reader.read(length))
    decoder = _DECODERS.get(frame_type)
    if decoder is not None:
        try:
            return decoder(payload)
        except UnexpectedEnd as exc:
            raise IncompleteFrame(exc.size) from None
    if frame_type in _UNSUPPORTED:
        raise UnsupportedFrame(frame_type.value)
    raise UnknownFrame(frame_type.value)