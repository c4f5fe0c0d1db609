"""Frame errors, frame types and the SETTINGS frame body."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from .coding import Reader, UnexpectedEnd
from .varint import MAX_SIZE, VARINT_MAX, check_varint, decode_varint, encode_varint, varint_size

_GREASE_LIMIT = (VARINT_MAX - 0x21) // 0x1F + 1
SETTINGS_LEN = 8


def _grease_value() -> int:
    return random.randrange(_GREASE_LIMIT) * 0x1F + 0x21


class FrameError(Exception):
    """A frame could not be decoded."""


class MalformedFrame(FrameError):
    def __init__(self) -> None:
        super().__init__("frame is malformed")


class UnsupportedFrame(FrameError):
    """A known frame type that is not allowed in HTTP/3."""

    def __init__(self, frame_type: int) -> None:
        super().__init__(f"frame 0x{frame_type:x} is not allowed h3")
        self.frame_type = frame_type


class UnknownFrame(FrameError):
    """An unknown frame type, to be ignored by the receiver."""

    def __init__(self, frame_type: int) -> None:
        super().__init__(f"frame 0x{frame_type:x} ignored")
        self.frame_type = frame_type


class InvalidFrameValue(FrameError):
    def __init__(self) -> None:
        super().__init__("frame value is invalid")


class IncompleteFrame(FrameError):
    """More bytes are needed; ``size`` is the minimum buffer size to retry with."""

    def __init__(self, size: int) -> None:
        super().__init__(f"internal error: frame incomplete {size}")
        self.size = size


class SettingsError(FrameError):
    """The SETTINGS frame is invalid."""


class SettingsExceeded(SettingsError):
    def __init__(self) -> None:
        super().__init__("max settings number exceeded, check for duplicate entries")


class SettingsMalformed(SettingsError):
    def __init__(self) -> None:
        super().__init__("malformed settings frame")


class RepeatedSetting(SettingsError):
    def __init__(self, setting_id: SettingId) -> None:
        super().__init__(f"got setting 0x{setting_id.value:x} twice")
        self.setting_id = setting_id


class InvalidSettingId(SettingsError):
    def __init__(self, value: int) -> None:
        super().__init__(f"setting id 0x{value:x} is invalid")
        self.value = value


class InvalidSettingValue(SettingsError):
    def __init__(self, setting_id: SettingId, value: int) -> None:
        super().__init__(f"setting 0x{setting_id.value:x} has invalid value {value}")
        self.setting_id = setting_id
        self.value = value


@dataclass(frozen=True)
class FrameType:
    """Type code of an HTTP/3 frame."""

    value: int

    @staticmethod
    def grease() -> FrameType:
        """A reserved frame type of the form 0x1f * N + 0x21."""
        return FrameType(_grease_value())

    def encode(self) -> bytes:
        return encode_varint(self.value)


FrameType.DATA = FrameType(0x0)
FrameType.HEADERS = FrameType(0x1)
FrameType.H2_PRIORITY = FrameType(0x2)
FrameType.CANCEL_PUSH = FrameType(0x3)
FrameType.SETTINGS = FrameType(0x4)
FrameType.PUSH_PROMISE = FrameType(0x5)
FrameType.H2_PING = FrameType(0x6)
FrameType.GOAWAY = FrameType(0x7)
FrameType.H2_WINDOW_UPDATE = FrameType(0x8)
FrameType.H2_CONTINUATION = FrameType(0x9)
FrameType.MAX_PUSH_ID = FrameType(0xD)
FrameType.WEBTRANSPORT_BI_STREAM = FrameType(0x41)


@dataclass(frozen=True)
class SettingId:
    """Identifier of a setting."""

    value: int

    @staticmethod
    def grease() -> SettingId:
        """A reserved setting id of the form 0x1f * N + 0x21."""
        return SettingId(_grease_value())

    def is_supported(self) -> bool:
        return self in _SUPPORTED

    def is_forbidden(self) -> bool:
        """Whether this id is reserved from HTTP/2 and must not be received."""
        return self.value in (0x00, 0x02, 0x03, 0x04, 0x05)


SettingId.NONE = SettingId(0)
SettingId.QPACK_MAX_TABLE_CAPACITY = SettingId(0x1)
SettingId.QPACK_MAX_BLOCKED_STREAMS = SettingId(0x7)
SettingId.MAX_HEADER_LIST_SIZE = SettingId(0x6)
SettingId.ENABLE_CONNECT_PROTOCOL = SettingId(0x8)
SettingId.H3_DATAGRAM = SettingId(0x33)
SettingId.ENABLE_WEBTRANSPORT = SettingId(0x2B603742)
SettingId.H3_SETTING_ENABLE_DATAGRAM_CHROME_SPECIFIC = SettingId(0xFFD277)
SettingId.WEBTRANSPORT_MAX_SESSIONS = SettingId(0x2B603743)

_SUPPORTED = frozenset(
    {
        SettingId.MAX_HEADER_LIST_SIZE,
        SettingId.QPACK_MAX_TABLE_CAPACITY,
        SettingId.QPACK_MAX_BLOCKED_STREAMS,
        SettingId.ENABLE_CONNECT_PROTOCOL,
        SettingId.ENABLE_WEBTRANSPORT,
        SettingId.WEBTRANSPORT_MAX_SESSIONS,
        SettingId.H3_DATAGRAM,
    }
)


@dataclass
class Settings:
    """Ordered settings, at most eight, each identifier appearing once."""

    entries: list[tuple[SettingId, int]] = field(default_factory=list)

    MAX_ENCODED_SIZE = SETTINGS_LEN * 2 * MAX_SIZE

    def insert(self, setting_id: SettingId, value: int) -> None:
        if len(self.entries) >= SETTINGS_LEN:
            raise SettingsExceeded()
        if any(existing == setting_id for existing, _ in self.entries):
            raise RepeatedSetting(setting_id)
        check_varint(setting_id.value)
        check_varint(value)
        self.entries.append((setting_id, value))

    def get(self, setting_id: SettingId) -> int | None:
        return next((v for i, v in self.entries if i == setting_id), None)

    def _payload_len(self) -> int:
        return sum(varint_size(i.value) + varint_size(v) for i, v in self.entries)

    def encode(self) -> bytes:
        """Encode as a complete SETTINGS frame: type, length and entries."""
        parts = [FrameType.SETTINGS.encode(), encode_varint(self._payload_len())]
        for setting_id, value in self.entries:
            parts.append(encode_varint(setting_id.value))
            parts.append(encode_varint(value))
        return b"".join(parts)


def decode_settings(reader: Reader) -> Settings:
    """Decode a SETTINGS payload, consuming the whole reader.

    Unsupported identifiers are skipped; reserved HTTP/2 ones are rejected.
    """
    settings = Settings()
    while reader.has_remaining():
        if reader.remaining() < 2:
            raise SettingsMalformed()
        try:
            identifier = SettingId(decode_varint(reader))
            value = decode_varint(reader)
        except UnexpectedEnd:
            raise SettingsMalformed() from None
        if identifier.is_forbidden():
            raise InvalidSettingId(identifier.value)
        if identifier.is_supported():
            settings.insert(identifier, value)
    return settings