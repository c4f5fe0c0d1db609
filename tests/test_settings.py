import pytest

from h3wire.coding import Reader
from h3wire.settings import (
    FrameError,
    FrameType,
    IncompleteFrame,
    InvalidSettingId,
    InvalidSettingValue,
    RepeatedSetting,
    SettingId,
    Settings,
    SettingsError,
    SettingsExceeded,
    SettingsMalformed,
    UnknownFrame,
    UnsupportedFrame,
    decode_settings,
)
from h3wire.varint import VARINT_MAX

WIRE = bytes(
    [4, 18, 6, 128, 0, 250, 209, 1, 128, 0, 250, 210, 7, 128, 0, 250, 211, 64, 95, 0]
)


def _sample():
    settings = Settings()
    settings.insert(SettingId.MAX_HEADER_LIST_SIZE, 0xFAD1)
    settings.insert(SettingId.QPACK_MAX_TABLE_CAPACITY, 0xFAD2)
    settings.insert(SettingId.QPACK_MAX_BLOCKED_STREAMS, 0xFAD3)
    settings.insert(SettingId(95), 0)
    return settings


def test_encode_matches_wire():
    assert _sample().encode() == WIRE


def test_decode_skips_unsupported():
    decoded = decode_settings(Reader(WIRE[2:]))
    assert decoded.entries == [
        (SettingId.MAX_HEADER_LIST_SIZE, 0xFAD1),
        (SettingId.QPACK_MAX_TABLE_CAPACITY, 0xFAD2),
        (SettingId.QPACK_MAX_BLOCKED_STREAMS, 0xFAD3),
    ]
    assert decoded.get(SettingId(95)) is None


def test_empty_settings():
    assert Settings().encode() == bytes([4, 0])
    assert decode_settings(Reader(b"")) == Settings()


def test_round_trip_supported():
    settings = Settings()
    settings.insert(SettingId.ENABLE_WEBTRANSPORT, 1)
    settings.insert(SettingId.H3_DATAGRAM, 1)
    settings.insert(SettingId.WEBTRANSPORT_MAX_SESSIONS, 12345)
    wire = settings.encode()
    assert wire[0] == 4
    assert wire[1] == len(wire) - 2
    assert decode_settings(Reader(wire[2:])) == settings


def test_get():
    settings = _sample()
    assert settings.get(SettingId.QPACK_MAX_TABLE_CAPACITY) == 0xFAD2
    assert settings.get(SettingId.H3_DATAGRAM) is None


def test_repeated_insert():
    settings = Settings()
    settings.insert(SettingId.H3_DATAGRAM, 1)
    with pytest.raises(RepeatedSetting) as info:
        settings.insert(SettingId.H3_DATAGRAM, 0)
    assert info.value.setting_id == SettingId.H3_DATAGRAM
    assert str(info.value) == "got setting 0x33 twice"


def test_exceeded():
    settings = Settings()
    for n in range(8):
        settings.insert(SettingId(0x100 + n), n)
    with pytest.raises(SettingsExceeded):
        settings.insert(SettingId(0x200), 0)
    assert len(settings.entries) == 8


def test_repeated_in_wire():
    payload = bytes([0x33, 1, 0x33, 0])
    with pytest.raises(RepeatedSetting):
        decode_settings(Reader(payload))


@pytest.mark.parametrize("forbidden", [0x00, 0x02, 0x03, 0x04, 0x05])
def test_forbidden_ids(forbidden):
    assert SettingId(forbidden).is_forbidden()
    with pytest.raises(InvalidSettingId) as info:
        decode_settings(Reader(bytes([forbidden, 0])))
    assert info.value.value == forbidden


def test_malformed_short():
    with pytest.raises(SettingsMalformed):
        decode_settings(Reader(bytes([6])))


def test_malformed_truncated_value():
    with pytest.raises(SettingsMalformed):
        decode_settings(Reader(bytes([6, 0x40])))


def test_supported():
    assert SettingId.H3_DATAGRAM.is_supported()
    assert SettingId.ENABLE_CONNECT_PROTOCOL.is_supported()
    assert not SettingId.H3_SETTING_ENABLE_DATAGRAM_CHROME_SPECIFIC.is_supported()
    assert not SettingId(95).is_forbidden()


@pytest.mark.parametrize("make", [SettingId.grease, FrameType.grease])
def test_grease_form(make):
    for _ in range(50):
        value = make().value
        assert (value - 0x21) % 0x1F == 0
        assert 0x21 <= value <= VARINT_MAX


def test_frame_type_encode():
    assert FrameType.DATA.encode() == b"\x00"
    assert FrameType.MAX_PUSH_ID.encode() == b"\x0d"
    assert FrameType.WEBTRANSPORT_BI_STREAM.encode() == bytes([0x40, 0x41])


def test_error_hierarchy_and_messages():
    assert issubclass(SettingsError, FrameError)
    assert str(SettingsExceeded()) == (
        "max settings number exceeded, check for duplicate entries"
    )
    assert str(SettingsMalformed()) == "malformed settings frame"
    assert str(UnsupportedFrame(2)) == "frame 0x2 is not allowed h3"
    assert str(UnknownFrame(22)) == "frame 0x16 ignored"
    assert IncompleteFrame(3).size == 3
    err = InvalidSettingValue(SettingId.H3_DATAGRAM, 7)
    assert str(err) == "setting 0x33 has invalid value 7"


def test_max_encoded_size_bound():
    settings = Settings()
    for n in range(8):
        settings.insert(SettingId(VARINT_MAX - n), VARINT_MAX)
    assert len(settings.encode()) - 3 <= Settings.MAX_ENCODED_SIZE