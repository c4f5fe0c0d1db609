# h3wire

Building blocks for the HTTP/3 wire format, in pure Python with no
dependencies:

- a forward-only byte reader (`h3wire.coding`)
- QUIC variable-length integers (`h3wire.varint`)
- stream identifiers and stream types (`h3wire.stream`)
- push identifiers (`h3wire.push`)
- the `:protocol` pseudo-header values and HTTP datagrams (`h3wire.ext`)
- frame types, frame errors, setting identifiers and SETTINGS frames
  (`h3wire.settings`)
- HTTP/3 frames (`h3wire.frame`)

## Installation

```
pip install h3wire
```

## Reading bytes

`Reader` wraps a byte string and consumes it from the front. Reading past the
end raises `UnexpectedEnd`, whose `size` attribute tells how many bytes were
wanted.

```python
from h3wire.coding import Reader

reader = Reader(b"\x01\x02\x03")
reader.read_u8()      # 1
reader.read(2)        # b"\x02\x03"
reader.has_remaining()  # False
```

## Varints

```python
from h3wire.coding import Reader
from h3wire.varint import decode_varint, encode_varint, varint_size

wire = encode_varint(15293)          # b"\x7b\xbd"
assert decode_varint(Reader(wire)) == 15293
assert varint_size(15293) == 2
```

Values below 0 or of 2**62 and above raise `VarIntBoundsExceeded`.

## Stream and push identifiers

```python
from h3wire.stream import StreamId, Dir, Side, make_stream_id

sid = make_stream_id(0, Dir.BI, Side.CLIENT)
str(sid)            # "client bidirectional stream 0"
sid.is_request()    # True
sid + 1             # StreamId(value=4)
```

`StreamId` and `PushId` (in `h3wire.push`) reject values outside the varint
range with `InvalidStreamId` and `InvalidPushId`. `StreamType` holds the
unidirectional stream types (`CONTROL`, `PUSH`, `ENCODER`, `DECODER`,
`WEBTRANSPORT_BIDI`, `WEBTRANSPORT_UNI`), and `StreamType.grease()` gives a
reserved one.

## Protocols and datagrams

```python
from h3wire.ext import Datagram, Protocol, decode_datagram, parse_protocol
from h3wire.stream import StreamId

parse_protocol("webtransport")      # Protocol.WEB_TRANSPORT

wire = Datagram(StreamId(4), b"hi").encode()   # b"\x01hi"
decode_datagram(wire).payload                  # b"hi"
```

A datagram's stream id must be divisible by four. A datagram too short to
hold its quarter stream id, or whose stream id is out of range, raises
`DatagramError`; an unknown protocol name raises `InvalidProtocol`.

## Settings

```python
from h3wire.settings import SettingId, Settings

settings = Settings()
settings.insert(SettingId.MAX_HEADER_LIST_SIZE, 0xFAD1)
settings.get(SettingId.MAX_HEADER_LIST_SIZE)   # 0xFAD1
settings.encode()                              # a whole SETTINGS frame
```

At most eight entries fit (`SettingsExceeded`); inserting the same identifier
twice raises `RepeatedSetting`. `decode_settings` reads a SETTINGS payload,
skips identifiers it does not support and rejects the ones reserved from
HTTP/2 with `InvalidSettingId`.

## Frames

```python
from h3wire.coding import Reader
from h3wire.frame import DataFrame, decode_frame

wire = DataFrame(b"1234567").encode_with_payload()
frame = decode_frame(Reader(wire))   # DataFrame with length 7
```

The frame classes are `DataFrame`, `HeadersFrame`, `CancelPushFrame`,
`SettingsFrame`, `PushPromiseFrame`, `GoawayFrame`, `MaxPushIdFrame`,
`WebTransportStreamFrame` and `GreaseFrame`. For DATA and WebTransport stream
frames, `decode_frame` consumes only the frame header; the payload is left in
the reader.

A frame of unknown type raises `UnknownFrame` after its bytes have been
skipped, so the caller can carry on decoding. Frame types that only exist in
HTTP/2 raise `UnsupportedFrame`. If there is not yet enough data,
`IncompleteFrame` says how large a buffer to wait for. All of these derive
from `FrameError`.

## What this package does not do

It only encodes and decodes wire values. It does not parse or validate header
sections or pseudo-headers, does not do QPACK compression, has no reader that
pulls frames from a sequence of received chunks, and opens no QUIC
connections: there is no client, server or command-line tool.

## Running the tests

```
pip install -e .[test]
pytest
```