import struct

INT32 = struct.Struct("<i")
"""
Every integer on the wire: signed 32-bit, little-endian.
"""

INT32_SIZE: int = INT32.size

NULL_MARKER: int = -1
"""
Sentinel used both for an absent payload and for an absent random link.
"""

ENCODING: str = "utf-8"


class FormatError(ValueError):
    """
    Raised when a byte source does not hold a consistent list encoding:
    truncated data, an invalid length marker or an undecodable payload.
    """


def pack_int32(value: int) -> bytes:
    try:
        return INT32.pack(value)
    except struct.error as exc:
        raise ValueError(f"Value {value} does not fit in a signed 32-bit integer") from exc


def unpack_int32(data: bytes) -> int:
    if len(data) != INT32_SIZE:
        raise FormatError(
            f"Expected {INT32_SIZE} bytes for an integer, got {len(data)}"
        )
    return INT32.unpack(data)[0]


def encode_payload(data: str | None) -> bytes:
    """
    Encode a payload as:
        len(utf8:4) || utf8 bytes
    or:
        -1 (4 bytes) when the payload is absent
    """
    if data is None:
        return pack_int32(NULL_MARKER)

    raw = data.encode(ENCODING)
    return pack_int32(len(raw)) + raw


def decode_payload(raw: bytes) -> str:
    try:
        return raw.decode(ENCODING)
    except UnicodeDecodeError as exc:
        raise FormatError(f"Payload is not valid {ENCODING}: {exc}") from exc
