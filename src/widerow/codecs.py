"""
Column Codecs
Pluggable byte encodings for row keys, column names and column values.

Column names are stored as blobs and ordered by their bytes, so a codec
used for names must keep byte order equal to the natural order of its
values.
"""
import json
import struct
from typing import Any, Protocol


class Codec(Protocol):
    """Encodes values to bytes and back."""

    def encode(self, value: Any) -> bytes:
        ...

    def decode(self, data: bytes) -> Any:
        ...


class BytesCodec:
    """Pass-through codec for raw bytes."""

    def encode(self, value: bytes) -> bytes:
        return bytes(value)

    def decode(self, data: bytes) -> bytes:
        return bytes(data)


class Utf8Codec:
    """Text codec. UTF-8 byte order matches code point order."""

    def encode(self, value: str) -> bytes:
        return value.encode("utf-8")

    def decode(self, data: bytes) -> str:
        return bytes(data).decode("utf-8")


class LongCodec:
    """
    Signed 64-bit integer codec.

    Big-endian with the sign bit flipped, so that negative numbers sort
    before positive ones when compared as unsigned bytes.
    """

    _SIGN_BIT = 1 << 63
    _FORMAT = ">Q"

    def encode(self, value: int) -> bytes:
        return struct.pack(self._FORMAT, value + self._SIGN_BIT)

    def decode(self, data: bytes) -> int:
        (raw,) = struct.unpack(self._FORMAT, bytes(data))
        return raw - self._SIGN_BIT


class JsonCodec:
    """JSON value codec. Not order-preserving; use for values only."""

    def __init__(self, sort_keys: bool = True):
        self.sort_keys = sort_keys

    def encode(self, value: Any) -> bytes:
        return json.dumps(value, sort_keys=self.sort_keys, separators=(",", ":")).encode("utf-8")

    def decode(self, data: bytes) -> Any:
        return json.loads(bytes(data).decode("utf-8"))
