"""Fixed-size encodings of unsigned 64-bit integers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .tags import Tag

_BUFFER_SIZE = 10
_MAX_U64 = 0xFFFF_FFFF_FFFF_FFFF


@dataclass(frozen=True)
class ConstInt:
    """A ten-byte buffer of which the first ``n`` bytes hold the encoding."""

    buffer: bytes
    n: int

    TAG: ClassVar[Tag] = Tag.INTEGER

    @property
    def encoded(self) -> bytes:
        """The used part of the buffer."""
        return self.buffer[: self.n]


class IntBuilder:
    """Builds ConstInt values from unsigned 64-bit integers."""

    def build(self, value: int) -> ConstInt:
        """Encode ``value`` without leading zero bytes."""
        if not isinstance(value, int) or not 0 <= value <= _MAX_U64:
            raise ValueError(f"value does not fit in 64 unsigned bits: {value!r}")
        body = value.to_bytes(8, "big").lstrip(b"\x00")
        encoded = bytes([0x4, len(body)]) + body
        buffer = encoded.ljust(_BUFFER_SIZE, b"\x00")
        return ConstInt(buffer, len(encoded))