"""Length of a BER/DER object: definite or indefinite."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from .encoding import ToDer, Writer
from .errors import IndefiniteLengthUnexpectedError, InvalidLengthError

_MAX_LENGTH = 0xFFFF_FFFF_FFFF_FFFF


@dataclass(frozen=True)
class Length(ToDer):
    """Length of an object; ``value`` is None for the indefinite form."""

    value: Optional[int]

    INDEFINITE: ClassVar["Length"]

    def __post_init__(self) -> None:
        if self.value is None:
            return
        if not isinstance(self.value, int) or isinstance(self.value, bool) or self.value < 0:
            raise ValueError(f"invalid definite length: {self.value!r}")

    @classmethod
    def of(cls, size: int) -> "Length":
        """Build a definite length."""
        return cls(size)

    def is_null(self) -> bool:
        """True if the length is definite and equal to 0."""
        return self.value == 0

    def size(self) -> int:
        """Return the definite length, or raise for the indefinite form."""
        if self.value is None:
            raise IndefiniteLengthUnexpectedError()
        return self.value

    def is_definite(self) -> bool:
        """True if the length is definite."""
        return self.value is not None

    def assert_definite(self) -> None:
        """Raise IndefiniteLengthUnexpectedError if the length is indefinite."""
        if self.value is None:
            raise IndefiniteLengthUnexpectedError()

    def __add__(self, other: Union["Length", int]) -> "Length":
        if isinstance(other, Length):
            if self.value is None:
                return self
            if other.value is None:
                return other
            return Length(self.value + other.value)
        if isinstance(other, int) and not isinstance(other, bool):
            if self.value is None:
                return self
            return Length(self.value + other)
        return NotImplemented

    def __repr__(self) -> str:
        if self.value is None:
            return "Length.INDEFINITE"
        return f"Length({self.value})"

    def to_der_len(self) -> int:
        if self.value is None:
            return 1
        length = self.value
        if length <= 0x7F:
            return 1
        if length <= 0xFF:
            return 2
        if length <= 0xFFFF:
            return 3
        if length <= 0xFFFF_FFFF:
            return 4
        raise InvalidLengthError()

    def write_der_header(self, writer: Writer) -> int:
        if self.value is None:
            return writer.write(b"\x80")
        length = self.value
        if length <= 127:
            return writer.write(bytes([length]))
        if length > _MAX_LENGTH:
            raise InvalidLengthError()
        body = length.to_bytes((length.bit_length() + 7) // 8, "big")
        written = writer.write(bytes([0x80 | len(body)]))
        return written + writer.write(body)

    def write_der_content(self, writer: Writer) -> int:
        return 0


Length.INDEFINITE = Length(None)