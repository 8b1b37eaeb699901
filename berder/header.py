"""Identifier and length headers of BER/DER objects, and content extraction."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import NamedTuple, Optional

from .encoding import ToDer, Writer
from .errors import (
    BerMaxDepthError,
    ConstructExpectedError,
    ConstructUnexpectedError,
    DerConstraint,
    DerConstraintFailedError,
    IncompleteError,
    IntegerTooLargeError,
    InvalidLengthError,
    InvalidTagError,
)
from .length import Length
from .tags import Class, Tag

MAX_RECURSION = 50
"""Default maximum recursion limit."""

_DEFAULT_CONTENT_DEPTH = 8
_U32_MASK = 0xFFFF_FFFF
_MAX_TAG_BYTES = 5


class _RawIdentifier(NamedTuple):
    class_bits: int
    constructed: bool
    tag_number: int
    raw_tag: bytes


def _take(data: bytes, count: int) -> tuple[bytes, bytes]:
    """Split ``count`` bytes off the front of ``data``: (rest, taken)."""
    if len(data) < count:
        raise IncompleteError(count - len(data))
    return data[count:], data[:count]


def bytes_to_u64(data: bytes) -> int:
    """Read big-endian bytes as an unsigned 64-bit integer."""
    value = 0
    for byte in data:
        if value & 0xFF00_0000_0000_0000:
            raise IntegerTooLargeError()
        value = (value << 8) | byte
    return value


def parse_identifier(data: bytes) -> tuple[bytes, _RawIdentifier]:
    """Parse the identifier octets: (rest, (class bits, constructed, tag number, raw tag))."""
    data = bytes(data)
    if not data:
        raise IncompleteError(1)
    first = data[0]
    class_bits = first >> 6
    constructed = bool(first & 0b0010_0000)
    tag_number = first & 0b0001_1111
    count = 1
    if tag_number == 0x1F:
        tag_number = 0
        while True:
            if count >= len(data):
                raise InvalidTagError()
            if count > _MAX_TAG_BYTES:
                raise InvalidTagError()
            byte = data[count]
            tag_number = ((tag_number << 7) | (byte & 0x7F)) & _U32_MASK
            count += 1
            if not byte & 0x80:
                break
    return data[count:], _RawIdentifier(class_bits, constructed, tag_number, data[:count])


def parse_ber_length_byte(data: bytes) -> tuple[bytes, tuple[int, int]]:
    """Split the first length byte into its high bit and its lower seven bits."""
    data = bytes(data)
    if not data:
        raise IncompleteError(1)
    return data[1:], (data[0] >> 7, data[0] & 0x7F)


def _read_long_length(data: bytes, count: int) -> tuple[bytes, Length]:
    if count == 0x7F:
        raise InvalidLengthError()
    rest, encoded = _take(data, count)
    try:
        value = bytes_to_u64(encoded)
    except IntegerTooLargeError as exc:
        raise InvalidLengthError() from exc
    return rest, Length.of(value)


@dataclass(frozen=True)
class TagIdentifier(ToDer):
    """Class, constructed flag and tag: the identifier part of a header."""

    class_: Class
    constructed: bool
    tag: Tag

    def to_der_len(self) -> int:
        value = self.tag.value
        if value <= 30:
            return 1
        size = 1
        while value > 127:
            value >>= 7
            size += 1
        return size + 1

    def write_der_header(self, writer: Writer) -> int:
        first = (self.class_.value << 6) | (0b10_0000 if self.constructed else 0)
        value = self.tag.value
        if value <= 30:
            return writer.write(bytes([first | value]))
        written = writer.write(bytes([first | 0b1_1111]))
        while value > 127:
            written += writer.write(bytes([(value & 0x7F) | 0x80]))
            value >>= 7
        return written + writer.write(bytes([value]))

    def write_der_content(self, writer: Writer) -> int:
        return 0


@dataclass(frozen=True, eq=False)
class Header(ToDer):
    """BER/DER object header: identifier and length.

    ``raw_tag`` optionally keeps the tag bytes as they were encoded.
    Equality ignores the length, and compares raw tags only when both
    headers have one.
    """

    class_: Class
    constructed: bool
    tag: Tag
    length: Length
    raw_tag: Optional[bytes] = None

    @classmethod
    def new_simple(cls, tag: Tag) -> "Header":
        """A universal header for ``tag`` with a null definite length."""
        constructed = tag in (Tag.SEQUENCE, Tag.SET)
        return cls(Class.UNIVERSAL, constructed, tag, Length.of(0))

    def with_class(self, class_: Class) -> "Header":
        return dataclasses.replace(self, class_=class_)

    def with_constructed(self, constructed: bool) -> "Header":
        return dataclasses.replace(self, constructed=constructed)

    def with_tag(self, tag: Tag) -> "Header":
        return dataclasses.replace(self, tag=tag)

    def with_length(self, length: Length) -> "Header":
        return dataclasses.replace(self, length=length)

    def with_raw_tag(self, raw_tag: Optional[bytes]) -> "Header":
        return dataclasses.replace(self, raw_tag=None if raw_tag is None else bytes(raw_tag))

    def is_primitive(self) -> bool:
        return not self.constructed

    def is_constructed(self) -> bool:
        return self.constructed

    def assert_class(self, class_: Class) -> None:
        self.class_.assert_eq(class_)

    def assert_tag(self, tag: Tag) -> None:
        self.tag.assert_eq(tag)

    def assert_primitive(self) -> None:
        if not self.is_primitive():
            raise ConstructUnexpectedError()

    def assert_constructed(self) -> None:
        if self.is_primitive():
            raise ConstructExpectedError()

    def is_universal(self) -> bool:
        return self.class_ is Class.UNIVERSAL

    def is_application(self) -> bool:
        return self.class_ is Class.APPLICATION

    def is_contextspecific(self) -> bool:
        return self.class_ is Class.CONTEXT_SPECIFIC

    def is_private(self) -> bool:
        return self.class_ is Class.PRIVATE

    def assert_definite(self) -> None:
        if not self.length.is_definite():
            raise DerConstraintFailedError(DerConstraint.INDEFINITE_LENGTH)

    def parse_ber_content(self, data: bytes) -> tuple[bytes, bytes]:
        """Return (rest, content) of the object following this BER header."""
        return ber_get_object_content(data, self, _DEFAULT_CONTENT_DEPTH)

    def parse_der_content(self, data: bytes) -> tuple[bytes, bytes]:
        """Return (rest, content) of the object following this DER header."""
        self.assert_definite()
        return der_get_object_content(data, self)

    @classmethod
    def from_ber(cls, data: bytes) -> tuple[bytes, "Header"]:
        """Parse a BER header: (rest, header)."""
        rest, ident = parse_identifier(data)
        rest, (long_form, low) = parse_ber_length_byte(rest)
        if not long_form:
            length = Length.of(low)
        elif low == 0:
            if not ident.constructed:
                raise ConstructExpectedError()
            length = Length.INDEFINITE
        else:
            rest, length = _read_long_length(rest, low)
        return rest, cls._from_identifier(ident, length)

    @classmethod
    def from_der(cls, data: bytes) -> tuple[bytes, "Header"]:
        """Parse a DER header: (rest, header); indefinite lengths are rejected."""
        rest, ident = parse_identifier(data)
        rest, (long_form, low) = parse_ber_length_byte(rest)
        if not long_form:
            length = Length.of(low)
        elif low == 0:
            raise DerConstraintFailedError(DerConstraint.INDEFINITE_LENGTH)
        else:
            rest, length = _read_long_length(rest, low)
        return rest, cls._from_identifier(ident, length)

    @classmethod
    def _from_identifier(cls, ident: _RawIdentifier, length: Length) -> "Header":
        return cls(
            Class(ident.class_bits),
            ident.constructed,
            Tag(ident.tag_number),
            length,
            ident.raw_tag,
        )

    def _identifier(self) -> TagIdentifier:
        return TagIdentifier(self.class_, self.constructed, self.tag)

    def to_der_len(self) -> int:
        return self._identifier().to_der_len() + self.length.to_der_len()

    def write_der_header(self, writer: Writer) -> int:
        written = self._identifier().write_der_header(writer)
        return written + self.length.write_der_header(writer)

    def write_der_content(self, writer: Writer) -> int:
        return 0

    def write_der_raw(self, writer: Writer) -> int:
        if self.raw_tag is not None:
            written = writer.write(self.raw_tag)
        else:
            written = self._identifier().write_der_header(writer)
        return written + self.length.write_der_header(writer)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Header):
            return NotImplemented
        if (self.class_, self.tag, self.constructed) != (other.class_, other.tag, other.constructed):
            return False
        if self.length.is_null() and other.length.is_null() and self.length != other.length:
            return False
        if (self.raw_tag is None) == (other.raw_tag is None):
            return self.raw_tag == other.raw_tag
        return True

    def __hash__(self) -> int:
        return hash((self.class_, self.tag, self.constructed))


def _ber_skip_object_content(data: bytes, header: Header, max_depth: int) -> tuple[bytes, bool]:
    """Skip the content; the flag is True if the object was End-Of-Content."""
    if max_depth == 0:
        raise BerMaxDepthError()
    if header.length.is_definite():
        size = header.length.size()
        if size == 0 and header.tag == Tag.END_OF_CONTENT:
            return data, True
        rest, _ = _take(data, size)
        return rest, False
    header.assert_constructed()
    rest = data
    while True:
        rest, inner = Header.from_ber(rest)
        rest, end_of_content = _ber_skip_object_content(rest, inner, max_depth - 1)
        if end_of_content:
            return rest, False


def ber_get_object_content(data: bytes, header: Header, max_depth: int) -> tuple[bytes, bytes]:
    """Return (rest, content); with an indefinite length, the End-Of-Content is dropped."""
    data = bytes(data)
    rest, _ = _ber_skip_object_content(data, header, max_depth)
    content = data[: len(data) - len(rest)]
    if not header.length.is_definite():
        content = content[:-2]
    return rest, content


def der_get_object_content(data: bytes, header: Header) -> tuple[bytes, bytes]:
    """Return (rest, content), accepting only definite lengths."""
    if not header.length.is_definite():
        raise DerConstraintFailedError(DerConstraint.INDEFINITE_LENGTH)
    return _take(bytes(data), header.length.size())