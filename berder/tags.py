"""Tag classes and tag numbers of BER/DER objects."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar

from .errors import InvalidValueError, UnexpectedClassError, UnexpectedTagError


class Class(enum.Enum):
    """Class of a BER/DER tag."""

    UNIVERSAL = 0b00
    APPLICATION = 0b01
    CONTEXT_SPECIFIC = 0b10
    PRIVATE = 0b11

    def assert_eq(self, other: "Class") -> None:
        """Raise UnexpectedClassError if this class is not ``other``."""
        if self is not other:
            raise UnexpectedClassError(other, self)

    def __str__(self) -> str:
        return self.name.replace("_", "-")


_MAX_TAG = 0xFFFF_FFFF

_KNOWN_TAGS = (
    ("END_OF_CONTENT", "EndOfContent", 0),
    ("BOOLEAN", "Boolean", 1),
    ("INTEGER", "Integer", 2),
    ("BIT_STRING", "BitString", 3),
    ("OCTET_STRING", "OctetString", 4),
    ("NULL", "Null", 5),
    ("OID", "Oid", 6),
    ("OBJECT_DESCRIPTOR", "ObjectDescriptor", 7),
    ("EXTERNAL", "External", 8),
    ("REAL_TYPE", "RealType", 9),
    ("ENUMERATED", "Enumerated", 10),
    ("EMBEDDED_PDV", "EmbeddedPdv", 11),
    ("UTF8_STRING", "Utf8String", 12),
    ("RELATIVE_OID", "RelativeOid", 13),
    ("SEQUENCE", "Sequence", 16),
    ("SET", "Set", 17),
    ("NUMERIC_STRING", "NumericString", 18),
    ("PRINTABLE_STRING", "PrintableString", 19),
    ("T61_STRING", "T61String", 20),
    ("TELETEX_STRING", "TeletexString", 20),
    ("VIDEOTEX_STRING", "VideotexString", 21),
    ("IA5_STRING", "Ia5String", 22),
    ("UTC_TIME", "UtcTime", 23),
    ("GENERALIZED_TIME", "GeneralizedTime", 24),
    ("GRAPHIC_STRING", "GraphicString", 25),
    ("VISIBLE_STRING", "VisibleString", 26),
    ("GENERAL_STRING", "GeneralString", 27),
    ("UNIVERSAL_STRING", "UniversalString", 28),
    ("CHARACTER_STRING", "CharacterString", 29),
    ("BMP_STRING", "BmpString", 30),
)

_DISPLAY_NAMES: dict[int, str] = {}
for _attr, _display, _number in _KNOWN_TAGS:
    _DISPLAY_NAMES.setdefault(_number, _display)


@dataclass(frozen=True, repr=False)
class Tag:
    """A tag number (X.680 section 8.4), limited to 32 bits."""

    value: int

    END_OF_CONTENT: ClassVar["Tag"]
    BOOLEAN: ClassVar["Tag"]
    INTEGER: ClassVar["Tag"]
    BIT_STRING: ClassVar["Tag"]
    OCTET_STRING: ClassVar["Tag"]
    NULL: ClassVar["Tag"]
    OID: ClassVar["Tag"]
    OBJECT_DESCRIPTOR: ClassVar["Tag"]
    EXTERNAL: ClassVar["Tag"]
    REAL_TYPE: ClassVar["Tag"]
    ENUMERATED: ClassVar["Tag"]
    EMBEDDED_PDV: ClassVar["Tag"]
    UTF8_STRING: ClassVar["Tag"]
    RELATIVE_OID: ClassVar["Tag"]
    SEQUENCE: ClassVar["Tag"]
    SET: ClassVar["Tag"]
    NUMERIC_STRING: ClassVar["Tag"]
    PRINTABLE_STRING: ClassVar["Tag"]
    T61_STRING: ClassVar["Tag"]
    TELETEX_STRING: ClassVar["Tag"]
    VIDEOTEX_STRING: ClassVar["Tag"]
    IA5_STRING: ClassVar["Tag"]
    UTC_TIME: ClassVar["Tag"]
    GENERALIZED_TIME: ClassVar["Tag"]
    GRAPHIC_STRING: ClassVar["Tag"]
    VISIBLE_STRING: ClassVar["Tag"]
    GENERAL_STRING: ClassVar["Tag"]
    UNIVERSAL_STRING: ClassVar["Tag"]
    CHARACTER_STRING: ClassVar["Tag"]
    BMP_STRING: ClassVar["Tag"]

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or not 0 <= self.value <= _MAX_TAG:
            raise ValueError(f"tag number out of range: {self.value!r}")

    def assert_eq(self, other: "Tag") -> None:
        """Raise UnexpectedTagError if this tag is not ``other``."""
        if self.value != other.value:
            raise UnexpectedTagError(other, self)

    def invalid_value(self, msg: str) -> InvalidValueError:
        """Build the error for an invalid value carried under this tag."""
        return InvalidValueError(self, msg)

    def __repr__(self) -> str:
        return f"Tag({self.value})"

    def __str__(self) -> str:
        name = _DISPLAY_NAMES.get(self.value)
        if name is not None:
            return name
        return f"Tag({self.value} / 0x{self.value:x})"


for _attr, _display, _number in _KNOWN_TAGS:
    setattr(Tag, _attr, Tag(_number))