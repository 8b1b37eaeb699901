"""Error types raised while parsing and serializing BER/DER objects."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from .tags import Class, Tag


class DerConstraint(enum.Enum):
    """DER constraints that an encoding may violate."""

    INDEFINITE_LENGTH = "Indefinite length not allowed"
    CONSTRUCTED = "Object must not be constructed"
    NOT_CONSTRUCTED = "Object must be constructed"
    MISSING_TIME_ZONE = "DateTime object is missing timezone"
    MISSING_SECONDS = "DateTime object is missing seconds"
    UNUSED_BITS_NOT_ZERO = "Bitstring unused bits must be set to zero"
    INVALID_BOOLEAN = "Boolean value must be 0x00 of 0xff"
    INTEGER_EMPTY = "Integer must not be empty"
    INTEGER_LEADING_ZEROES = "Leading zeroes in Integer encoding"
    INTEGER_LEADING_FF = "Leading 0xff in negative Integer encoding"

    def __str__(self) -> str:
        return self.value


class Asn1Error(Exception):
    """Base class of all errors reported while decoding BER/DER data.

    Two errors are equal when they have the same type and the same fields.
    """

    message = "ASN.1 error"

    def __str__(self) -> str:
        return self.message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Asn1Error):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class BerTypeError(Asn1Error):
    """The BER object does not have the expected type."""

    message = "BER object does not have the expected type"


class BerValueError(Asn1Error):
    """The BER object does not have the expected value."""

    message = "BER object does not have the expected value"


class InvalidLengthError(Asn1Error):
    """The encoded length is invalid."""

    message = "Invalid Length"


class InvalidValueError(Asn1Error):
    """The content of an object with the given tag is invalid."""

    def __init__(self, tag: "Tag", msg: str) -> None:
        super().__init__(tag, msg)
        self.tag = tag
        self.msg = msg

    def __str__(self) -> str:
        return f"Invalid Value when parsing object with tag {self.tag!r} {self.msg}"


class InvalidTagError(Asn1Error):
    """The encoded tag is invalid."""

    message = "Invalid Tag"


class UnknownTagError(Asn1Error):
    """The tag number is not known."""

    def __init__(self, tag_number: int) -> None:
        super().__init__(tag_number)
        self.tag_number = tag_number

    def __str__(self) -> str:
        return f"Unknown tag: {self.tag_number!r}"


class UnexpectedTagError(Asn1Error):
    """The object has another tag than the one expected."""

    def __init__(self, expected: Optional["Tag"], actual: "Tag") -> None:
        super().__init__(expected, actual)
        self.expected = expected
        self.actual = actual

    def __str__(self) -> str:
        return f"Unexpected Tag (expected: {self.expected!r}, actual: {self.actual!r})"


class UnexpectedClassError(Asn1Error):
    """The object has another class than the one expected."""

    def __init__(self, expected: Optional["Class"], actual: "Class") -> None:
        super().__init__(expected, actual)
        self.expected = expected
        self.actual = actual

    def __str__(self) -> str:
        return f"Unexpected Class (expected: {self.expected!r}, actual: {self.actual!r})"


class IndefiniteLengthUnexpectedError(Asn1Error):
    """An indefinite length was found where it is not allowed."""

    message = "Indefinite length not allowed"


class ConstructExpectedError(Asn1Error):
    """The object was expected to be constructed and is primitive."""

    message = "DER object was expected to be constructed (and found to be primitive)"


class ConstructUnexpectedError(Asn1Error):
    """The object was expected to be primitive and is constructed."""

    message = "DER object was expected to be primitive (and found to be constructed)"


class IntegerTooLargeError(Asn1Error):
    """The integer does not fit the requested type."""

    message = "Integer too large to fit requested type"


class IntegerNegativeError(Asn1Error):
    """A negative integer was found where an unsigned one was requested."""

    message = "BER integer is negative, while an unsigned integer was requested"


class BerMaxDepthError(Asn1Error):
    """Recursive parsing reached the maximum depth."""

    message = "BER recursive parsing reached maximum depth"


class StringInvalidCharsetError(Asn1Error):
    """A string has an invalid encoding or forbidden characters."""

    message = "Invalid encoding or forbidden characters in string"


class InvalidDateTimeError(Asn1Error):
    """A date or time is invalid."""

    message = "Invalid Date or Time"


class DerConstraintFailedError(Asn1Error):
    """A DER constraint is not respected."""

    def __init__(self, constraint: DerConstraint) -> None:
        super().__init__(constraint)
        self.constraint = constraint

    def __str__(self) -> str:
        return f"DER Failed constraint: {self.constraint}"


class UnsupportedError(Asn1Error):
    """The requested feature is not available."""

    message = "Feature is not yet implemented"


class IncompleteError(Asn1Error):
    """The input ended early; ``needed`` is the missing byte count, if known."""

    def __init__(self, needed: Optional[int]) -> None:
        super().__init__(needed)
        self.needed = needed

    def __str__(self) -> str:
        missing = "unknown" if self.needed is None else str(self.needed)
        return f"incomplete data, missing: {missing}"


class SerializeError(Exception):
    """An error raised while writing a DER encoding.

    ``cause`` is the decoding error or I/O error behind it, or a message.
    """

    def __init__(self, cause: Union[Asn1Error, OSError, str]) -> None:
        super().__init__(cause)
        self.cause = cause

    def __str__(self) -> str:
        if isinstance(self.cause, Asn1Error):
            return f"ASN.1 error: {self.cause!r}"
        if isinstance(self.cause, OSError):
            return f"I/O error: {self.cause!r}"
        return str(self.cause)


class InvalidClassError(SerializeError):
    """A class value that does not fit in two bits."""

    def __init__(self, class_value: int) -> None:
        super().__init__(f"Invalid Class {class_value}")
        self.class_value = class_value