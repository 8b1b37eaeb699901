"""UTCTime: a two-digit-year date and time with a time zone."""

from __future__ import annotations

import dataclasses
import datetime as _dt
from dataclasses import dataclass
from typing import ClassVar

from .asn1_datetime import ASN1DateTime, ASN1TimeZone, TimeZoneKind, decode_decimal
from .encoding import ToDer, Writer
from .errors import InvalidDateTimeError, StringInvalidCharsetError
from .header import Header
from .tags import Tag

_EPOCH = _dt.datetime(1970, 1, 1, tzinfo=_dt.timezone.utc)
_DER_CONTENT_LEN = 13


def _is_visible(byte: int) -> bool:
    return 0x20 <= byte <= 0x7F


@dataclass(frozen=True, order=True)
class UtcTime(ToDer):
    """A UTCTime value (X.680 section 43); the year holds two digits."""

    datetime: ASN1DateTime

    TAG: ClassVar[Tag] = Tag.UTC_TIME

    @classmethod
    def from_bytes(cls, data: bytes) -> "UtcTime":
        """Parse the content octets ``YYMMDDhhmm[ss](Z|+hhmm|-hhmm)``."""
        tag = cls.TAG
        data = bytes(data)
        if len(data) < 10:
            raise tag.invalid_value("malformed time string (not yymmddhhmm)")
        year, month, day, hour, minute = (
            decode_decimal(tag, data[pos], data[pos + 1]) for pos in range(0, 10, 2)
        )
        rest = data[10:]
        if not rest:
            raise tag.invalid_value("malformed time string")
        if len(rest) >= 2:
            second = decode_decimal(tag, rest[0], rest[1])
            rest = rest[2:]
        else:
            second = 0
        if month > 12 or day > 31 or hour > 23 or minute > 59 or second > 59:
            raise tag.invalid_value("time components with invalid values")
        if not rest:
            raise tag.invalid_value("malformed time string")
        if rest == b"Z":
            tz = ASN1TimeZone.Z
        elif len(rest) == 5 and rest[:1] in (b"+", b"-"):
            hours = decode_decimal(tag, rest[1], rest[2])
            minutes = decode_decimal(tag, rest[3], rest[4])
            if rest[:1] == b"-":
                hours = -hours
            tz = ASN1TimeZone.offset(hours, minutes)
        else:
            raise tag.invalid_value("malformed time string: no time zone")
        return cls(ASN1DateTime(year, month, day, hour, minute, second, None, tz))

    @classmethod
    def _from_object(cls, header: Header, content: bytes) -> "UtcTime":
        header.tag.assert_eq(cls.TAG)
        if not all(_is_visible(byte) for byte in content):
            raise StringInvalidCharsetError()
        return cls.from_bytes(content)

    @classmethod
    def from_ber(cls, data: bytes) -> tuple[bytes, "UtcTime"]:
        """Parse a BER-encoded UTCTime: (rest, value)."""
        rest, header = Header.from_ber(data)
        rest, content = header.parse_ber_content(rest)
        return rest, cls._from_object(header, content)

    @classmethod
    def from_der(cls, data: bytes) -> tuple[bytes, "UtcTime"]:
        """Parse a DER-encoded UTCTime: (rest, value)."""
        rest, header = Header.from_der(data)
        rest, content = header.parse_der_content(rest)
        return rest, cls._from_object(header, content)

    def utc_datetime(self) -> _dt.datetime:
        """The value as an aware datetime, with the year taken as written."""
        return self.datetime.to_datetime()

    def utc_adjusted_datetime(self) -> _dt.datetime:
        """The value as an aware datetime, years 00-49 as 20xx and 50-99 as 19xx."""
        year = self.datetime.year
        year = year + 1900 if year >= 50 else year + 2000
        adjusted = dataclasses.replace(self.datetime, year=year)
        try:
            return adjusted.to_datetime()
        except InvalidDateTimeError as exc:
            raise self.TAG.invalid_value("Invalid adjusted date") from exc

    def timestamp(self) -> int:
        """Non-leap seconds since 1970-01-01T00:00:00Z."""
        return (self.utc_datetime() - _EPOCH) // _dt.timedelta(seconds=1)

    def to_der_len(self) -> int:
        # tag byte + length byte + YYMMDDhhmmssZ
        return 2 + _DER_CONTENT_LEN

    def write_der_header(self, writer: Writer) -> int:
        return writer.write(bytes([self.TAG.value, _DER_CONTENT_LEN]))

    def write_der_content(self, writer: Writer) -> int:
        dt = self.datetime
        text = (
            f"{dt.year:02}{dt.month:02}{dt.day:02}"
            f"{dt.hour:02}{dt.minute:02}{dt.second:02}Z"
        )
        writer.write(text.encode("ascii"))
        return _DER_CONTENT_LEN

    def __str__(self) -> str:
        dt = self.datetime
        stamp = (
            f"{dt.year:04}-{dt.month:02}-{dt.day:02} "
            f"{dt.hour:02}:{dt.minute:02}:{dt.second:02}"
        )
        if dt.tz.kind is not TimeZoneKind.OFFSET:
            return f"{stamp}Z"
        hours, minutes = dt.tz.hours, dt.tz.minutes
        sign, hours = ("+", hours) if hours > 0 else ("-", -hours)
        return f"{stamp}{sign}{hours:02}{minutes:02}"