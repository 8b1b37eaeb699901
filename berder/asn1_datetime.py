"""Date, time and time zone values carried by ASN.1 time types."""

from __future__ import annotations

import datetime as _dt
import enum
import functools
from dataclasses import dataclass
from typing import ClassVar, Optional

from .errors import InvalidDateTimeError
from .tags import Tag


class TimeZoneKind(enum.IntEnum):
    """Kind of time zone information."""

    UNDEFINED = 0
    Z = 1
    OFFSET = 2


@dataclass(frozen=True, order=True)
class ASN1TimeZone:
    """Time zone: undefined, UTC (``Z``), or an offset to UTC."""

    kind: TimeZoneKind
    hours: int = 0
    minutes: int = 0

    UNDEFINED: ClassVar["ASN1TimeZone"]
    Z: ClassVar["ASN1TimeZone"]

    @classmethod
    def offset(cls, hours: int, minutes: int) -> "ASN1TimeZone":
        """Local zone with the given offset to UTC."""
        return cls(TimeZoneKind.OFFSET, hours, minutes)

    def __repr__(self) -> str:
        if self.kind is TimeZoneKind.OFFSET:
            return f"ASN1TimeZone.offset({self.hours}, {self.minutes})"
        return f"ASN1TimeZone.{self.kind.name}"


ASN1TimeZone.UNDEFINED = ASN1TimeZone(TimeZoneKind.UNDEFINED)
ASN1TimeZone.Z = ASN1TimeZone(TimeZoneKind.Z)


@functools.total_ordering
@dataclass(frozen=True)
class ASN1DateTime:
    """Calendar date and time of day, with optional milliseconds and zone."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    millisecond: Optional[int] = None
    tz: ASN1TimeZone = ASN1TimeZone.UNDEFINED

    def _sort_key(self) -> tuple:
        millis = (0,) if self.millisecond is None else (1, self.millisecond)
        return (
            self.year,
            self.month,
            self.day,
            self.hour,
            self.minute,
            self.second,
            millis,
            self.tz,
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ASN1DateTime):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def to_datetime(self) -> _dt.datetime:
        """Return an aware datetime; undefined zones are taken as UTC."""
        try:
            if self.tz.kind is TimeZoneKind.OFFSET:
                hours, minutes = self.tz.hours, abs(self.tz.minutes)
                total = hours * 60 + (minutes if hours >= 0 else -minutes)
                tzinfo = _dt.timezone(_dt.timedelta(minutes=total))
            else:
                tzinfo = _dt.timezone.utc
            millis = self.millisecond or 0
            if not 0 <= millis < 1000:
                raise ValueError("millisecond out of range")
            return _dt.datetime(
                self.year,
                self.month,
                self.day,
                self.hour,
                self.minute,
                self.second,
                millis * 1000,
                tzinfo=tzinfo,
            )
        except (ValueError, OverflowError) as exc:
            raise InvalidDateTimeError() from exc

    def __str__(self) -> str:
        fractional = "" if self.millisecond is None else f".{self.millisecond}"
        return (
            f"{self.year:04}{self.month:02}{self.day:02}"
            f"{self.hour:02}{self.minute:02}{self.second:02}{fractional}Z"
        )


def _is_ascii_digit(value: int) -> bool:
    return 0x30 <= value <= 0x39


def decode_decimal(tag: Tag, hi: int, lo: int) -> int:
    """Decode two ASCII digit bytes into a number from 0 to 99."""
    if _is_ascii_digit(hi) and _is_ascii_digit(lo):
        return (hi - 0x30) * 10 + (lo - 0x30)
    raise tag.invalid_value("expected digit")