# berder

Building blocks for reading and writing ASN.1 data in the Basic Encoding
Rules (BER) and Distinguished Encoding Rules (DER) of X.690: identifier
classes and tags, lengths, object headers, extraction of object content,
and the UTCTime type.

## Modules

- `berder.tags`: `Class` (an enum: `UNIVERSAL`, `APPLICATION`,
  `CONTEXT_SPECIFIC`, `PRIVATE`) and `Tag`, a 32-bit tag number with the
  universal tags as constants (`Tag.INTEGER`, `Tag.SEQUENCE`,
  `Tag.UTC_TIME`, ...). `Class.assert_eq` and `Tag.assert_eq` raise
  `UnexpectedClassError` / `UnexpectedTagError` on a mismatch;
  `Tag.invalid_value(msg)` builds an `InvalidValueError`.
- `berder.length`: `Length`, either definite (`Length.of(n)`) or
  `Length.INDEFINITE`. `size()` returns the definite value or raises
  `IndefiniteLengthUnexpectedError`; `+` adds an `int` or another `Length`
  (indefinite stays indefinite). It encodes itself in short or long form.
- `berder.header`: `Header` (class, constructed flag, tag, length and the
  raw tag bytes as read), `TagIdentifier` (the identifier octets alone), and
  the helpers `parse_identifier`, `parse_ber_length_byte`, `bytes_to_u64`,
  `ber_get_object_content` and `der_get_object_content`.
- `berder.asn1_datetime`: `ASN1DateTime`, `ASN1TimeZone` (`UNDEFINED`,
  `Z`, or `ASN1TimeZone.offset(hours, minutes)`) and `decode_decimal`.
  `ASN1DateTime.to_datetime()` returns an aware `datetime.datetime`, taking
  an undefined zone as UTC, and raises `InvalidDateTimeError` for values
  that are not a real date and time.
- `berder.utctime`: `UtcTime`, parsed from BER or DER and written as DER.
- `berder.const_int`: `IntBuilder.build(value)` turns an unsigned 64-bit
  integer into a `ConstInt`, a ten-byte buffer whose first `n` bytes
  (`ConstInt.encoded`) are the byte `0x04`, the byte count, and the value's
  big-endian bytes without leading zeros.
- `berder.encoding`: `ToDer`, the base class of every encodable object
  here. Subclasses provide `to_der_len`, `write_der_header` and
  `write_der_content`; `ToDer` adds `write_der`, `write_der_raw`,
  `to_der_vec` and `to_der_vec_raw`.
- `berder.errors`: every decoding error derives from `Asn1Error`; errors
  compare equal when type and fields match. Serialization raises
  `SerializeError`, which wraps the decoding error or `OSError` behind it.

## Parsing a header

```python
from berder.header import Header
from berder.tags import Class, Tag

rem, header = Header.from_ber(bytes.fromhex("020100"))
assert header.tag == Tag.INTEGER
assert header.class_ is Class.UNIVERSAL
assert rem == b"\x00"

rem, content = header.parse_ber_content(rem)
assert content == b"\x00" and rem == b""
```

`from_ber` and `from_der` return the unparsed remainder together with the
parsed value. `from_der` rejects the indefinite length form with
`DerConstraintFailedError`. Input that ends too soon raises
`IncompleteError`, whose `needed` attribute is the number of missing bytes.
With a BER indefinite length, `parse_ber_content` walks the nested objects
(to a depth of 8) and returns the content without the closing
End-Of-Content octets.

## Encoding

```python
from berder.header import Header
from berder.length import Length
from berder.tags import Class, Tag

header = (
    Header.new_simple(Tag.INTEGER)
    .with_class(Class.CONTEXT_SPECIFIC)
    .with_constructed(True)
    .with_length(Length.of(1))
)
assert header.to_der_vec() == bytes([0xA2, 0x01])
assert Length.of(250).to_der_vec() == bytes([0x81, 0xFA])
assert Length.INDEFINITE.to_der_vec() == bytes([0x80])
```

`write_der(writer)` writes to any object with a `write(bytes)` method and
returns the number of bytes written. `Header.write_der_raw` reuses the raw
tag bytes when the header was parsed.

## UTCTime

```python
from berder.utctime import UtcTime

rem, value = UtcTime.from_der(bytes.fromhex("170d3032313231333134323932335aff"))
assert rem == b"\xff"
print(value)                          # 0002-12-13 14:29:23Z
print(value.utc_adjusted_datetime())  # 2002-12-13 14:29:23+00:00
assert value.to_der_vec() == bytes.fromhex("170d3032313231333134323932335a")
```

The year is kept as its two digits. `utc_datetime()` uses it as written;
`utc_adjusted_datetime()` reads 00-49 as 2000-2049 and 50-99 as 1950-1999;
`timestamp()` gives seconds since the Unix epoch. The DER output always
carries seconds and a `Z`.

## What is not included

There are no value types besides `UtcTime`: no INTEGER, BOOLEAN, OCTET
STRING, OBJECT IDENTIFIER, SEQUENCE, SET, other string or time types, no
generic "any object" type and no tagged (EXPLICIT/IMPLICIT) wrappers.
The package gives the header, length and content layers on which such
types are built.

## Running the tests

```
pip install -e ".[test]"
pytest
```