import io

import pytest

from berder.errors import (
    BerMaxDepthError,
    ConstructExpectedError,
    ConstructUnexpectedError,
    DerConstraint,
    DerConstraintFailedError,
    IncompleteError,
    IntegerTooLargeError,
    InvalidLengthError,
    InvalidTagError,
    UnexpectedClassError,
    UnexpectedTagError,
)
from berder.header import (
    Header,
    TagIdentifier,
    ber_get_object_content,
    bytes_to_u64,
    der_get_object_content,
    parse_ber_length_byte,
    parse_identifier,
)
from berder.length import Length
from berder.tags import Class, Tag


def test_methods_header():
    data = bytes.fromhex("020100")
    rest, header = Header.from_ber(data)
    assert header.class_ is Class.UNIVERSAL
    assert header.tag == Tag.INTEGER
    header.assert_primitive()
    with pytest.raises(ConstructExpectedError):
        header.assert_constructed()
    assert header.is_universal()
    assert not header.is_application()
    assert not header.is_private()
    assert rest == data[2:]

    simple = Header.new_simple(Tag.INTEGER)
    assert header == simple

    hdr3 = (
        simple.with_class(Class.CONTEXT_SPECIFIC)
        .with_constructed(True)
        .with_length(Length.of(1))
    )
    assert hdr3.constructed
    assert hdr3.is_constructed()
    hdr3.assert_constructed()
    assert hdr3.is_contextspecific()
    assert hdr3.to_der_vec() == bytes([0xA2, 0x01])

    hdr4 = hdr3.with_length(Length.INDEFINITE)
    with pytest.raises(DerConstraintFailedError) as exc:
        hdr4.assert_definite()
    assert exc.value.constraint is DerConstraint.INDEFINITE_LENGTH
    assert hdr4.to_der_vec() == bytes([0xA2, 0x80])

    hdr = Header.new_simple(Tag(2)).with_length(Length.of(1))
    assert hdr.parse_ber_content(data[2:]) == (b"", data[2:])
    assert hdr.parse_der_content(data[2:]) == (b"", data[2:])


def test_assert_primitive_on_constructed():
    header = Header.new_simple(Tag.SEQUENCE)
    assert header.constructed is True
    with pytest.raises(ConstructUnexpectedError):
        header.assert_primitive()


def test_assert_class_and_tag():
    header = Header.new_simple(Tag.INTEGER)
    header.assert_class(Class.UNIVERSAL)
    header.assert_tag(Tag.INTEGER)
    with pytest.raises(UnexpectedClassError) as cls_exc:
        header.assert_class(Class.PRIVATE)
    assert cls_exc.value == UnexpectedClassError(Class.PRIVATE, Class.UNIVERSAL)
    with pytest.raises(UnexpectedTagError) as tag_exc:
        header.assert_tag(Tag.BOOLEAN)
    assert tag_exc.value == UnexpectedTagError(Tag.BOOLEAN, Tag.INTEGER)


def test_equality_compares_raw_tags_when_both_present():
    base = Header.new_simple(Tag(15)).with_class(Class.CONTEXT_SPECIFIC)
    canonical = base.with_raw_tag(b"\x8f")
    long_form = base.with_raw_tag(b"\x9f\x0f")
    assert canonical != long_form
    assert canonical == base
    assert long_form == base.with_raw_tag(bytes([0x9F, 0x0F]))


def test_to_der_tag():
    assert TagIdentifier(Class.UNIVERSAL, False, Tag(0x1A)).to_der_vec() == bytes([0x1A])
    assert TagIdentifier(Class.APPLICATION, False, Tag(0x1A)).to_der_vec() == bytes(
        [0x1A | (0b01 << 6)]
    )
    assert TagIdentifier(Class.UNIVERSAL, True, Tag(0x10)).to_der_vec() == bytes([0x30])
    long_tag = TagIdentifier(Class.UNIVERSAL, False, Tag(0x1A1A))
    assert long_tag.to_der_vec() == bytes([0b1_1111, 0x9A, 0x34])
    assert long_tag.to_der_len() == 3


def test_tag_identifier_len_short():
    assert TagIdentifier(Class.UNIVERSAL, False, Tag(30)).to_der_len() == 1
    assert TagIdentifier(Class.UNIVERSAL, False, Tag(31)).to_der_len() == 2


def test_to_der_header():
    assert Header.new_simple(Tag.INTEGER).to_der_vec() == bytes([0x02, 0x00])
    header = Header(Class.UNIVERSAL, False, Tag.INTEGER, Length.INDEFINITE)
    assert header.to_der_vec() == bytes([0x02, 0x80])
    assert header.to_der_len() == 2


def test_write_der_raw_uses_raw_tag():
    header = Header.new_simple(Tag(15)).with_class(Class.CONTEXT_SPECIFIC)
    header = header.with_raw_tag(b"\x9f\x0f").with_length(Length.of(2))
    assert header.to_der_vec() == bytes([0x8F, 0x02])
    assert header.to_der_vec_raw() == bytes([0x9F, 0x0F, 0x02])
    buffer = io.BytesIO()
    assert header.write_der_raw(buffer) == 3


def test_from_ber_tag_custom():
    rest, header = Header.from_ber(bytes.fromhex("8f021234"))
    assert rest == bytes.fromhex("1234")
    assert header.tag == Tag(15)
    rest, header = Header.from_ber(bytes.fromhex("9f0f021234"))
    assert rest == bytes.fromhex("1234")
    assert header.tag == Tag(15)
    assert header.raw_tag == bytes([0x9F, 0x0F])


def test_from_ber_tag_incomplete():
    with pytest.raises(InvalidTagError):
        Header.from_ber(bytes.fromhex("9fa2a2"))


def test_from_ber_tag_overflow():
    with pytest.raises(InvalidTagError):
        Header.from_ber(bytes.fromhex("9fa2a2a2a2a2a2220100"))


def test_from_ber_tag_long():
    rest, header = Header.from_ber(bytes.fromhex("9fa2220100"))
    assert header.tag == Tag(0x1122)
    assert header.raw_tag == bytes([0x9F, 0xA2, 0x22])
    assert header.parse_ber_content(rest) == (b"", b"\x00")


@pytest.mark.parametrize(
    "encoded, needed",
    [("30", 1), ("02", 1), ("0285", 5), ("0285ff", 4)],
)
def test_from_ber_length_incomplete_header(encoded, needed):
    with pytest.raises(IncompleteError) as exc:
        Header.from_ber(bytes.fromhex(encoded))
    assert exc.value == IncompleteError(needed)


def test_from_ber_content_incomplete():
    rest, header = Header.from_ber(bytes.fromhex("0205"))
    with pytest.raises(IncompleteError) as exc:
        header.parse_ber_content(rest)
    assert exc.value.needed == 5


def test_from_ber_length_invalid():
    data = bytes.fromhex("02ff000102030405060708090a0b0c0d0e0f10")
    with pytest.raises(InvalidLengthError):
        Header.from_ber(data)
    rest, header = Header.from_ber(bytes.fromhex("0285ffffffffff00"))
    assert header.length == Length.of(0xFF_FFFF_FFFF)
    with pytest.raises(IncompleteError):
        header.parse_ber_content(rest)


def test_from_ber_length_too_large():
    with pytest.raises(InvalidLengthError):
        Header.from_ber(bytes.fromhex("0289010000000000000000"))


def test_from_ber_long_form_length():
    rest, header = Header.from_ber(bytes.fromhex("038104066e5dc0"))
    assert header.length == Length.of(4)
    assert header.tag == Tag.BIT_STRING
    assert header.parse_ber_content(rest) == (b"", bytes.fromhex("066e5dc0"))


def test_from_ber_primitive_indefinite_rejected():
    with pytest.raises(ConstructExpectedError):
        Header.from_ber(bytes.fromhex("0280010000"))


def test_from_der_indefinite_length():
    for encoded in ("2380030300 0a3b0305045f291cd00000", "0280010000"):
        with pytest.raises(DerConstraintFailedError) as exc:
            Header.from_der(bytes.fromhex(encoded.replace(" ", "")))
        assert exc.value.constraint is DerConstraint.INDEFINITE_LENGTH


def test_from_der_header():
    rest, header = Header.from_der(bytes.fromhex("020102ffff"))
    assert rest == bytes.fromhex("02ffff")
    assert header.tag == Tag.INTEGER
    assert header.parse_der_content(rest) == (bytes.fromhex("ffff"), b"\x02")


def test_from_der_constructed_flag():
    rest, header = Header.from_der(bytes.fromhex("23810c0303000a"))
    assert header.is_constructed()
    assert header.length == Length.of(12)
    assert rest == bytes.fromhex("0303000a")


def test_ber_indefinite_content():
    rest, header = Header.from_ber(bytes.fromhex("308002010500 00ff".replace(" ", "")))
    assert header.length == Length.INDEFINITE
    assert header.parse_ber_content(rest) == (b"\xff", bytes.fromhex("020105"))


def test_ber_indefinite_nested_content():
    data = bytes.fromhex("3080308002010100000000aa")
    rest, header = Header.from_ber(data)
    assert ber_get_object_content(rest, header, 8) == (b"\xaa", bytes.fromhex("308002010100 00".replace(" ", "")))


def test_ber_max_depth():
    rest, header = Header.from_ber(bytes.fromhex("308030800000 0000".replace(" ", "")))
    with pytest.raises(BerMaxDepthError):
        ber_get_object_content(rest, header, 1)
    with pytest.raises(BerMaxDepthError):
        ber_get_object_content(rest, header, 0)


def test_ber_indefinite_requires_constructed():
    header = Header(Class.UNIVERSAL, False, Tag.INTEGER, Length.INDEFINITE)
    with pytest.raises(ConstructExpectedError):
        ber_get_object_content(b"\x00\x00", header, 8)


def test_der_get_object_content():
    header = Header.new_simple(Tag.OCTET_STRING).with_length(Length.of(3))
    assert der_get_object_content(b"abcd", header) == (b"d", b"abc")
    with pytest.raises(IncompleteError) as exc:
        der_get_object_content(b"a", header)
    assert exc.value.needed == 2
    indefinite = header.with_constructed(True).with_length(Length.INDEFINITE)
    with pytest.raises(DerConstraintFailedError):
        der_get_object_content(b"\x00\x00", indefinite)
    with pytest.raises(DerConstraintFailedError):
        indefinite.parse_der_content(b"\x00\x00")


def test_parse_identifier():
    rest, ident = parse_identifier(bytes.fromhex("a103"))
    assert rest == b"\x03"
    assert tuple(ident) == (0b10, True, 1, b"\xa1")
    with pytest.raises(IncompleteError) as exc:
        parse_identifier(b"")
    assert exc.value.needed == 1


def test_parse_ber_length_byte():
    assert parse_ber_length_byte(bytes.fromhex("8201")) == (b"\x01", (1, 2))
    assert parse_ber_length_byte(bytes.fromhex("7f")) == (b"", (0, 0x7F))
    with pytest.raises(IncompleteError):
        parse_ber_length_byte(b"")


def test_bytes_to_u64():
    assert bytes_to_u64(bytes.fromhex("010001")) == 65537
    assert bytes_to_u64(b"") == 0
    assert bytes_to_u64(b"\xff" * 8) == 0xFFFF_FFFF_FFFF_FFFF
    with pytest.raises(IntegerTooLargeError):
        bytes_to_u64(b"\x01" + b"\x00" * 8)


def test_header_roundtrip_der():
    header = Header(Class.APPLICATION, True, Tag(0x50), Length.of(300))
    encoded = header.to_der_vec()
    assert header.to_der_len() == len(encoded)
    rest, parsed = Header.from_der(encoded)
    assert rest == b""
    assert parsed == header
    assert parsed.length == Length.of(300)
    assert parsed.is_application()