"""ASN.1 BER/DER building blocks: tags, lengths, headers, content extraction and UTCTime."""

__version__ = "0.1.0"

__all__ = [
    "asn1_datetime",
    "const_int",
    "encoding",
    "errors",
    "header",
    "length",
    "tags",
    "utctime",
]