"""Base class for objects that can be written as DER."""

from __future__ import annotations

import abc
import io
from contextlib import contextmanager
from typing import Iterator, Protocol

from .errors import Asn1Error, SerializeError


class Writer(Protocol):
    """Any binary sink with a ``write`` method returning the bytes written."""

    def write(self, data: bytes) -> int: ...


@contextmanager
def _serializing() -> Iterator[None]:
    try:
        yield
    except (Asn1Error, OSError) as exc:
        raise SerializeError(exc) from exc


class ToDer(abc.ABC):
    """An object with a DER representation made of a header and content."""

    @abc.abstractmethod
    def to_der_len(self) -> int:
        """Length of the encoding, header included."""

    @abc.abstractmethod
    def write_der_header(self, writer: Writer) -> int:
        """Write the DER header and return the number of bytes written."""

    @abc.abstractmethod
    def write_der_content(self, writer: Writer) -> int:
        """Write the DER content and return the number of bytes written."""

    def write_der(self, writer: Writer) -> int:
        """Write header and content; return the number of bytes written.

        Decoding and I/O errors are raised as SerializeError.
        """
        with _serializing():
            written = self.write_der_header(writer)
            return written + self.write_der_content(writer)

    def write_der_raw(self, writer: Writer) -> int:
        """Write the stored values unchanged; may not be valid DER."""
        return self.write_der(writer)

    def to_der_vec(self) -> bytes:
        """Return the DER encoding as bytes."""
        buffer = io.BytesIO()
        self.write_der(buffer)
        return buffer.getvalue()

    def to_der_vec_raw(self) -> bytes:
        """Return the raw encoding as bytes, using stored values unchanged."""
        buffer = io.BytesIO()
        with _serializing():
            self.write_der_raw(buffer)
        return buffer.getvalue()