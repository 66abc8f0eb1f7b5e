"""
Sequential, seekable big-endian reader.

Every decoder in :py:mod:`psd_structure.psd` reads through a
:py:class:`Cursor`. The cursor owns the read position of one decode and
turns short reads and out-of-range seeks into
:py:exc:`~psd_structure.exceptions.UnexpectedEnd` with the offending offset.

Example::

    from psd_structure.psd.cursor import Cursor

    cursor = Cursor.frombytes(b"\\x00\\x01\\x00\\x00\\x00\\x02")
    assert cursor.read_u16() == 1
    assert cursor.read_u32() == 2
"""

import io
import logging
import struct
from typing import Any, BinaryIO, TypeVar

from psd_structure.exceptions import UnexpectedEnd

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Cursor")


class Cursor:
    """
    Big-endian reader over a binary file object.

    Streams that cannot seek are buffered into memory on construction.
    A cursor built over a span of another source can carry that span's
    offset, so positions and error offsets stay absolute.

    .. py:attribute:: size

        Total size of the source in bytes.
    """

    def __init__(self, fp: BinaryIO, offset: int = 0):
        seekable = getattr(fp, "seekable", None)
        if seekable is not None and not seekable():
            logger.debug("buffering non-seekable stream")
            fp = io.BytesIO(fp.read())
        self._fp = fp
        self._origin = fp.tell()
        self._offset = offset
        fp.seek(0, io.SEEK_END)
        self.size = fp.tell() - self._origin
        fp.seek(self._origin, io.SEEK_SET)

    @classmethod
    def frombytes(cls: type[T], data: bytes, offset: int = 0) -> T:
        return cls(io.BytesIO(data), offset)

    def __repr__(self) -> str:
        return "Cursor(offset=%d, size=%d)" % (self.tell(), self.size)

    def tell(self) -> int:
        """Current offset from the start of the source."""
        return self._fp.tell() - self._origin + self._offset

    def remaining(self) -> int:
        """Number of bytes left after the current offset."""
        return self._offset + self.size - self.tell()

    def seek(self, offset: int) -> int:
        """Move to the absolute `offset`."""
        if offset < self._offset or offset > self._offset + self.size:
            raise UnexpectedEnd(
                "Seek out of range, size=%d" % self.size, offset=offset
            )
        self._fp.seek(self._origin + offset - self._offset, io.SEEK_SET)
        return offset

    def skip(self, length: int) -> int:
        """Move `length` bytes relative to the current offset."""
        return self.seek(self.tell() + length)

    def read_span(self: T, length: int) -> T:
        """
        Read exactly `length` bytes and return a cursor bounded to them.
        Offsets reported by the new cursor are those of this one.
        """
        offset = self.tell()
        return self.frombytes(self.read_bytes(length), offset)

    def read_bytes(self, length: int) -> bytes:
        """Read exactly `length` bytes."""
        offset = self.tell()
        if length < 0:
            raise UnexpectedEnd("Negative read length %d" % length, offset=offset)
        data = self._fp.read(length)
        if len(data) != length:
            raise UnexpectedEnd(
                "Expected %d bytes but only %d available" % (length, len(data)),
                offset=offset,
            )
        return data

    def peek_bytes(self, length: int) -> bytes:
        """Read exactly `length` bytes without moving the cursor."""
        offset = self.tell()
        data = self.read_bytes(length)
        self.seek(offset)
        return data

    def read_fmt(self, fmt: str) -> tuple[Any, ...]:
        """
        Read values according to a big-endian :py:mod:`struct` format.
        """
        fmt = ">" + fmt
        return struct.unpack(fmt, self.read_bytes(struct.calcsize(fmt)))

    def read_u8(self) -> int:
        return self.read_fmt("B")[0]  # type: ignore[no-any-return]

    def read_u16(self) -> int:
        return self.read_fmt("H")[0]  # type: ignore[no-any-return]

    def read_u32(self) -> int:
        return self.read_fmt("I")[0]  # type: ignore[no-any-return]

    def read_u64(self) -> int:
        return self.read_fmt("Q")[0]  # type: ignore[no-any-return]

    def read_i16(self) -> int:
        return self.read_fmt("h")[0]  # type: ignore[no-any-return]

    def read_i32(self) -> int:
        return self.read_fmt("i")[0]  # type: ignore[no-any-return]

    def read_f64(self) -> float:
        return self.read_fmt("d")[0]  # type: ignore[no-any-return]

    def read_length(self, version: int = 1) -> int:
        """Read a section length: u32 in PSD, u64 in PSB."""
        return self.read_u32() if version == 1 else self.read_u64()
