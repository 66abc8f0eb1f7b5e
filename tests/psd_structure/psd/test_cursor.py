import io

import pytest

from psd_structure.exceptions import DecodeError, UnexpectedEnd
from psd_structure.psd.cursor import Cursor


class NonSeekable(io.RawIOBase):
    def __init__(self, data: bytes) -> None:
        self._data = io.BytesIO(data)

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return False

    def readinto(self, buffer):  # type: ignore[no-untyped-def]
        data = self._data.read(len(buffer))
        buffer[: len(data)] = data
        return len(data)


def test_cursor_big_endian() -> None:
    cursor = Cursor.frombytes(
        b"\x01\x00\x02\x00\x00\x00\x03\xff\xfe\xff\xff\xff\xfd"
        b"\x00\x00\x00\x00\x00\x00\x00\x04"
    )
    assert cursor.read_u8() == 1
    assert cursor.read_u16() == 2
    assert cursor.read_u32() == 3
    assert cursor.read_i16() == -2
    assert cursor.read_i32() == -3
    assert cursor.read_u64() == 4
    assert cursor.remaining() == 0


def test_cursor_f64() -> None:
    assert Cursor.frombytes(b"\x3f\xf8" + b"\x00" * 6).read_f64() == 1.5


def test_cursor_read_fmt() -> None:
    cursor = Cursor.frombytes(b"8BIM\x00\x01")
    assert cursor.read_fmt("4sH") == (b"8BIM", 1)
    assert cursor.tell() == 6


@pytest.mark.parametrize("version, fixture, expected", [
    (1, b"\x00\x00\x01\x00", 256),
    (2, b"\x00\x00\x00\x00\x00\x00\x01\x00", 256),
])
def test_cursor_read_length(version: int, fixture: bytes, expected: int) -> None:
    cursor = Cursor.frombytes(fixture)
    assert cursor.read_length(version) == expected
    assert cursor.remaining() == 0


def test_cursor_short_read() -> None:
    cursor = Cursor.frombytes(b"\x00\x01\x02")
    cursor.skip(1)
    with pytest.raises(UnexpectedEnd) as excinfo:
        cursor.read_u32()
    assert excinfo.value.offset == 1
    assert isinstance(excinfo.value, DecodeError)
    assert isinstance(excinfo.value, EOFError)


def test_cursor_seek_out_of_range() -> None:
    cursor = Cursor.frombytes(b"\x00" * 4)
    assert cursor.seek(4) == 4
    with pytest.raises(UnexpectedEnd) as excinfo:
        cursor.seek(5)
    assert excinfo.value.offset == 5
    with pytest.raises(UnexpectedEnd):
        cursor.skip(-5)


def test_cursor_peek_bytes() -> None:
    cursor = Cursor.frombytes(b"abcd")
    assert cursor.peek_bytes(2) == b"ab"
    assert cursor.tell() == 0
    assert cursor.read_bytes(4) == b"abcd"


def test_cursor_origin() -> None:
    fp = io.BytesIO(b"junk\x00\x07")
    fp.seek(4)
    cursor = Cursor(fp)
    assert cursor.size == 2
    assert cursor.tell() == 0
    assert cursor.read_u16() == 7


def test_cursor_non_seekable() -> None:
    cursor = Cursor(NonSeekable(b"\x00\x02abc"))  # type: ignore[arg-type]
    assert cursor.size == 5
    assert cursor.read_u16() == 2
    cursor.seek(0)
    assert cursor.read_bytes(5) == b"\x00\x02abc"


def test_cursor_read_span() -> None:
    cursor = Cursor.frombytes(b"head\x00\x01\x00\x02tail")
    cursor.skip(4)
    span = cursor.read_span(4)
    assert cursor.tell() == 8
    assert span.tell() == 4
    assert span.size == 4
    assert span.read_u16() == 1
    assert span.remaining() == 2
    span.seek(4)
    assert span.read_u16() == 1
    with pytest.raises(UnexpectedEnd) as excinfo:
        span.read_u32()
    assert excinfo.value.offset == 6
    with pytest.raises(UnexpectedEnd):
        span.seek(3)
