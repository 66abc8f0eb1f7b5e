import logging
import zlib

import pytest

from psd_structure.constants import Compression
from psd_structure.exceptions import InconsistentLength, UnsupportedCompression
from psd_structure.psd.channel_data import ChannelData, frame_payload, row_size
from psd_structure.psd.cursor import Cursor
from psd_structure.psd.layer_and_mask import ChannelInfo

from ..utils import payload, rle_body

logger = logging.getLogger(__name__)


@pytest.mark.parametrize("width, depth, expected", [
    (2, 8, 2),
    (3, 16, 6),
    (2, 32, 8),
    (1, 1, 1),
    (9, 1, 2),
])
def test_row_size(width: int, depth: int, expected: int) -> None:
    assert row_size(width, depth) == expected


def read_channel(fixture: bytes, width: int = 2, height: int = 2, **kwargs):
    cursor = Cursor.frombytes(fixture + b"next")
    channel = ChannelData.read(
        cursor, ChannelInfo(id=0, length=len(fixture)), width, height, **kwargs
    )
    assert cursor.read_bytes(4) == b"next"
    return channel


def test_channel_data_raw() -> None:
    channel = read_channel(payload(0, b"\x01\x02\x03\x04"))
    assert channel.compression == Compression.RAW
    assert channel.data == b"\x01\x02\x03\x04"
    assert channel.expected_size == 4
    assert channel.is_supported
    assert channel.get_data(2, 2, 8) == b"\x01\x02\x03\x04"


def test_channel_data_raw_size_mismatch(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="psd_structure"):
        channel = read_channel(payload(0, b"\x01\x02\x03"))
    assert channel.data == b"\x01\x02\x03"
    assert channel.expected_size == 4
    assert "expected 4" in caplog.text


def test_channel_data_rle() -> None:
    channel = read_channel(payload(1, rle_body([b"\x01\x02", b"\x03\x04"])))
    assert channel.compression == Compression.RLE
    assert channel.byte_counts == (3, 3)
    assert channel.scanlines == (b"\x01\x01\x02", b"\x01\x03\x04")
    assert channel.get_data(2, 2, 8) == b"\x01\x02\x03\x04"


def test_channel_data_rle_psb() -> None:
    body = rle_body([b"\x01\x02", b"\x03\x04"], version=2)
    channel = read_channel(payload(1, body), version=2)
    assert channel.byte_counts == (3, 3)
    assert channel.get_data(2, 2, 8) == b"\x01\x02\x03\x04"


def test_channel_data_rle_get_data_uses_scanlines() -> None:
    channel = ChannelData(
        compression=Compression.RLE,
        data=b"\xff\xff\xff\xff",
        byte_counts=(3, 3),
        scanlines=(b"\x01\x01\x02", b"\x01\x03\x04"),
    )
    assert channel.get_data(2, 2, 8) == b"\x01\x02\x03\x04"


def test_channel_data_rle_counts_overflow() -> None:
    body = rle_body([b"\x01\x02", b"\x03\x04"])
    with pytest.raises(InconsistentLength) as excinfo:
        read_channel(payload(1, body[:-1]))
    assert excinfo.value.offset == 0


def test_channel_data_rle_table_overflow() -> None:
    with pytest.raises(InconsistentLength):
        read_channel(payload(1, b"\x00\x01"))


@pytest.mark.parametrize("value", [Compression.ZIP, Compression.ZIP_WITH_PREDICTION])
def test_channel_data_zip(value: Compression) -> None:
    body = zlib.compress(b"\x01\x01\x01\x01")
    channel = read_channel(payload(value, body))
    assert channel.compression == value
    assert channel.data == body
    assert channel.byte_counts is None


def test_channel_data_zip_get_data() -> None:
    body = zlib.compress(b"\x01\x02\x03\x04")
    channel = read_channel(payload(2, body))
    assert channel.get_data(2, 2, 8) == b"\x01\x02\x03\x04"


def test_channel_data_unknown_compression(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="psd_structure"):
        channel = read_channel(payload(99, b"\xde\xad\xbe\xef\x00"))
    assert channel.compression == 99
    assert channel.data == b"\xde\xad\xbe\xef\x00"
    assert not channel.is_supported
    assert isinstance(channel.error, UnsupportedCompression)
    assert channel.error.value == 99
    assert channel.error.offset == 0
    assert "Unsupported compression 99" in caplog.text
    with pytest.raises(UnsupportedCompression):
        channel.get_data(2, 2, 8)


@pytest.mark.parametrize("length", [0, 1])
def test_channel_data_too_short(length: int) -> None:
    cursor = Cursor.frombytes(b"\x00\x00\x00\x00")
    with pytest.raises(InconsistentLength):
        ChannelData.read(cursor, ChannelInfo(id=0, length=length), 2, 2)


def test_frame_payload_exact_span() -> None:
    cursor = Cursor.frombytes(payload(0, b"\x00" * 4) + payload(0, b"\xff" * 4))
    first = frame_payload(cursor, 6, 2, 2)
    assert cursor.tell() == 6
    second = frame_payload(cursor, 6, 2, 2)
    assert first["data"] == b"\x00" * 4
    assert second["data"] == b"\xff" * 4
