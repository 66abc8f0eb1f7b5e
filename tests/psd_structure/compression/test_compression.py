import logging
import sys
import zlib
from typing import Optional

import pytest

from psd_structure.compression import decode_prediction, decode_rle, decompress
from psd_structure.constants import Compression
from psd_structure.exceptions import UnsupportedCompression

logger = logging.getLogger(__name__)

RAW_IMAGE_3x2_8bit = b"\x01\x02\x03\x05\x05\x04"
DELTA_IMAGE_3x2_8bit = b"\x01\x01\x01\x05\x00\xff"
RAW_IMAGE_2x1_32bit = b"\x3f\x80\x00\x00\x40\x00\x00\x00"
DELTA_IMAGE_2x1_32bit = b"\x3f\x01\x40\x80\x00\x00\x00\x00"


@pytest.mark.parametrize(
    "fixture, expected, width, height, depth",
    [
        (DELTA_IMAGE_3x2_8bit, RAW_IMAGE_3x2_8bit, 3, 2, 8),
        (b"\x00\x01\x00\x01", b"\x00\x01\x00\x02", 2, 1, 16),
        (b"\xff\xff\x00\x02", b"\xff\xff\x00\x01", 2, 1, 16),
        (b"\x3f\x41\x80\x00", b"\x3f\x80\x00\x00", 1, 1, 32),
        (DELTA_IMAGE_2x1_32bit, RAW_IMAGE_2x1_32bit, 2, 1, 32),
    ],
)
def test_decode_prediction(
    fixture: bytes, expected: bytes, width: int, height: int, depth: int
) -> None:
    assert decode_prediction(fixture, width, height, depth) == expected


def test_decode_prediction_invalid_depth() -> None:
    with pytest.raises(ValueError):
        decode_prediction(b"\x00", 8, 1, 1)


def test_decode_prediction_invalid_size() -> None:
    with pytest.raises(ValueError):
        decode_prediction(b"\x00" * 5, 3, 2, 8)


def test_decode_prediction_big_endian_host(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "byteorder", "big")
    assert decode_prediction(b"\x00\x01\x00\x01", 2, 1, 16) == b"\x00\x01\x00\x02"


def test_decode_rle() -> None:
    scanlines = [b"\x02\x01\x02\x03", b"\xff\x05\x00\x04"]
    assert decode_rle(scanlines, 3) == RAW_IMAGE_3x2_8bit


def test_decode_rle_repeat() -> None:
    assert decode_rle([b"\xfe\x07"], 3) == b"\x07\x07\x07"


def test_decode_rle_invalid(caplog: pytest.LogCaptureFixture) -> None:
    with pytest.raises(ValueError):
        decode_rle([b"\xfe\x07", b"\xfd\x07"], 3)
    assert "scan line 1" in caplog.text


@pytest.mark.parametrize(
    "data, kind, scanlines",
    [
        (RAW_IMAGE_3x2_8bit, Compression.RAW, None),
        (
            b"",
            Compression.RLE,
            (b"\x02\x01\x02\x03", b"\xff\x05\x00\x04"),
        ),
        (zlib.compress(RAW_IMAGE_3x2_8bit), Compression.ZIP, None),
        (
            zlib.compress(DELTA_IMAGE_3x2_8bit),
            Compression.ZIP_WITH_PREDICTION,
            None,
        ),
    ],
)
def test_decompress(data: bytes, kind: Compression, scanlines: Optional[tuple]) -> None:
    assert decompress(data, kind, 3, 2, 8, scanlines) == RAW_IMAGE_3x2_8bit


def test_decompress_rle_without_scanlines() -> None:
    with pytest.raises(ValueError):
        decompress(b"\x00\x03\x00\x03", Compression.RLE, 3, 2, 8)


def test_decompress_bitmap() -> None:
    assert decompress(b"\xf0\x0f\xff", Compression.RAW, 9, 1, 1) == b"\xf0\x0f"


def test_decompress_short() -> None:
    with pytest.raises(ValueError):
        decompress(b"\x00\x00", Compression.RAW, 3, 2, 8)


def test_decompress_unsupported() -> None:
    with pytest.raises(UnsupportedCompression) as excinfo:
        decompress(b"", 99, 1, 1, 8)
    assert excinfo.value.value == 99
