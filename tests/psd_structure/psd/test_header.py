from typing import Any

import pytest

from psd_structure.constants import ColorMode
from psd_structure.exceptions import (
    MalformedHeader,
    MalformedSignature,
    UnsupportedColorMode,
    UnsupportedVersion,
)
from psd_structure.psd.header import FileHeader

from ..utils import header


def test_header_read() -> None:
    fixture = (
        b"8BPS\x00\x01\x00\x00\x00\x00\x00\x00\x00\x03\x00\x00\x00\x96\x00"
        b"\x00\x00d\x00 \x00\x03"
    )
    result = FileHeader.frombytes(fixture)
    assert result.version == 1
    assert result.channels == 3
    assert result.height == 150
    assert result.width == 100
    assert result.depth == 32
    assert result.color_mode == ColorMode.RGB
    assert not result.is_psb


def test_header_psb() -> None:
    result = FileHeader.frombytes(header(version=2, color_mode=4))
    assert result.is_psb
    assert result.color_mode == ColorMode.CMYK


@pytest.mark.parametrize("kwargs, error, offset", [
    (dict(signature=b"8BPX"), MalformedSignature, 0),
    (dict(signature=b" 8BP"), MalformedSignature, 0),
    (dict(version=3), UnsupportedVersion, 4),
    (dict(reserved=b"\x00\x00\x00\x00\x00\x01"), MalformedHeader, 6),
    (dict(channels=0), MalformedHeader, 12),
    (dict(channels=57), MalformedHeader, 12),
    (dict(height=0), MalformedHeader, 14),
    (dict(width=300001), MalformedHeader, 14),
    (dict(depth=4), MalformedHeader, 22),
    (dict(color_mode=5), UnsupportedColorMode, 24),
])
def test_header_errors(kwargs: dict[str, Any], error: type, offset: int) -> None:
    with pytest.raises(error) as excinfo:
        FileHeader.frombytes(header(**kwargs))
    assert excinfo.value.offset == offset


def test_header_signature_checked_first() -> None:
    with pytest.raises(MalformedSignature):
        FileHeader.frombytes(header(signature=b"PNG\x00", version=9, depth=3))


def test_header_signature_validator() -> None:
    with pytest.raises(ValueError):
        FileHeader(signature=b"8BIM")
