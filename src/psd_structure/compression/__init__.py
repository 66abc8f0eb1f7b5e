"""
Decoders for channel payloads.

The structure decoders in :py:mod:`psd_structure.psd` only frame payloads;
this subpackage turns a framed payload back into raw scan lines when a
consumer asks for pixels. RLE payloads are decoded from the scan lines the
framer already split off; the other methods work on the payload body.

Supported compression methods:

- **RAW** (``Compression.RAW``): Uncompressed raw pixel data
- **RLE** (``Compression.RLE``): Apple PackBits run-length encoding
- **ZIP** (``Compression.ZIP``): ZIP/Deflate compression without prediction
- **ZIP_WITH_PREDICTION** (``Compression.ZIP_WITH_PREDICTION``): ZIP with delta encoding

Example usage::

    from psd_structure.compression import decompress

    channel = psd.channel_image_data[0]
    raw_pixels = decompress(
        channel.data,
        channel.compression,
        width=100,
        height=100,
        depth=8,
        scanlines=channel.scanlines,
    )
"""

import logging
import sys
import zlib
from typing import Optional, Sequence, Union

from psd_structure.compression import rle as rle_impl
from psd_structure.constants import Compression
from psd_structure.exceptions import UnsupportedCompression
from psd_structure.psd.bin_utils import be_array_from_bytes

logger = logging.getLogger(__name__)


def decompress(
    data: bytes,
    compression: Union[Compression, int],
    width: int,
    height: int,
    depth: int,
    scanlines: Optional[Sequence[bytes]] = None,
) -> bytes:
    """Decompress a framed payload.

    :param data: payload body after the compression tag.
    :param compression: compression type,
            see :py:class:`~psd_structure.constants.Compression`.
    :param width: width.
    :param height: height.
    :param depth: bit depth of the pixel.
    :param scanlines: compressed scan lines of an RLE payload, as framed by
            :py:func:`~psd_structure.psd.channel_data.frame_payload`.
    :return: decompressed data bytes.
    """
    row_size = (width * depth + 7) // 8
    length = row_size * height

    if compression == Compression.RAW:
        result = data[:length]
    elif compression == Compression.RLE:
        if scanlines is None:
            raise ValueError("RLE payload has no framed scan lines")
        result = decode_rle(scanlines, row_size)
    elif compression == Compression.ZIP:
        result = zlib.decompress(data)
    elif compression == Compression.ZIP_WITH_PREDICTION:
        result = decode_prediction(zlib.decompress(data), width, height, depth)
    else:
        raise UnsupportedCompression(compression)

    if len(result) != length:
        raise ValueError("len=%d, expected=%d" % (len(result), length))
    return result


def decode_rle(scanlines: Sequence[bytes], row_size: int) -> bytes:
    """Unpack each PackBits scan line to `row_size` bytes and join them."""
    rows = []
    for index, line in enumerate(scanlines):
        try:
            rows.append(rle_impl.decode(line, row_size))
        except ValueError as e:
            logger.error("RLE decoding failed at scan line %d: %s" % (index, e))
            raise
    return b"".join(rows)


def decode_prediction(data: bytes, width: int, height: int, depth: int) -> bytes:
    """
    Undo the horizontal delta filter of ZIP_WITH_PREDICTION payloads.

    Each scan line is filtered on its own. 16-bit samples are summed as
    big-endian words. 32-bit lines store the four byte planes of the line one
    after another; the planes are summed as bytes and then interleaved back
    into samples.
    """
    if depth not in (8, 16, 32):
        raise ValueError("Prediction is not defined for depth %d" % depth)
    line_size = width * depth // 8
    if len(data) != line_size * height:
        raise ValueError(
            "Predicted data has %d bytes, expected %d"
            % (len(data), line_size * height)
        )

    if depth == 16:
        samples = be_array_from_bytes("H", data)
        for start in range(0, len(samples), width):
            for x in range(start + 1, start + width):
                samples[x] = (samples[x] + samples[x - 1]) & 0xFFFF
        if sys.byteorder == "little":
            samples.byteswap()
        return samples.tobytes()

    planes = bytearray(data)
    for start in range(0, len(planes), line_size):
        for x in range(start + 1, start + line_size):
            planes[x] = (planes[x] + planes[x - 1]) & 0xFF
    if depth == 8:
        return bytes(planes)

    result = bytearray(len(planes))
    for start in range(0, len(planes), line_size):
        for plane in range(4):
            source = start + plane * width
            result[start + plane : start + line_size : 4] = planes[
                source : source + width
            ]
    return bytes(result)
