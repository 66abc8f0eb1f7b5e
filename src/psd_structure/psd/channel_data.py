"""
Channel image data structures.

Channel payloads follow the layer records. Each payload is framed by the
declared length from its :py:class:`~psd_structure.psd.layer_and_mask.ChannelInfo`:
exactly that many bytes are taken from the stream before the compression tag
is looked at, so an unknown or damaged payload never shifts the next one.

The first two bytes of a payload are the compression tag
(see :py:class:`~psd_structure.constants.Compression`). Raw payloads are
checked against the expected size, run-length payloads are split into scan
lines, and deflate payloads are kept as they are. Pixels are only decoded on
request through :py:meth:`ChannelData.get_data`.
"""

import logging
from typing import TYPE_CHECKING, Any, Optional, TypeVar, Union

from attrs import define, field

from psd_structure.compression import decompress
from psd_structure.constants import Compression
from psd_structure.exceptions import InconsistentLength, UnsupportedCompression
from psd_structure.psd.base import BaseElement, ListElement
from psd_structure.psd.bin_utils import read_be_array, trimmed_repr
from psd_structure.psd.cursor import Cursor

if TYPE_CHECKING:
    from psd_structure.psd.layer_and_mask import ChannelInfo, LayerRecords

logger = logging.getLogger(__name__)

T_ChannelImageData = TypeVar("T_ChannelImageData", bound="ChannelImageData")
T_ChannelData = TypeVar("T_ChannelData", bound="ChannelData")


def row_size(width: int, depth: int) -> int:
    """Number of bytes in a scan line of `width` pixels at `depth` bits."""
    return (width * depth + 7) // 8


def frame_payload(
    cursor: Cursor,
    length: int,
    width: int,
    height: int,
    depth: int = 8,
    version: int = 1,
) -> dict[str, Any]:
    """
    Take `length` bytes from the cursor and frame them by compression.

    :param cursor: cursor positioned at the compression tag.
    :param length: declared length including the 2-byte tag.
    :param width: width of a scan line in pixels.
    :param height: number of scan lines.
    :param depth: bits per pixel.
    :param version: 1 for PSD, 2 for PSB.
    :return: `dict` of payload fields.
    """
    start_pos = cursor.tell()
    if length < 2:
        raise InconsistentLength(
            "Channel data length %d is shorter than the compression tag" % length,
            offset=start_pos,
        )
    span = cursor.read_span(length)
    value = span.read_u16()
    body = span.peek_bytes(span.remaining())

    try:
        compression = Compression(value)
    except ValueError:
        error = UnsupportedCompression(value, offset=start_pos)
        logger.warning("%s, keeping %d bytes as is" % (error, len(body)))
        return dict(compression=value, data=body, error=error)

    if compression == Compression.RAW:
        expected_size = row_size(width, depth) * height
        if len(body) != expected_size:
            logger.warning(
                "Raw channel data at offset %d has %d bytes, expected %d"
                % (start_pos, len(body), expected_size)
            )
        return dict(compression=compression, data=body, expected_size=expected_size)

    if compression == Compression.RLE:
        fmt = ("H", "I")[version - 1]
        if height * (2, 4)[version - 1] > span.remaining():
            raise InconsistentLength(
                "RLE byte counts for %d scan lines exceed channel data length %d"
                % (height, length),
                offset=start_pos,
            )
        byte_counts = tuple(read_be_array(fmt, height, span))
        if sum(byte_counts) > span.remaining():
            raise InconsistentLength(
                "RLE scan lines take %d bytes but only %d remain"
                % (sum(byte_counts), span.remaining()),
                offset=start_pos,
            )
        scanlines = tuple(span.read_bytes(count) for count in byte_counts)
        if span.remaining():
            logger.debug(
                "  %d bytes left after RLE scan lines at offset %d"
                % (span.remaining(), start_pos)
            )
        return dict(
            compression=compression,
            data=body,
            byte_counts=byte_counts,
            scanlines=scanlines,
        )

    return dict(compression=compression, data=body)


@define(repr=False, frozen=True)
class ChannelData(BaseElement):
    """
    Channel data.

    .. py:attribute:: channel_id

        Channel ID the payload belongs to.

    .. py:attribute:: length

        Declared length, including the compression tag.

    .. py:attribute:: compression

        Compression type. See :py:class:`~psd_structure.constants.Compression`.
        Unknown tags are kept as `int`.

    .. py:attribute:: data

        Payload after the compression tag, as compressed.

    .. py:attribute:: byte_counts

        Scan line byte counts for RLE payloads.

    .. py:attribute:: scanlines

        Compressed scan lines for RLE payloads.

    .. py:attribute:: expected_size

        Expected size of raw payloads.

    .. py:attribute:: error

        :py:exc:`~psd_structure.exceptions.UnsupportedCompression` when the
        tag is unknown.
    """

    channel_id: int = 0
    length: int = 2
    compression: Union[Compression, int] = Compression.RAW
    data: bytes = field(default=b"", repr=False)
    byte_counts: Optional[tuple] = field(default=None, repr=False)
    scanlines: Optional[tuple] = field(default=None, repr=False)
    expected_size: Optional[int] = None
    error: Optional[UnsupportedCompression] = field(default=None, eq=False)

    @classmethod
    def read(
        cls: type[T_ChannelData],
        cursor: Cursor,
        channel_info: "ChannelInfo",
        width: int = 0,
        height: int = 0,
        depth: int = 8,
        version: int = 1,
        **kwargs: Any,
    ) -> T_ChannelData:
        payload = frame_payload(
            cursor, channel_info.length, width, height, depth, version
        )
        return cls(channel_id=channel_info.id, length=channel_info.length, **payload)

    def __repr__(self) -> str:
        return "ChannelData(channel_id=%d, compression=%r, data=%s)" % (
            self.channel_id,
            self.compression,
            trimmed_repr(self.data),
        )

    @property
    def is_supported(self) -> bool:
        """The payload can be decompressed."""
        return self.error is None

    def get_data(self, width: int, height: int, depth: int) -> bytes:
        """Get decompressed channel data.

        RLE payloads are unpacked from the framed :py:attr:`scanlines`.

        :param width: width.
        :param height: height.
        :param depth: bit depth of the pixel.
        :rtype: bytes
        """
        if self.error is not None:
            raise self.error
        return decompress(
            self.data, self.compression, width, height, depth, self.scanlines
        )


class ChannelImageData(ListElement):
    """
    Flat list of :py:class:`.ChannelData`, in layer order then in the order
    of each layer's channel table.
    """

    @classmethod
    def read(  # type: ignore[override]
        cls: type[T_ChannelImageData],
        cursor: Cursor,
        layer_records: Optional["LayerRecords"] = None,
        depth: int = 8,
        version: int = 1,
        **kwargs: Any,
    ) -> T_ChannelImageData:
        start_pos = cursor.tell()
        items = []
        if layer_records:
            for layer in layer_records:
                for channel, (width, height) in zip(
                    layer.channel_info, layer.channel_sizes
                ):
                    items.append(
                        ChannelData.read(
                            cursor, channel, width, height, depth, version
                        )
                    )
        logger.debug("  read channel image data, len=%d" % (cursor.tell() - start_pos))
        return cls(items)  # type: ignore[arg-type]
