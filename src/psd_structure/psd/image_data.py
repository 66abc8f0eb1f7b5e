"""
Image data section structure.

:py:class:`ImageData` corresponds to the last section of the PSD/PSB file
where a composited image is stored. When the file does not contain layers,
this is the only place pixels are saved.
"""

import logging
from typing import Any, Optional, TypeVar, Union

from attrs import define, field

from psd_structure.compression import decompress
from psd_structure.constants import Compression
from psd_structure.exceptions import UnsupportedCompression
from psd_structure.psd.base import BaseElement
from psd_structure.psd.channel_data import frame_payload
from psd_structure.psd.cursor import Cursor
from psd_structure.psd.header import FileHeader

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="ImageData")


@define(repr=False, frozen=True)
class ImageData(BaseElement):
    """
    Merged channel image data.

    All channels share one compression tag. RLE byte counts cover
    ``channels * height`` scan lines.

    .. py:attribute:: compression

        See :py:class:`~psd_structure.constants.Compression`.

    .. py:attribute:: data

        `bytes` as compressed in the `compression` flag.
    """

    compression: Union[Compression, int] = Compression.RAW
    data: bytes = field(default=b"", repr=False)
    byte_counts: Optional[tuple] = field(default=None, repr=False)
    scanlines: Optional[tuple] = field(default=None, repr=False)
    expected_size: Optional[int] = None
    error: Optional[UnsupportedCompression] = field(default=None, eq=False)

    @classmethod
    def read(cls: type[T], cursor: Cursor, header: FileHeader, **kwargs: Any) -> T:
        start_pos = cursor.tell()
        payload = frame_payload(
            cursor,
            cursor.remaining(),
            header.width,
            header.height * header.channels,
            header.depth,
            header.version,
        )
        logger.debug("  read image data, len=%d" % (cursor.tell() - start_pos))
        return cls(**payload)

    def get_data(self, header: FileHeader, split: bool = True) -> Union[list, bytes]:
        """
        Get decompressed data.

        :param header: See :py:class:`~psd_structure.psd.header.FileHeader`.
        :return: `list` of bytes corresponding each channel.
        """
        if self.error is not None:
            raise self.error
        data = decompress(
            self.data,
            self.compression,
            header.width,
            header.height * header.channels,
            header.depth,
            self.scanlines,
        )
        if split:
            plane_size = len(data) // header.channels
            return [
                data[index * plane_size : (index + 1) * plane_size]
                for index in range(header.channels)
            ]
        return data
