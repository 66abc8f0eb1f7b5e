"""
PSD document structure module.

This module contains the main PSD class that represents the low-level
binary structure of a PSD/PSB file.
"""

import logging
import os
from typing import Any, BinaryIO, Generator, Optional, TypeVar, Union

from attrs import define, field

from .base import BaseElement
from .channel_data import ChannelImageData
from .color_mode_data import ColorModeData
from .cursor import Cursor
from .header import FileHeader
from .image_data import ImageData
from .image_resources import ImageResources
from .layer_and_mask import LayerAndMaskInformation, LayerInfo, LayerRecords

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="PSD")


@define(repr=False, frozen=True)
class PSD(BaseElement):
    """
    Low-level PSD file structure that resembles the `Adobe file format`_.

    .. _Adobe file format: https://www.adobe.com/devnet-apps/photoshop/fileformatashtml/

    Example::

        from psd_structure.psd import PSD

        with open(input_file, 'rb') as f:
            psd = PSD.read(f)

        for record, channels in psd.iter_layers():
            print(record.name, [c.compression for c in channels])


    .. py:attribute:: header

        See :py:class:`.FileHeader`.

    .. py:attribute:: color_mode_data

        See :py:class:`.ColorModeData`.

    .. py:attribute:: image_resources

        See :py:class:`.ImageResources`.

    .. py:attribute:: layer_and_mask_information

        See :py:class:`.LayerAndMaskInformation`.

    .. py:attribute:: image_data

        See :py:class:`.ImageData`. None when the file ends after the layer
        and mask information, or when too few bytes follow to hold a
        compression tag.
    """

    header: FileHeader = field(factory=FileHeader)
    color_mode_data: ColorModeData = field(factory=ColorModeData)
    image_resources: ImageResources = field(factory=ImageResources)
    layer_and_mask_information: LayerAndMaskInformation = field(
        factory=LayerAndMaskInformation
    )
    image_data: Optional[ImageData] = None

    @classmethod
    def read(
        cls: type[T],
        fp: Union[BinaryIO, Cursor],
        encoding: str = "macroman",
        **kwargs: Any,
    ) -> T:
        cursor = fp if isinstance(fp, Cursor) else Cursor(fp)
        header = FileHeader.read(cursor)
        logger.debug("read %s" % header)
        color_mode_data = ColorModeData.read(cursor)
        image_resources = ImageResources.read(cursor, encoding)
        layer_and_mask_information = LayerAndMaskInformation.read(
            cursor, encoding, header.version, header.depth
        )
        image_data = None
        if cursor.remaining() >= 2:
            image_data = ImageData.read(cursor, header)
        elif cursor.remaining():
            logger.warning(
                "Ignoring %d stray byte after layer and mask information at %d"
                % (cursor.remaining(), cursor.tell())
            )
        return cls(
            header,
            color_mode_data,
            image_resources,
            layer_and_mask_information,
            image_data,
        )

    @classmethod
    def open(
        cls: type[T], fp: Union[BinaryIO, str, os.PathLike], **kwargs: Any
    ) -> T:
        """
        Open a PSD document.

        :param fp: filename or file-like object.
        :param encoding: charset encoding of the pascal string within the file,
            default 'macroman'. Some psd files need explicit encoding option.
        :return: A :py:class:`~psd_structure.psd.PSD` object.
        """
        if isinstance(fp, (str, os.PathLike)):
            with open(fp, "rb") as f:
                return cls.read(f, **kwargs)
        return cls.read(fp, **kwargs)

    @property
    def layer_info(self) -> Optional[LayerInfo]:
        return self.layer_and_mask_information.layer_info

    @property
    def layer_records(self) -> LayerRecords:
        """Layer records in file order."""
        layer_info = self.layer_info
        return layer_info.layer_records if layer_info else LayerRecords()

    @property
    def channel_image_data(self) -> ChannelImageData:
        """Channel payloads of all layers, in file order."""
        layer_info = self.layer_info
        return layer_info.channel_image_data if layer_info else ChannelImageData()

    @property
    def has_merged_alpha(self) -> bool:
        layer_info = self.layer_info
        return layer_info.has_merged_alpha if layer_info else False

    def iter_layers(self) -> Generator[tuple[Any, list], None, None]:
        """
        Iterate over (layer_record, channel_data) pairs, where channel_data
        is the list of payloads of that layer in channel table order.
        """
        channels = iter(self.channel_image_data)
        for record in self.layer_records:
            yield record, [next(channels) for _ in record.channel_info]
