"""
Color mode data structure.
"""

import logging
from typing import Any, TypeVar

from attrs import define

from psd_structure.psd.base import ValueElement
from psd_structure.psd.bin_utils import read_length_block
from psd_structure.psd.cursor import Cursor

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="ColorModeData")


@define(repr=False, eq=False, frozen=True)
class ColorModeData(ValueElement):
    """
    Color mode data section of the PSD file.

    For indexed color images the data is the color table for the image in a
    non-interleaved order. Duotone images also have this data, but the data
    format is undocumented. The bytes are kept as they are.
    """

    value: bytes = b""

    @classmethod
    def read(cls: type[T], cursor: Cursor, **kwargs: Any) -> T:
        value = read_length_block(cursor)
        logger.debug("reading color mode data, len=%d" % (len(value)))
        return cls(value)
