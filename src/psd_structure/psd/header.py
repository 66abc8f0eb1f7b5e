"""
File header structure.
"""

import logging
from typing import Any, TypeVar

from attrs import define, field

from psd_structure.constants import FILE_SIGNATURE, ColorMode
from psd_structure.exceptions import (
    MalformedHeader,
    MalformedSignature,
    UnsupportedColorMode,
    UnsupportedVersion,
)
from psd_structure.psd.base import BaseElement
from psd_structure.psd.cursor import Cursor
from psd_structure.validators import in_, range_

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="FileHeader")

VERSIONS = (1, 2)
DEPTHS = (1, 8, 16, 32)


@define(repr=True, frozen=True)
class FileHeader(BaseElement):
    """
    Header section of the PSD file.

    Example::

        from psd_structure.psd.header import FileHeader

        with open(input_file, 'rb') as f:
            header = FileHeader.read(Cursor(f))

    .. py:attribute:: signature

        Signature: always equal to ``b'8BPS'``.

    .. py:attribute:: version

        Version number. PSD is 1, and PSB is 2.

    .. py:attribute:: channels

        The number of channels in the image, including any user-defined alpha
        channel.

    .. py:attribute:: height

        The height of the image in pixels.

    .. py:attribute:: width

        The width of the image in pixels.

    .. py:attribute:: depth

        The number of bits per channel.

    .. py:attribute:: color_mode

        The color mode of the file. See
        :py:class:`~psd_structure.constants.ColorMode`
    """

    # Fields following the 4-byte signature.
    _FORMAT = "H6sHIIHH"
    SIZE = 26

    signature: bytes = field(default=FILE_SIGNATURE, repr=False)
    version: int = field(default=1, validator=in_(VERSIONS))
    channels: int = field(default=4, validator=range_(1, 56))
    height: int = field(default=64, validator=range_(1, 300000))
    width: int = field(default=64, validator=range_(1, 300000))
    depth: int = field(default=8, validator=in_(DEPTHS))
    color_mode: ColorMode = field(
        default=ColorMode.RGB, converter=ColorMode, validator=in_(ColorMode)
    )

    @signature.validator
    def _validate_signature(self, attribute: Any, value: bytes) -> None:
        if value != FILE_SIGNATURE:
            raise ValueError("This is not a PSD or PSB file")

    @classmethod
    def read(cls: type[T], cursor: Cursor, **kwargs: Any) -> T:
        start_pos = cursor.tell()
        signature = cursor.read_bytes(4)
        if signature != FILE_SIGNATURE:
            raise MalformedSignature(
                "This is not a PSD or PSB file: %r" % signature, offset=start_pos
            )

        (
            version,
            reserved,
            channels,
            height,
            width,
            depth,
            color_mode,
        ) = cursor.read_fmt(cls._FORMAT)
        if version not in VERSIONS:
            raise UnsupportedVersion(
                "Unsupported version %d" % version, offset=start_pos + 4
            )
        if reserved != b"\x00" * 6:
            raise MalformedHeader(
                "Reserved bytes must be zero: %r" % reserved, offset=start_pos + 6
            )
        if not 1 <= channels <= 56:
            raise MalformedHeader(
                "Invalid channel count %d" % channels, offset=start_pos + 12
            )
        if not (1 <= height <= 300000 and 1 <= width <= 300000):
            raise MalformedHeader(
                "Invalid image size %dx%d" % (width, height), offset=start_pos + 14
            )
        if depth not in DEPTHS:
            raise MalformedHeader("Invalid depth %d" % depth, offset=start_pos + 22)
        try:
            color_mode = ColorMode(color_mode)
        except ValueError:
            raise UnsupportedColorMode(
                "Unsupported color mode %d" % color_mode, offset=start_pos + 24
            )
        return cls(signature, version, channels, height, width, depth, color_mode)

    @property
    def is_psb(self) -> bool:
        """Large document format."""
        return self.version == 2
