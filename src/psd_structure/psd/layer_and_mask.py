"""
Layer and mask data structures.

This module implements the structures of the "Layer and Mask Information"
section of PSD files. This is the most irregular part of the format: several
sub-records are length-delimited and at the same time internally
conditional, and each uses its own padding rule.

Key classes:

- :py:class:`LayerAndMaskInformation`: Top-level container for all layer data
- :py:class:`LayerInfo`: Contains layer records and channel image data
- :py:class:`LayerRecords`: List of individual layer records
- :py:class:`LayerRecord`: Single layer metadata (name, bounds, blend mode, etc.)
- :py:class:`ChannelInfo`: Channel metadata within a layer record
- :py:class:`MaskData`: Layer mask parameters
- :py:class:`LayerBlendingRanges`: Blend-if ranges of a layer
- :py:class:`GlobalLayerMaskInfo`: Document-wide mask settings

Each layer record declares the length of its extra data (mask, blending
ranges, name and any additional layer information). The declared length is
ground truth: exactly that many bytes are taken from the stream and the
nested fields are decoded from them on a best-effort basis. Fields that do
not fit in the declared length are left absent, and layouts that are newer
than this decoder never shift the rest of the document.

The channel image data section follows all layer records; see
:py:mod:`psd_structure.psd.channel_data`.

Example of reading layer metadata::

    from psd_structure.psd import PSD

    psd = PSD.open('file.psd')
    for record in psd.layer_records:
        print(f"Layer: {record.name}")
        print(f"  Bounds: {record.rect}")
        print(f"  Blend mode: {record.blend_mode_name}")
        print(f"  Channels: {len(record.channel_info)}")
"""

import logging
from typing import Any, Optional, TypeVar, Union

from attrs import define, field

from psd_structure.constants import (
    BLOCK_SIGNATURE,
    MASK_COLORS,
    MASK_LENGTH_NO_REAL_MASK,
    BlendMode,
    ChannelID,
    GlobalLayerMaskKind,
)
from psd_structure.exceptions import (
    InconsistentLength,
    MalformedRecord,
    MalformedSignature,
    UnexpectedEnd,
)
from psd_structure.psd.base import BaseElement, ListElement
from psd_structure.psd.bin_utils import read_pascal_string
from psd_structure.psd.channel_data import ChannelImageData
from psd_structure.psd.cursor import Cursor
from psd_structure.validators import in_, range_

logger = logging.getLogger(__name__)

T_LayerAndMaskInformation = TypeVar(
    "T_LayerAndMaskInformation", bound="LayerAndMaskInformation"
)
T_LayerInfo = TypeVar("T_LayerInfo", bound="LayerInfo")
T_Rect = TypeVar("T_Rect", bound="Rect")
T_ChannelInfo = TypeVar("T_ChannelInfo", bound="ChannelInfo")
T_LayerFlags = TypeVar("T_LayerFlags", bound="LayerFlags")
T_BlendingRange = TypeVar("T_BlendingRange", bound="BlendingRange")
T_LayerBlendingRanges = TypeVar("T_LayerBlendingRanges", bound="LayerBlendingRanges")
T_LayerRecords = TypeVar("T_LayerRecords", bound="LayerRecords")
T_LayerRecord = TypeVar("T_LayerRecord", bound="LayerRecord")
T_MaskFlags = TypeVar("T_MaskFlags", bound="MaskFlags")
T_MaskData = TypeVar("T_MaskData", bound="MaskData")
T_MaskParameters = TypeVar("T_MaskParameters", bound="MaskParameters")
T_GlobalLayerMaskInfo = TypeVar("T_GlobalLayerMaskInfo", bound="GlobalLayerMaskInfo")


@define(repr=False, frozen=True)
class LayerAndMaskInformation(BaseElement):
    """
    Layer and mask information section.

    .. py:attribute:: layer_info

        See :py:class:`.LayerInfo`.

    .. py:attribute:: global_layer_mask_info

        See :py:class:`.GlobalLayerMaskInfo`.

    .. py:attribute:: tagged_blocks_data

        Remaining bytes of the section (global additional layer
        information), kept as they are.
    """

    layer_info: Optional["LayerInfo"] = None
    global_layer_mask_info: Optional["GlobalLayerMaskInfo"] = None
    tagged_blocks_data: bytes = field(default=b"", repr=False)

    @classmethod
    def read(
        cls: type[T_LayerAndMaskInformation],
        cursor: Cursor,
        encoding: str = "macroman",
        version: int = 1,
        depth: int = 8,
        **kwargs: Any,
    ) -> T_LayerAndMaskInformation:
        start_pos = cursor.tell()
        length = cursor.read_length(version)
        end_pos = cursor.tell() + length
        logger.debug(
            "reading layer and mask info, len=%d, offset=%d" % (length, start_pos)
        )
        if length == 0:
            self = cls()
        else:
            self = cls._read_body(cursor, end_pos, encoding, version, depth)
        if cursor.tell() > end_pos:
            raise InconsistentLength(
                "Layer and mask information overruns its length %d by %d bytes"
                % (length, cursor.tell() - end_pos),
                offset=start_pos,
            )
        cursor.seek(end_pos)
        return self

    @classmethod
    def _read_body(
        cls: type[T_LayerAndMaskInformation],
        cursor: Cursor,
        end_pos: int,
        encoding: str,
        version: int,
        depth: int,
    ) -> T_LayerAndMaskInformation:
        layer_info = LayerInfo.read(cursor, encoding, version, depth)

        global_layer_mask_info = None
        if end_pos - cursor.tell() >= 17:
            global_layer_mask_info = GlobalLayerMaskInfo.read(cursor)

        tagged_blocks_data = b""
        if end_pos > cursor.tell():
            tagged_blocks_data = cursor.read_bytes(end_pos - cursor.tell())
            logger.debug(
                "  kept additional layer information, len=%d"
                % len(tagged_blocks_data)
            )

        return cls(layer_info, global_layer_mask_info, tagged_blocks_data)


@define(repr=False, frozen=True)
class LayerInfo(BaseElement):
    """
    High-level organization of the layer information.

    .. py:attribute:: layer_count

        Layer count. If it is a negative number, its absolute value is the
        number of layers and the first alpha channel contains the transparency
        data for the merged result.

    .. py:attribute:: layer_records

        Information about each layer. See :py:class:`.LayerRecords`.

    .. py:attribute:: channel_image_data

        Channel image data of all layers, in layer order then channel
        order. See :py:class:`~psd_structure.psd.channel_data.ChannelImageData`.
    """

    layer_count: int = 0
    layer_records: "LayerRecords" = field(factory=lambda: LayerRecords())
    channel_image_data: ChannelImageData = field(factory=ChannelImageData)

    @classmethod
    def read(
        cls: type[T_LayerInfo],
        cursor: Cursor,
        encoding: str = "macroman",
        version: int = 1,
        depth: int = 8,
        **kwargs: Any,
    ) -> T_LayerInfo:
        start_pos = cursor.tell()
        length = cursor.read_length(version)
        logger.debug("reading layer info, len=%d" % length)
        end_pos = cursor.tell() + length
        if length == 0:
            self = cls()
        else:
            self = cls._read_body(cursor, encoding, version, depth)
        if cursor.tell() > end_pos:
            raise InconsistentLength(
                "Layer info overruns its length %d by %d bytes"
                % (length, cursor.tell() - end_pos),
                offset=start_pos,
            )
        cursor.seek(end_pos)
        return self

    @classmethod
    def _read_body(
        cls: type[T_LayerInfo],
        cursor: Cursor,
        encoding: str,
        version: int,
        depth: int,
    ) -> T_LayerInfo:
        start_pos = cursor.tell()
        layer_count = cursor.read_i16()
        layer_records = LayerRecords.read(cursor, layer_count, encoding, version)
        logger.debug("  read layer records, len=%d" % (cursor.tell() - start_pos))
        channel_image_data = ChannelImageData.read(
            cursor, layer_records, depth=depth, version=version
        )
        return cls(
            layer_count=layer_count,
            layer_records=layer_records,
            channel_image_data=channel_image_data,
        )

    @property
    def has_merged_alpha(self) -> bool:
        """
        The first alpha channel holds the transparency of the merged result.
        """
        return self.layer_count < 0


@define(repr=True, frozen=True)
class Rect(BaseElement):
    """
    Rectangle in document coordinates. Bottom and right are exclusive.
    """

    top: int = 0
    left: int = 0
    bottom: int = 0
    right: int = 0

    @classmethod
    def read(cls: type[T_Rect], cursor: Cursor, **kwargs: Any) -> T_Rect:
        start_pos = cursor.tell()
        top, left, bottom, right = cursor.read_fmt("4i")
        if bottom < top or right < left:
            raise MalformedRecord(
                "Invalid rectangle (%d, %d, %d, %d)" % (top, left, bottom, right),
                offset=start_pos,
            )
        return cls(top, left, bottom, right)

    @property
    def width(self) -> int:
        return max(self.right - self.left, 0)

    @property
    def height(self) -> int:
        return max(self.bottom - self.top, 0)

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def num_scan_lines(self) -> int:
        return self.height


@define(repr=True, frozen=True)
class ChannelInfo(BaseElement):
    """
    Channel information.

    .. py:attribute:: id

        Channel ID: 0 = red, 1 = green, etc.; -1 = transparency mask; -2 =
        user supplied layer mask, -3 real user supplied layer mask (when both
        a user mask and a vector mask are present). See
        :py:class:`~psd_structure.constants.ChannelID`.

    .. py:attribute:: length

        Declared length of the corresponding channel data, including the
        2-byte compression tag.
    """

    id: int = 0
    length: int = 0

    @classmethod
    def read(
        cls: type[T_ChannelInfo], cursor: Cursor, version: int = 1, **kwargs: Any
    ) -> T_ChannelInfo:
        values = cursor.read_fmt(("hI", "hQ")[version - 1])
        return cls(id=values[0], length=values[1])


@define(repr=False, frozen=True)
class LayerFlags(BaseElement):
    """
    Layer flags.

    Note there are undocumented flags. Maybe photoshop version.

    .. py:attribute:: transparency_protected
    .. py:attribute:: visible
    .. py:attribute:: obsolete
    .. py:attribute:: bit4_meaningful

        Set by Photoshop 5.0 and later; tells whether
        `pixel_data_irrelevant` carries information.

    .. py:attribute:: pixel_data_irrelevant

        Pixel data irrelevant to appearance of document.
    """

    transparency_protected: bool = False
    visible: bool = True
    obsolete: bool = field(default=False, repr=False)
    bit4_meaningful: bool = field(default=True, repr=False)
    pixel_data_irrelevant: bool = False
    undocumented_1: bool = field(default=False, repr=False)
    undocumented_2: bool = field(default=False, repr=False)
    undocumented_3: bool = field(default=False, repr=False)

    @classmethod
    def read(cls: type[T_LayerFlags], cursor: Cursor, **kwargs: Any) -> T_LayerFlags:
        return cls.frombyte(cursor.read_u8())

    @classmethod
    def frombyte(cls: type[T_LayerFlags], flags: int) -> T_LayerFlags:
        return cls(
            bool(flags & 1),
            not bool(flags & 2),  # the bit is set for hidden layers
            bool(flags & 4),
            bool(flags & 8),
            bool(flags & 16),
            bool(flags & 32),
            bool(flags & 64),
            bool(flags & 128),
        )


@define(repr=True, frozen=True)
class BlendingRange(BaseElement):
    """
    Source and destination range, each packing black and white values.
    """

    source: int = 0x0000FFFF
    destination: int = 0x0000FFFF

    @classmethod
    def read(
        cls: type[T_BlendingRange], cursor: Cursor, **kwargs: Any
    ) -> T_BlendingRange:
        return cls(*cursor.read_fmt("2I"))


@define(repr=False, frozen=True)
class LayerBlendingRanges(BaseElement):
    """
    Layer blending ranges.

    .. py:attribute:: length

        Declared length of the ranges in bytes.

    .. py:attribute:: composite_ranges

        Composite gray :py:class:`.BlendingRange`, None when empty.

    .. py:attribute:: channel_ranges

        Tuple of :py:class:`.BlendingRange`, one per channel.
    """

    length: int = 0
    composite_ranges: Optional[BlendingRange] = None
    channel_ranges: tuple = field(factory=tuple, converter=tuple)

    @classmethod
    def read(
        cls: type[T_LayerBlendingRanges],
        cursor: Cursor,
        channel_count: int = 0,
        **kwargs: Any,
    ) -> T_LayerBlendingRanges:
        start_pos = cursor.tell()
        length = cursor.read_u32()
        if length == 0:
            return cls()

        expected = 8 * (1 + channel_count)
        if length != expected:
            raise InconsistentLength(
                "Blending ranges declare %d bytes but %d channels take %d"
                % (length, channel_count, expected),
                offset=start_pos,
            )
        composite_ranges = BlendingRange.read(cursor)
        channel_ranges = [BlendingRange.read(cursor) for _ in range(channel_count)]
        return cls(length, composite_ranges, channel_ranges)


class LayerRecords(ListElement):
    """
    List of layer records. See :py:class:`.LayerRecord`.
    """

    @classmethod
    def read(  # type: ignore[override]
        cls: type[T_LayerRecords],
        cursor: Cursor,
        layer_count: int,
        encoding: str = "macroman",
        version: int = 1,
        **kwargs: Any,
    ) -> T_LayerRecords:
        items = []
        for _ in range(abs(layer_count)):
            items.append(LayerRecord.read(cursor, encoding, version))
        return cls(items)  # type: ignore[arg-type]


@define(repr=False, frozen=True)
class LayerRecord(BaseElement):
    """
    Layer record.

    .. py:attribute:: rect

        Layer bounds. See :py:class:`.Rect`.

    .. py:attribute:: channel_info

        Tuple of :py:class:`.ChannelInfo`.

    .. py:attribute:: signature

        Blend mode signature ``b'8BIM'``.

    .. py:attribute:: blend_mode

        Blend mode key, 4 bytes. Kept as is; see :py:attr:`blend_mode_name`.

    .. py:attribute:: opacity

        Opacity, 0 = transparent, 255 = opaque.

    .. py:attribute:: clipping

        False for base, True for non-base.

    .. py:attribute:: flags

        See :py:class:`.LayerFlags`.

    .. py:attribute:: extra_length

        Declared length of the extra data following the fixed fields.

    .. py:attribute:: mask_data

        :py:class:`.MaskData` or None.

    .. py:attribute:: blending_ranges

        :py:class:`.LayerBlendingRanges` or None when the extra data is too
        short to hold them.

    .. py:attribute:: name

        Layer name.
    """

    rect: Rect = field(factory=Rect)
    channel_info: tuple = field(factory=tuple, converter=tuple)
    signature: bytes = field(
        default=BLOCK_SIGNATURE, repr=False, validator=in_((BLOCK_SIGNATURE,))
    )
    blend_mode: bytes = BlendMode.NORMAL.value
    opacity: int = field(default=255, validator=range_(0, 255))
    clipping: bool = False
    flags: LayerFlags = field(factory=LayerFlags)
    extra_length: int = 0
    mask_data: Optional["MaskData"] = None
    blending_ranges: Optional[LayerBlendingRanges] = None
    name: str = ""

    @classmethod
    def read(
        cls: type[T_LayerRecord],
        cursor: Cursor,
        encoding: str = "macroman",
        version: int = 1,
        **kwargs: Any,
    ) -> T_LayerRecord:
        start_pos = cursor.tell()
        rect = Rect.read(cursor)
        num_channels = cursor.read_u16()
        channel_info = [ChannelInfo.read(cursor, version) for _ in range(num_channels)]

        signature_pos = cursor.tell()
        signature, blend_mode, opacity, clipping = cursor.read_fmt("4s4sBB")
        if signature != BLOCK_SIGNATURE:
            raise MalformedSignature(
                "Invalid blend mode signature %r" % signature, offset=signature_pos
            )
        flags = LayerFlags.read(cursor)
        filler_pos = cursor.tell()
        if cursor.read_u8() != 0:
            raise MalformedRecord("Layer record filler must be zero", offset=filler_pos)

        extra_length = cursor.read_u32()
        logger.debug(
            "  read layer record, len=%d, extra=%d"
            % (cursor.tell() - start_pos, extra_length)
        )
        if extra_length == 0:
            return cls(
                rect=rect,
                channel_info=channel_info,
                signature=signature,
                blend_mode=blend_mode,
                opacity=opacity,
                clipping=bool(clipping),
                flags=flags,
            )

        extra_pos = cursor.tell()
        span = cursor.read_span(extra_length)
        mask_data, blending_ranges, name = None, None, ""
        try:
            mask_data = MaskData.read(span)
            blending_ranges = LayerBlendingRanges.read(span, num_channels)
            name = read_pascal_string(span, encoding, padding=4)
        except UnexpectedEnd as e:
            logger.debug("  layer extra data ends early: %s" % e)
        if span.remaining():
            logger.debug(
                "  resync layer %r: decoded %d of %d extra bytes"
                % (name, span.tell() - extra_pos, extra_length)
            )

        return cls(
            rect=rect,
            channel_info=channel_info,
            signature=signature,
            blend_mode=blend_mode,
            opacity=opacity,
            clipping=bool(clipping),
            flags=flags,
            extra_length=extra_length,
            mask_data=mask_data,
            blending_ranges=blending_ranges,
            name=name,
        )

    @property
    def blend_mode_name(self) -> Optional[BlendMode]:
        """Known :py:class:`~psd_structure.constants.BlendMode`, or None."""
        try:
            return BlendMode(self.blend_mode)
        except ValueError:
            return None

    @property
    def width(self) -> int:
        """Width of the layer."""
        return self.rect.width

    @property
    def height(self) -> int:
        """Height of the layer."""
        return self.rect.height

    @property
    def channel_sizes(self) -> list[tuple[int, int]]:
        """List of channel sizes: [(width, height)]."""
        sizes = []
        for channel in self.channel_info:
            if channel.id == ChannelID.USER_LAYER_MASK:
                rect = self.mask_data.rect if self.mask_data else None
            elif channel.id == ChannelID.REAL_USER_LAYER_MASK:
                rect = self.mask_data.real_rect if self.mask_data else None
            else:
                rect = self.rect
            sizes.append((rect.width, rect.height) if rect else (0, 0))
        return sizes


@define(repr=False, frozen=True)
class MaskFlags(BaseElement):
    """
    Mask flags.

    .. py:attribute:: pos_relative_to_layer

        Position relative to layer.

    .. py:attribute:: mask_disabled

        Layer mask disabled.

    .. py:attribute:: invert_mask

        Invert layer mask when blending (Obsolete).

    .. py:attribute:: user_mask_from_render

        The user mask actually came from rendering other data.

    .. py:attribute:: parameters_applied

        The user and/or vector masks have parameters applied to them.
    """

    pos_relative_to_layer: bool = False
    mask_disabled: bool = False
    invert_mask: bool = False
    user_mask_from_render: bool = False
    parameters_applied: bool = False
    undocumented_1: bool = field(default=False, repr=False)
    undocumented_2: bool = field(default=False, repr=False)
    undocumented_3: bool = field(default=False, repr=False)

    @classmethod
    def read(cls: type[T_MaskFlags], cursor: Cursor, **kwargs: Any) -> T_MaskFlags:
        return cls.frombyte(cursor.read_u8())

    @classmethod
    def frombyte(cls: type[T_MaskFlags], flags: int) -> T_MaskFlags:
        return cls(*(bool(flags & (1 << bit)) for bit in range(8)))


def _read_mask_color(cursor: Cursor) -> int:
    offset = cursor.tell()
    value = cursor.read_u8()
    if value not in MASK_COLORS:
        raise MalformedRecord("Mask color must be 0 or 255: %d" % value, offset=offset)
    return value


@define(repr=False, frozen=True)
class MaskData(BaseElement):
    """
    Mask data.

    Real user mask is a final composite mask of vector and pixel masks.

    .. py:attribute:: length

        Declared length of the mask data.

    .. py:attribute:: rect

        Mask bounds. See :py:class:`.Rect`.

    .. py:attribute:: background_color

        Default color. 0 or 255.

    .. py:attribute:: flags

        See :py:class:`.MaskFlags`.

    .. py:attribute:: parameters

        :py:class:`.MaskParameters` or None.

    .. py:attribute:: real_flags

        Real user mask flags. See :py:class:`.MaskFlags`.

    .. py:attribute:: real_background_color

        Real user mask background. 0 or 255.

    .. py:attribute:: real_rect

        Bounds of real user mask.
    """

    length: int = MASK_LENGTH_NO_REAL_MASK
    rect: Rect = field(factory=Rect)
    background_color: int = field(default=0, validator=in_(MASK_COLORS))
    flags: MaskFlags = field(factory=MaskFlags)
    parameters: Optional["MaskParameters"] = None
    real_flags: Optional[MaskFlags] = None
    real_background_color: Optional[int] = None
    real_rect: Optional[Rect] = None

    @classmethod
    def read(
        cls: type[T_MaskData], cursor: Cursor, **kwargs: Any
    ) -> Optional[T_MaskData]:
        length = cursor.read_u32()
        if length == 0:
            return None

        start_pos = cursor.tell()
        end_pos = start_pos + length
        self = cls._read_body(cursor, length)
        if cursor.tell() != end_pos:
            logger.debug(
                "  resync mask data: decoded %d of %d bytes"
                % (cursor.tell() - start_pos, length)
            )
        cursor.seek(end_pos)
        return self

    @classmethod
    def _read_body(cls: type[T_MaskData], cursor: Cursor, length: int) -> T_MaskData:
        rect = Rect.read(cursor)
        background_color = _read_mask_color(cursor)
        flags = MaskFlags.read(cursor)

        parameters = None
        if flags.parameters_applied:
            parameters = MaskParameters.read(cursor)

        real_flags, real_background_color, real_rect = None, None, None
        if length == MASK_LENGTH_NO_REAL_MASK:
            cursor.skip(2)
        else:
            real_flags = MaskFlags.read(cursor)
            real_background_color = _read_mask_color(cursor)
            real_rect = Rect.read(cursor)

        return cls(
            length=length,
            rect=rect,
            background_color=background_color,
            flags=flags,
            parameters=parameters,
            real_flags=real_flags,
            real_background_color=real_background_color,
            real_rect=real_rect,
        )

    @property
    def width(self) -> int:
        """Width of the mask."""
        return self.rect.width

    @property
    def height(self) -> int:
        """Height of the mask."""
        return self.rect.height


@define(repr=False, frozen=True)
class MaskParameters(BaseElement):
    """
    Mask parameters.

    .. py:attribute:: user_mask_density
    .. py:attribute:: user_mask_feather
    .. py:attribute:: vector_mask_density
    .. py:attribute:: vector_mask_feather
    """

    user_mask_density: Optional[int] = None
    user_mask_feather: Optional[float] = None
    vector_mask_density: Optional[int] = None
    vector_mask_feather: Optional[float] = None

    @classmethod
    def read(
        cls: type[T_MaskParameters], cursor: Cursor, **kwargs: Any
    ) -> T_MaskParameters:
        parameters = cursor.read_u8()
        return cls(
            cursor.read_u8() if bool(parameters & 1) else None,
            cursor.read_f64() if bool(parameters & 2) else None,
            cursor.read_u8() if bool(parameters & 4) else None,
            cursor.read_f64() if bool(parameters & 8) else None,
        )


@define(repr=False, frozen=True)
class GlobalLayerMaskInfo(BaseElement):
    """
    Global mask information.

    .. py:attribute:: overlay_color

        Overlay color space (undocumented) and color components.

    .. py:attribute:: opacity

        Opacity. 0 = transparent, 100 = opaque.

    .. py:attribute:: kind

        Kind.
        0 = Color selected--i.e. inverted;
        1 = Color protected;
        128 = use value stored per layer. This value is preferred. The others
        are for backward compatibility with beta versions.
    """

    overlay_color: Optional[tuple] = None
    opacity: int = 0
    kind: Union[GlobalLayerMaskKind, int] = GlobalLayerMaskKind.PER_LAYER

    @classmethod
    def read(
        cls: type[T_GlobalLayerMaskInfo], cursor: Cursor, **kwargs: Any
    ) -> T_GlobalLayerMaskInfo:
        pos = cursor.tell()
        length = cursor.read_u32()
        logger.debug("reading global layer mask info, len=%d" % (length))
        if length == 0:
            return cls(overlay_color=None)
        elif length < 13:
            logger.warning(
                "global layer mask info is broken, expected 13 bytes but found"
                " only %d" % (length)
            )
            cursor.seek(pos)
            return cls(overlay_color=None)

        end_pos = cursor.tell() + length
        overlay_color = cursor.read_fmt("5H")
        opacity, kind = cursor.read_fmt("HB")
        try:
            kind = GlobalLayerMaskKind(kind)
        except ValueError:
            logger.debug("Unknown global layer mask kind %d" % kind)
        cursor.seek(end_pos)
        return cls(overlay_color, opacity, kind)
