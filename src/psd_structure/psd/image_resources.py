"""
Image resources section structure. Image resources are used to store non-pixel
data associated with images, such as pen tool paths or slices.

The section is a length-prefixed sequence of resource blocks. The decoder
accounts for every byte of the declared section length: a resource whose
fields would cross the end of the section is an
:py:exc:`~psd_structure.exceptions.InconsistentLength` error rather than the
end of the sequence.

See :py:class:`~psd_structure.constants.Resource` to check available
resource names.

Example::

    from psd_structure.constants import Resource

    version_info = psd.image_resources.get_data(Resource.VERSION_INFO)

Resource data is kept as plain bytes.
"""

import logging
from typing import Any, Optional, TypeVar, Union

from attrs import define, field

from psd_structure.constants import BLOCK_SIGNATURE, Resource
from psd_structure.exceptions import InconsistentLength, MalformedSignature
from psd_structure.psd.base import BaseElement, ListElement
from psd_structure.psd.bin_utils import pad, trimmed_repr
from psd_structure.psd.cursor import Cursor
from psd_structure.validators import in_

logger = logging.getLogger(__name__)

T_ImageResources = TypeVar("T_ImageResources", bound="ImageResources")
T_ImageResource = TypeVar("T_ImageResource", bound="ImageResource")


class ImageResources(ListElement):
    """
    Image resources section of the PSD file. List of
    :py:class:`.ImageResource` in file order.
    """

    def get(self, key: Any, default: Any = None) -> Any:
        """Get the first resource with the given id."""
        key = getattr(key, "value", key)
        for item in self:
            if item.key == key:
                return item
        return default

    def get_data(self, key: Any, default: Any = None) -> Any:
        """
        Get data from the image resources.

        Shortcut for the following::

            if key in image_resources:
                value = image_resources.get(key).data
        """
        item = self.get(key)
        if item is None:
            return default
        return item.data

    def keys(self) -> list[Union[Resource, int]]:
        return [item.key for item in self]

    def __contains__(self, key: Any) -> bool:
        return self.get(key) is not None

    @classmethod
    def read(
        cls: type[T_ImageResources],
        cursor: Cursor,
        encoding: str = "macroman",
        **kwargs: Any,
    ) -> T_ImageResources:
        length = cursor.read_u32()
        start_pos = cursor.tell()
        end_pos = start_pos + length
        logger.debug("reading image resources, len=%d, offset=%d" % (length, start_pos))
        items = []
        while cursor.tell() < end_pos:
            item = ImageResource.read(cursor, encoding, end_pos=end_pos)
            logger.debug("  read image resource %r" % item)
            items.append(item)
        return cls(items)  # type: ignore[arg-type]

    def _repr_pretty_(self, p: Any, cycle: bool) -> None:
        if cycle:
            p.text("[...]")
            return

        with p.group(2, "[", "]"):
            p.breakable("")
            for idx, item in enumerate(self):
                if idx:
                    p.text(",")
                    p.breakable()
                key = item.key
                p.text(key.name if isinstance(key, Resource) else str(key))
                p.text(": ")
                p.text(trimmed_repr(item.data))
            p.breakable("")


def _convert_key(key: int) -> Union[Resource, int]:
    try:
        return Resource(key)
    except ValueError:
        return key


@define(repr=False, frozen=True)
class ImageResource(BaseElement):
    """
    Image resource block.

    .. py:attribute:: signature

        Binary signature, always ``b'8BIM'``.

    .. py:attribute:: key

        Unique identifier for the resource. See
        :py:class:`~psd_structure.constants.Resource`. Ids without a name
        stay plain integers.

    .. py:attribute:: name

        Resource name, usually empty.

    .. py:attribute:: data

        The resource data, without the padding byte.
    """

    signature: bytes = field(
        default=BLOCK_SIGNATURE, repr=False, validator=in_((BLOCK_SIGNATURE,))
    )
    key: Union[Resource, int] = field(default=1000, converter=_convert_key)
    name: str = ""
    data: bytes = field(default=b"", repr=False)

    def __repr__(self) -> str:
        return "ImageResource(key=%r, name=%r, data=%s)" % (
            self.key,
            self.name,
            trimmed_repr(self.data),
        )

    @classmethod
    def read(
        cls: type[T_ImageResource],
        cursor: Cursor,
        encoding: str = "macroman",
        end_pos: Optional[int] = None,
        **kwargs: Any,
    ) -> T_ImageResource:
        start_pos = cursor.tell()
        if end_pos is None:
            end_pos = cursor.tell() + cursor.remaining()

        def check(size: int) -> None:
            if cursor.tell() + size > end_pos:  # type: ignore[operator]
                raise InconsistentLength(
                    "Image resource crosses the end of the section at %d"
                    % end_pos,
                    offset=start_pos,
                )

        check(6)
        signature = cursor.read_bytes(4)
        if signature != BLOCK_SIGNATURE:
            raise MalformedSignature(
                "Invalid image resource signature %r" % signature, offset=start_pos
            )
        key = cursor.read_u16()
        try:
            key = Resource(key)
        except ValueError:
            if Resource.is_path_info(key):
                logger.debug("Undefined PATH_INFO found: %d" % (key))
            elif Resource.is_plugin_resource(key):
                logger.debug("Undefined PLUGIN_RESOURCE found: %d" % (key))
            else:
                logger.info("Unknown image resource %d" % (key))

        # Length byte and name together take an even number of bytes.
        check(1)
        name_length = cursor.read_u8()
        check(pad(name_length + 1, 2) - 1)
        name = cursor.read_bytes(name_length).decode(encoding, "replace")
        cursor.skip(pad(name_length + 1, 2) - 1 - name_length)

        check(4)
        data_length = cursor.read_u32()
        check(pad(data_length, 2))
        data = cursor.read_bytes(data_length)
        cursor.skip(pad(data_length, 2) - data_length)
        return cls(signature, key, name, data)

    def byte_length(self, encoding: str = "macroman") -> int:
        """Number of bytes the resource occupies in the section."""
        name_length = len(self.name.encode(encoding, "replace"))
        return 4 + 2 + pad(name_length + 1, 2) + 4 + pad(len(self.data), 2)
