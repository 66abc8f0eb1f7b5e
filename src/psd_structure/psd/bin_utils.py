"""
Binary helpers shared by the structure decoders.
"""

import array
import logging
import sys

from psd_structure.psd.cursor import Cursor

logger = logging.getLogger(__name__)


def pad(number: int, divisor: int) -> int:
    """Round `number` up to a multiple of `divisor`."""
    if number % divisor:
        number = (number // divisor + 1) * divisor
    return number


def read_pascal_string(
    cursor: Cursor, encoding: str = "macroman", padding: int = 1
) -> str:
    """
    Read a length-prefixed string.

    The length byte and the characters together occupy a multiple of
    `padding` bytes, so an empty string still consumes `padding` bytes.
    """
    length = cursor.read_u8()
    data = cursor.read_bytes(length)
    cursor.skip(pad(length + 1, padding) - length - 1)
    return data.decode(encoding, "replace")


def read_length_block(cursor: Cursor, fmt: str = "I", padding: int = 1) -> bytes:
    """
    Read a block prefixed by its length, skipping the trailing padding.
    """
    length = cursor.read_fmt(fmt)[0]
    data = cursor.read_bytes(length)
    cursor.skip(pad(length, padding) - length)
    return data


def read_be_array(fmt: str, count: int, cursor: Cursor) -> array.array:
    """
    Reads an array of big-endian values.
    """
    arr = array.array(fmt)
    arr.frombytes(cursor.read_bytes(arr.itemsize * count))
    if sys.byteorder == "little":
        arr.byteswap()
    return arr


def be_array_from_bytes(fmt: str, data: bytes) -> array.array:
    """
    Reads an array from bytestring with big-endian data.
    """
    arr = array.array(fmt, data)
    if sys.byteorder == "little":
        arr.byteswap()
    return arr


def trimmed_repr(data: object, trim_length: int = 16) -> str:
    if isinstance(data, bytes):
        if len(data) > trim_length:
            return repr(
                data[:trim_length] + b" ... =" + str(len(data)).encode("ascii")
            )
    return repr(data)
