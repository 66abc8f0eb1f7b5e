"""
Byte builders for decoder tests.

Each builder returns the encoded bytes of one structure, so tests can
assemble documents field by field and break exactly one thing at a time.
"""

import logging
import struct
from typing import Optional, Sequence

logging.basicConfig(level=logging.DEBUG)


def pack(fmt: str, *args) -> bytes:
    return struct.pack(">" + fmt, *args)


def pack_length(length: int, version: int = 1) -> bytes:
    return pack(("I", "Q")[version - 1], length)


def pascal_string(name: bytes, padding: int = 1) -> bytes:
    data = bytes([len(name)]) + name
    if len(data) % padding:
        data += b"\x00" * (padding - len(data) % padding)
    return data


def header(
    version: int = 1,
    channels: int = 3,
    height: int = 2,
    width: int = 2,
    depth: int = 8,
    color_mode: int = 3,
    signature: bytes = b"8BPS",
    reserved: bytes = b"\x00" * 6,
) -> bytes:
    return signature + pack(
        "H6sHIIHH", version, reserved, channels, height, width, depth, color_mode
    )


def color_mode_data(data: bytes = b"") -> bytes:
    return pack("I", len(data)) + data


def resource(
    key: int, data: bytes = b"", name: bytes = b"", signature: bytes = b"8BIM"
) -> bytes:
    block = signature + pack("H", key)
    block += pascal_string(name, 2)
    block += pack("I", len(data)) + data
    if len(data) % 2:
        block += b"\x00"
    return block


def image_resources(*blocks: bytes, length: Optional[int] = None) -> bytes:
    body = b"".join(blocks)
    return pack("I", len(body) if length is None else length) + body


def payload(compression: int, body: bytes = b"") -> bytes:
    return pack("H", compression) + body


def rle_body(rows: Sequence[bytes], version: int = 1) -> bytes:
    """Run-length body with each row stored as one literal run."""
    encoded = [bytes([len(row) - 1]) + row for row in rows]
    counts = b"".join(pack(("H", "I")[version - 1], len(row)) for row in encoded)
    return counts + b"".join(encoded)


def mask_data(
    rect: Sequence[int] = (0, 0, 2, 2),
    background_color: int = 0,
    flags: int = 0,
    parameters: bytes = b"",
    real: Optional[bytes] = None,
    length: Optional[int] = None,
) -> bytes:
    body = pack("4iBB", *rect, background_color, flags) + parameters
    if real is None:
        body += b"\x00\x00"
    else:
        body += real
    return pack("I", len(body) if length is None else length) + body


def real_mask(
    rect: Sequence[int] = (0, 0, 2, 2), flags: int = 0, background_color: int = 255
) -> bytes:
    return pack("BB4i", flags, background_color, *rect)


def blending_ranges(channel_count: int, length: Optional[int] = None) -> bytes:
    body = pack("2I", 0xFFFF, 0xFFFF) * (1 + channel_count)
    return pack("I", len(body) if length is None else length) + body


def layer_record(
    rect: Sequence[int] = (0, 0, 2, 2),
    channels: Sequence[tuple] = ((0, 6),),
    blend_mode: bytes = b"norm",
    opacity: int = 255,
    clipping: int = 0,
    flags: int = 0,
    filler: int = 0,
    signature: bytes = b"8BIM",
    mask: bytes = b"\x00\x00\x00\x00",
    ranges: Optional[bytes] = None,
    name: bytes = b"",
    extra_tail: bytes = b"",
    extra_length: Optional[int] = None,
    version: int = 1,
) -> bytes:
    data = pack("4iH", *rect, len(channels))
    for channel_id, length in channels:
        data += pack(("hI", "hQ")[version - 1], channel_id, length)
    data += signature + blend_mode + pack("BBBB", opacity, clipping, flags, filler)
    if ranges is None:
        ranges = blending_ranges(len(channels))
    extra = mask + ranges + pascal_string(name, 4) + extra_tail
    if extra_length is None:
        extra_length = len(extra)
    return data + pack("I", extra_length) + extra[:extra_length]


def layer_info(
    records: Sequence[bytes] = (),
    payloads: Sequence[bytes] = (),
    layer_count: Optional[int] = None,
    version: int = 1,
) -> bytes:
    count = len(records) if layer_count is None else layer_count
    body = pack("h", count) + b"".join(records) + b"".join(payloads)
    if len(body) % 2:
        body += b"\x00"
    return pack_length(len(body), version) + body


def global_layer_mask_info(
    overlay_color: Sequence[int] = (0, 65535, 0, 0, 0),
    opacity: int = 50,
    kind: int = 128,
) -> bytes:
    body = pack("5HHB", *overlay_color, opacity, kind)
    return pack("I", len(body)) + body


def layer_and_mask(
    info: Optional[bytes] = None,
    global_mask: Optional[bytes] = None,
    tail: bytes = b"",
    version: int = 1,
) -> bytes:
    if info is None:
        info = pack_length(0, version)
    if global_mask is None:
        global_mask = global_layer_mask_info()
    body = info + global_mask + tail
    return pack_length(len(body), version) + body


def document(
    head: Optional[bytes] = None,
    colors: bytes = b"",
    resources: bytes = b"",
    layers: Optional[bytes] = None,
    image_data: bytes = b"",
) -> bytes:
    if head is None:
        head = header()
    if layers is None:
        layers = layer_and_mask()
    return (
        head + color_mode_data(colors) + image_resources(resources) + layers + image_data
    )
