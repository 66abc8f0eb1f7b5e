"""
PackBits decoder for one scan line.

A header byte ``n`` starts each run:

- 0 to 127: ``n + 1`` literal bytes follow
- 129 to 255: the next byte is repeated ``257 - n`` times
- 128: no-op

Example usage::

    from psd_structure.compression.rle import decode

    assert decode(b"\\xfe\\x00\\x00\\x01", 4) == b"\\x00\\x00\\x00\\x01"
"""


def decode(data: bytes, size: int) -> bytes:
    """
    Unpack `data` into exactly `size` bytes.

    :raise ValueError: when a run is cut short or the output size differs.
    """
    result = bytearray()
    pos = 0
    while pos < len(data):
        header = data[pos]
        pos += 1
        if header == 128:
            continue
        if header < 128:
            end = pos + header + 1
            if end > len(data):
                raise ValueError(
                    "Literal run of %d bytes at %d overruns the scan line"
                    % (header + 1, pos - 1)
                )
            result += data[pos:end]
            pos = end
        else:
            if pos >= len(data):
                raise ValueError("Repeat run at %d has no value" % (pos - 1))
            result += data[pos : pos + 1] * (257 - header)
            pos += 1
        if len(result) > size:
            raise ValueError("Scan line unpacks to more than %d bytes" % size)

    if len(result) != size:
        raise ValueError("Expected %d bytes but decoded %d bytes" % (size, len(result)))
    return bytes(result)
