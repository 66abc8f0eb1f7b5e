"""
Exceptions raised while decoding a PSD/PSB container.

Structural errors derive from :py:class:`DecodeError` and abort the whole
decode. They carry the byte offset at which the problem was found.
:py:class:`UnsupportedCompression` is not structural: the framer records it
on the affected payload and decoding continues.
"""

from typing import Optional


class Error(Exception):
    """Base class of all psd-structure errors."""


class DecodeError(Error, ValueError):
    """
    Structural decode failure.

    .. py:attribute:: offset

        Byte offset in the source where the failure occurred, or None.
    """

    def __init__(self, message: str, offset: Optional[int] = None):
        self.message = message
        self.offset = offset
        super().__init__(message, offset)

    def __str__(self) -> str:
        if self.offset is None:
            return self.message
        return "%s (at offset %d)" % (self.message, self.offset)


class MalformedSignature(DecodeError):
    """A fixed magic tag does not match."""


class UnsupportedVersion(DecodeError):
    """The file version is not PSD (1) or PSB (2)."""


class UnsupportedColorMode(DecodeError):
    """The color mode value is not a known color mode."""


class MalformedHeader(DecodeError):
    """A header field violates its invariant."""


class MalformedRecord(DecodeError):
    """A layer or mask record field violates its invariant."""


class InconsistentLength(DecodeError):
    """A declared length does not match the bytes accounted for."""


class UnexpectedEnd(DecodeError, EOFError):
    """Read or seek past the end of the source."""


class UnsupportedCompression(Error):
    """
    Compression tag outside the known set.

    Recorded on the payload, raised only when the payload is decompressed.
    """

    def __init__(self, value: int, offset: Optional[int] = None):
        self.value = value
        self.offset = offset
        super().__init__(value, offset)

    def __str__(self) -> str:
        message = "Unsupported compression %d" % self.value
        if self.offset is None:
            return message
        return "%s (at offset %d)" % (message, self.offset)
