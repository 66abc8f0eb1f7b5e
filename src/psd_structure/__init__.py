"""
psd-structure: Python package for reading the structure of Adobe Photoshop
PSD and PSB files.

The decoder walks the container from the fixed header to the merged image
and returns an immutable tree of records: image resources, layer records
with their masks and blending ranges, and the channel payloads framed by
their declared lengths. Pixels are not decoded unless asked for.

Basic usage::

    from psd_structure import PSD

    psd = PSD.open('example.psd')

    for record, channels in psd.iter_layers():
        print(record.name, record.rect)

Architecture:

- :py:mod:`psd_structure.psd`: Low-level binary structure parsing
- :py:mod:`psd_structure.compression`: Channel payload decoders (RLE, ZIP)
- :py:mod:`psd_structure.exceptions`: Decode errors carrying byte offsets
"""

from psd_structure.psd import PSD
from psd_structure.version import __version__

__all__ = ["PSD", "__version__"]
