"""
Low-level API that translates binary data to Python structure.

All the data structure in this subpackage inherits from one of the object
defined in :py:mod:`psd_structure.psd.base` module.
"""

# Main PSD document class
from .document import PSD as PSD

# Stream reader
from .cursor import Cursor as Cursor

# Layer and mask structures
from .channel_data import (
    ChannelData as ChannelData,
    ChannelImageData as ChannelImageData,
)
from .layer_and_mask import (
    GlobalLayerMaskInfo as GlobalLayerMaskInfo,
    LayerInfo as LayerInfo,
    LayerRecord as LayerRecord,
    LayerRecords as LayerRecords,
)

__all__ = [
    "PSD",
    "Cursor",
    "LayerInfo",
    "LayerRecord",
    "LayerRecords",
    "ChannelData",
    "ChannelImageData",
    "GlobalLayerMaskInfo",
]
