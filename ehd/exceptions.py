"""
Errors raised while computing the Edge Histogram Descriptor
"""


class EHDError(ValueError):
    """Base class for invalid descriptor input"""


class InvalidChannelCount(EHDError):
    """Image is not a single-channel (gray) grid"""


class InvalidBlockCount(EHDError):
    """Block count is not a positive multiple of 4"""


class InvalidImageSize(EHDError):
    """Image cannot be split into whole blocks of 2x2 cells"""
