"""
Edge Histogram Descriptor (MPEG-7 EHD) with semi-local features
"""

from .config import EdgeHistogramConfig, config_from_dict, load_config, save_config
from .exceptions import EHDError, InvalidChannelCount, InvalidBlockCount, InvalidImageSize
from .features import EdgeHistogramDescriptor, Orientation, classify_cell, extract_ehd

__version__ = '1.0.0'

__all__ = [
    'EdgeHistogramConfig',
    'config_from_dict',
    'load_config',
    'save_config',
    'EHDError',
    'InvalidChannelCount',
    'InvalidBlockCount',
    'InvalidImageSize',
    'EdgeHistogramDescriptor',
    'Orientation',
    'classify_cell',
    'extract_ehd',
]
