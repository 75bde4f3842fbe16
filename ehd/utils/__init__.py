"""
Utility functions for the edge histogram descriptor project
"""

from .logger import setup_logger, get_timestamp
from .image import load_gray, crop_to_grid

__all__ = [
    'setup_logger',
    'get_timestamp',
    'load_gray',
    'crop_to_grid',
]
