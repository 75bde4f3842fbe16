"""
Block-level edge histograms

The image is tiled into vertical_blocks x horizontal_blocks blocks, every block
is tiled into 2x2 cells, and each block gets a 5-bin count of its cell
orientations.
"""

import logging
from typing import Tuple

import numpy as np
from joblib import Parallel, delayed
from skimage.util import view_as_blocks

from ..config import EdgeHistogramConfig
from ..exceptions import InvalidBlockCount, InvalidImageSize
from .cells import N_BINS, classify_cells

logger = logging.getLogger(__name__)


def validate_layout(shape: Tuple[int, int],
                    horizontal_blocks: int,
                    vertical_blocks: int) -> Tuple[int, int]:
    """
    Check that an image shape can be tiled into blocks of whole cells

    Args:
        shape: Image shape (height, width)
        horizontal_blocks: Blocks across the width
        vertical_blocks: Blocks down the height

    Returns:
        Block size (block_height, block_width) in pixels

    Raises:
        InvalidBlockCount: If a block count is not a positive multiple of 4
        InvalidImageSize: If a side is empty or not divisible by twice its
            block count
    """
    for name, count in (('horizontal_blocks', horizontal_blocks),
                        ('vertical_blocks', vertical_blocks)):
        if count <= 0 or count % 4 != 0:
            raise InvalidBlockCount(
                f"EHD requires block counts to be positive multiples of 4, "
                f"got {name}={count}"
            )

    height, width = shape
    if height == 0 or width == 0:
        raise InvalidImageSize(
            f"EHD requires a non-empty image, got {width}x{height} (width x height)"
        )
    if width % (2 * horizontal_blocks) != 0 or height % (2 * vertical_blocks) != 0:
        raise InvalidImageSize(
            f"EHD requires image width to be a multiple of 2*horizontal_blocks "
            f"({2 * horizontal_blocks}) and height a multiple of 2*vertical_blocks "
            f"({2 * vertical_blocks}), got {width}x{height} (width x height)"
        )

    return height // vertical_blocks, width // horizontal_blocks


def cells_per_block(block_shape: Tuple[int, int]) -> int:
    """Number of 2x2 cells in a block of (block_height, block_width) pixels"""
    block_height, block_width = block_shape
    return (block_width // 2) * (block_height // 2)


def compute_block_histogram(block: np.ndarray, threshold: float) -> np.ndarray:
    """
    Count cell orientations within one block

    Args:
        block: Single-channel block with even sides
        threshold: Minimum vote for a cell to count as an edge

    Returns:
        int64 array of 5 counts in bin order; cells without an edge are skipped
    """
    codes = classify_cells(block, threshold).ravel()
    return np.bincount(codes[codes >= 0], minlength=N_BINS).astype(np.int64)


def compute_block_grid(image: np.ndarray, config: EdgeHistogramConfig) -> np.ndarray:
    """
    Compute the histogram of every block

    Args:
        image: Single-channel image (height, width)
        config: Descriptor configuration

    Returns:
        int64 array (vertical_blocks, horizontal_blocks, 5), row-major blocks
    """
    block_shape = validate_layout(image.shape, config.horizontal_blocks,
                                  config.vertical_blocks)
    logger.debug("Computing EHD block grid: image %s, %dx%d blocks of %s px, threshold %.3f",
                 image.shape, config.vertical_blocks, config.horizontal_blocks,
                 block_shape, config.threshold)

    blocks = view_as_blocks(np.ascontiguousarray(image), block_shape)
    flat_blocks = blocks.reshape(-1, *block_shape)

    if config.n_jobs == 1:
        histograms = [compute_block_histogram(b, config.threshold) for b in flat_blocks]
    else:
        histograms = Parallel(n_jobs=config.n_jobs)(
            delayed(compute_block_histogram)(b, config.threshold) for b in flat_blocks
        )

    grid = np.stack(histograms).reshape(config.vertical_blocks,
                                        config.horizontal_blocks, N_BINS)
    grid.setflags(write=False)
    return grid
