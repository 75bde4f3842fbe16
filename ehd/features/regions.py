"""
Multi-scale aggregation of block histograms

Global, semi-local and per-block views of a block grid. Semi-local regions
follow Park, Jeon & Won, "Efficient use of local edge histogram descriptor":
one band per block row, one band per block column, four quadrants and a
center cluster.
"""

from typing import List, NamedTuple, Tuple

import numpy as np

from .cells import N_BINS

IndexRange = Tuple[int, int]  # half-open (start, stop) block indices


class Region(NamedTuple):
    name: str
    rows: IndexRange
    cols: IndexRange

    @property
    def block_count(self) -> int:
        return (self.rows[1] - self.rows[0]) * (self.cols[1] - self.cols[0])


def sum_region(grid: np.ndarray,
               rows: IndexRange,
               cols: IndexRange,
               normalize: bool = False,
               cells_per_block: int = 1) -> np.ndarray:
    """
    Sum block histograms over a rectangle of blocks

    Args:
        grid: Block grid (vertical_blocks, horizontal_blocks, 5)
        rows: Half-open range of block rows
        cols: Half-open range of block columns
        normalize: Divide by the number of cells in the region
        cells_per_block: Cells in one block, used when normalizing

    Returns:
        float64 array of 5 bins; in [0, 1] when normalized
    """
    r0, r1 = rows
    c0, c1 = cols
    if not (0 <= r0 < r1 <= grid.shape[0] and 0 <= c0 < c1 <= grid.shape[1]):
        raise ValueError(f"Region rows={rows} cols={cols} is empty or outside "
                         f"a {grid.shape[0]}x{grid.shape[1]} block grid")

    bins = grid[r0:r1, c0:c1].reshape(-1, N_BINS).sum(axis=0).astype(np.float64)
    if normalize:
        bins /= cells_per_block * (r1 - r0) * (c1 - c0)
    return bins


def semi_local_regions(vertical_blocks: int, horizontal_blocks: int) -> List[Region]:
    """
    Ordered semi-local regions of a block grid

    Row bands (top to bottom), column bands (left to right), then the upper-left,
    upper-right, lower-left and lower-right quadrants and the center cluster
    covering the middle half of both axes.
    """
    v, h = vertical_blocks, horizontal_blocks
    regions = [Region(f'row{r}', (r, r + 1), (0, h)) for r in range(v)]
    regions += [Region(f'col{c}', (0, v), (c, c + 1)) for c in range(h)]
    regions += [
        Region('upper_left', (0, v // 2), (0, h // 2)),
        Region('upper_right', (0, v // 2), (h // 2, h)),
        Region('lower_left', (v // 2, v), (0, h // 2)),
        Region('lower_right', (v // 2, v), (h // 2, h)),
        Region('center', (v // 4, 3 * v // 4), (h // 4, 3 * h // 4)),
    ]
    return regions


def global_bins(grid: np.ndarray, normalize: bool = False,
                cells_per_block: int = 1) -> np.ndarray:
    """Histogram of the whole image (5 bins)"""
    return sum_region(grid, (0, grid.shape[0]), (0, grid.shape[1]),
                      normalize, cells_per_block)


def semi_local_bins(grid: np.ndarray, normalize: bool = False,
                    cells_per_block: int = 1) -> np.ndarray:
    """Concatenated histograms of all semi-local regions"""
    regions = semi_local_regions(grid.shape[0], grid.shape[1])
    return np.concatenate([
        sum_region(grid, region.rows, region.cols, normalize, cells_per_block)
        for region in regions
    ])


def blocks_bins(grid: np.ndarray, normalize: bool = False,
                cells_per_block: int = 1) -> np.ndarray:
    """
    Per-block histograms flattened row-major

    Each block is normalized by its own cell count only, unlike region sums.
    """
    bins = grid.reshape(-1).astype(np.float64)
    if normalize:
        bins /= cells_per_block
    return bins
