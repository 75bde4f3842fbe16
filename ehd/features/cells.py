"""
Cell-level edge classification

Every 2x2 cell is matched against five fixed edge operators (MPEG-7 EHD).
The vote of an operator is the absolute value of the elementwise product sum
of the cell and the operator; the strongest vote decides the orientation, and
cells whose strongest vote is below the threshold carry no edge.
"""

from enum import IntEnum

import numpy as np


class Orientation(IntEnum):
    """Edge orientation of a cell; values double as histogram bin indices"""
    NONE = -1
    VERTICAL = 0
    HORIZONTAL = 1
    DIAGONAL_45 = 2
    DIAGONAL_135 = 3
    NONDIRECTIONAL = 4


# Bin order of every histogram produced by this package
BIN_ORIENTATIONS = (
    Orientation.VERTICAL,
    Orientation.HORIZONTAL,
    Orientation.DIAGONAL_45,
    Orientation.DIAGONAL_135,
    Orientation.NONDIRECTIONAL,
)
N_BINS = len(BIN_ORIENTATIONS)

_SQRT2 = np.sqrt(2.0)

# Stacked in bin order; argmax picks the first maximum, which resolves ties
EDGE_KERNELS = np.array([
    [[1.0, -1.0], [1.0, -1.0]],        # vertical
    [[1.0, 1.0], [-1.0, -1.0]],        # horizontal
    [[_SQRT2, 0.0], [0.0, -_SQRT2]],   # 45 degree (right to left)
    [[0.0, _SQRT2], [-_SQRT2, 0.0]],   # 135 degree (left to right)
    [[2.0, -2.0], [-2.0, 2.0]],        # non-directional
])
EDGE_KERNELS.setflags(write=False)


def cell_votes(cells: np.ndarray) -> np.ndarray:
    """
    Compute operator votes for an array of cells

    Args:
        cells: Array of shape (..., 2, 2)

    Returns:
        Array of shape (..., 5) with one non-negative vote per operator
    """
    cells = np.asarray(cells, dtype=np.float64)
    if cells.shape[-2:] != (2, 2):
        raise ValueError(f"Cells must have trailing shape (2, 2), got {cells.shape}")
    return np.abs(np.einsum('...ij,kij->...k', cells, EDGE_KERNELS))


def _votes_to_codes(votes: np.ndarray, threshold: float) -> np.ndarray:
    codes = np.argmax(votes, axis=-1)
    strongest = np.take_along_axis(votes, codes[..., np.newaxis], axis=-1)[..., 0]
    return np.where(strongest < threshold, int(Orientation.NONE), codes)


def split_cells(grid: np.ndarray) -> np.ndarray:
    """
    View an even-sized 2D grid as its non-overlapping 2x2 cells

    Args:
        grid: Array of shape (H, W), H and W even

    Returns:
        Array of shape (H/2, W/2, 2, 2), cells in row-major order
    """
    grid = np.asarray(grid)
    if grid.ndim != 2:
        raise ValueError(f"Expected a 2D grid, got shape {grid.shape}")
    h, w = grid.shape
    if h % 2 or w % 2:
        raise ValueError(f"Grid sides must be even to form 2x2 cells, got {grid.shape}")
    return grid.reshape(h // 2, 2, w // 2, 2).swapaxes(1, 2)


def classify_cells(grid: np.ndarray, threshold: float) -> np.ndarray:
    """
    Classify every 2x2 cell of a grid in one pass

    Args:
        grid: Single-channel array (H, W) with even sides
        threshold: Minimum vote for an edge (a vote equal to it counts)

    Returns:
        Integer array (H/2, W/2) of Orientation codes, -1 where no edge
    """
    return _votes_to_codes(cell_votes(split_cells(grid)), threshold)


def classify_cell(cell: np.ndarray, threshold: float) -> Orientation:
    """
    Classify a single 2x2 cell

    Example:
        >>> classify_cell([[0, 255], [0, 255]], threshold=50)
        <Orientation.VERTICAL: 0>
    """
    cell = np.asarray(cell, dtype=np.float64)
    if cell.shape != (2, 2):
        raise ValueError(f"A cell must be 2x2, got shape {cell.shape}")
    return Orientation(int(_votes_to_codes(cell_votes(cell), threshold)))
