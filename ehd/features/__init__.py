"""Edge histogram feature extraction modules"""

from .cells import (
    Orientation,
    BIN_ORIENTATIONS,
    EDGE_KERNELS,
    cell_votes,
    classify_cell,
    classify_cells,
)
from .blocks import compute_block_histogram, compute_block_grid, validate_layout
from .regions import Region, sum_region, semi_local_regions
from .descriptor import EdgeHistogramDescriptor, extract_ehd

__all__ = [
    'Orientation',
    'BIN_ORIENTATIONS',
    'EDGE_KERNELS',
    'cell_votes',
    'classify_cell',
    'classify_cells',
    'compute_block_histogram',
    'compute_block_grid',
    'validate_layout',
    'Region',
    'sum_region',
    'semi_local_regions',
    'EdgeHistogramDescriptor',
    'extract_ehd',
]
