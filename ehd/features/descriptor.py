"""
Edge Histogram Descriptor (MPEG-7) with semi-local features

The descriptor divides a gray image into blocks (4x4 by default), every block
into 2x2 pixel cells, and counts the dominant edge orientation of each cell.
Block histograms are then reported per block, summed over semi-local clusters
of blocks, and summed over the whole image.
"""

import dataclasses
import threading
from typing import Dict, List, Optional

import numpy as np

from ..config import EdgeHistogramConfig
from ..exceptions import InvalidChannelCount
from .blocks import cells_per_block, compute_block_grid
from .cells import BIN_ORIENTATIONS
from .regions import blocks_bins, global_bins, semi_local_bins, semi_local_regions

BIN_NAMES = [o.name.lower() for o in BIN_ORIENTATIONS]


class EdgeHistogramDescriptor:
    """
    Edge Histogram Descriptor of one gray image

    The configuration is fixed at construction. The block grid is computed on
    the first query and reused by every later query.

    Example:
        >>> ehd = EdgeHistogramDescriptor(gray, threshold=30, normalize=True)
        >>> vector = ehd.full_bins_vector()
        >>> coarse = ehd.with_configuration(horizontal_blocks=8, vertical_blocks=8)
    """

    def __init__(self, image: np.ndarray,
                 config: Optional[EdgeHistogramConfig] = None,
                 **overrides):
        """
        Args:
            image: Single-channel image (H, W); (H, W, 1) is also accepted
            config: Descriptor configuration (defaults if None)
            **overrides: Config fields replacing those of ``config``

        Raises:
            InvalidChannelCount: If the image is not single-channel
        """
        image = np.asarray(image)
        if image.ndim == 3 and image.shape[2] == 1:
            image = image[:, :, 0]
        if image.ndim != 2:
            raise InvalidChannelCount(
                f"EHD requires mono-channel (gray) images, got shape {image.shape}"
            )

        self._image = image.astype(np.float64)
        self._image.setflags(write=False)

        config = config or EdgeHistogramConfig()
        self._config = dataclasses.replace(config, **overrides) if overrides else config

        self._grid: Optional[np.ndarray] = None
        self._lock = threading.Lock()

    @property
    def config(self) -> EdgeHistogramConfig:
        return self._config

    @property
    def image(self) -> np.ndarray:
        return self._image

    def with_configuration(self, config: Optional[EdgeHistogramConfig] = None,
                           **changes) -> 'EdgeHistogramDescriptor':
        """Return a new descriptor over the same image with another configuration"""
        return EdgeHistogramDescriptor(self._image, config or self._config, **changes)

    # ------------------------------------------------------------------
    # Block grid
    # ------------------------------------------------------------------

    @property
    def block_grid(self) -> np.ndarray:
        """Read-only (vertical_blocks, horizontal_blocks, 5) raw block counts"""
        if self._grid is None:
            with self._lock:
                if self._grid is None:
                    self._grid = compute_block_grid(self._image, self._config)
        return self._grid

    @property
    def cells_per_block(self) -> int:
        h, w = self._image.shape
        return cells_per_block((h // self._config.vertical_blocks,
                                w // self._config.horizontal_blocks))

    # ------------------------------------------------------------------
    # Vectors
    # ------------------------------------------------------------------

    def blocks_bins_vector(self) -> np.ndarray:
        """Per-block bins, row-major (5 * vertical_blocks * horizontal_blocks)"""
        grid = self.block_grid
        return blocks_bins(grid, self._config.normalize, self.cells_per_block)

    def global_bins_vector(self) -> np.ndarray:
        """Bins summed over the whole image (5)"""
        grid = self.block_grid
        return global_bins(grid, self._config.normalize, self.cells_per_block)

    def semi_local_bins_vector(self) -> np.ndarray:
        """Row bands, column bands, quadrants and center (5 * (v + h + 5))"""
        grid = self.block_grid
        return semi_local_bins(grid, self._config.normalize, self.cells_per_block)

    def full_bins_vector(self) -> np.ndarray:
        """Global, semi-local and per-block bins concatenated in that order"""
        return np.concatenate([
            self.global_bins_vector(),
            self.semi_local_bins_vector(),
            self.blocks_bins_vector(),
        ])

    # ------------------------------------------------------------------
    # Named features
    # ------------------------------------------------------------------

    def feature_names(self) -> List[str]:
        """Names of the entries of ``full_bins_vector`` in order"""
        v = self._config.vertical_blocks
        h = self._config.horizontal_blocks

        prefixes = ['ehd_global']
        prefixes += [f'ehd_{region.name}' for region in semi_local_regions(v, h)]
        prefixes += [f'ehd_block_r{r}_c{c}' for r in range(v) for c in range(h)]

        return [f'{prefix}_{bin_name}' for prefix in prefixes for bin_name in BIN_NAMES]

    def extract_features(self) -> Dict[str, float]:
        """Full descriptor as an ordered name -> value dictionary"""
        vector = self.full_bins_vector()
        return {name: float(value) for name, value in zip(self.feature_names(), vector)}


def extract_ehd(image: np.ndarray,
                config: Optional[EdgeHistogramConfig] = None,
                **overrides) -> np.ndarray:
    """
    Compute the full EHD vector of an image in one call

    Args:
        image: Single-channel image (H, W)
        config: Descriptor configuration (defaults if None)
        **overrides: Config fields replacing those of ``config``

    Returns:
        float64 vector (global, semi-local, per-block)
    """
    return EdgeHistogramDescriptor(image, config, **overrides).full_bins_vector()
