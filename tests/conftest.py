"""Shared fixtures for descriptor tests"""

import numpy as np
import pytest

VERTICAL_STEP = np.array([[0, 255], [0, 255]])


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def random_image(rng):
    """32x32 gray image with plenty of edges of every kind"""
    return rng.integers(0, 256, size=(32, 32)).astype(np.uint8)


@pytest.fixture
def uniform_image():
    return np.full((8, 8), 100, dtype=np.uint8)


@pytest.fixture
def single_edge_image():
    """8x8 image (1 cell per block with 4x4 blocks) with one vertical edge in block (0, 0)"""
    image = np.zeros((8, 8))
    image[0:2, 0:2] = VERTICAL_STEP
    return image
