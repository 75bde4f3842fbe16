"""Tests for cell-level edge classification"""

import numpy as np
import pytest

from ehd.features.cells import (
    EDGE_KERNELS,
    Orientation,
    cell_votes,
    classify_cell,
    classify_cells,
    split_cells,
)

VERTICAL_STEP = np.array([[0, 255], [0, 255]])


def test_vertical_step_votes():
    votes = cell_votes(VERTICAL_STEP)
    # both diagonal operators see |255 * sqrt(2)| from the right column
    np.testing.assert_allclose(
        votes, [510.0, 0.0, 255 * np.sqrt(2), 255 * np.sqrt(2), 0.0], atol=1e-9
    )
    assert np.argmax(votes) == 0
    assert votes[0] > np.delete(votes, 0).max()


def test_vertical_step_is_vertical():
    assert classify_cell(VERTICAL_STEP, threshold=50) == Orientation.VERTICAL


def test_vote_equal_to_threshold_counts_as_edge():
    assert classify_cell(VERTICAL_STEP, threshold=510) == Orientation.VERTICAL
    assert classify_cell(VERTICAL_STEP, threshold=511) == Orientation.NONE


@pytest.mark.parametrize('cell, expected', [
    ([[255, 255], [0, 0]], Orientation.HORIZONTAL),
    ([[100, 50], [50, 0]], Orientation.DIAGONAL_45),
    ([[50, 100], [0, 50]], Orientation.DIAGONAL_135),
    ([[255, 0], [0, 255]], Orientation.NONDIRECTIONAL),
])
def test_each_orientation(cell, expected):
    assert classify_cell(cell, threshold=10) == expected


def test_ties_resolve_to_first_kernel():
    # Every vote of a flat cell is 0, so with threshold 0 all five tie
    assert classify_cell([[7, 7], [7, 7]], threshold=0) == Orientation.VERTICAL


def test_flat_cell_has_no_edge():
    assert classify_cell([[7, 7], [7, 7]], threshold=1) == Orientation.NONE


def test_kernels_are_read_only():
    assert EDGE_KERNELS.shape == (5, 2, 2)
    with pytest.raises(ValueError):
        EDGE_KERNELS[0, 0, 0] = 3


def test_classify_cell_rejects_wrong_shape():
    with pytest.raises(ValueError):
        classify_cell(np.zeros((3, 3)), threshold=50)


def test_split_cells_row_major():
    grid = np.arange(16).reshape(4, 4)
    cells = split_cells(grid)
    assert cells.shape == (2, 2, 2, 2)
    np.testing.assert_array_equal(cells[0, 1], [[2, 3], [6, 7]])
    np.testing.assert_array_equal(cells[1, 0], [[8, 9], [12, 13]])


def test_split_cells_rejects_odd_sides():
    with pytest.raises(ValueError):
        split_cells(np.zeros((4, 5)))


def test_classify_cells_matches_single_cell(random_image):
    codes = classify_cells(random_image, threshold=40)
    assert codes.shape == (16, 16)

    for i in range(codes.shape[0]):
        for j in range(codes.shape[1]):
            cell = random_image[2 * i:2 * i + 2, 2 * j:2 * j + 2]
            assert codes[i, j] == classify_cell(cell, threshold=40)


def test_uint8_input_does_not_wrap():
    # 0 - 255 would wrap around in uint8 arithmetic
    cell = np.array([[0, 255], [0, 255]], dtype=np.uint8)
    np.testing.assert_allclose(cell_votes(cell)[0], 510.0)
