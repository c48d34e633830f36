"""
Test the luminance affinity weights.
"""
import numpy as np

from scribble_colorize.affinity import compute_weights, local_variance, pixel_weights
from scribble_colorize.grid import PixelGrid


def test_weights_sum_to_one(rng):
    """Every pixel's normalised weights sum to 1."""
    Y = rng.uniform(0, 255, size=(7, 9))
    weights = compute_weights(Y, gamma=2.0)

    sums = weights.weight.sum(axis=0)
    assert np.allclose(sums, 1.0, atol=1e-12)
    assert np.all(weights.weight >= 0)
    assert np.all(weights.weight[~weights.valid] == 0)


def test_vectorised_matches_per_pixel(rng):
    """Whole-image and single-pixel forms give the same weights."""
    Y = rng.uniform(0, 255, size=(5, 6))
    grid = PixelGrid(5, 6)
    weights = compute_weights(Y, gamma=3.0)

    for row, col in [(0, 0), (0, 3), (2, 2), (4, 5), (3, 0)]:
        expected = pixel_weights(Y, grid, row, col, gamma=3.0)
        actual = weights.of(row, col)
        assert [s for s, _ in actual] == [s for s, _ in expected]
        assert np.allclose([w for _, w in actual], [w for _, w in expected])


def test_uniform_luminance_gives_equal_weights():
    Y = np.full((4, 4), 90.0)
    grid = PixelGrid(4, 4)
    corner = pixel_weights(Y, grid, 0, 0)
    interior = pixel_weights(Y, grid, 1, 1)

    assert np.allclose([w for _, w in corner], 1 / 3)
    assert np.allclose([w for _, w in interior], 1 / 8)


def test_gamma_sharpens_edges():
    """Weight across a luminance edge drops as gamma grows."""
    Y = np.zeros((3, 4))
    Y[:, 2:] = 100.0
    grid = PixelGrid(3, 4)
    across = grid.index(1, 2)
    same_side = grid.index(1, 0)

    soft = dict(pixel_weights(Y, grid, 1, 1, gamma=1.0))
    sharp = dict(pixel_weights(Y, grid, 1, 1, gamma=4.0))

    assert soft[across] < soft[same_side]
    assert sharp[across] < soft[across]


def test_single_pixel_has_empty_weight_set():
    Y = np.array([[42.0]])
    weights = compute_weights(Y)
    assert not weights.valid.any()
    assert weights.of(0, 0) == []
    assert pixel_weights(Y, PixelGrid(1, 1), 0, 0) == []


def test_local_variance_flat_region():
    assert abs(local_variance([5.0, 5.0, 5.0]) - 0.01) < 1e-12
    assert abs(local_variance([0.0, 2.0], eps=0.0) - 1.0) < 1e-12


def test_input_is_not_modified(rng):
    Y = rng.uniform(0, 255, size=(3, 3))
    before = Y.copy()
    compute_weights(Y)
    assert np.array_equal(Y, before)
