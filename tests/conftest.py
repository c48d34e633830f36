"""Shared fixtures: small synthetic BGR images."""
import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def edge_pair():
    """6x8 image, dark left half / bright right half, one red and one blue scribble."""
    image = np.zeros((6, 8, 3), dtype=np.uint8)
    image[:, :4] = 50
    image[:, 4:] = 200
    scribbles = image.copy()
    scribbles[2, 1] = (0, 0, 255)
    scribbles[2, 6] = (255, 0, 0)
    mask = np.zeros((6, 8), dtype=bool)
    mask[2, 1] = True
    mask[2, 6] = True
    return image, scribbles, mask
