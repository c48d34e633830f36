"""
Test scribble mask extraction.
"""
import numpy as np
import pytest

from scribble_colorize import getScribbleMask
from scribble_colorize.errors import InputShapeError
from scribble_colorize.mask import get_scribble_mask


def _gray(height, width, level=120):
    return np.full((height, width, 3), level, dtype=np.uint8)


@pytest.mark.parametrize("eps", [0, 1, 10])
def test_identical_copy_gives_empty_mask(eps):
    image = _gray(8, 8)
    image[2:5, 3:6] = 30
    mask = get_scribble_mask(image, image.copy(), eps=eps)

    assert mask.dtype == bool
    assert mask.shape == (8, 8)
    assert not mask.any()


def test_erosion_strips_stroke_rim():
    """A 5x5 patch shrinks to its 3x3 core after one erosion."""
    image = _gray(10, 10)
    scribbles = image.copy()
    scribbles[2:7, 2:7] = (0, 0, 255)

    raw = get_scribble_mask(image, scribbles, n_erosions=0)
    eroded = get_scribble_mask(image, scribbles, n_erosions=1)

    expected_raw = np.zeros((10, 10), dtype=bool)
    expected_raw[2:7, 2:7] = True
    expected_eroded = np.zeros((10, 10), dtype=bool)
    expected_eroded[3:6, 3:6] = True
    assert np.array_equal(raw, expected_raw)
    assert np.array_equal(eroded, expected_eroded)


def test_thin_stroke_removed_by_erosion():
    image = _gray(9, 9)
    scribbles = image.copy()
    scribbles[4, 1:8] = (255, 0, 0)

    assert get_scribble_mask(image, scribbles, n_erosions=0).sum() == 7
    assert not get_scribble_mask(image, scribbles, n_erosions=1).any()


def test_threshold_is_strict():
    """A summed difference equal to eps is not marked."""
    image = _gray(3, 3)
    scribbles = image.copy()
    scribbles[1, 1] = (121, 120, 120)

    assert not get_scribble_mask(image, scribbles, eps=1, n_erosions=0).any()
    assert get_scribble_mask(image, scribbles, eps=0, n_erosions=0)[1, 1]


def test_channel_differences_are_summed_without_saturation():
    image = _gray(3, 3, level=0)
    scribbles = image.copy()
    scribbles[0, 0] = (200, 200, 200)

    mask = get_scribble_mask(image, scribbles, eps=500, n_erosions=0)
    assert mask[0, 0]
    assert mask.sum() == 1


def test_inputs_are_not_modified():
    image = _gray(6, 6)
    scribbles = image.copy()
    scribbles[1:4, 1:4] = (10, 200, 30)
    before = scribbles.copy()
    get_scribble_mask(image, scribbles)
    assert np.array_equal(scribbles, before)
    assert (image == 120).all()


def test_mismatched_sizes_rejected():
    with pytest.raises(InputShapeError, match="differ in size"):
        get_scribble_mask(_gray(4, 4), _gray(4, 5))


def test_wrong_channel_count_rejected():
    with pytest.raises(InputShapeError):
        get_scribble_mask(np.zeros((4, 4), dtype=np.uint8), _gray(4, 4))


def test_non_8bit_rejected():
    with pytest.raises(InputShapeError, match="8-bit"):
        get_scribble_mask(_gray(4, 4).astype(np.float32), _gray(4, 4))


def test_negative_parameters_rejected():
    with pytest.raises(ValueError):
        get_scribble_mask(_gray(4, 4), _gray(4, 4), eps=-1)
    with pytest.raises(ValueError):
        get_scribble_mask(_gray(4, 4), _gray(4, 4), n_erosions=-1)


def test_camel_case_alias():
    assert getScribbleMask is get_scribble_mask
