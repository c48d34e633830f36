import logging

import cv2 as cv
import numpy as np

from .config import DEFAULT_EPS, DEFAULT_EROSIONS
from .errors import InputShapeError

logger = logging.getLogger(__name__)


def check_image_pair(image: np.ndarray, scribbles: np.ndarray):
    """Reject an image/scribbles pair that is not two equal 8-bit BGR grids."""
    for name, arr in (("image", image), ("scribbles", scribbles)):
        if not isinstance(arr, np.ndarray):
            raise InputShapeError(f"{name} must be a numpy array, got {type(arr).__name__}")
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise InputShapeError(f"{name} must be H x W x 3, got shape {arr.shape}")
        if arr.dtype != np.uint8:
            raise InputShapeError(f"{name} must be 8-bit, got dtype {arr.dtype}")
        if arr.shape[0] < 1 or arr.shape[1] < 1:
            raise InputShapeError(f"{name} is empty: shape {arr.shape}")
    if image.shape != scribbles.shape:
        raise InputShapeError(
            f"image {image.shape} and scribbles {scribbles.shape} differ in size"
        )


def get_scribble_mask(image: np.ndarray, scribbles: np.ndarray,
                      eps: float = DEFAULT_EPS, n_erosions: int = DEFAULT_EROSIONS) -> np.ndarray:
    """
    Boolean H x W mask of the pixels the user painted.

    A pixel is marked when its absolute BGR difference, summed over the three
    channels, exceeds ``eps``. The marked region is then eroded ``n_erosions``
    times with a 3x3 element so the anti-aliased rim of each stroke is not
    taken as a known colour. Strokes thinner than the element vanish.
    """
    check_image_pair(image, scribbles)
    if eps < 0:
        raise ValueError(f"eps must be >= 0, got {eps}")
    if n_erosions < 0:
        raise ValueError(f"n_erosions must be >= 0, got {n_erosions}")

    diff = cv.absdiff(image, scribbles).astype(np.int32).sum(axis=2)
    mask = np.where(diff > eps, 255, 0).astype(np.uint8)
    if n_erosions:
        mask = cv.erode(mask, None, iterations=int(n_erosions))

    mask = mask > 0
    logger.debug("scribble mask: %d of %d pixels marked", int(mask.sum()), mask.size)
    return mask
