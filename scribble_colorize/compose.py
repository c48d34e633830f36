import cv2 as cv
import numpy as np

from .grid import PixelGrid


def to_yuv(image: np.ndarray) -> np.ndarray:
    """H x W x 3 float64 YUV planes of an 8-bit BGR image."""
    return cv.cvtColor(image, cv.COLOR_BGR2YUV).astype(np.float64)


def unflatten(values: np.ndarray, grid: PixelGrid) -> np.ndarray:
    """Row-major flat vector back to an H x W plane."""
    values = np.asarray(values, dtype=np.float64)
    if values.size != grid.size:
        raise ValueError(f"expected {grid.size} values for {grid}, got {values.size}")
    return values.reshape(grid.shape)


def compose(Y: np.ndarray, u: np.ndarray, v: np.ndarray) -> np.ndarray:
    """
    Recombine luminance with solved chrominance into an 8-bit BGR image.

    ``u`` and ``v`` may be flat solver output or H x W planes. Out-of-range
    samples are clamped to [0, 255] before quantising, never wrapped.
    """
    Y = np.asarray(Y, dtype=np.float64)
    grid = PixelGrid.like(Y)
    yuv = np.dstack([Y, unflatten(u, grid), unflatten(v, grid)])
    yuv = np.clip(np.rint(yuv), 0, 255).astype(np.uint8)
    return cv.cvtColor(yuv, cv.COLOR_YUV2BGR)
