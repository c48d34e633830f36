"""
Affinity weights between each pixel and its 8-connected neighbours.

    d(r, s)  = (Y[r] - Y[s])^2
    var(r)   = variance of Y over N(r) + {r}, plus VARIANCE_EPS
    w(r, s)  = exp(-gamma * d(r, s) / (2 * var(r))), normalised over N(r)

Pixels of similar local luminance get large weights, so colour flows along
them and stops at luminance edges.
"""
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .config import DEFAULT_GAMMA, VARIANCE_EPS
from .grid import PixelGrid


@dataclass(frozen=True)
class AffinityWeights:
    """Stacked neighbour weights of a whole image.

    ``index``, ``valid`` and ``weight`` all have shape (8, H, W); slot k of
    pixel (i, j) refers to neighbour ``index[k, i, j]`` with weight
    ``weight[k, i, j]``. Invalid slots carry weight 0.
    """
    grid: PixelGrid
    index: np.ndarray
    valid: np.ndarray
    weight: np.ndarray

    def of(self, row: int, col: int) -> List[Tuple[int, float]]:
        """(neighbour, weight) pairs of one pixel."""
        self.grid.index(row, col)
        ok = self.valid[:, row, col]
        return list(zip(self.index[ok, row, col].tolist(),
                        self.weight[ok, row, col].tolist()))


# ───────────────────────── helper: local stats ─────────────────────────
def local_variance(values: np.ndarray, eps: float = VARIANCE_EPS) -> float:
    """Population variance of ``values`` plus ``eps``."""
    values = np.asarray(values, dtype=np.float64)
    n = values.size
    return float(np.sum(values ** 2) / n - np.sum(values) ** 2 / (n * n) + eps)


# ───────────────────────── per-pixel form ──────────────────────────────
def pixel_weights(Y: np.ndarray, grid: PixelGrid, row: int, col: int,
                  gamma: float = DEFAULT_GAMMA) -> List[Tuple[int, float]]:
    """Normalised weights of one pixel, as (neighbour index, weight) pairs.

    Reads ``Y`` only; a pixel without neighbours yields an empty list.
    """
    r = grid.index(row, col)
    y = np.asarray(Y, dtype=np.float64).ravel()
    neighbours = grid.neighbours(row, col)
    if not neighbours:
        return []

    var = local_variance(np.append(y[neighbours], y[r]))
    raw = np.exp(-gamma * (y[r] - y[neighbours]) ** 2 / (2 * var))
    raw /= raw.sum()
    return list(zip(neighbours, raw.tolist()))


# ───────────────────────── whole-image form ────────────────────────────
def compute_weights(Y: np.ndarray, gamma: float = DEFAULT_GAMMA) -> AffinityWeights:
    """Vectorised ``pixel_weights`` over every pixel of ``Y``."""
    Y = np.asarray(Y, dtype=np.float64)
    if Y.ndim != 2:
        raise ValueError(f"luminance plane must be 2-D, got shape {Y.shape}")
    grid = PixelGrid.like(Y)
    index, valid = grid.neighbour_table()

    nbr = np.where(valid, Y.ravel()[index], 0.0)
    count = valid.sum(axis=0) + 1
    total = Y + nbr.sum(axis=0)
    squares = Y ** 2 + (nbr ** 2).sum(axis=0)
    var = squares / count - total ** 2 / (count * count) + VARIANCE_EPS

    d = (Y[None] - nbr) ** 2
    weight = np.where(valid, np.exp(-gamma * d / (2 * var[None])), 0.0)
    norm = weight.sum(axis=0)
    # 1x1 images have no neighbours: leave their (empty) weight set at zero
    weight = np.divide(weight, norm[None], out=np.zeros_like(weight), where=norm[None] > 0)

    return AffinityWeights(grid=grid, index=index, valid=valid, weight=weight)
