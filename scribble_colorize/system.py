"""
Sparse system A x = b for the harmonic extension of scribbled chrominance.

Row r of A reads  x[r] - sum_s w(r, s) x[s] = sum_t w(r, t) known[t]
where s runs over unscribbled neighbours and t over scribbled ones. A
scribbled pixel is a fixed boundary node: its row is the identity and its
right-hand side is its own known value. A is shared by the U and V channels;
only bu and bv differ.
"""
import logging
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
import scipy.sparse as sp
from tqdm import tqdm

from .affinity import AffinityWeights, compute_weights
from .config import DEFAULT_CHUNK_ROWS, DEFAULT_GAMMA
from .grid import PixelGrid

logger = logging.getLogger(__name__)

Triplets = Tuple[np.ndarray, np.ndarray, np.ndarray]


@dataclass(frozen=True)
class LinearSystem:
    A: sp.csr_matrix
    bu: np.ndarray
    bv: np.ndarray
    grid: PixelGrid
    n_fixed: int

    @property
    def n_pixels(self) -> int:
        return self.grid.size


def _band(weights: AffinityWeights, U: np.ndarray, V: np.ndarray, known: np.ndarray,
          r0: int, r1: int) -> Tuple[Triplets, np.ndarray, np.ndarray]:
    """Triplets and right-hand sides of image rows [r0, r1)."""
    w_cols = weights.grid.width
    own = np.arange(r0 * w_cols, r1 * w_cols, dtype=np.int64).reshape(r1 - r0, w_cols)
    idx = weights.index[:, r0:r1]
    valid = weights.valid[:, r0:r1]
    w = weights.weight[:, r0:r1]

    fixed = known[r0:r1]
    free = ~fixed[None]
    nbr_known = known.ravel()[idx]
    to_rhs = valid & nbr_known & free
    to_matrix = valid & ~nbr_known & free

    bu = np.where(fixed, U[r0:r1], np.sum(np.where(to_rhs, w * U.ravel()[idx], 0.0), axis=0))
    bv = np.where(fixed, V[r0:r1], np.sum(np.where(to_rhs, w * V.ravel()[idx], 0.0), axis=0))

    owner = np.broadcast_to(own[None], idx.shape)
    rows = np.concatenate([own.ravel(), owner[to_matrix]])
    cols = np.concatenate([own.ravel(), idx[to_matrix]])
    data = np.concatenate([np.ones(own.size), -w[to_matrix]])
    return (rows, cols, data), bu.ravel(), bv.ravel()


def build_system(Y: np.ndarray, U: np.ndarray, V: np.ndarray, mask: np.ndarray,
                 gamma: float = DEFAULT_GAMMA, chunk_rows: int = DEFAULT_CHUNK_ROWS,
                 progress: bool = False) -> LinearSystem:
    """
    Assemble A, bu and bv from the luminance plane, the scribbled chrominance
    planes and the scribble mask (all H x W).

    The image is processed in bands of ``chunk_rows`` rows; each band fills
    its own triplet buffer and the buffers are concatenated into one CSR
    matrix at the end.
    """
    Y = np.asarray(Y, dtype=np.float64)
    U = np.asarray(U, dtype=np.float64)
    V = np.asarray(V, dtype=np.float64)
    known = np.asarray(mask, dtype=bool)
    if not (Y.shape == U.shape == V.shape == known.shape) or Y.ndim != 2:
        raise ValueError(
            f"planes must share one 2-D shape: Y {Y.shape}, U {U.shape}, "
            f"V {V.shape}, mask {known.shape}"
        )

    weights = compute_weights(Y, gamma)
    grid = weights.grid
    h = grid.height

    buffers: List[Triplets] = []
    bu_parts, bv_parts = [], []
    for r0 in tqdm(range(0, h, chunk_rows), desc="Constructing linear system",
                   disable=not progress):
        triplets, bu, bv = _band(weights, U, V, known, r0, min(h, r0 + chunk_rows))
        buffers.append(triplets)
        bu_parts.append(bu)
        bv_parts.append(bv)

    rows = np.concatenate([t[0] for t in buffers])
    cols = np.concatenate([t[1] for t in buffers])
    data = np.concatenate([t[2] for t in buffers])
    A = sp.csr_matrix((data, (rows, cols)), shape=(grid.size, grid.size))

    logger.debug("assembled %dx%d system with %d non-zeros", grid.size, grid.size, A.nnz)
    return LinearSystem(A=A, bu=np.concatenate(bu_parts), bv=np.concatenate(bv_parts),
                        grid=grid, n_fixed=int(known.sum()))
