import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
import scipy.sparse as sp
import scipy.sparse.linalg as spla

from .config import DEFAULT_MAXITER, DEFAULT_RTOL, MIN_ITERATIONS
from .system import LinearSystem

logger = logging.getLogger(__name__)

CHANNELS = ("U", "V")


@dataclass(frozen=True)
class ChannelSolution:
    """Outcome of one channel solve.

    ``info`` is the BiCGSTAB status: 0 on convergence, the iteration count
    when the cap was hit, negative on breakdown. ``values`` is None unless
    the solve converged.
    """
    channel: str
    info: int
    iterations: int
    values: Optional[np.ndarray] = None

    @property
    def converged(self) -> bool:
        return self.info == 0


def jacobi_preconditioner(A: sp.spmatrix) -> sp.csr_matrix:
    """Inverse of the diagonal of ``A`` as a sparse matrix."""
    diag = A.diagonal()
    if np.any(diag == 0):
        raise ValueError("matrix has a zero on its diagonal")
    return sp.diags(1.0 / diag, format="csr")


def solve_channel(A: sp.spmatrix, b: np.ndarray, M: sp.spmatrix, channel: str,
                  rtol: float = DEFAULT_RTOL, maxiter: Optional[int] = DEFAULT_MAXITER) -> ChannelSolution:
    """BiCGSTAB from a zero initial guess; never raises on non-convergence."""
    if maxiter is None:
        maxiter = max(2 * A.shape[0], MIN_ITERATIONS)
    steps = [0]

    def count(_xk):
        steps[0] += 1

    x, info = spla.bicgstab(A, b, x0=np.zeros_like(b), rtol=rtol, atol=0.0,
                            maxiter=maxiter, M=M, callback=count)
    if info == 0 and not np.all(np.isfinite(x)):
        info = -1
    if info != 0:
        logger.error("%s channel did not converge (info=%d, %d iterations)",
                     channel, info, steps[0])
        return ChannelSolution(channel=channel, info=int(info), iterations=steps[0])
    logger.debug("%s channel converged in %d iterations", channel, steps[0])
    return ChannelSolution(channel=channel, info=0, iterations=steps[0], values=x)


def solve_channels(system: LinearSystem, rtol: float = DEFAULT_RTOL,
                   maxiter: Optional[int] = DEFAULT_MAXITER) -> List[ChannelSolution]:
    """
    Solve for U then V with one shared preconditioner.

    Stops at the first channel that fails, so the last entry of the returned
    list is the failing one when fewer than two solutions come back or the
    last one did not converge.
    """
    M = jacobi_preconditioner(system.A)
    solutions = []
    for channel, b in zip(CHANNELS, (system.bu, system.bv)):
        logger.info("Solving for %s channel.", channel)
        solution = solve_channel(system.A, b, M, channel, rtol=rtol, maxiter=maxiter)
        solutions.append(solution)
        if not solution.converged:
            break
    return solutions
