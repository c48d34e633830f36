# ---------------------------------------------------------------
# Scribble-based Image Colorization
#   Levin, Lischinski & Weiss (SIGGRAPH 2004) colour propagation
#   mask -> affinity weights -> sparse system -> BiCGSTAB -> YUV merge
# ---------------------------------------------------------------
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .config import (DEFAULT_CHUNK_ROWS, DEFAULT_GAMMA, DEFAULT_MAXITER,
                     DEFAULT_RTOL, ColorizeConfig)
from .compose import compose, to_yuv
from .errors import ConvergenceError, DegenerateInputError, InputShapeError
from .mask import check_image_pair, get_scribble_mask
from .solver import ChannelSolution, solve_channels
from .system import build_system

logger = logging.getLogger(__name__)


@dataclass
class ColorizeResult:
    """Outcome of a colorize run: the image, or the channel that failed."""
    image: Optional[np.ndarray]
    solutions: List[ChannelSolution] = field(default_factory=list)

    @property
    def failed_channel(self) -> Optional[str]:
        for solution in self.solutions:
            if not solution.converged:
                return solution.channel
        return None

    @property
    def ok(self) -> bool:
        return self.image is not None and self.failed_channel is None

    def unwrap(self) -> np.ndarray:
        """The colour image, or ConvergenceError naming the failed channel."""
        channel = self.failed_channel
        if channel is not None:
            info = next(s.info for s in self.solutions if s.channel == channel)
            raise ConvergenceError(channel, info)
        return self.image


# ───────────────────────── input checks ────────────────────────────────
def _check_mask(mask: np.ndarray, image: np.ndarray) -> np.ndarray:
    mask = np.asarray(mask)
    if mask.shape != image.shape[:2]:
        raise InputShapeError(
            f"mask {mask.shape} does not match image size {image.shape[:2]}"
        )
    mask = mask.astype(bool)
    if not mask.any():
        raise DegenerateInputError(
            "scribble mask has no marked pixels; nothing to propagate"
        )
    return mask


# ───────────────────────── core pipeline ───────────────────────────────
def colorize_result(image: np.ndarray, scribbles: np.ndarray, mask: np.ndarray,
                    gamma: float = DEFAULT_GAMMA, rtol: float = DEFAULT_RTOL,
                    maxiter: Optional[int] = DEFAULT_MAXITER,
                    chunk_rows: int = DEFAULT_CHUNK_ROWS,
                    progress: bool = False) -> ColorizeResult:
    """
    Propagate the scribbled chrominance over ``image``.

    image     : H x W x 3 uint8 BGR, supplies the luminance
    scribbles : H x W x 3 uint8 BGR, supplies the known chrominance
    mask      : H x W bool, True where the chrominance is known

    Shape problems and an empty mask raise; a solver failure is reported in
    the returned result instead.
    """
    check_image_pair(image, scribbles)
    mask = _check_mask(mask, image)

    Y = to_yuv(image)[..., 0]
    scribble_yuv = to_yuv(scribbles)
    system = build_system(Y, scribble_yuv[..., 1], scribble_yuv[..., 2], mask,
                          gamma=gamma, chunk_rows=chunk_rows, progress=progress)
    logger.debug("%d of %d pixels fixed by scribbles", system.n_fixed, system.n_pixels)

    solutions = solve_channels(system, rtol=rtol, maxiter=maxiter)
    if len(solutions) < 2 or not all(s.converged for s in solutions):
        return ColorizeResult(image=None, solutions=solutions)

    logger.info("Finished coloring")
    u, v = (s.values for s in solutions)
    return ColorizeResult(image=compose(Y, u, v), solutions=solutions)


def colorize(image: np.ndarray, scribbles: np.ndarray, mask: np.ndarray,
             gamma: float = DEFAULT_GAMMA, rtol: float = DEFAULT_RTOL,
             maxiter: Optional[int] = DEFAULT_MAXITER) -> np.ndarray:
    """New H x W x 3 uint8 BGR colour image; raises ConvergenceError on solver failure."""
    return colorize_result(image, scribbles, mask, gamma=gamma, rtol=rtol,
                           maxiter=maxiter).unwrap()


def colorize_scribbled(image: np.ndarray, scribbles: np.ndarray,
                       config: Optional[ColorizeConfig] = None) -> ColorizeResult:
    """Mask extraction and colorization in one call, driven by a config."""
    config = config or ColorizeConfig()
    mask = get_scribble_mask(image, scribbles, eps=config.eps, n_erosions=config.n_erosions)
    return colorize_result(image, scribbles, mask, gamma=config.gamma, rtol=config.rtol,
                           maxiter=config.maxiter, chunk_rows=config.chunk_rows,
                           progress=config.progress)
