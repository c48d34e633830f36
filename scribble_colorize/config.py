"""
Tunable parameters of the colorization engine.

Defaults mirror the values the engine was originally tuned with. Nothing is
read from the environment; callers pass every value explicitly.
"""
from dataclasses import dataclass
from typing import Optional

# Scribble mask extraction
DEFAULT_EPS = 1           # summed |BGR difference| above which a pixel is scribbled
DEFAULT_EROSIONS = 1      # 3x3 erosion rounds applied to the thresholded mask

# Affinity weights
DEFAULT_GAMMA = 2.0       # edge sensitivity
VARIANCE_EPS = 0.01       # keeps flat regions away from a zero variance

# Solver
DEFAULT_RTOL = 1e-8
DEFAULT_MAXITER = None    # None -> max(2 * number of pixels, MIN_ITERATIONS)
MIN_ITERATIONS = 1000

# Assembly
DEFAULT_CHUNK_ROWS = 64   # image rows per private triplet buffer


@dataclass(frozen=True)
class ColorizeConfig:
    """Bundle of caller-tunable parameters for one colorize run.

    Attributes:
        eps: Mask threshold on the summed per-channel difference.
        n_erosions: Erosion rounds that strip anti-aliased stroke borders.
        gamma: Larger values keep colour from crossing luminance edges.
        rtol: Relative residual tolerance of the iterative solver.
        maxiter: Iteration cap per channel, ``None`` for ``max(2 * n_pixels, 1000)``.
        chunk_rows: Rows per assembly band.
        progress: Show a tqdm bar while the system is assembled.
    """
    eps: float = DEFAULT_EPS
    n_erosions: int = DEFAULT_EROSIONS
    gamma: float = DEFAULT_GAMMA
    rtol: float = DEFAULT_RTOL
    maxiter: Optional[int] = DEFAULT_MAXITER
    chunk_rows: int = DEFAULT_CHUNK_ROWS
    progress: bool = False

    def __post_init__(self):
        if self.eps < 0:
            raise ValueError(f"eps must be >= 0, got {self.eps}")
        if self.n_erosions < 0:
            raise ValueError(f"n_erosions must be >= 0, got {self.n_erosions}")
        if self.gamma <= 0:
            raise ValueError(f"gamma must be > 0, got {self.gamma}")
        if self.rtol <= 0:
            raise ValueError(f"rtol must be > 0, got {self.rtol}")
        if self.maxiter is not None and self.maxiter < 1:
            raise ValueError(f"maxiter must be >= 1, got {self.maxiter}")
        if self.chunk_rows < 1:
            raise ValueError(f"chunk_rows must be >= 1, got {self.chunk_rows}")
