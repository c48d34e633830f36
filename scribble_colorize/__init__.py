"""Scribble-based image colorization by weighted harmonic extension."""
import logging

from .affinity import AffinityWeights, compute_weights, pixel_weights
from .colorize import ColorizeResult, colorize, colorize_result, colorize_scribbled
from .compose import compose, to_yuv
from .config import ColorizeConfig
from .errors import (ColorizeError, ConvergenceError, DegenerateInputError,
                     InputShapeError)
from .grid import PixelGrid
from .mask import get_scribble_mask
from .solver import ChannelSolution, solve_channels
from .system import LinearSystem, build_system

__version__ = "0.1.0"

getScribbleMask = get_scribble_mask

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AffinityWeights", "ChannelSolution", "ColorizeConfig", "ColorizeError",
    "ColorizeResult", "ConvergenceError", "DegenerateInputError",
    "InputShapeError", "LinearSystem", "PixelGrid", "build_system", "colorize",
    "colorize_result", "colorize_scribbled", "compose", "compute_weights",
    "getScribbleMask", "get_scribble_mask", "pixel_weights", "solve_channels",
    "to_yuv",
]
