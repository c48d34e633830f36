"""Exceptions raised by the colorization engine."""


class ColorizeError(Exception):
    """Base class for every error raised by this package."""


class InputShapeError(ColorizeError, ValueError):
    """Image, scribbles or mask do not describe the same pixel grid."""


class DegenerateInputError(ColorizeError):
    """The scribble mask has no fixed pixels, so the system is singular."""


class ConvergenceError(ColorizeError):
    """The iterative solver did not reach tolerance for one channel."""

    def __init__(self, channel: str, info: int = 0):
        self.channel = channel
        self.info = info
        if info > 0:
            detail = f"no convergence after {info} iterations"
        elif info < 0:
            detail = f"solver breakdown (info={info})"
        else:
            detail = "solver failure"
        super().__init__(f"Failed to solve for {channel} channel: {detail}.")
