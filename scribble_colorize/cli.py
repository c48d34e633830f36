# ---------------------------------------------------------------
# Command-line front end
#   python -m scribble_colorize <gray> <scribbles> <result>
# ---------------------------------------------------------------
import argparse
import logging

import cv2 as cv
from PIL import Image

from .colorize import colorize_scribbled
from .config import (DEFAULT_CHUNK_ROWS, DEFAULT_EPS, DEFAULT_EROSIONS,
                     DEFAULT_GAMMA, DEFAULT_RTOL, ColorizeConfig)
from .errors import ColorizeError

logger = logging.getLogger(__name__)


# ──────────────────────── I/O wrapper ──────────────────────────────────
def process_scribble_file(gray_path: str, scribble_path: str, result_path: str,
                          config: ColorizeConfig) -> None:
    gray = cv.imread(gray_path, cv.IMREAD_COLOR)
    if gray is None:
        raise FileNotFoundError(gray_path)
    scribbles = cv.imread(scribble_path, cv.IMREAD_COLOR)
    if scribbles is None:
        raise FileNotFoundError(scribble_path)

    logger.info("Running color propagation on %s", gray_path)
    result = colorize_scribbled(gray, scribbles, config).unwrap()

    Image.fromarray(cv.cvtColor(result, cv.COLOR_BGR2RGB)).save(result_path, quality=95)
    logger.info("Saved -> %s", result_path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scribble-colorize",
        description="Colorize a grayscale image from a scribbled copy of it.")
    parser.add_argument("gray", help="grayscale input image")
    parser.add_argument("scribbles", help="the same image with colour scribbles drawn on it")
    parser.add_argument("result", help="where to write the colorized image")
    parser.add_argument("--eps", type=float, default=DEFAULT_EPS,
                        help="mask threshold on the summed channel difference (default: %(default)s)")
    parser.add_argument("--erosions", type=int, default=DEFAULT_EROSIONS,
                        help="3x3 erosion rounds applied to the mask (default: %(default)s)")
    parser.add_argument("--gamma", type=float, default=DEFAULT_GAMMA,
                        help="edge sensitivity of the affinity weights (default: %(default)s)")
    parser.add_argument("--rtol", type=float, default=DEFAULT_RTOL,
                        help="solver relative tolerance (default: %(default)s)")
    parser.add_argument("--maxiter", type=int, default=None,
                        help="solver iteration cap per channel (default: max(2 x pixels, 1000))")
    parser.add_argument("--chunk-rows", type=int, default=DEFAULT_CHUNK_ROWS,
                        help="image rows per assembly band (default: %(default)s)")
    parser.add_argument("--progress", action="store_true",
                        help="show a progress bar while building the system")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


# ───────────────────────────── main ────────────────────────────────────
def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = ColorizeConfig(eps=args.eps, n_erosions=args.erosions, gamma=args.gamma,
                                rtol=args.rtol, maxiter=args.maxiter,
                                chunk_rows=args.chunk_rows, progress=args.progress)
        process_scribble_file(args.gray, args.scribbles, args.result, config)
    except (ColorizeError, OSError, ValueError) as e:
        logger.error("✖ Error: %s", e)
        return 1
    return 0
