#!/usr/bin/env python
"""Unicode wave function collapse: grow a grid of box-drawing tiles."""

import argparse
import logging
import os
import random
import sys
import time
from datetime import datetime

import render
import wfc_core
from tiles import default_catalog

DEFAULT_WIDTH = 10
DEFAULT_HEIGHT = 10
DEFAULT_DELAY = 3.0  # seconds between runs


def positive_int(value):
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError("{!r} is not an integer".format(value))
    if number < 1:
        raise argparse.ArgumentTypeError("{} must be at least 1".format(number))
    return number


def build_parser():
    parser = argparse.ArgumentParser(
        description="Generate interlocking box-drawing patterns with wave function collapse"
    )
    parser.add_argument("--width", type=positive_int, default=DEFAULT_WIDTH,
                        help="width of generated pattern (default: %(default)s)")
    parser.add_argument("--height", type=positive_int, default=DEFAULT_HEIGHT,
                        help="height of generated pattern (default: %(default)s)")
    parser.add_argument("--n-iter", type=positive_int, default=1,
                        help="how many patterns to generate (default: %(default)s)")
    parser.add_argument("--delay", type=float, default=DEFAULT_DELAY,
                        help="seconds to wait between patterns (default: %(default)s)")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for a reproducible run")
    parser.add_argument("--max-attempts", type=positive_int, default=1,
                        help="restart a pattern up to N times on contradiction (default: %(default)s)")
    parser.add_argument("--quiet", action="store_true",
                        help="only print finished patterns, not every step")
    parser.add_argument("--svg", action="store_true",
                        help="also save each pattern as an SVG file")
    parser.add_argument("--out-dir", default=".",
                        help="directory for SVG files (default: current directory)")
    parser.add_argument("--verbose", action="store_true",
                        help="enable debug logging")
    return parser


def print_step(board, event):
    print("chosen: {}, at: {}".format(event.glyph, event.position))
    render.print_board(board)


def run_once(catalog, width, height, rng, max_attempts, quiet):
    """Generate one pattern. Returns (result or None, elapsed seconds)."""
    start = time.perf_counter()
    result = wfc_core.generate_with_retries(
        catalog, width, height, rng=rng, max_attempts=max_attempts,
        step_callback=None if quiet else print_step,
    )
    return result, time.perf_counter() - start


def save_svg(grid, catalog, out_dir, index):
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(
        out_dir, "uwfc-{}-{}.svg".format(datetime.now().strftime('%Y%m%d-%H%M%S'), index))
    with open(filename, 'w', encoding='utf-8') as f:
        f.write(render.render_svg(grid, catalog))
    return filename


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    try:
        wfc_core.validate_dimensions(args.width, args.height)
    except wfc_core.ConfigError as exc:
        parser.error(str(exc))

    catalog = default_catalog()
    rng = random.Random(args.seed) if args.seed is not None else random
    shape = (args.height, args.width)

    for n in range(args.n_iter):
        result, elapsed = run_once(catalog, args.width, args.height, rng,
                                   args.max_attempts, args.quiet)
        if result is None:
            print("UWFC size of {} failed: contradiction in every one of {} attempt(s)".format(
                shape, args.max_attempts), file=sys.stderr)
            return 1

        print(render.format_grid(result.grid))
        print("UWFC size of {} took {:.6f} seconds".format(shape, elapsed))

        if args.svg:
            print("Saved: {}".format(save_svg(result.grid, catalog, args.out_dir, n + 1)))

        if n < args.n_iter - 1:
            time.sleep(args.delay)

    return 0


if __name__ == '__main__':
    sys.exit(main())
