#!/usr/bin/env python3
"""
===============================================================================
ATTITUDE - COMMAND-LINE ENTRY POINT
===============================================================================
Small front end over the quaternion toolkit for quick checks from a shell.

USAGE:
    attitude rotate --axis 0 0 1 --angle 90 --degrees --vector 1 0 0
    attitude matrix --quat 0.7071 0 0 0.7071
    attitude slerp --from 1 0 0 0 --to 0.7071 0 0 0.7071 --t 0.5
    attitude random --count 3 --seed 42

Global options (before the subcommand):
    --config PATH       YAML configuration (see config/attitude_config.yaml)
    --log-level LEVEL   Override the configured logging level
    --precision N       Override the configured output precision
===============================================================================
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import Iterable, List, Optional

import numpy as np

from attitude.config import Config, load_config
from attitude.core.constants import RAD2DEG
from attitude.core.quaternion import Quaternion
from attitude.core.vec3 import Vec3


logger = logging.getLogger('attitude.main')


def setup_logging(level: str) -> None:
    """Configure the root logger for the command-line process."""
    logging.basicConfig(
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    # basicConfig is a no-op when handlers exist, so set the level directly
    logging.getLogger().setLevel(level.upper())


def non_negative_int(text: str) -> int:
    """argparse type for counts and precisions."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def log_level(text: str) -> str:
    """argparse type accepting a logging level name in any case."""
    level = text.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise argparse.ArgumentTypeError(f"unknown logging level: {text!r}")
    return level


def format_values(values: Iterable[float], precision: int) -> str:
    """Format numbers as a bracketed, comma-separated list."""
    # + 0.0 turns a rounded -0.0 into 0.0
    return "[" + ", ".join(f"{round(v, precision) + 0.0:.{precision}f}"
                           for v in values) + "]"


# =============================================================================
# SUBCOMMANDS
# =============================================================================

def run_rotate(args: argparse.Namespace, config: Config) -> int:
    axis = Vec3.from_array(args.axis)
    if args.degrees:
        q = Quaternion.rotation_degrees(args.angle, axis)
    else:
        q = Quaternion.rotation_radians(args.angle, axis)
    angle_deg = args.angle if args.degrees else args.angle * RAD2DEG
    logger.info("Rotation of %.6f deg, quaternion: %s", angle_deg, q.to_array())
    v = q.rotate(Vec3.from_array(args.vector))
    print(format_values(v.to_array(), config.output.precision))
    return 0


def run_matrix(args: argparse.Namespace, config: Config) -> int:
    q = Quaternion.from_array(args.quat)
    if args.normalize:
        q = q.normalize()
    m = q.matrix()
    for i in range(3):
        print(format_values(m.row(i).to_array(), config.output.precision))
    return 0


def run_slerp(args: argparse.Namespace, config: Config) -> int:
    q_from = Quaternion.from_array(args.from_quat)
    q_to = Quaternion.from_array(args.to_quat)
    result = Quaternion.slerp(q_from, q_to, args.t)
    print(format_values(result.to_array(), config.output.precision))
    return 0


def run_random(args: argparse.Namespace, config: Config) -> int:
    seed = args.seed if args.seed is not None else config.random.seed
    logger.info("Random seed: %s", seed)
    rng = np.random.default_rng(seed)
    for _ in range(args.count):
        q = Quaternion.random(rng)
        print(format_values(q.to_array(), config.output.precision))
    return 0


# =============================================================================
# ARGUMENT PARSING
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='attitude',
        description='Quaternion orientation toolkit',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  attitude rotate --axis 0 0 1 --angle 90 --degrees --vector 1 0 0
  attitude matrix --quat 1 0 0 0
  attitude slerp --from 1 0 0 0 --to 0 0 0 1 --t 0.25
  attitude random --count 5 --seed 7
        """
    )
    parser.add_argument('--config', type=str, default=None,
                        help='Path to configuration YAML')
    parser.add_argument('--log-level', type=log_level, default=None,
                        help='Logging level (overrides config)')
    parser.add_argument('--precision', type=non_negative_int, default=None,
                        help='Digits after the decimal point (overrides config)')

    sub = parser.add_subparsers(dest='command', required=True)

    p_rotate = sub.add_parser('rotate', help='Rotate a vector about an axis')
    p_rotate.add_argument('--axis', type=float, nargs=3, required=True,
                          metavar=('AX', 'AY', 'AZ'))
    p_rotate.add_argument('--angle', type=float, required=True,
                          help='Rotation angle (radians unless --degrees)')
    p_rotate.add_argument('--degrees', action='store_true',
                          help='Interpret --angle in degrees')
    p_rotate.add_argument('--vector', type=float, nargs=3, required=True,
                          metavar=('VX', 'VY', 'VZ'))
    p_rotate.set_defaults(handler=run_rotate)

    p_matrix = sub.add_parser('matrix', help='Print the rotation matrix of a quaternion')
    p_matrix.add_argument('--quat', type=float, nargs=4, required=True,
                          metavar=('W', 'X', 'Y', 'Z'))
    p_matrix.add_argument('--normalize', action='store_true',
                          help='Normalize the quaternion first')
    p_matrix.set_defaults(handler=run_matrix)

    p_slerp = sub.add_parser('slerp', help='Interpolate between two quaternions')
    p_slerp.add_argument('--from', dest='from_quat', type=float, nargs=4,
                         required=True, metavar=('W', 'X', 'Y', 'Z'))
    p_slerp.add_argument('--to', dest='to_quat', type=float, nargs=4,
                         required=True, metavar=('W', 'X', 'Y', 'Z'))
    p_slerp.add_argument('--t', type=float, required=True,
                         help='Interpolation parameter in [0, 1]')
    p_slerp.set_defaults(handler=run_slerp)

    p_random = sub.add_parser('random', help='Generate random unit quaternions')
    p_random.add_argument('--count', type=non_negative_int, default=1)
    p_random.add_argument('--seed', type=non_negative_int, default=None,
                          help='Random seed (overrides config)')
    p_random.set_defaults(handler=run_random)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse command line arguments and run the requested subcommand.

    Args:
        argv: Argument list without the program name. Defaults to sys.argv.

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    if args.precision is not None:
        config = replace(config, output=replace(config.output, precision=args.precision))

    # the level comes from the config, so loading is reported once it is set
    setup_logging(args.log_level or config.logging.level)
    if args.config is not None:
        logger.info("Loading configuration from: %s", args.config)
    logger.debug("Configuration: %s", config)

    return args.handler(args, config)


if __name__ == '__main__':
    sys.exit(main())
