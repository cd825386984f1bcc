"""
densemat command-line tool for printing and checking small matrices.

Usage:
    python -m densemat show ROWS COLS [VALUES...] [--transpose]
    python -m densemat mul ROWS_A COLS_A ROWS_B COLS_B VALUES...
    python -m densemat cross X1 Y1 Z1 X2 Y2 Z2

Options:
    --log-level LEVEL   Override DENSEMAT_LOG_LEVEL

Example:
    python -m densemat mul 2 3 3 2 1 2 3 4 5 6 1 0 0 1 1 1
"""

import argparse
import sys
from typing import List, Optional

from .core.errors import DenseMatError
from .core.logging import get_logger, setup_logging
from .matrix import Matrix, print_matrix
from .operators import matmul
from .vector import column_vector, cross

logger = get_logger(__name__)


def cmd_show(args: argparse.Namespace) -> None:
    """Build one matrix and print it."""
    m = Matrix(args.rows, args.cols, data=args.values or None)
    if args.transpose:
        m = m.transpose()
    print_matrix(m)


def cmd_mul(args: argparse.Namespace) -> None:
    """Split VALUES into A and B and print A*B."""
    split = args.rows_a * args.cols_a
    a = Matrix(args.rows_a, args.cols_a, data=args.values[:split])
    b = Matrix(args.rows_b, args.cols_b, data=args.values[split:])
    print_matrix(matmul(a, b))


def cmd_cross(args: argparse.Namespace) -> None:
    """Print the cross product of two 3-vectors as a column."""
    a = column_vector(args.components[:3])
    b = column_vector(args.components[3:])
    print_matrix(cross(a, b))


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with the show, mul and cross subcommands."""
    parser = argparse.ArgumentParser(
        prog="densemat",
        description="Print and check small dense matrices",
        epilog=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--log-level', default=None,
                        help='Logging level (default: DENSEMAT_LOG_LEVEL)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    show = subparsers.add_parser('show', help='Print a matrix')
    show.add_argument('rows', type=int)
    show.add_argument('cols', type=int)
    show.add_argument('values', type=float, nargs='*',
                      help='Row-major values (default: zeros)')
    show.add_argument('--transpose', action='store_true',
                      help='Print the transpose instead')
    show.set_defaults(func=cmd_show)

    mul = subparsers.add_parser('mul', help='Print the product A*B')
    mul.add_argument('rows_a', type=int)
    mul.add_argument('cols_a', type=int)
    mul.add_argument('rows_b', type=int)
    mul.add_argument('cols_b', type=int)
    mul.add_argument('values', type=float, nargs='+',
                     help='Row-major values of A followed by B')
    mul.set_defaults(func=cmd_mul)

    cross_cmd = subparsers.add_parser('cross', help='Print the cross product of two 3-vectors')
    cross_cmd.add_argument('components', type=float, nargs=6,
                           help='X1 Y1 Z1 X2 Y2 Z2')
    cross_cmd.set_defaults(func=cmd_cross)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run one subcommand.

    Returns:
        Exit status: 0 on success, 2 when the library rejects the input
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        args.func(args)
    except (DenseMatError, IndexError) as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == '__main__':
    sys.exit(main())
