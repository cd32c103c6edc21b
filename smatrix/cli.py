"""Command line front end for matrix files.

Usage::

    smatrix show a.txt
    smatrix inv a.txt -o a_inv.txt
    smatrix dot a.txt b.txt
    smatrix rank a.txt --atol 1e-12
    cat a.txt | smatrix transpose -
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import textio
from .errors import MatrixError
from .linalg import DEFAULT_ATOL
from .matrix import Matrix, format_value


logger = logging.getLogger(__name__)


def _read(path: str) -> Matrix:
    if path == "-":
        logger.debug("Reading matrix from stdin")
        return textio.load(sys.stdin)
    return textio.read_file(path)


def _emit(matrix: Matrix, output: Optional[str]) -> None:
    if output is None or output == "-":
        textio.dump(matrix, sys.stdout)
    else:
        textio.write_file(matrix, output)
        logger.info("Wrote %dx%d matrix to %s", matrix.rows, matrix.columns, output)


def _cmd_show(args: argparse.Namespace) -> int:
    _emit(_read(args.file), None)
    return 0


def _cmd_transpose(args: argparse.Namespace) -> int:
    _emit(_read(args.file).T, args.output)
    return 0


def _cmd_inv(args: argparse.Namespace) -> int:
    _emit(_read(args.file).inv(), args.output)
    return 0


def _cmd_dot(args: argparse.Namespace) -> int:
    _emit(_read(args.left).dot(_read(args.right)), args.output)
    return 0


def _cmd_rank(args: argparse.Namespace) -> int:
    matrix = _read(args.file)
    print(matrix.rank(atol=args.atol, integer_multipliers=args.integer_multipliers))
    return 0


def _cmd_stats(args: argparse.Namespace) -> int:
    matrix = _read(args.file)
    print(f"shape: {matrix.rows} {matrix.columns}")
    if matrix.rows and matrix.columns:
        print(f"min: {format_value(matrix.min())}")
        print(f"max: {format_value(matrix.max())}")
    print(f"major diagonal sum: {format_value(matrix.major_diagonal_sum())}")
    print(f"minor diagonal sum: {format_value(matrix.minor_diagonal_sum())}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="smatrix", description="Operate on matrices stored as text files.")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="print a matrix")
    show.add_argument("file", help="matrix file, '-' for stdin")
    show.set_defaults(func=_cmd_show)

    for name, func, help_text in (
        ("transpose", _cmd_transpose, "transpose a matrix"),
        ("inv", _cmd_inv, "invert a square matrix"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("file", help="matrix file, '-' for stdin")
        cmd.add_argument("-o", "--output", help="write the result here instead of stdout")
        cmd.set_defaults(func=func)

    dot = sub.add_parser("dot", help="matrix product LEFT @ RIGHT")
    dot.add_argument("left")
    dot.add_argument("right")
    dot.add_argument("-o", "--output", help="write the result here instead of stdout")
    dot.set_defaults(func=_cmd_dot)

    rank = sub.add_parser("rank", help="rank by row reduction")
    rank.add_argument("file", help="matrix file, '-' for stdin")
    rank.add_argument("--atol", type=float, default=DEFAULT_ATOL, help="pivots at or below this are zero")
    rank.add_argument(
        "--integer-multipliers",
        action="store_true",
        help="truncate elimination multipliers toward zero (historical behaviour)",
    )
    rank.set_defaults(func=_cmd_rank)

    stats = sub.add_parser("stats", help="shape, extrema and diagonal sums")
    stats.add_argument("file", help="matrix file, '-' for stdin")
    stats.set_defaults(func=_cmd_stats)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except (MatrixError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
