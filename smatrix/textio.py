"""Plain text serialization of matrices.

The layout is one header line with the shape followed by one line per row::

    2 2
    1 2
    3 4

Values are separated by spaces or tabs and always use ``.`` as the decimal
separator, independent of the locale.
"""

from __future__ import annotations

import io
import logging
import sys
from typing import Callable, List, Optional, TextIO, TypeVar

from .errors import EmptyInput, MatrixFormatError
from .matrix import Matrix


logger = logging.getLogger(__name__)

CONSOLE_PROMPT = "Enter the number of rows and columns: "

T = TypeVar("T")


def parse_float(token: str) -> float:
    # float() would accept "1_000"; grouping separators are not part of the format
    if "_" in token:
        raise MatrixFormatError(f"{token!r} is not a number")
    try:
        return float(token)
    except ValueError:
        raise MatrixFormatError(f"{token!r} is not a number") from None


def parse_dimension(token: str) -> int:
    if "_" in token:
        raise MatrixFormatError(f"{token!r} is not a valid matrix dimension")
    try:
        value = int(token)
    except ValueError:
        raise MatrixFormatError(f"{token!r} is not a valid matrix dimension") from None
    if value < 0:
        raise MatrixFormatError(f"matrix dimension must be non-negative, got {value}")
    return value


def read_vector(
    stream: TextIO,
    parse_value: Callable[[str], T],
    expected_length: Optional[int] = None,
    line_index: Optional[int] = None,
) -> List[T]:
    """Read one line from *stream* and parse every whitespace separated token.

    ``expected_length`` asserts the number of tokens and ``line_index`` is
    only used to make error messages point at the offending line.
    """

    line = stream.readline()
    if not line:
        if line_index is None:
            raise EmptyInput("the stream is empty")
        raise EmptyInput(f"expected to read line {line_index}, but the stream ended")
    values = [parse_value(token) for token in line.split()]
    if expected_length is not None and len(values) != expected_length:
        where = "the line" if line_index is None else f"line {line_index}"
        raise MatrixFormatError(f"{where} expected to contain {expected_length} values, but got {len(values)}")
    return values


def load(stream: TextIO) -> Matrix:
    rows, columns = read_vector(stream, parse_dimension, 2, 0)
    matrix = Matrix.zeros(rows, columns)
    for i in range(rows):
        values = read_vector(stream, parse_float, columns, i + 1)
        for j, value in enumerate(values):
            matrix[i, j] = value
    return matrix


def loads(text: str) -> Matrix:
    # the last row may be empty when there are no columns
    if text:
        text += "\n"
    return load(io.StringIO(text))


def dumps(matrix: Matrix) -> str:
    header = f"{matrix.rows} {matrix.columns}"
    if matrix.rows == 0:
        return header
    return f"{header}\n{matrix}"


def dump(matrix: Matrix, stream: TextIO) -> None:
    stream.write(dumps(matrix))
    stream.write("\n")


def read_file(filename) -> Matrix:
    logger.debug("Reading matrix from %s", filename)
    with open(filename, "r", encoding="utf-8") as handle:
        matrix = load(handle)
    logger.debug("Read %dx%d matrix from %s", matrix.rows, matrix.columns, filename)
    return matrix


def write_file(matrix: Matrix, filename) -> None:
    logger.debug("Writing %dx%d matrix to %s", matrix.rows, matrix.columns, filename)
    with open(filename, "w", encoding="utf-8") as handle:
        dump(matrix, handle)


def read_from_console() -> Matrix:
    sys.stdout.write(CONSOLE_PROMPT)
    sys.stdout.flush()
    return load(sys.stdin)


def write_to_console(matrix: Matrix) -> None:
    dump(matrix, sys.stdout)
