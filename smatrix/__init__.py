"""SMatrix: a small dense matrix value type.

The package offers construction helpers, element-wise and matrix arithmetic,
Gauss-Jordan inversion, row reduction rank and a plain text format for
reading and writing matrices.
"""

from .errors import EmptyInput, EmptyMatrix, MatrixError, MatrixFormatError, NotSquare, ShapeMismatch
from .linalg import DEFAULT_ATOL
from .matrix import Matrix
from .textio import dump, dumps, load, loads, read_file, read_from_console, write_file, write_to_console

__all__ = [
    "Matrix",
    "MatrixError",
    "ShapeMismatch",
    "NotSquare",
    "EmptyMatrix",
    "EmptyInput",
    "MatrixFormatError",
    "DEFAULT_ATOL",
    "load",
    "loads",
    "dump",
    "dumps",
    "read_file",
    "write_file",
    "read_from_console",
    "write_to_console",
]
