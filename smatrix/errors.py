"""Exceptions raised by the matrix package.

Each error also derives from the closest builtin exception so callers that
only know about ``ValueError``/``EOFError`` keep working.
"""

from __future__ import annotations


class MatrixError(Exception):
    """Base class for every error raised by :mod:`smatrix`."""


class ShapeMismatch(MatrixError, ValueError):
    """Operands have incompatible shapes, or the input rows are jagged."""


class NotSquare(MatrixError, ValueError):
    """The operation needs a square matrix."""


class EmptyMatrix(MatrixError, ValueError):
    """The operation is undefined on a matrix without entries."""


class EmptyInput(MatrixError, EOFError):
    """The text stream ended before the whole matrix was read."""


class MatrixFormatError(MatrixError, ValueError):
    """The text does not follow the ``rows columns`` + rows layout."""
