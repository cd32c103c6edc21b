"""Dense linear algebra kernels backing :class:`smatrix.Matrix`.

Every helper in this module works on two dimensional ``numpy`` arrays of
``float64`` values.  Apart from :func:`swap_rows` none of them modifies its
arguments; results are always fresh arrays.  The
:class:`~smatrix.matrix.Matrix` value type owns one such array and delegates
the arithmetic here.

The two elimination routines deserve a note.  :func:`gauss_jordan_inverse`
reduces an auxiliary identity matrix while reading the coefficients of the
*unmodified* input, without any pivoting.  That is only a correct inverse for
inputs where the decoupled elimination is valid (diagonal, lower triangular
and unit upper triangular matrices); zero pivots silently turn into
``inf``/``nan``.
:func:`row_reduced_rank` counts pivots by in-place row reduction of a copy,
discarding dependent columns as it goes.
"""

from __future__ import annotations

from typing import Callable, Iterable, Tuple

import numpy as np

from .errors import EmptyMatrix, NotSquare, ShapeMismatch


DEFAULT_ATOL = 1e-9

Shape = Tuple[int, int]


def _check_dimensions(rows: int, columns: int) -> Shape:
    rows, columns = int(rows), int(columns)
    if rows < 0 or columns < 0:
        raise ValueError(f"matrix dimensions must be non-negative, got {rows}x{columns}")
    return rows, columns


def as_array(rows: Iterable[Iterable[float]]) -> np.ndarray:
    """Convert *rows* into a fresh 2D ``float64`` array.

    Accepts nested sequences as well as existing arrays.  Rows of different
    width raise :class:`ShapeMismatch`.  An empty sequence gives a ``0x0``
    array.
    """

    if isinstance(rows, np.ndarray):
        if rows.ndim != 2:
            raise ShapeMismatch(f"expected a 2D array, got {rows.ndim} dimension(s)")
        return np.array(rows, dtype=float, copy=True)

    converted = [[float(v) for v in row] for row in rows]
    if not converted:
        return np.zeros((0, 0))
    width = len(converted[0])
    for index, row in enumerate(converted):
        if len(row) != width:
            raise ShapeMismatch(f"inconsistent row width: row {index} has {len(row)} values, expected {width}")
    return np.array(converted, dtype=float).reshape(len(converted), width)


def zeros(rows: int, columns: int) -> np.ndarray:
    return np.zeros(_check_dimensions(rows, columns))


def full(rows: int, columns: int, value: float) -> np.ndarray:
    return np.full(_check_dimensions(rows, columns), float(value))


def eye(rows: int, columns: int) -> np.ndarray:
    """Ones on the positions where row == column, also for non-square shapes."""

    rows, columns = _check_dimensions(rows, columns)
    return np.eye(rows, columns)


def unit(rows: int, columns: int, i: int, j: int) -> np.ndarray:
    result = zeros(rows, columns)
    if not (0 <= i < result.shape[0] and 0 <= j < result.shape[1]):
        raise IndexError(f"position ({i}, {j}) is outside a {result.shape[0]}x{result.shape[1]} matrix")
    result[i, j] = 1.0
    return result


def from_function(rows: int, columns: int, filler: Callable[[int, int], float]) -> np.ndarray:
    result = zeros(rows, columns)
    for i in range(result.shape[0]):
        for j in range(result.shape[1]):
            result[i, j] = float(filler(i, j))
    return result


def check_same_shape(lhs: np.ndarray, rhs: np.ndarray, operation: str) -> None:
    if lhs.shape != rhs.shape:
        raise ShapeMismatch(
            f"cannot {operation} matrices of different size: "
            f"{lhs.shape[0]}x{lhs.shape[1]} and {rhs.shape[0]}x{rhs.shape[1]}"
        )


def elementwise(lhs: np.ndarray, rhs, op: Callable, operation: str) -> np.ndarray:
    """Apply the binary ufunc *op* to ``lhs`` and a scalar or same-shaped array."""

    if isinstance(rhs, np.ndarray):
        check_same_shape(lhs, rhs, operation)
    else:
        rhs = float(rhs)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return op(lhs, rhs)


def matmul(lhs: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    if lhs.shape[1] != rhs.shape[0]:
        raise ShapeMismatch(
            f"dimension mismatch in matmul: left has {lhs.shape[1]} columns, right has {rhs.shape[0]} rows"
        )
    return lhs @ rhs


def transpose(matrix: np.ndarray) -> np.ndarray:
    return np.array(matrix.T, copy=True)


def _forward_pass(coeff: np.ndarray, aux: np.ndarray, k: int) -> None:
    size = coeff.shape[0]
    aux[k, :] /= coeff[k, k]
    for i in range(k + 1, size):
        aux[i, :] -= aux[k, :] * coeff[i, k]


def _backward_pass(coeff: np.ndarray, aux: np.ndarray, k: int) -> None:
    size = coeff.shape[0]
    pivot = size - k - 1
    for i in range(size - k - 2, -1, -1):
        aux[i, :] -= aux[pivot, :] * coeff[i, pivot]


def gauss_jordan_inverse(matrix: np.ndarray) -> np.ndarray:
    """Return the inverse of a square *matrix* by decoupled Gauss-Jordan elimination.

    An identity matrix of the same size is reduced row by row: a forward pass
    scales each pivot row by ``1 / A[k, k]`` and clears the rows below it, a
    backward pass clears the rows above each pivot from the bottom up.  Only
    the auxiliary matrix is written; every coefficient is read from the
    original ``A``.  There is no pivoting, so a zero pivot yields ``inf`` or
    ``nan`` entries instead of an exception.
    """

    if matrix.shape[0] != matrix.shape[1]:
        raise NotSquare(
            f"cannot find inverse matrix of non-square {matrix.shape[0]}x{matrix.shape[1]} matrix"
        )
    size = matrix.shape[0]
    aux = np.eye(size)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for k in range(size):
            _forward_pass(matrix, aux, k)
        for k in range(size):
            _backward_pass(matrix, aux, k)
    return aux


def swap_rows(matrix: np.ndarray, row1: int, row2: int, columns: int) -> None:
    """Swap the first *columns* entries of two rows in place."""

    matrix[[row1, row2], :columns] = matrix[[row2, row1], :columns]


def row_reduced_rank(
    matrix: np.ndarray,
    atol: float = DEFAULT_ATOL,
    integer_multipliers: bool = False,
) -> int:
    """Return the rank of *matrix* counted by row reduction.

    The reduction runs on a copy.  ``rank`` starts at the column count and a
    cursor walks the diagonal while it stays below ``rank``.  A zero pivot is
    first repaired by swapping in a lower row with a nonzero entry in the
    same column; if there is none, the column is dependent, so ``rank`` drops
    by one and the last still-counted column is moved into its place.

    ``integer_multipliers`` truncates every elimination multiplier toward
    zero.  Together with ``atol=0.0`` this reproduces the historical
    behaviour, which is only reliable for integer-friendly inputs.
    """

    m = np.array(matrix, dtype=float, copy=True)
    height, width = m.shape
    if height == 0 or width == 0:
        return 0

    rank = width
    row = 0
    with np.errstate(invalid="ignore", over="ignore"):
        while row < rank:
            pivot = m[row, row] if row < height else 0.0
            if abs(pivot) > atol:
                for other in range(height):
                    if other == row:
                        continue
                    mult = m[other, row] / pivot
                    if integer_multipliers:
                        mult = float(np.trunc(mult))
                    m[other, :rank] -= mult * m[row, :rank]
                row += 1
                continue

            for below in range(row + 1, height):
                if abs(m[below, row]) > atol:
                    swap_rows(m, row, below, rank)
                    break
            else:
                rank -= 1
                m[:, row] = m[:, rank]
    return rank


def major_diagonal_sum(matrix: np.ndarray) -> float:
    n = min(matrix.shape)
    return float(sum(matrix[i, i] for i in range(n)))


def minor_diagonal_sum(matrix: np.ndarray) -> float:
    n = min(matrix.shape)
    return float(sum(matrix[i, n - i - 1] for i in range(n)))


def _check_not_empty(matrix: np.ndarray, operation: str) -> None:
    if matrix.size == 0:
        raise EmptyMatrix(f"cannot take the {operation} of an empty {matrix.shape[0]}x{matrix.shape[1]} matrix")


def minimum(matrix: np.ndarray) -> float:
    _check_not_empty(matrix, "min")
    return float(matrix.min())


def maximum(matrix: np.ndarray) -> float:
    _check_not_empty(matrix, "max")
    return float(matrix.max())


def allclose(lhs: np.ndarray, rhs: np.ndarray, atol: float = DEFAULT_ATOL) -> bool:
    return lhs.shape == rhs.shape and bool(np.all(np.abs(lhs - rhs) <= atol))
