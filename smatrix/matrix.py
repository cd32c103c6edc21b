"""The :class:`Matrix` value type."""

from __future__ import annotations

import operator
from numbers import Real
from typing import Callable, Iterable, List, Optional, Tuple, Union

import numpy as np

from . import linalg
from .linalg import DEFAULT_ATOL


def format_value(value: float) -> str:
    """Shortest round-trip text of *value*; integral values lose the ``.0``."""

    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


class Matrix:
    """Dense ``rows x columns`` matrix of floats with value semantics.

    Arithmetic, :meth:`transpose`, :meth:`inv` and :meth:`rank` never modify
    the receiver; they return new instances (or plain numbers).  The only in
    place mutation is element assignment ``m[i, j] = value``.

    ``Matrix(n, m)`` is an ``n x m`` zero matrix, ``Matrix(n)`` a square one
    and ``Matrix(rows)`` copies a nested sequence or 2D array.
    """

    __slots__ = ("_data",)
    # numpy scalars on the left defer to the reflected operators
    __array_ufunc__ = None

    def __init__(self, data: Union[int, Iterable[Iterable[float]]] = (), columns: Optional[int] = None) -> None:
        if isinstance(data, (int, np.integer)):
            self._data = linalg.zeros(data, data if columns is None else columns)
        else:
            if columns is not None:
                raise TypeError("columns is only accepted together with a row count")
            if isinstance(data, Matrix):
                data = data._data
            self._data = linalg.as_array(data)

    @classmethod
    def _wrap(cls, array: np.ndarray) -> "Matrix":
        matrix = cls.__new__(cls)
        matrix._data = array
        return matrix

    # ------------------------------------------------------------------
    # Factories ----------------------------------------------------------
    # ------------------------------------------------------------------
    @classmethod
    def zeros(cls, n: int, m: Optional[int] = None) -> "Matrix":
        return cls._wrap(linalg.zeros(n, n if m is None else m))

    @classmethod
    def ones(cls, n: int, m: Optional[int] = None) -> "Matrix":
        return cls._wrap(linalg.full(n, n if m is None else m, 1.0))

    @classmethod
    def filled(cls, n: int, m: int, value: float) -> "Matrix":
        return cls._wrap(linalg.full(n, m, value))

    fill = filled

    @classmethod
    def identity(cls, n: int, m: Optional[int] = None) -> "Matrix":
        """Ones on the major diagonal, zeros elsewhere; *m* defaults to *n*."""

        return cls._wrap(linalg.eye(n, n if m is None else m))

    @classmethod
    def unit(cls, n: int, m: int, i: int, j: int) -> "Matrix":
        """``n x m`` zeros except for a single one at ``(i, j)``."""

        return cls._wrap(linalg.unit(n, m, i, j))

    @classmethod
    def from_function(cls, n: int, m: int, filler: Callable[[int, int], float]) -> "Matrix":
        return cls._wrap(linalg.from_function(n, m, filler))

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[float]]) -> "Matrix":
        return cls(rows)

    # ------------------------------------------------------------------
    # Shape and element access --------------------------------------------
    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def columns(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.columns

    def __getitem__(self, index: Tuple[int, int]) -> float:
        i, j = index
        return float(self._data[i, j])

    def __setitem__(self, index: Tuple[int, int], value: float) -> None:
        i, j = index
        self._data[i, j] = float(value)

    def row(self, i: int) -> Tuple[float, ...]:
        return tuple(float(v) for v in self._data[i, :])

    def column(self, j: int) -> Tuple[float, ...]:
        return tuple(float(v) for v in self._data[:, j])

    def tolist(self) -> List[List[float]]:
        return self._data.tolist()

    def to_numpy(self) -> np.ndarray:
        return self._data.copy()

    def copy(self) -> "Matrix":
        return self._wrap(self._data.copy())

    # ------------------------------------------------------------------
    # Matrix specific operations -------------------------------------------
    # ------------------------------------------------------------------
    @property
    def T(self) -> "Matrix":
        return self.transpose()

    def transpose(self) -> "Matrix":
        return self._wrap(linalg.transpose(self._data))

    def dot(self, other: "Matrix") -> "Matrix":
        """Matrix product; needs ``self.columns == other.rows``."""

        return self._wrap(linalg.matmul(self._data, other._data))

    def inv(self) -> "Matrix":
        """Inverse by Gauss-Jordan elimination without pivoting.

        Exact for diagonal, lower triangular and unit upper triangular
        matrices.  For other inputs the decoupled elimination does not
        produce ``A^-1``, and zero pivots give ``inf``/``nan`` entries.
        Raises :class:`NotSquare` for non-square matrices.
        """

        return self._wrap(linalg.gauss_jordan_inverse(self._data))

    def rank(self, atol: float = DEFAULT_ATOL, integer_multipliers: bool = False) -> int:
        return linalg.row_reduced_rank(self._data, atol=atol, integer_multipliers=integer_multipliers)

    def major_diagonal_sum(self) -> float:
        return linalg.major_diagonal_sum(self._data)

    def minor_diagonal_sum(self) -> float:
        return linalg.minor_diagonal_sum(self._data)

    def min(self) -> float:
        return linalg.minimum(self._data)

    def max(self) -> float:
        return linalg.maximum(self._data)

    def allclose(self, other: "Matrix", atol: float = DEFAULT_ATOL) -> bool:
        return linalg.allclose(self._data, other._data, atol)

    # ------------------------------------------------------------------
    # Arithmetic ---------------------------------------------------------
    # ------------------------------------------------------------------
    def _binary(self, other, op: Callable, operation: str, reflected: bool = False):
        if isinstance(other, Matrix):
            rhs = other._data
        elif isinstance(other, Real):
            rhs = float(other)
        else:
            return NotImplemented
        if reflected:
            return self._wrap(linalg.elementwise(self._data, rhs, lambda a, b: op(b, a), operation))
        return self._wrap(linalg.elementwise(self._data, rhs, op, operation))

    def __add__(self, other):
        return self._binary(other, operator.add, "add")

    def __radd__(self, other):
        return self._binary(other, operator.add, "add", reflected=True)

    def __sub__(self, other):
        return self._binary(other, operator.sub, "subtract")

    def __rsub__(self, other):
        return self._binary(other, operator.sub, "subtract", reflected=True)

    def __mul__(self, other):
        return self._binary(other, operator.mul, "multiply")

    def __rmul__(self, other):
        return self._binary(other, operator.mul, "multiply", reflected=True)

    def __truediv__(self, other):
        return self._binary(other, operator.truediv, "divide")

    def __rtruediv__(self, other):
        return self._binary(other, operator.truediv, "divide", reflected=True)

    def __matmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.dot(other)

    def __neg__(self) -> "Matrix":
        return self._wrap(-self._data)

    def __pos__(self) -> "Matrix":
        return self.copy()

    # ------------------------------------------------------------------
    # Comparison and text ------------------------------------------------
    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    def __repr__(self) -> str:
        return f"Matrix({self.tolist()!r})"

    def __str__(self) -> str:
        return "\n".join(" ".join(format_value(v) for v in row) for row in self._data)

    # ------------------------------------------------------------------
    # IO shortcuts -------------------------------------------------------
    # ------------------------------------------------------------------
    @classmethod
    def read_file(cls, filename) -> "Matrix":
        from . import textio

        return textio.read_file(filename)

    def write_file(self, filename) -> None:
        from . import textio

        textio.write_file(self, filename)

    @classmethod
    def read_from_console(cls) -> "Matrix":
        from . import textio

        return textio.read_from_console()

    def write_to_console(self) -> None:
        from . import textio

        textio.write_to_console(self)
