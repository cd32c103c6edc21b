from __future__ import annotations

import math

import numpy as np
import pytest

from smatrix import EmptyMatrix, Matrix, MatrixError, NotSquare, ShapeMismatch


def sample() -> Matrix:
    return Matrix([[1.0, 2.0], [3.0, 4.0]])


def test_constructors_shape():
    assert Matrix(2, 3).shape == (2, 3)
    assert Matrix(3).shape == (3, 3)
    assert Matrix().shape == (0, 0)
    assert Matrix(2, 3) == Matrix.zeros(2, 3)
    assert Matrix.zeros(4).shape == (4, 4)


def test_factories():
    assert Matrix.ones(2, 1) == Matrix([[1], [1]])
    assert Matrix.filled(2, 2, 7.5) == Matrix([[7.5, 7.5], [7.5, 7.5]])
    assert Matrix.fill(1, 2, -1) == Matrix([[-1, -1]])
    assert Matrix.unit(2, 3, 1, 2) == Matrix([[0, 0, 0], [0, 0, 1]])
    assert Matrix.from_function(2, 3, lambda i, j: 10 * i + j) == Matrix([[0, 1, 2], [10, 11, 12]])
    assert Matrix.from_rows([[5]]) == Matrix([[5]])


def test_identity_respects_non_square_shape():
    assert Matrix.identity(2, 3) == Matrix([[1, 0, 0], [0, 1, 0]])
    assert Matrix.identity(3, 2).shape == (3, 2)
    assert Matrix.identity(3) == Matrix([[1, 0, 0], [0, 1, 0], [0, 0, 1]])


def test_invalid_construction():
    with pytest.raises(ValueError):
        Matrix.zeros(-2, 2)
    with pytest.raises(ShapeMismatch):
        Matrix([[1, 2], [3]])
    with pytest.raises(IndexError):
        Matrix.unit(2, 2, 0, 5)


def test_element_access():
    m = sample()
    assert m[1, 0] == 3.0
    assert m[-1, -1] == 4.0
    assert m.row(0) == (1.0, 2.0)
    assert m.column(1) == (2.0, 4.0)
    m[0, 1] = 9
    assert m.tolist() == [[1.0, 9.0], [3.0, 4.0]]


def test_storage_is_not_shared():
    source = np.array([[1.0, 2.0]])
    m = Matrix(source)
    source[0, 0] = 5.0
    exported = m.to_numpy()
    exported[0, 1] = 5.0
    assert m == Matrix([[1, 2]])

    assert Matrix(m) == m

    clone = m.copy()
    clone[0, 0] = 0.0
    assert m[0, 0] == 1.0


def test_transpose():
    m = Matrix([[1, 2, 3], [4, 5, 6]])
    assert m.T == Matrix([[1, 4], [2, 5], [3, 6]])
    assert m.transpose().transpose() == m
    assert Matrix(0, 3).T.shape == (3, 0)


def test_scalar_arithmetic():
    m = sample()
    assert m + 1 == Matrix([[2, 3], [4, 5]])
    assert 1 + m == Matrix([[2, 3], [4, 5]])
    assert m - 1 == Matrix([[0, 1], [2, 3]])
    assert 10 - m == Matrix([[9, 8], [7, 6]])
    assert m * 2 == Matrix([[2, 4], [6, 8]])
    assert 2 * m == Matrix([[2, 4], [6, 8]])
    assert m / 2 == Matrix([[0.5, 1], [1.5, 2]])
    assert 12 / m == Matrix([[12, 6], [4, 3]])
    assert -m == Matrix([[-1, -2], [-3, -4]])


def test_elementwise_arithmetic():
    m = sample()
    other = Matrix([[2, 2], [2, 2]])
    assert m + other == Matrix([[3, 4], [5, 6]])
    assert m - other == Matrix([[-1, 0], [1, 2]])
    assert m * other == Matrix([[2, 4], [6, 8]])
    assert m / other == Matrix([[0.5, 1], [1.5, 2]])


@pytest.mark.parametrize("op", ["add", "sub", "mul", "truediv"])
def test_elementwise_shape_mismatch(op):
    lhs = Matrix(2, 2)
    rhs = Matrix(2, 3)
    with pytest.raises(ShapeMismatch):
        getattr(lhs, f"__{op}__")(rhs)


def test_arithmetic_is_pure():
    m = sample()
    _ = m + 1
    _ = m * m
    _ = m.T
    _ = m.inv()
    _ = m.rank()
    assert m == sample()


def test_division_by_zero_is_ieee():
    result = Matrix([[1, -1, 0]]) / 0
    assert result[0, 0] == math.inf
    assert result[0, 1] == -math.inf
    assert math.isnan(result[0, 2])


def test_unsupported_operand():
    with pytest.raises(TypeError):
        sample() + "1"


def test_dot():
    lhs = Matrix([[1, 2, 3], [4, 5, 6]])
    rhs = Matrix([[7, 8], [9, 10], [11, 12]])
    assert lhs.dot(rhs) == Matrix([[58, 64], [139, 154]])
    assert lhs @ rhs == lhs.dot(rhs)
    assert lhs.dot(Matrix.identity(3)) == lhs


def test_dot_shape_mismatch():
    with pytest.raises(ShapeMismatch):
        Matrix(2, 3).dot(Matrix(2, 2))
    with pytest.raises(ValueError):
        Matrix(2, 3) @ Matrix(2, 2)


def test_inverse_within_domain():
    diagonal = Matrix([[2, 0], [0, 4]])
    assert diagonal.inv() == Matrix([[0.5, 0], [0, 0.25]])

    lower = Matrix([[1, 0, 0], [2, 3, 0], [-1, 4, 2]])
    assert (lower @ lower.inv()).allclose(Matrix.identity(3))


def test_inverse_outside_domain_is_not_identity():
    general = Matrix([[4, 7], [2, 6]])
    assert not (general @ general.inv()).allclose(Matrix.identity(2))


def test_inverse_not_square():
    with pytest.raises(NotSquare):
        Matrix(2, 3).inv()
    with pytest.raises(MatrixError):
        Matrix(3, 2).inv()


@pytest.mark.parametrize("n", [1, 3, 6])
def test_rank_of_identity_and_zero(n):
    assert Matrix.identity(n).rank() == n
    assert Matrix.zeros(n, n + 1).rank() == 0


def test_rank_options():
    m = Matrix([[2, 4], [1, 2]])
    assert m.rank() == 1
    assert m.rank(atol=0.0, integer_multipliers=True) == 2


def test_diagonal_sums():
    assert Matrix.identity(4).major_diagonal_sum() == 4.0
    assert Matrix.identity(4).minor_diagonal_sum() == 0.0
    m = Matrix([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
    assert m.major_diagonal_sum() == 15.0
    assert m.minor_diagonal_sum() == 15.0
    assert Matrix(0, 0).major_diagonal_sum() == 0.0


def test_min_max():
    m = Matrix([[3, -2], [8, 0.5]])
    assert m.min() == -2.0
    assert m.max() == 8.0
    with pytest.raises(EmptyMatrix):
        Matrix(0, 0).min()
    with pytest.raises(EmptyMatrix):
        Matrix(3, 0).max()


def test_equality():
    assert sample() == sample()
    assert sample() != Matrix([[1, 2], [3, 4.000001]])
    assert Matrix(2, 3) != Matrix(3, 2)
    assert Matrix(0, 2) != Matrix(0, 3)
    assert not (sample() == [[1, 2], [3, 4]])
    assert sample() != 1


def test_allclose():
    assert sample().allclose(Matrix([[1, 2], [3, 4 + 1e-12]]))
    assert not sample().allclose(Matrix([[1, 2], [3, 4.1]]))
    assert not sample().allclose(Matrix(2, 3))


def test_unhashable():
    with pytest.raises(TypeError):
        hash(sample())


def test_text_forms():
    assert str(sample()) == "1 2\n3 4"
    assert str(Matrix([[0.5, -1e20]])) == "0.5 -1e+20"
    assert repr(sample()) == "Matrix([[1.0, 2.0], [3.0, 4.0]])"
