"""Tests for vector and matrix containers.

Tests cover:
- Construction from raw numbers and dense numpy arrays
- Validity checks (empty, ragged rows, wrong element kind)
- Indexed access and bounds errors
- Kind conversion and constant parts
"""

import dataclasses

import numpy as np
import pytest

from symbolicmath.errors import (
    EmptyMatrixError,
    EmptyVectorError,
    InvalidMatrixIndexError,
    InvalidVectorIndexError,
    MatrixColumnMismatchError,
    UnallocatedVariableError,
    UnsupportedInputError,
)
from symbolicmath.symbolic.expr import (
    Constant,
    ConstantMatrix,
    ConstantVector,
    Container,
    Kind,
    Monomial,
    MonomialVector,
    Polynomial,
    PolynomialMatrix,
    PolynomialVector,
    Variable,
    VariableMatrix,
    VariableVector,
    new_variable,
    new_variable_matrix,
    new_variable_vector,
)

# =============================================================================
# Vectors
# =============================================================================


def test_constant_vector_wraps_numbers():
    v = ConstantVector([1, 2])
    assert v == ConstantVector([Constant(1.0), Constant(2.0)])
    assert v.dims == (2, 1)
    assert len(v) == 2
    assert v.len() == 2
    assert v.kind == Kind.CONSTANT
    assert v.container == Container.VECTOR


def test_constant_vector_from_dense():
    v = ConstantVector.from_dense(np.array([1.0, 2.0, 3.0]))
    np.testing.assert_array_equal(v.to_dense(), [1.0, 2.0, 3.0])

    column = ConstantVector.from_dense(np.array([[1.0], [2.0]]))
    assert column.dims == (2, 1)


def test_constant_vector_from_dense_rejects_matrix():
    with pytest.raises(UnsupportedInputError, match="ConstantVector.from_dense"):
        ConstantVector.from_dense(np.eye(2))


def test_empty_vector_fails_check():
    with pytest.raises(EmptyVectorError, match="empty vector error") as excinfo:
        VariableVector(()).check()
    assert excinfo.value.expression_type == "VariableVector"


def test_vector_with_wrong_element_kind_fails_check():
    x = new_variable()
    with pytest.raises(UnsupportedInputError):
        VariableVector((Monomial(1.0, (x,), (1,)),)).check()


def test_vector_with_invalid_element_fails_check():
    with pytest.raises(UnallocatedVariableError):
        VariableVector((new_variable(), Variable())).check()


def test_new_variable_vector_allocates_distinct_variables():
    x = new_variable_vector(3)
    x.check()
    assert x.dims == (3, 1)
    assert len({v.id for v in x}) == 3
    assert x.variables() == list(x.elements)


def test_at_vec():
    x = new_variable_vector(2)
    assert x.at_vec(1) == x.elements[1]


@pytest.mark.parametrize("idx", [-1, 2, 10])
def test_at_vec_out_of_bounds(idx):
    x = new_variable_vector(2)
    with pytest.raises(InvalidVectorIndexError) as excinfo:
        x.at_vec(idx)
    assert excinfo.value.index == idx
    assert excinfo.value.dims == (2, 1)
    assert isinstance(excinfo.value, IndexError)


def test_vector_constant_parts():
    x = new_variable()
    p = PolynomialVector(
        (
            Polynomial((Monomial(1.0, (x,), (1,)), Monomial(2.0))),
            Polynomial((Monomial(3.0, (x,), (2,)),)),
        )
    )
    np.testing.assert_array_equal(p.constant(), [2.0, 0.0])


def test_vector_kind_conversion():
    x = new_variable_vector(2)
    m = x.to_monomial_vector()
    assert isinstance(m, MonomialVector)
    assert m.elements[0] == Monomial(1.0, (x.elements[0],), (1,))
    p = x.to_polynomial_vector()
    assert isinstance(p, PolynomialVector)
    assert p.dims == x.dims


def test_vector_rendering():
    assert str(ConstantVector([1, 2.5])) == "[1, 2.5]"
    assert repr(ConstantVector([1])) == "ConstantVector([1])"


def test_vectors_are_immutable():
    v = ConstantVector([1.0])
    with pytest.raises(dataclasses.FrozenInstanceError):
        v.elements = ()


# =============================================================================
# Matrices
# =============================================================================


def test_constant_matrix_from_dense():
    A = ConstantMatrix.from_dense(np.eye(3))
    assert A.dims == (3, 3)
    assert A.is_square()
    np.testing.assert_array_equal(A.to_dense(), np.eye(3))


def test_constant_matrix_from_dense_rejects_vector():
    with pytest.raises(UnsupportedInputError, match="ConstantMatrix.from_dense"):
        ConstantMatrix.from_dense(np.array([1.0, 2.0]))


def test_ragged_matrix_reports_row():
    x, y, z = new_variable(), new_variable(), new_variable()
    M = VariableMatrix(((x, y), (z,)))
    match = "expected 2 columns, received 1 in row 1"
    with pytest.raises(MatrixColumnMismatchError, match=match) as excinfo:
        M.check()
    assert excinfo.value.expected_n_columns == 2
    assert excinfo.value.actual_n_columns == 1
    assert excinfo.value.row == 1


def test_empty_matrix_fails_check():
    with pytest.raises(EmptyMatrixError) as excinfo:
        ConstantMatrix(()).check()
    assert excinfo.value.expression_type == "ConstantMatrix"


def test_matrix_at():
    A = ConstantMatrix([[1.0, 2.0], [3.0, 4.0]])
    assert A.at(1, 0) == Constant(3.0)


@pytest.mark.parametrize("ii, jj", [(2, 0), (0, 2), (-1, 0)])
def test_matrix_at_out_of_bounds(ii, jj):
    A = ConstantMatrix([[1.0, 2.0], [3.0, 4.0]])
    with pytest.raises(InvalidMatrixIndexError) as excinfo:
        A.at(ii, jj)
    assert (excinfo.value.row_index, excinfo.value.col_index) == (ii, jj)
    assert excinfo.value.dims == (2, 2)


def test_new_variable_matrix():
    X = new_variable_matrix(2, 3)
    X.check()
    assert X.dims == (2, 3)
    assert len(X.variables()) == 6
    assert not X.is_square()


def test_matrix_kind_conversion_and_constant():
    X = new_variable_matrix(2, 2)
    P = X.to_polynomial_matrix()
    assert isinstance(P, PolynomialMatrix)
    np.testing.assert_array_equal(P.constant(), np.zeros((2, 2)))


def test_matrix_rendering():
    assert str(ConstantMatrix([[1, 2], [3, 4]])) == "[1, 2; 3, 4]"


def test_degree_is_max_over_elements():
    x = new_variable()
    p = PolynomialVector(
        (
            Polynomial((Monomial(1.0, (x,), (1,)),)),
            Polynomial((Monomial(1.0, (x,), (3,)),)),
        )
    )
    assert p.degree() == 3
