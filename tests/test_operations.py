import numpy as np
import pytest

from linbra import (
    DimensionError,
    ScalarTypeError,
    Matrix,
    Matrix2,
    Vector,
    Vector2,
    Vector3,
    cross,
    determinant,
    dot,
    inverse,
    outer,
    transpose,
    try_inverse,
)


def test_dot_of_orthogonal_axes_is_zero():
    assert dot(Vector3(1, 0, 0), Vector3(0, 1, 0)) == 0


def test_cross_requires_3_vectors():
    assert cross(Vector3(0, 1, 0), Vector3(0, 0, 1)) == Vector3(1, 0, 0)
    with pytest.raises(DimensionError):
        cross(Vector2(1, 0), Vector2(0, 1))


def test_outer_product_shape_and_values():
    m = outer(Vector3(1, 2, 3), Vector2(4, 5))
    assert m.shape == (2, 3)
    assert m.tolist() == [[4, 5], [8, 10], [12, 15]]
    with pytest.raises(ScalarTypeError):
        outer(Vector2(1, 2), Vector2(1.0, 2.0))


def test_matrix_helpers_delegate():
    m = Matrix2([[1, 2], [3, 4]])
    assert transpose(m) == m.T
    assert determinant(m) == -2
    assert inverse(m) == Matrix2([[-2, 1], [1.5, -0.5]])
    assert try_inverse(Matrix2.zeros()) is None


def test_transform_pipeline():
    # rotate (1, 0) by 90 degrees then scale by 2
    rot = Matrix2([[0.0, -1.0], [1.0, 0.0]])
    scale = Matrix2.identity() * 2.0
    p = Vector2.at(1.0, 0.0)
    q = (scale * rot) * p
    assert q == Vector2(0.0, 2.0)
    assert ((scale * rot).inverse() * q).allclose(p)


def test_large_plain_vectors_and_matrices():
    v = Vector.from_array(np.arange(6.0))
    m = Matrix.identity(6)
    assert m * v == v
    assert isinstance(m * v, Vector)
    assert len(m * v) == 6
