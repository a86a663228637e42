import copy
from decimal import Decimal
from fractions import Fraction

import numpy as np
import pytest

from linbra import (
    DimensionError,
    ScalarTypeError,
    Vector,
    Vector2,
    Vector3,
    Vector4,
    Matrix,
)


def test_vector2_addition_scenario():
    assert Vector2(1, 2) + Vector2(3, 4) == Vector2(4, 6)


def test_plain_vector_dispatches_to_sized_class():
    assert type(Vector(1, 2)) is Vector2
    assert type(Vector(1, 2, 3)) is Vector3
    assert type(Vector(1, 2, 3, 4)) is Vector4
    v5 = Vector(1, 2, 3, 4, 5)
    assert type(v5) is Vector
    assert len(v5) == 5


def test_sized_class_rejects_wrong_length():
    with pytest.raises(DimensionError):
        Vector2(1, 2, 3)
    with pytest.raises(DimensionError):
        Vector3.from_array([1, 2])
    with pytest.raises(DimensionError):
        Vector()


def test_nested_input_is_rejected():
    with pytest.raises(DimensionError):
        Vector.from_array([[1, 2], [3, 4]])


def test_non_numeric_components_are_rejected():
    with pytest.raises(ScalarTypeError):
        Vector2("a", "b")
    with pytest.raises(ScalarTypeError):
        Vector2(1, None)
    with pytest.raises(ScalarTypeError):
        Vector2(1, 2, dtype=object)


def test_dtype_is_inferred_or_explicit():
    assert Vector2(1, 2).dtype == np.int64
    assert Vector2(1.0, 2).dtype == np.float64
    assert Vector3(1, 2, 3, dtype=np.float32).dtype == np.float32


def test_from_array_and_tuple():
    v = Vector.from_array((8, 9, 10))
    assert isinstance(v, Vector3)
    assert v == Vector3(8, 9, 10)
    assert Vector.from_array(np.arange(6)).tolist() == [0, 1, 2, 3, 4, 5]


def test_filled_and_zeros():
    assert Vector3.filled(7) == Vector3(7, 7, 7)
    assert Vector.filled(1.5, 5).tolist() == [1.5] * 5
    z = Vector2.zeros()
    assert z.dtype == np.float64
    assert z == Vector2(0, 0)
    with pytest.raises(DimensionError):
        Vector.filled(1)
    with pytest.raises(DimensionError):
        Vector2.filled(1, 3)


def test_construction_copies_input():
    arr = np.array([1.0, 2.0, 3.0])
    v = Vector.from_array(arr)
    arr[0] = 100.0
    assert v[0] == 1.0


def test_index_read_write():
    v = Vector3(255, 100, 100)
    assert v[0] == 255
    assert v[-1] == 100
    v[0] = 10
    assert v.tolist() == [10, 100, 100]
    with pytest.raises(IndexError):
        v[3]
    with pytest.raises(TypeError):
        v[0:2]


def test_lossy_write_is_rejected():
    v = Vector2(1, 2)
    with pytest.raises(ScalarTypeError):
        v[0] = 1.5
    f = Vector2(1.0, 2.0)
    f[0] = 3
    assert f[0] == 3.0


def test_operations_return_new_values():
    u = Vector2(1, 2)
    w = u + Vector2(0, 0)
    w[0] = 99
    assert u[0] == 1
    c = copy.copy(u)
    c[1] = 42
    assert u[1] == 2


def test_additive_identity():
    for v in (Vector2(3, -4), Vector3(1.5, 2.5, -0.5), Vector.from_array([1, 2, 3, 4, 5])):
        zero = type(v).zeros(len(v), dtype=v.dtype)
        assert v + zero == v
        assert v - v == zero


def test_negation():
    assert -Vector3(1, -2, 3) == Vector3(-1, 2, -3)


def test_elementwise_product():
    assert Vector2(2, 3) * Vector2(5, 8) == Vector2(10, 24)


def test_scalar_multiplication_and_distributivity():
    u = Vector3(1, 2, 3)
    v = Vector3(4, 5, 6)
    assert u * 2 == Vector3(2, 4, 6)
    assert 2 * u == Vector3(2, 4, 6)
    assert 3 * (u + v) == 3 * u + 3 * v

    a = Vector3(0.1, 0.2, 0.3)
    b = Vector3(1.7, -2.5, 0.9)
    assert (0.3 * (a + b)).allclose(0.3 * a + 0.3 * b)


def test_scalar_division_follows_python_semantics():
    v = Vector2(3, 4)
    assert v / 2 == Vector2(1.5, 2.0)
    assert (v / 2).dtype == np.float64
    assert v // 2 == Vector2(1, 2)
    assert (v // 2).dtype == np.int64


def test_division_by_zero_follows_float_semantics():
    v = Vector2(1.0, 0.0) / 0
    assert np.isinf(v[0])
    assert np.isnan(v[1])


def test_mismatched_lengths_raise():
    with pytest.raises(DimensionError):
        Vector2(1, 2) + Vector3(1, 2, 3)
    with pytest.raises(DimensionError):
        Vector2(1, 2).dot(Vector3(1, 2, 3))


def test_mismatched_dtypes_raise_until_converted():
    u = Vector2(1, 2)
    f = Vector2(0.5, 0.5)
    with pytest.raises(ScalarTypeError):
        u + f
    assert u.astype(float) + f == Vector2(1.5, 2.5)


def test_unsupported_operand_type():
    with pytest.raises(TypeError):
        Vector2(1, 2) + 1
    with pytest.raises(TypeError):
        Vector2(1, 2) * "x"


def test_numpy_arrays_do_not_broadcast_into_vectors():
    with pytest.raises(TypeError):
        np.array([1, 2]) + Vector2(1, 2)


def test_dot_product():
    assert Vector3(1, 0, 0).dot(Vector3(0, 1, 0)) == 0
    assert Vector3(1, 2, 3) @ Vector3(4, 5, 6) == 32


def test_dot_product_symmetry():
    rng = np.random.default_rng(0)
    for _ in range(10):
        u = Vector.from_array(rng.normal(size=4))
        v = Vector.from_array(rng.normal(size=4))
        assert u.dot(v) == v.dot(u)


def test_magnitude_and_normalization():
    v = Vector2(3, 4)
    assert v.magnitude_squared() == 25
    assert v.magnitude() == 5.0
    n = Vector3(3.0, 0.0, 4.0).normalized()
    assert np.isclose(n.magnitude(), 1.0, atol=1e-14)
    assert n.allclose(Vector3(0.6, 0.0, 0.8))


def test_normalizing_zero_vector():
    z = Vector3.zeros()
    n = z.normalized()
    assert np.all(np.isnan(n.to_numpy()))
    assert z.try_normalized() is None
    assert Vector2(0.0, 2.0).try_normalized() == Vector2(0.0, 1.0)


def test_equality_is_exact_and_dtype_independent():
    assert Vector2(1, 2) == Vector2(1.0, 2.0)
    assert Vector2(1.0, 2.0) != Vector2(1.0, 2.0 + 1e-12)
    assert Vector2(1, 2) != Vector3(1, 2, 0)
    assert Vector2(1, 2) != (1, 2)


def test_vectors_are_unhashable():
    with pytest.raises(TypeError):
        hash(Vector2(1, 2))


def test_astype_casting():
    v = Vector2(1.7, -2.2)
    assert v.astype(np.int32) == Vector2(1, -2)
    assert v.astype(np.int32).dtype == np.int32
    with pytest.raises(ScalarTypeError):
        v.astype(np.int32, casting="safe")
    with pytest.raises(ScalarTypeError):
        v.astype(str)


def test_cross_product():
    x = Vector3(1, 0, 0)
    y = Vector3(0, 1, 0)
    assert x.cross(y) == Vector3(0, 0, 1)
    assert y.cross(x) == Vector3(0, 0, -1)


def test_iteration_and_components():
    v = Vector3(1, 2, 3)
    assert list(v) == [1, 2, 3]
    assert v.components == (1, 2, 3)
    assert isinstance(v.to_numpy(), np.ndarray)


def test_as_column_and_as_row():
    v = Vector3(1, 2, 3)
    col = v.as_column()
    row = v.as_row()
    assert isinstance(col, Matrix)
    assert col.shape == (1, 3)
    assert row.shape == (3, 1)
    assert col.tolist() == [[1], [2], [3]]
    assert row.tolist() == [[1, 2, 3]]
    assert col.to_vector() == v
    assert row.to_vector() == v


def test_repr_and_str():
    assert repr(Vector3(1, 2, 3)) == "Vector3(1, 2, 3)"
    assert repr(Vector(1, 2, 3, 4, 5)) == "Vector(1, 2, 3, 4, 5)"
    assert repr(Vector3(255, 0, 0, dtype=np.uint8)) == "Vector3(255, 0, 0, dtype='uint8')"
    assert str(Vector3(1, 2, 3)) == "[1 2 3]"


def test_non_native_numbers_do_not_produce_object_vectors():
    with pytest.raises(TypeError):
        Vector2(1, 2) * Fraction(1, 2)
    with pytest.raises(TypeError):
        Fraction(1, 2) * Vector2(1, 2)
    with pytest.raises(TypeError):
        Vector2(1.0, 2.0) / Decimal("2")
    with pytest.raises(ScalarTypeError):
        Vector2.filled(Fraction(1, 2))


def test_filled_rejects_non_numeric_and_sequence_values():
    with pytest.raises(ScalarTypeError):
        Vector3.filled("x")
    with pytest.raises(ScalarTypeError):
        Vector.filled(None, 4)
    with pytest.raises(DimensionError):
        Vector2.filled([1, 2])
