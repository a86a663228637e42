from decimal import Decimal
from fractions import Fraction

import numpy as np
import pytest

from linbra.exceptions import DimensionError, LinbraError, ScalarTypeError
from linbra.utils.validation import (
    as_components,
    as_grid,
    check_assignable,
    is_scalar,
    numeric_dtype,
)


def test_errors_are_also_builtin_errors():
    assert issubclass(DimensionError, ValueError)
    assert issubclass(ScalarTypeError, TypeError)
    assert issubclass(DimensionError, LinbraError)


def test_as_components_accepts_shape_n():
    v = as_components([1, 2, 3], 3)
    assert isinstance(v, np.ndarray)
    assert v.shape == (3,)


def test_as_components_rejects_wrong_shape():
    with pytest.raises(DimensionError):
        as_components([1, 2], 3)
    with pytest.raises(DimensionError):
        as_components([[1, 2, 3]], 3)
    with pytest.raises(DimensionError):
        as_components(np.zeros((3, 1)), 3)
    with pytest.raises(DimensionError):
        as_components([])


def test_as_components_always_copies():
    arr = np.array([1.0, 2.0])
    out = as_components(arr)
    out[0] = 5.0
    assert arr[0] == 1.0


def test_booleans_become_integers():
    assert as_components([True, False]).dtype == np.int64


def test_as_grid_shapes():
    g = as_grid([[1, 2, 3], [4, 5, 6]])
    assert g.shape == (2, 3)
    with pytest.raises(DimensionError):
        as_grid([[1, 2], [3, 4]], columns=3)
    with pytest.raises(DimensionError):
        as_grid([[1, 2], [3, 4]], n_rows=3)
    with pytest.raises(DimensionError):
        as_grid([[1, 2], [3]])


def test_numeric_dtype():
    assert numeric_dtype("float32") == np.float32
    with pytest.raises(ScalarTypeError):
        numeric_dtype(bool)
    with pytest.raises(ScalarTypeError):
        numeric_dtype("U3")


def test_is_scalar():
    assert is_scalar(1)
    assert is_scalar(2.5)
    assert is_scalar(np.float32(1.0))
    assert not is_scalar(True)
    assert not is_scalar([1])
    assert not is_scalar("1")
    assert is_scalar(1 + 2j)
    assert not is_scalar(Fraction(1, 2))
    assert not is_scalar(Decimal("2"))


def test_check_assignable():
    check_assignable(3, np.dtype(np.float64))
    check_assignable(3, np.dtype(np.uint8))
    with pytest.raises(ScalarTypeError):
        check_assignable(0.5, np.dtype(np.int32))
    with pytest.raises(ScalarTypeError):
        check_assignable(1j, np.dtype(np.float64))
    with pytest.raises(ScalarTypeError):
        check_assignable("a", np.dtype(np.float64))
