from __future__ import annotations

from typing import Any, Optional

import numpy as np

from linbra.exceptions import DimensionError, ScalarTypeError
from linbra.utils.types import ArrayLike, DTypeLike, NumericArray

############################
# INPUT VALIDATION UTILITIES
############################

# Kinds ordered by how much they can represent. A value may be stored into a
# component whose kind ranks at least as high.
_KIND_RANK = {"b": 0, "u": 1, "i": 1, "f": 2, "c": 3}


def numeric_dtype(dtype: DTypeLike) -> np.dtype:
    dt = np.dtype(dtype)
    if dt.kind not in "iufc":
        raise ScalarTypeError(f"Expected a numeric dtype (int, uint, float, complex), got {dt}.")
    return dt


def _numeric_array(values: ArrayLike, dtype: Optional[DTypeLike]) -> NumericArray:
    try:
        arr = np.array(values, dtype=dtype, copy=True)
    except (TypeError, ValueError) as e:
        raise ScalarTypeError(f"Components must be numeric scalars, got {values!r}.") from e
    if arr.dtype.kind == "b" and dtype is None:
        arr = arr.astype(np.int64)
    numeric_dtype(arr.dtype)
    return arr


def as_components(values: ArrayLike, n: Optional[int] = None, *,
                  dtype: Optional[DTypeLike] = None, name: str = "vector") -> NumericArray:
    """
    Coerce `values` into a private 1-D numeric array.

    Parameters
    ----------
    values : array_like
        Flat sequence of scalars.
    n : int, optional
        Required length. If None, any length >= 1 is accepted.
    dtype : dtype-like, optional
        Target scalar type. Inferred by NumPy when omitted (booleans become int64).
    name : str
        Used in error messages.

    Returns
    -------
    out : np.ndarray
        Fresh contiguous array of shape (n,).

    Raises
    ------
    DimensionError
        If the input is not 1-D, is empty, or has the wrong length.
    ScalarTypeError
        If the components are not numeric.
    """
    arr = _numeric_array(values, dtype)
    if arr.ndim != 1:
        raise DimensionError(f"Expected a flat sequence of scalars for {name}, got shape {arr.shape}.")
    if arr.shape[0] == 0:
        raise DimensionError(f"{name} needs at least one component.")
    if n is not None and arr.shape[0] != n:
        raise DimensionError(f"Expected {n} components for {name}, got {arr.shape[0]}.")
    return arr


def as_grid(rows: ArrayLike, columns: Optional[int] = None, n_rows: Optional[int] = None, *,
            dtype: Optional[DTypeLike] = None, name: str = "matrix") -> NumericArray:
    """
    Coerce a row-major nested sequence into a private (R, C) numeric array.

    Raises DimensionError if the input is ragged, not 2-D, empty, or does not
    have the requested number of columns / rows.
    """
    try:
        arr = _numeric_array(rows, dtype)
    except ScalarTypeError as e:
        # np.array raises ValueError on ragged nesting
        if isinstance(e.__cause__, ValueError) and "inhomogeneous" in str(e.__cause__):
            raise DimensionError(f"{name} rows must all have the same length.") from e.__cause__
        raise
    if arr.ndim != 2:
        raise DimensionError(f"Expected a nested sequence of rows for {name}, got shape {arr.shape}.")
    R, C = arr.shape
    if R == 0 or C == 0:
        raise DimensionError(f"{name} needs at least one row and one column, got shape {arr.shape}.")
    if columns is not None and C != columns:
        raise DimensionError(f"Expected {columns} columns for {name}, got {C}.")
    if n_rows is not None and R != n_rows:
        raise DimensionError(f"Expected {n_rows} rows for {name}, got {R}.")
    return arr


def is_scalar(value: Any) -> bool:
    """
    True for int, float, complex and NumPy numbers (booleans excluded).

    Other `numbers.Number` types such as Fraction or Decimal would turn the
    result into an object array, so they are not scalars here.
    """
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (int, float, complex, np.number))


def require_scalar(value: Any, *, name: str = "value") -> None:
    """DimensionError for sequences, ScalarTypeError for anything else that is not a number."""
    if np.ndim(value) != 0:
        raise DimensionError(f"{name} must be a single scalar, got shape {np.shape(value)}.")
    if not is_scalar(value):
        raise ScalarTypeError(f"{name} must be a numeric scalar, got {type(value).__name__}.")


def check_assignable(value: Any, target: np.dtype, *, name: str = "component") -> None:
    """
    Refuse to store a value of a wider kind than the target dtype.

    Integer into float is fine, float into integer is not. Range overflow
    within a kind is left to NumPy.
    """
    if not is_scalar(value):
        raise ScalarTypeError(f"{name} must be a numeric scalar, got {type(value).__name__}.")
    kind = np.asarray(value).dtype.kind
    if _KIND_RANK.get(kind, 99) > _KIND_RANK[target.kind]:
        raise ScalarTypeError(f"Cannot store a value of kind {kind!r} into a {target} {name} without loss.")


def require_same_dtype(a: np.dtype, b: np.dtype, *, op: str) -> None:
    if a != b:
        raise ScalarTypeError(
            f"Operands of {op} must share one scalar type, got {a} and {b}. "
            "Convert one of them explicitly with astype()."
        )


def cast(arr: NumericArray, dtype: DTypeLike, casting: str = "unsafe") -> NumericArray:
    dt = numeric_dtype(dtype)
    if not np.can_cast(arr.dtype, dt, casting=casting):
        raise ScalarTypeError(f"Cannot cast {arr.dtype} to {dt} under casting={casting!r}.")
    return arr.astype(dt, casting=casting, copy=True)
