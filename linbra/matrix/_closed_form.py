"""
Closed-form determinant and adjugate for square matrices of side 1 to 4.

All helpers take and return row-major arrays, a[i, j] being row i, column j.
Signs are applied by subtraction rather than by multiplying with -1 so that
unsigned dtypes keep their own wrap-around arithmetic.
"""
from __future__ import annotations

import numpy as np

from linbra.exceptions import DimensionError
from linbra.utils.types import NumericArray

MAX_SIDE = 4


def _minor(a: NumericArray, row: int, col: int) -> NumericArray:
    return np.delete(np.delete(a, row, axis=0), col, axis=1)


def _det2(a: NumericArray):
    return a[0, 0] * a[1, 1] - a[0, 1] * a[1, 0]


def _det3(a: NumericArray):
    return (
        a[0, 0] * (a[1, 1] * a[2, 2] - a[1, 2] * a[2, 1])
        - a[0, 1] * (a[1, 0] * a[2, 2] - a[1, 2] * a[2, 0])
        + a[0, 2] * (a[1, 0] * a[2, 1] - a[1, 1] * a[2, 0])
    )


def _det4(a: NumericArray):
    # cofactor expansion along the first row
    total = a.dtype.type(0)
    for j in range(4):
        term = a[0, j] * _det3(_minor(a, 0, j))
        total = total + term if j % 2 == 0 else total - term
    return total


def check_side(n_columns: int, n_rows: int, op: str) -> int:
    if n_columns != n_rows:
        raise DimensionError(f"{op} needs a square matrix, got {n_columns} columns and {n_rows} rows.")
    if n_columns > MAX_SIDE:
        raise DimensionError(f"{op} is only defined up to {MAX_SIDE}x{MAX_SIDE}, got {n_columns}x{n_rows}.")
    return n_columns


def determinant(a: NumericArray):
    """
    Determinant of a square (n, n) array, 1 <= n <= 4.

    - 1x1: a
    - 2x2: ad - bc
    - 3x3: cofactor expansion along the first row
    - 4x4: cofactor expansion along the first row, 3x3 minors
    """
    n = a.shape[0]
    if n == 1:
        return a[0, 0]
    if n == 2:
        return _det2(a)
    if n == 3:
        return _det3(a)
    if n == 4:
        return _det4(a)
    raise DimensionError(f"No closed-form determinant for a {n}x{n} matrix.")


def adjugate(a: NumericArray) -> NumericArray:
    """
    Adjugate (transposed cofactor matrix) of a square array, 1 <= n <= 4.

        adj(A)[i, j] = (-1)^(i+j) * det(minor(A, j, i))

    so that A @ adj(A) = det(A) * I.
    """
    n = a.shape[0]
    adj = np.empty_like(a)
    if n == 1:
        adj[0, 0] = 1
        return adj
    for i in range(n):
        for j in range(n):
            c = determinant(_minor(a, j, i))
            adj[i, j] = c if (i + j) % 2 == 0 else -c
    return adj
