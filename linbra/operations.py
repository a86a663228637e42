"""
Free-function spellings of the vector and matrix operations.

    dot(u, v)        u . v
    cross(u, v)      u x v             (3-vectors)
    outer(u, v)      u v^T             (len(v) columns, len(u) rows)
    transpose(m)     m^T
    determinant(m)   det(m)            (square, side <= 4)
    inverse(m)       adj(m) / det(m)   (inf/NaN if singular)
    try_inverse(m)   inverse or None
"""
from __future__ import annotations

from typing import Optional

from linbra.exceptions import DimensionError
from linbra.matrix import Matrix
from linbra.utils.validation import require_same_dtype
from linbra.vector import Vector, Vector3


def dot(u: Vector, v: Vector):
    return u.dot(v)


def cross(u: Vector, v: Vector) -> Vector3:
    if not isinstance(u, Vector3):
        raise DimensionError(f"cross product is defined for 3-vectors, got length {len(u)}.")
    return u.cross(v)


def outer(u: Vector, v: Vector) -> Matrix:
    """
    Outer product, the matrix with element (column j, row i) = u_i * v_j.

    Equivalent to `u.as_column() * v.as_row()`.
    """
    require_same_dtype(u.dtype, v.dtype, op="outer product")
    return u.as_column() * v.as_row()


def transpose(m: Matrix) -> Matrix:
    return m.transpose()


def determinant(m: Matrix):
    return m.determinant()


def inverse(m: Matrix) -> Matrix:
    return m.inverse()


def try_inverse(m: Matrix) -> Optional[Matrix]:
    return m.try_inverse()
