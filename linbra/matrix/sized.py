from __future__ import annotations

from linbra.matrix.matrix import Matrix


class Matrix2(Matrix):
    """2x2 matrix."""
    COLUMNS = 2
    ROWS = 2
    __slots__ = ()


class Matrix3(Matrix):
    """3x3 matrix."""
    COLUMNS = 3
    ROWS = 3
    __slots__ = ()


class Matrix4(Matrix):
    """4x4 matrix, e.g. homogeneous 3-D transforms."""
    COLUMNS = 4
    ROWS = 4
    __slots__ = ()
