"""
Named x, y, z access for vectors used as 2-D and 3-D points.

Mixins only: they hold no storage and read through `self[i]`, so the name
and the index always refer to the same component.
"""
from __future__ import annotations


class Point2:
    """Horizontal (x, index 0) and vertical (y, index 1) positions in a plane."""
    __slots__ = ()

    @property
    def x(self):
        return self[0]

    @x.setter
    def x(self, value) -> None:
        self[0] = value

    @property
    def y(self):
        return self[1]

    @y.setter
    def y(self, value) -> None:
        self[1] = value

    @classmethod
    def at(cls, x, y, *, dtype=None):
        """Create a point in a plane."""
        return cls(x, y, dtype=dtype)


class Point3(Point2):
    """Adds the depth (z, index 2) of a point in space."""
    __slots__ = ()

    @property
    def z(self):
        return self[2]

    @z.setter
    def z(self, value) -> None:
        self[2] = value

    @classmethod
    def at(cls, x, y, z, *, dtype=None):
        """Create a point in space."""
        return cls(x, y, z, dtype=dtype)
