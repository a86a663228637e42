from __future__ import annotations

import numpy as np

from linbra.colours import RGB, RGBA
from linbra.points import Point2, Point3
from linbra.sizes import Size2, Size3
from linbra.vector.vector import Vector


class Vector2(Point2, Size2, Vector):
    """Vector of 2 components, readable as a point (x, y) or a size (w, h)."""
    N = 2
    __slots__ = ()


class Vector3(Point3, Size3, RGB, Vector):
    """
    Vector of 3 components.

    Readable as a point (x, y, z), a size (w, h, d) or an RGB colour
    (r, g, b). The views coexist and all alias the same storage: `v.x`,
    `v.w` and `v.r` are `v[0]`.
    """
    N = 3
    __slots__ = ()

    def cross(self, other: "Vector3") -> "Vector3":
        """
        Cross product u x v.

            (u_y v_z - u_z v_y, u_z v_x - u_x v_z, u_x v_y - u_y v_x)
        """
        if not isinstance(other, Vector):
            raise TypeError(f"cross expects a Vector3, got {type(other).__name__}.")
        self._check_operand(other, "cross product")
        return Vector._from_storage(np.cross(self._data, other._data))


class Vector4(RGBA, Vector):
    """Vector of 4 components, readable as an RGBA colour (r, g, b, a)."""
    N = 4
    __slots__ = ()
