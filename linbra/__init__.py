"""
Linear algebra for game development, graphics and other calculations with
small fixed-size vectors and matrices.
"""
from .exceptions import LinbraError, DimensionError, ScalarTypeError
from .config import (
    LinbraConfig,
    ToleranceConfig,
    DisplayConfig,
    get_config,
    set_config,
    using_config,
)
from .points import Point2, Point3
from .sizes import Size2, Size3
from .colours import RGB, RGBA
from .vector import Vector, Vector2, Vector3, Vector4
from .matrix import Matrix, Matrix2, Matrix3, Matrix4
from .operations import (
    dot,
    cross,
    outer,
    transpose,
    determinant,
    inverse,
    try_inverse,
)

__version__ = "0.2.0"
