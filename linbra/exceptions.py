"""
Exception hierarchy for linbra.

Shape and scalar-type problems are reported eagerly, before any arithmetic
runs. Numeric edge cases (division by zero, singular inversion, normalizing a
zero vector) are not errors: they follow the dtype's own arithmetic.
"""


class LinbraError(Exception):
    """Base exception for all linbra errors."""
    pass


class DimensionError(LinbraError, ValueError):
    """
    Operand dimensions are incorrect or inconsistent.

    Raised when a vector length or a matrix (columns, rows) shape does not
    match what the operation requires.
    """
    pass


class ScalarTypeError(LinbraError, TypeError):
    """
    Scalar type is not numeric, or two operands disagree on it.

    Also raised when a write or an explicit cast would lose information
    (e.g. a float stored into an integer vector).
    """
    pass
