from __future__ import annotations

import logging
import operator
from typing import Any, ClassVar, Dict, Iterator, Optional, Tuple

import numpy as np

from linbra.config import get_config
from linbra.exceptions import DimensionError
from linbra.io import dump_yaml, load_yaml, encode_scalars, decode_scalars, dtype_name
from linbra.utils.types import ArrayLike, DTypeLike, NumericArray
from linbra.utils.validation import (
    as_components,
    cast,
    check_assignable,
    is_scalar,
    require_scalar,
    require_same_dtype,
)

logger = logging.getLogger(__name__)

# dtypes NumPy infers from plain Python numbers; repr omits them
_INFERRED_DTYPES = (np.dtype(np.int64), np.dtype(np.float64), np.dtype(np.complex128))


class Vector:
    """
    Fixed-length column of N scalars sharing one NumPy dtype.

        (a_1, a_2, ..., a_N)^T

    Parameters
    ----------
    *components : scalars
        Exactly N values, in mathematical order (x, y, z, w, ...).
    dtype : dtype-like, optional
        Scalar type of the components. Inferred by NumPy when omitted.

    Notes
    -----
    - Lengths 2, 3 and 4 have dedicated classes (`Vector2`, `Vector3`,
      `Vector4`). Building a plain `Vector` with that many components returns
      an instance of the dedicated class, which also carries the named
      accessors (x/y/z, w/h/d, r/g/b/a).
    - Values own their storage. Every operator returns a new vector; only
      `v[i] = s` (and the named setters) mutate, and only the receiver.
    - Binary operations between vectors require the same length
      (DimensionError) and the same dtype (ScalarTypeError). Scalar operands
      follow NumPy promotion for Python scalars, so `/` on an integer vector
      gives floats and `//` keeps integers.
    - Division by zero and normalization of a zero vector follow the dtype's
      arithmetic (inf / NaN for floats) and are not reported.
    """
    N: ClassVar[Optional[int]] = None
    _SIZED: ClassVar[Dict[int, type]] = {}

    __slots__ = ("_data",)
    __hash__ = None  # mutable
    __array_ufunc__ = None  # NumPy defers to our operators

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        n = cls.__dict__.get("N")
        if n is not None:
            Vector._SIZED[n] = cls

    def __new__(cls, *components: Any, dtype: Optional[DTypeLike] = None):
        if cls is Vector:
            cls = Vector._SIZED.get(len(components), Vector)
        return super().__new__(cls)

    def __init__(self, *components: Any, dtype: Optional[DTypeLike] = None) -> None:
        self._data = as_components(components, self.N, dtype=dtype, name=type(self).__name__)

    @staticmethod
    def _from_storage(data: NumericArray) -> "Vector":
        # `data` must be a fresh array owned by the new vector
        cls = Vector._SIZED.get(data.shape[0], Vector)
        obj = object.__new__(cls)
        obj._data = data
        return obj

    ############################
    # CONSTRUCTORS
    ############################

    @classmethod
    def from_array(cls, values: ArrayLike, *, dtype: Optional[DTypeLike] = None) -> "Vector":
        """
        Build a vector from a flat sequence (list, tuple, 1-D array).

        Raises
        ------
        DimensionError
            If `values` is not flat, or its length does not match the class.
        """
        name = cls.__name__
        return Vector._from_storage(as_components(values, cls.N, dtype=dtype, name=name))

    @classmethod
    def filled(cls, value: Any, n: Optional[int] = None, *, dtype: Optional[DTypeLike] = None) -> "Vector":
        """
        Broadcast one scalar to every component.

        `n` is implied by `Vector2/3/4` and required for plain `Vector`.
        """
        if n is None:
            n = cls.N
        if n is None:
            raise DimensionError("Vector.filled needs the number of components `n`.")
        if cls.N is not None and n != cls.N:
            raise DimensionError(f"{cls.__name__} has {cls.N} components, got n={n}.")
        require_scalar(value, name="Fill value")
        return cls.from_array(np.full(int(n), value, dtype=dtype))

    @classmethod
    def zeros(cls, n: Optional[int] = None, *, dtype: DTypeLike = float) -> "Vector":
        return cls.filled(0, n, dtype=dtype)

    ############################
    # STORAGE ACCESS
    ############################

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def components(self) -> Tuple[Any, ...]:
        """Components as a tuple of Python scalars."""
        return tuple(self._data.tolist())

    def __len__(self) -> int:
        return self._data.shape[0]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data.copy())

    @staticmethod
    def _index(index: Any) -> int:
        try:
            return operator.index(index)
        except TypeError as e:
            raise TypeError(f"Vector indices must be integers, got {type(index).__name__}.") from e

    def __getitem__(self, index: int):
        return self._data[self._index(index)]

    def __setitem__(self, index: int, value: Any) -> None:
        i = self._index(index)
        check_assignable(value, self.dtype)
        self._data[i] = value

    def tolist(self) -> list:
        return self._data.tolist()

    def to_numpy(self) -> NumericArray:
        """Copy of the components as a 1-D array."""
        return self._data.copy()

    def copy(self) -> "Vector":
        return Vector._from_storage(self._data.copy())

    __copy__ = copy

    def astype(self, dtype: DTypeLike, casting: str = "unsafe") -> "Vector":
        """
        Explicit conversion to another scalar type.

        Parameters
        ----------
        dtype : dtype-like
            Target numeric dtype.
        casting : {"no", "equiv", "safe", "same_kind", "unsafe"}
            NumPy casting rule. The default truncates / wraps like
            `ndarray.astype`; pass "safe" to refuse lossy conversions.

        Raises
        ------
        ScalarTypeError
            If the target is not numeric or the cast is not allowed under `casting`.
        """
        return Vector._from_storage(cast(self._data, dtype, casting))

    ############################
    # ARITHMETIC
    ############################

    def _check_operand(self, other: "Vector", op: str) -> None:
        if len(other) != len(self):
            raise DimensionError(f"{op} needs vectors of equal length, got {len(self)} and {len(other)}.")
        require_same_dtype(self.dtype, other.dtype, op=op)

    def __add__(self, other: Any):
        if not isinstance(other, Vector):
            return NotImplemented
        self._check_operand(other, "vector addition")
        return Vector._from_storage(self._data + other._data)

    def __sub__(self, other: Any):
        if not isinstance(other, Vector):
            return NotImplemented
        self._check_operand(other, "vector subtraction")
        return Vector._from_storage(self._data - other._data)

    def __neg__(self) -> "Vector":
        return Vector._from_storage(-self._data)

    def __pos__(self) -> "Vector":
        return self.copy()

    def __mul__(self, other: Any):
        # Vector * Matrix is handled by Matrix.__rmul__
        if isinstance(other, Vector):
            self._check_operand(other, "elementwise product")
            return Vector._from_storage(self._data * other._data)
        if is_scalar(other):
            return Vector._from_storage(self._data * other)
        return NotImplemented

    def __rmul__(self, other: Any):
        if is_scalar(other):
            return Vector._from_storage(other * self._data)
        return NotImplemented

    def __truediv__(self, other: Any):
        if not is_scalar(other):
            return NotImplemented
        with np.errstate(divide="ignore", invalid="ignore"):
            return Vector._from_storage(self._data / other)

    def __floordiv__(self, other: Any):
        if not is_scalar(other):
            return NotImplemented
        with np.errstate(divide="ignore", invalid="ignore"):
            return Vector._from_storage(self._data // other)

    def __matmul__(self, other: Any):
        if isinstance(other, Vector):
            return self.dot(other)
        return NotImplemented

    def dot(self, other: "Vector"):
        """
        Dot product, the sum of elementwise products.

            u . v = u_1 v_1 + u_2 v_2 + ... + u_N v_N

        Returns a scalar of the operands' dtype. Complex components are not
        conjugated.
        """
        if not isinstance(other, Vector):
            raise TypeError(f"dot expects a Vector, got {type(other).__name__}.")
        self._check_operand(other, "dot product")
        return np.dot(self._data, other._data)

    def magnitude_squared(self):
        """|v|^2, the dot product of v with its conjugate."""
        sq = np.vdot(self._data, self._data)
        return sq.real if self.dtype.kind == "c" else sq

    def magnitude(self):
        """
        Euclidean length sqrt(v . v).

        Integer vectors give a float64 result; float32 stays float32.
        """
        return np.sqrt(self.magnitude_squared())

    def normalized(self) -> "Vector":
        """
        Unit vector v / |v|.

        A zero vector gives NaN components (0 / 0); no warning is raised.
        Use `try_normalized` to detect that case instead.
        """
        with np.errstate(divide="ignore", invalid="ignore"):
            return Vector._from_storage(self._data / self.magnitude())

    def try_normalized(self) -> Optional["Vector"]:
        """Unit vector v / |v|, or None when |v| == 0."""
        m = self.magnitude()
        if m == 0:
            logger.debug("try_normalized: zero-length %s, returning None", type(self).__name__)
            return None
        return Vector._from_storage(self._data / m)

    ############################
    # COMPARISON
    ############################

    def __eq__(self, other: Any):
        if not isinstance(other, Vector):
            return NotImplemented
        return len(self) == len(other) and bool(np.array_equal(self._data, other._data))

    def allclose(self, other: "Vector", *, rtol: Optional[float] = None, atol: Optional[float] = None) -> bool:
        """
        Component-wise comparison within tolerance.

        Defaults come from `get_config().tolerance`. Vectors of different
        lengths are never close.
        """
        if not isinstance(other, Vector):
            raise TypeError(f"allclose expects a Vector, got {type(other).__name__}.")
        if len(self) != len(other):
            return False
        tol = get_config().tolerance
        return bool(np.allclose(
            self._data, other._data,
            rtol=tol.rtol if rtol is None else rtol,
            atol=tol.atol if atol is None else atol,
        ))

    ############################
    # SHAPE CONVERSIONS
    ############################

    def as_column(self):
        """The vector as a Matrix with one column and N rows."""
        from linbra.matrix import Matrix
        return Matrix._from_storage(self._data.reshape(1, -1).copy())

    def as_row(self):
        """The vector as a Matrix with N columns and one row."""
        from linbra.matrix import Matrix
        return Matrix._from_storage(self._data.reshape(-1, 1).copy())

    ############################
    # TEXT & SERIALIZATION
    ############################

    def __repr__(self) -> str:
        args = ", ".join(repr(c) for c in self._data.tolist())
        if self.dtype not in _INFERRED_DTYPES:
            args += f", dtype={dtype_name(self.dtype)!r}"
        return f"{type(self).__name__}({args})"

    def __str__(self) -> str:
        disp = get_config().display
        return np.array2string(
            self._data,
            precision=disp.precision,
            suppress_small=disp.suppress_small,
            max_line_width=disp.max_line_width,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dtype": dtype_name(self.dtype),
            "components": encode_scalars(self._data),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Vector":
        return cls.from_array(decode_scalars(d["components"]), dtype=d.get("dtype"))

    def to_yaml(self, path: str) -> None:
        dump_yaml({"vector": self.to_dict()}, path)

    @classmethod
    def from_yaml(cls, path: str) -> "Vector":
        d = load_yaml(path)
        try:
            return cls.from_dict(d["vector"])
        except KeyError as e:
            raise KeyError("The specified YAML file does not contain a field called 'vector'") from e
