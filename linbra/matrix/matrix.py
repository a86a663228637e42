from __future__ import annotations

import logging
import operator
from typing import Any, ClassVar, Dict, Iterator, Optional, Sequence, Tuple

import numpy as np

from linbra.config import get_config
from linbra.exceptions import DimensionError, ScalarTypeError
from linbra.io import dump_yaml, load_yaml, encode_scalars, decode_scalars, dtype_name
from linbra.matrix import _closed_form
from linbra.utils.types import ArrayLike, DTypeLike, NumericArray
from linbra.utils.validation import (
    as_components,
    as_grid,
    cast,
    check_assignable,
    is_scalar,
    require_scalar,
    require_same_dtype,
)
from linbra.vector import Vector

logger = logging.getLogger(__name__)

_INFERRED_DTYPES = (np.dtype(np.int64), np.dtype(np.float64), np.dtype(np.complex128))


def _nested_shape(rows: Any) -> Optional[Tuple[int, int]]:
    try:
        shape = np.shape(rows)
    except ValueError:
        return None
    if len(shape) != 2:
        return None
    R, C = shape
    return C, R


class Matrix:
    """
    Grid of C columns by R rows of scalars sharing one NumPy dtype.

        ( x_11  x_12  ...  x_1C )
        ( x_21  x_22  ...  x_2C )
        (  ...                  )
        ( x_R1  x_R2  ...  x_RC )

    Parameters
    ----------
    rows : nested sequence
        R rows of C scalars each, in natural (row-major) reading order.
    dtype : dtype-like, optional
        Scalar type of the elements. Inferred by NumPy when omitted.

    Conventions
    -----------
    - Storage is column-major: a matrix is C column vectors of length R.
      Element access is `m[column, row]`.
    - Every input and output in nested / flat form is row-major: the
      constructor, `from_flat`, `tolist`, `to_numpy`, `repr` and `str`.
    - `shape` is `(C, R)`, i.e. (n_columns, n_rows).
    - `a * b` and `a @ b` are the matrix product and need
      `a.n_columns == b.n_rows`; the result has `b.n_columns` columns and
      `a.n_rows` rows. `a * v` needs `len(v) == a.n_columns`, `v * a` needs
      `len(v) == a.n_rows`.
    - Square sides 2, 3 and 4 have dedicated classes (`Matrix2`, `Matrix3`,
      `Matrix4`) returned automatically by every constructor and operator.

    Singular matrices
    -----------------
    `inverse()` divides the adjugate by the determinant and so yields inf/NaN
    entries for a singular matrix, without warning. `try_inverse()` returns
    None when the determinant is exactly zero.
    """
    COLUMNS: ClassVar[Optional[int]] = None
    ROWS: ClassVar[Optional[int]] = None
    _SIZED: ClassVar[Dict[Tuple[int, int], type]] = {}

    __slots__ = ("_data",)
    __hash__ = None  # mutable
    __iter__ = None  # iterate explicitly over columns or rows
    __array_ufunc__ = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "COLUMNS" in cls.__dict__ and "ROWS" in cls.__dict__:
            Matrix._SIZED[(cls.COLUMNS, cls.ROWS)] = cls

    def __new__(cls, rows: Any = None, *, dtype: Optional[DTypeLike] = None):
        if cls is Matrix:
            cls = Matrix._SIZED.get(_nested_shape(rows), Matrix)
        return super().__new__(cls)

    def __init__(self, rows: ArrayLike, *, dtype: Optional[DTypeLike] = None) -> None:
        grid = as_grid(rows, self.COLUMNS, self.ROWS, dtype=dtype, name=type(self).__name__)
        self._data = np.ascontiguousarray(grid.T)

    @staticmethod
    def _from_storage(data: NumericArray) -> "Matrix":
        # `data` is (C, R) column-major storage owned by the new matrix
        cls = Matrix._SIZED.get(data.shape, Matrix)
        obj = object.__new__(cls)
        obj._data = np.ascontiguousarray(data)
        return obj

    @classmethod
    def _check_class_shape(cls, n_columns: int, n_rows: int) -> None:
        if cls.COLUMNS is not None and n_columns != cls.COLUMNS:
            raise DimensionError(f"{cls.__name__} has {cls.COLUMNS} columns, got {n_columns}.")
        if cls.ROWS is not None and n_rows != cls.ROWS:
            raise DimensionError(f"{cls.__name__} has {cls.ROWS} rows, got {n_rows}.")

    @classmethod
    def _resolve_shape(cls, columns: Optional[int], rows: Optional[int]) -> Tuple[int, int]:
        C = cls.COLUMNS if columns is None else int(columns)
        R = cls.ROWS if rows is None else int(rows)
        if C is None or R is None:
            raise DimensionError(f"{cls.__name__} needs explicit `columns` and `rows`.")
        if C <= 0 or R <= 0:
            raise DimensionError(f"Matrix dimensions must be positive, got {C} columns and {R} rows.")
        cls._check_class_shape(C, R)
        return C, R

    ############################
    # CONSTRUCTORS
    ############################

    @classmethod
    def _stack(cls, vectors: Sequence[Any], dtype: Optional[DTypeLike], what: str) -> NumericArray:
        if not vectors:
            raise DimensionError(f"{cls.__name__}.from_{what} needs at least one {what[:-1]}.")
        dtypes = {v.dtype for v in vectors if isinstance(v, Vector)}
        if dtype is None and len(dtypes) > 1:
            raise ScalarTypeError(
                f"{what} must share one scalar type, got {sorted(map(str, dtypes))}. "
                "Pass `dtype` to convert them explicitly."
            )
        arrays = [v.to_numpy() if isinstance(v, Vector) else v for v in vectors]
        return as_grid(arrays, dtype=dtype, name=f"{cls.__name__} {what}")

    @classmethod
    def from_columns(cls, *columns: Any, dtype: Optional[DTypeLike] = None) -> "Matrix":
        """
        Build a matrix from C column vectors (or sequences) of length R.

        Reconstructing from `m.iter_columns()` reproduces `m` exactly.
        """
        storage = cls._stack(columns, dtype, "columns")
        cls._check_class_shape(*storage.shape)
        return Matrix._from_storage(storage)

    @classmethod
    def from_rows(cls, *rows: Any, dtype: Optional[DTypeLike] = None) -> "Matrix":
        """Build a matrix from R row vectors (or sequences) of length C."""
        grid = cls._stack(rows, dtype, "rows")
        cls._check_class_shape(grid.shape[1], grid.shape[0])
        return Matrix._from_storage(grid.T)

    @classmethod
    def from_flat(cls, values: ArrayLike, columns: Optional[int] = None, rows: Optional[int] = None, *,
                  dtype: Optional[DTypeLike] = None) -> "Matrix":
        """
        Build a matrix from R*C scalars listed row after row.

            Matrix.from_flat([1, 2, 3, 4, 5, 6], columns=3, rows=2)
            # ( 1 2 3 )
            # ( 4 5 6 )
        """
        C, R = cls._resolve_shape(columns, rows)
        flat = as_components(values, C * R, dtype=dtype, name=f"{cls.__name__} elements")
        return Matrix._from_storage(flat.reshape(R, C).T)

    @classmethod
    def filled(cls, value: Any, columns: Optional[int] = None, rows: Optional[int] = None, *,
               dtype: Optional[DTypeLike] = None) -> "Matrix":
        """Every element set to `value`."""
        C, R = cls._resolve_shape(columns, rows)
        require_scalar(value, name="Fill value")
        return cls.from_flat(np.full(C * R, value, dtype=dtype), C, R)

    @classmethod
    def zeros(cls, columns: Optional[int] = None, rows: Optional[int] = None, *,
              dtype: DTypeLike = float) -> "Matrix":
        return cls.filled(0, columns, rows, dtype=dtype)

    @classmethod
    def identity(cls, n: Optional[int] = None, *, dtype: DTypeLike = float) -> "Matrix":
        """
        Square identity matrix, I[i, i] = 1 and 0 elsewhere.

        `n` is implied by `Matrix2/3/4` and required for plain `Matrix`.
        """
        C, R = cls._resolve_shape(n, n)
        if C != R:
            raise DimensionError(f"identity needs a square shape, got {C} columns and {R} rows.")
        return cls.from_flat(np.eye(C, dtype=dtype).ravel(), C, R)

    ############################
    # STORAGE ACCESS
    ############################

    @property
    def n_columns(self) -> int:
        return self._data.shape[0]

    @property
    def n_rows(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        """(n_columns, n_rows)"""
        return self._data.shape

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def is_square(self) -> bool:
        return self.n_columns == self.n_rows

    @staticmethod
    def _key(key: Any) -> Tuple[int, int]:
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError(f"Matrix elements are indexed by (column, row), got {key!r}.")
        try:
            return operator.index(key[0]), operator.index(key[1])
        except TypeError as e:
            raise TypeError(f"Matrix indices must be integers, got {key!r}.") from e

    def __getitem__(self, key: Tuple[int, int]):
        return self._data[self._key(key)]

    def __setitem__(self, key: Tuple[int, int], value: Any) -> None:
        k = self._key(key)
        check_assignable(value, self.dtype, name="element")
        self._data[k] = value

    def column(self, c: int) -> Vector:
        """Column `c` as a vector of length R."""
        return Vector._from_storage(self._data[operator.index(c)].copy())

    def row(self, r: int) -> Vector:
        """Row `r` as a vector of length C."""
        return Vector._from_storage(self._data[:, operator.index(r)].copy())

    def iter_columns(self) -> Iterator[Vector]:
        for c in range(self.n_columns):
            yield self.column(c)

    def iter_rows(self) -> Iterator[Vector]:
        for r in range(self.n_rows):
            yield self.row(r)

    def tolist(self) -> list:
        """Row-major nested list."""
        return self._data.T.tolist()

    def to_numpy(self) -> NumericArray:
        """Row-major (R, C) copy, so that `m.to_numpy()[r, c] == m[c, r]`."""
        return self._data.T.copy()

    def copy(self) -> "Matrix":
        return Matrix._from_storage(self._data.copy())

    __copy__ = copy

    def astype(self, dtype: DTypeLike, casting: str = "unsafe") -> "Matrix":
        """Explicit scalar type conversion, see `Vector.astype`."""
        return Matrix._from_storage(cast(self._data, dtype, casting))

    def to_vector(self) -> Vector:
        """
        A single-column matrix as a vector of length R, or a single-row
        matrix as a vector of length C.
        """
        if self.n_columns == 1:
            return self.column(0)
        if self.n_rows == 1:
            return self.row(0)
        raise DimensionError(
            f"Only one-column or one-row matrices convert to a vector, got shape {self.shape}."
        )

    def transpose(self) -> "Matrix":
        """Matrix with columns and rows swapped, shape (R, C)."""
        return Matrix._from_storage(self._data.T.copy())

    @property
    def T(self) -> "Matrix":
        return self.transpose()

    ############################
    # ARITHMETIC
    ############################

    def _check_same_shape(self, other: "Matrix", op: str) -> None:
        if other.shape != self.shape:
            raise DimensionError(f"{op} needs matrices of equal shape, got {self.shape} and {other.shape}.")
        require_same_dtype(self.dtype, other.dtype, op=op)

    def __add__(self, other: Any):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "matrix addition")
        return Matrix._from_storage(self._data + other._data)

    def __sub__(self, other: Any):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "matrix subtraction")
        return Matrix._from_storage(self._data - other._data)

    def __neg__(self) -> "Matrix":
        return Matrix._from_storage(-self._data)

    def __pos__(self) -> "Matrix":
        return self.copy()

    def _matmul(self, other: "Matrix") -> "Matrix":
        if self.n_columns != other.n_rows:
            raise DimensionError(
                f"Matrix product needs left columns == right rows, got {self.shape} x {other.shape} "
                "(shapes are (columns, rows))."
            )
        require_same_dtype(self.dtype, other.dtype, op="matrix product")
        # row-major views: (R1, C1) @ (R2, C2) -> (R1, C2)
        product = self._data.T @ other._data.T
        return Matrix._from_storage(product.T)

    def _matvec(self, v: Vector) -> Vector:
        if len(v) != self.n_columns:
            raise DimensionError(
                f"Matrix-vector product needs len(vector) == {self.n_columns} columns, got {len(v)}."
            )
        require_same_dtype(self.dtype, v.dtype, op="matrix-vector product")
        return Vector._from_storage(self._data.T @ v.to_numpy())

    def _vecmat(self, v: Vector) -> Vector:
        if len(v) != self.n_rows:
            raise DimensionError(
                f"Vector-matrix product needs len(vector) == {self.n_rows} rows, got {len(v)}."
            )
        require_same_dtype(self.dtype, v.dtype, op="vector-matrix product")
        return Vector._from_storage(v.to_numpy() @ self._data.T)

    def __mul__(self, other: Any):
        if isinstance(other, Matrix):
            return self._matmul(other)
        if isinstance(other, Vector):
            return self._matvec(other)
        if is_scalar(other):
            return Matrix._from_storage(self._data * other)
        return NotImplemented

    def __rmul__(self, other: Any):
        if isinstance(other, Vector):
            return self._vecmat(other)
        if is_scalar(other):
            return Matrix._from_storage(other * self._data)
        return NotImplemented

    def __truediv__(self, other: Any):
        if not is_scalar(other):
            return NotImplemented
        with np.errstate(divide="ignore", invalid="ignore"):
            return Matrix._from_storage(self._data / other)

    def __matmul__(self, other: Any):
        if isinstance(other, Matrix):
            return self._matmul(other)
        if isinstance(other, Vector):
            return self._matvec(other)
        return NotImplemented

    def __rmatmul__(self, other: Any):
        if isinstance(other, Vector):
            return self._vecmat(other)
        return NotImplemented

    ############################
    # SQUARE MATRICES
    ############################

    def determinant(self):
        """
        Determinant by closed-form cofactor expansion (sides 1 to 4).

        Integer matrices give an exact integer result. Unsigned matrices keep
        their dtype, so a negative determinant wraps around; call
        `astype(float)` or a signed dtype first when the sign matters.

        Raises
        ------
        DimensionError
            If the matrix is not square or larger than 4x4.
        """
        _closed_form.check_side(self.n_columns, self.n_rows, "determinant")
        return _closed_form.determinant(self._data.T)

    def _signed_rows(self) -> NumericArray:
        # cofactor signs make no sense in unsigned arithmetic
        a = self._data.T
        return a.astype(np.float64) if a.dtype.kind == "u" else a

    def inverse(self) -> "Matrix":
        """
        Inverse adj(A) / det(A).

        Integer matrices give a float result. Unsigned matrices are converted
        to float64 before the cofactors are formed, the same as calling
        `astype(float).inverse()`. A singular matrix gives inf/NaN entries
        (division by a zero determinant); see `try_inverse`.
        """
        _closed_form.check_side(self.n_columns, self.n_rows, "inverse")
        a = self._signed_rows()
        det = _closed_form.determinant(a)
        with np.errstate(divide="ignore", invalid="ignore"):
            inv = _closed_form.adjugate(a) / det
        return Matrix._from_storage(inv.T)

    def try_inverse(self) -> Optional["Matrix"]:
        """Inverse, or None when the determinant is exactly zero."""
        _closed_form.check_side(self.n_columns, self.n_rows, "inverse")
        if _closed_form.determinant(self._signed_rows()) == 0:
            logger.debug("try_inverse: singular %s, returning None", type(self).__name__)
            return None
        return self.inverse()

    def trace(self):
        """Sum of the diagonal elements."""
        if not self.is_square:
            raise DimensionError(f"trace needs a square matrix, got shape {self.shape}.")
        return np.trace(self._data)

    ############################
    # COMPARISON
    ############################

    def __eq__(self, other: Any):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    def allclose(self, other: "Matrix", *, rtol: Optional[float] = None, atol: Optional[float] = None) -> bool:
        """
        Element-wise comparison within tolerance, defaults from
        `get_config().tolerance`. Different shapes are never close.
        """
        if not isinstance(other, Matrix):
            raise TypeError(f"allclose expects a Matrix, got {type(other).__name__}.")
        if self.shape != other.shape:
            return False
        tol = get_config().tolerance
        return bool(np.allclose(
            self._data, other._data,
            rtol=tol.rtol if rtol is None else rtol,
            atol=tol.atol if atol is None else atol,
        ))

    ############################
    # TEXT & SERIALIZATION
    ############################

    def __repr__(self) -> str:
        args = repr(self.tolist())
        if self.dtype not in _INFERRED_DTYPES:
            args += f", dtype={dtype_name(self.dtype)!r}"
        return f"{type(self).__name__}({args})"

    def __str__(self) -> str:
        disp = get_config().display
        return np.array2string(
            self._data.T,
            precision=disp.precision,
            suppress_small=disp.suppress_small,
            max_line_width=disp.max_line_width,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dtype": dtype_name(self.dtype),
            "columns": int(self.n_columns),
            "rows": int(self.n_rows),
            "data": encode_scalars(self._data.T),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Matrix":
        m = cls(decode_scalars(d["data"]), dtype=d.get("dtype"))
        expected = (int(d.get("columns", m.n_columns)), int(d.get("rows", m.n_rows)))
        if m.shape != expected:
            raise DimensionError(f"Matrix data has shape {m.shape} but the record declares {expected}.")
        return m

    def to_yaml(self, path: str) -> None:
        dump_yaml({"matrix": self.to_dict()}, path)

    @classmethod
    def from_yaml(cls, path: str) -> "Matrix":
        d = load_yaml(path)
        try:
            return cls.from_dict(d["matrix"])
        except KeyError as e:
            raise KeyError("The specified YAML file does not contain a field called 'matrix'") from e
