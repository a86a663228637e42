from __future__ import annotations

from typing import Any, List

import numpy as np

from linbra.utils.types import NumericArray


def encode_scalars(arr: NumericArray) -> List[Any]:
    """
    Nested Python lists of plain scalars for YAML/JSON output.

    Complex values have no YAML scalar form and are written as strings
    such as "(1+2j)".
    """
    out = arr.tolist()
    if arr.dtype.kind != "c":
        return out

    def _enc(x):
        return [_enc(v) for v in x] if isinstance(x, list) else repr(complex(x))

    return _enc(out)


def decode_scalars(values: Any) -> Any:
    """Inverse of `encode_scalars`: strings are parsed back into complex numbers."""
    if isinstance(values, (list, tuple)):
        return [decode_scalars(v) for v in values]
    if isinstance(values, str):
        return complex(values)
    return values


def dtype_name(dt: np.dtype) -> str:
    return np.dtype(dt).name
