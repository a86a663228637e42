from __future__ import annotations

from typing import Union

import numpy as np
from numpy.typing import NDArray, ArrayLike, DTypeLike

Scalar = Union[int, float, complex, np.number]

NumericArray = NDArray[np.number]
FloatArray = NDArray[np.floating]

__all__ = [
    "ArrayLike", "DTypeLike",
    "Scalar", "NumericArray", "FloatArray",
]
