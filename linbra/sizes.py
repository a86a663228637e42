"""
Named width, height and depth access for vectors used as 2-D and 3-D sizes.
"""
from __future__ import annotations


class Size2:
    """Width (w, index 0) and height (h, index 1)."""
    __slots__ = ()

    @property
    def w(self):
        return self[0]

    @w.setter
    def w(self, value) -> None:
        self[0] = value

    @property
    def h(self):
        return self[1]

    @h.setter
    def h(self, value) -> None:
        self[1] = value

    @classmethod
    def of_size(cls, w, h, *, dtype=None):
        return cls(w, h, dtype=dtype)


class Size3(Size2):
    """Adds the depth (d, index 2)."""
    __slots__ = ()

    @property
    def d(self):
        return self[2]

    @d.setter
    def d(self, value) -> None:
        self[2] = value

    @classmethod
    def of_size(cls, w, h, d, *, dtype=None):
        return cls(w, h, d, dtype=dtype)
