"""
Named red, green, blue (and alpha) channels for colour vectors.

Channels are plain components: `r` is index 0, `g` index 1, `b` index 2 and
`a` index 3. Colours built from the named constructors or from a hexadecimal
value use `uint8` channels.
"""
from __future__ import annotations

import numpy as np


def _channel_bytes(colour, n: int) -> list[int]:
    if colour.dtype.kind not in "iu":
        raise ValueError(f"Hexadecimal conversion needs integer channels, got {colour.dtype}.")
    channels = [int(colour[i]) for i in range(n)]
    for c in channels:
        if not 0 <= c <= 0xFF:
            raise ValueError(f"Colour channels must be in [0, 255], got {channels}.")
    return channels


def _check_hex(value, bits: int) -> int:
    value = int(value)
    if not 0 <= value < (1 << bits):
        raise ValueError(f"Expected a {bits}-bit hexadecimal colour, got {value:#x}.")
    return value


class RGB:
    """Red, green and blue channels."""
    __slots__ = ()

    @property
    def r(self):
        return self[0]

    @r.setter
    def r(self, value) -> None:
        self[0] = value

    @property
    def g(self):
        return self[1]

    @g.setter
    def g(self, value) -> None:
        self[1] = value

    @property
    def b(self):
        return self[2]

    @b.setter
    def b(self, value) -> None:
        self[2] = value

    @classmethod
    def rgb(cls, r, g, b, *, dtype=np.uint8):
        return cls(r, g, b, dtype=dtype)

    @classmethod
    def from_hex(cls, value: int):
        """
        Create a colour from a `0xRRGGBB` value.

            >>> Vector3.from_hex(0xFF8000).tolist()
            [255, 128, 0]
        """
        value = _check_hex(value, 24)
        return cls.rgb((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    def to_hex(self) -> int:
        """Pack the channels into a `0xRRGGBB` value."""
        r, g, b = _channel_bytes(self, 3)
        return (r << 16) | (g << 8) | b


class RGBA(RGB):
    """Adds the alpha channel."""
    __slots__ = ()

    @property
    def a(self):
        return self[3]

    @a.setter
    def a(self, value) -> None:
        self[3] = value

    @classmethod
    def rgba(cls, r, g, b, a, *, dtype=np.uint8):
        return cls(r, g, b, a, dtype=dtype)

    @classmethod
    def from_hex(cls, value: int):
        """Create a colour from a `0xRRGGBBAA` value."""
        value = _check_hex(value, 32)
        return cls.rgba((value >> 24) & 0xFF, (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    def to_hex(self) -> int:
        """Pack the channels into a `0xRRGGBBAA` value."""
        r, g, b, a = _channel_bytes(self, 4)
        return (r << 24) | (g << 16) | (b << 8) | a
