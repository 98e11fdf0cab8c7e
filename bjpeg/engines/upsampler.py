"""Chroma upsampling: bicubic 2x filters and pixel replication."""

import numpy as np

from bjpeg.engines.idct import clip
from bjpeg.models.component import Component
from bjpeg.utils.constants import (
    CF2A, CF2B, CF3A, CF3B, CF3C, CF3X, CF3Y, CF3Z, CF4A, CF4B, CF4C, CF4D,
)


def _cf(x: np.ndarray) -> np.ndarray:
    return clip((x + 64) >> 7)


def double_width(lines: np.ndarray, n: int) -> np.ndarray:
    """Filter each row of `lines` to twice `n` samples.

    The interior reads columns [0, n); the right-hand edge taps read the
    last three columns of `lines`, which may extend past `n`.
    """
    a = lines.astype(np.int32)
    out = np.empty((a.shape[0], n << 1), dtype=np.uint8)

    out[:, 0] = _cf(CF2A * a[:, 0] + CF2B * a[:, 1])
    out[:, 1] = _cf(CF3X * a[:, 0] + CF3Y * a[:, 1] + CF3Z * a[:, 2])
    out[:, 2] = _cf(CF3A * a[:, 0] + CF3B * a[:, 1] + CF3C * a[:, 2])

    p0, p1, p2, p3 = a[:, 0:n - 3], a[:, 1:n - 2], a[:, 2:n - 1], a[:, 3:n]
    out[:, 3:2 * n - 3:2] = _cf(CF4A * p0 + CF4B * p1 + CF4C * p2 + CF4D * p3)
    out[:, 4:2 * n - 2:2] = _cf(CF4D * p0 + CF4C * p1 + CF4B * p2 + CF4A * p3)

    out[:, -3] = _cf(CF3A * a[:, -1] + CF3B * a[:, -2] + CF3C * a[:, -3])
    out[:, -2] = _cf(CF3X * a[:, -1] + CF3Y * a[:, -2] + CF3Z * a[:, -3])
    out[:, -1] = _cf(CF2A * a[:, -1] + CF2B * a[:, -2])
    return out


def upsample_h(c: Component) -> None:
    """Double the plane's width in place."""
    c.pixels = double_width(c.pixels[:c.height], c.width)
    c.width <<= 1
    c.stride = c.width


def upsample_v(c: Component) -> None:
    """Double the plane's height in place."""
    c.pixels = np.ascontiguousarray(double_width(c.pixels[:c.height, :c.width].T, c.height).T)
    c.height <<= 1
    c.stride = c.width


def upsample_bicubic(c: Component, width: int, height: int) -> None:
    """Apply 2x passes until the plane covers width x height."""
    while c.width < width or c.height < height:
        if c.width < width:
            upsample_h(c)
        if c.height < height:
            upsample_v(c)


def upsample_nearest(c: Component, width: int, height: int) -> None:
    """Replicate samples by the power-of-two factors needed to cover the image."""
    xshift = yshift = 0
    while c.width << xshift < width:
        xshift += 1
    while c.height << yshift < height:
        yshift += 1
    plane = c.pixels[:c.height, :c.width]
    c.pixels = np.repeat(np.repeat(plane, 1 << yshift, axis=0), 1 << xshift, axis=1)
    c.width <<= xshift
    c.height <<= yshift
    c.stride = c.width
