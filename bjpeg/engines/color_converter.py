"""Output conversion: fixed-point YCbCr to RGB, or stride removal for gray."""

import numpy as np

from bjpeg.engines.idct import clip


def ycbcr_to_rgb(y: np.ndarray, cb: np.ndarray, cr: np.ndarray) -> np.ndarray:
    """BT.601 YCbCr planes (same shape) -> packed (H, W, 3) uint8 RGB."""
    y = y.astype(np.int32) << 8
    cb = cb.astype(np.int32) - 128
    cr = cr.astype(np.int32) - 128
    r = (y + 359 * cr + 128) >> 8
    g = (y - 88 * cb - 183 * cr + 128) >> 8
    b = (y + 454 * cb + 128) >> 8
    return clip(np.stack([r, g, b], axis=-1))


def remove_stride(plane: np.ndarray, width: int, height: int) -> np.ndarray:
    """Drop MCU padding so rows are exactly `width` bytes."""
    return np.ascontiguousarray(plane[:height, :width])
