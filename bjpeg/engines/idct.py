"""Fixed-point separable 8x8 inverse DCT.

Integer butterfly after the MPEG reference decoder: rows first with 11 bits
of headroom, then columns with level shift and clamping to 8 bits. Rows or
columns whose AC terms are all zero take a broadcast shortcut that yields
the same integers as the full butterfly.
"""

import numpy as np

from bjpeg.utils.constants import W1, W2, W3, W5, W6, W7


def clip(x: np.ndarray) -> np.ndarray:
    """Clamp to [0, 255] as uint8."""
    return np.clip(x, 0, 255).astype(np.uint8)


def _butterfly_rows(blk: np.ndarray) -> np.ndarray:
    x0 = (blk[:, 0] << 11) + 128
    x1 = blk[:, 4] << 11
    x2, x3, x4 = blk[:, 6], blk[:, 2], blk[:, 1]
    x5, x6, x7 = blk[:, 7], blk[:, 5], blk[:, 3]

    x8 = W7 * (x4 + x5)
    x4 = x8 + (W1 - W7) * x4
    x5 = x8 - (W1 + W7) * x5
    x8 = W3 * (x6 + x7)
    x6 = x8 - (W3 - W5) * x6
    x7 = x8 - (W3 + W5) * x7
    x8 = x0 + x1
    x0 = x0 - x1
    x1 = W6 * (x3 + x2)
    x2 = x1 - (W2 + W6) * x2
    x3 = x1 + (W2 - W6) * x3
    x1 = x4 + x6
    x4 = x4 - x6
    x6 = x5 + x7
    x5 = x5 - x7
    x7 = x8 + x3
    x8 = x8 - x3
    x3 = x0 + x2
    x0 = x0 - x2
    x2 = (181 * (x4 + x5) + 128) >> 8
    x4 = (181 * (x4 - x5) + 128) >> 8
    return np.stack([
        x7 + x1, x3 + x2, x0 + x4, x8 + x6,
        x8 - x6, x0 - x4, x3 - x2, x7 - x1,
    ], axis=1) >> 8


def _butterfly_cols(blk: np.ndarray) -> np.ndarray:
    x0 = (blk[0] << 8) + 8192
    x1 = blk[4] << 8
    x2, x3, x4 = blk[6], blk[2], blk[1]
    x5, x6, x7 = blk[7], blk[5], blk[3]

    x8 = W7 * (x4 + x5) + 4
    x4 = (x8 + (W1 - W7) * x4) >> 3
    x5 = (x8 - (W1 + W7) * x5) >> 3
    x8 = W3 * (x6 + x7) + 4
    x6 = (x8 - (W3 - W5) * x6) >> 3
    x7 = (x8 - (W3 + W5) * x7) >> 3
    x8 = x0 + x1
    x0 = x0 - x1
    x1 = W6 * (x3 + x2) + 4
    x2 = (x1 - (W2 + W6) * x2) >> 3
    x3 = (x1 + (W2 - W6) * x3) >> 3
    x1 = x4 + x6
    x4 = x4 - x6
    x6 = x5 + x7
    x5 = x5 - x7
    x7 = x8 + x3
    x8 = x8 - x3
    x3 = x0 + x2
    x0 = x0 - x2
    x2 = (181 * (x4 + x5) + 128) >> 8
    x4 = (181 * (x4 - x5) + 128) >> 8
    return (np.stack([
        x7 + x1, x3 + x2, x0 + x4, x8 + x6,
        x8 - x6, x0 - x4, x3 - x2, x7 - x1,
    ]) >> 14) + 128


def row_idct(blk: np.ndarray, shortcut: bool = True) -> np.ndarray:
    """1-D IDCT of each row of an (8, 8) int64 coefficient block."""
    blk = np.asarray(blk, dtype=np.int64)
    if not shortcut:
        return _butterfly_rows(blk)
    flat = ~blk[:, 1:].any(axis=1)
    dc = np.broadcast_to(blk[:, :1] << 3, blk.shape)
    if flat.all():
        return dc.copy()
    return np.where(flat[:, None], dc, _butterfly_rows(blk))


def col_idct(blk: np.ndarray, shortcut: bool = True) -> np.ndarray:
    """1-D IDCT down each column, level-shifted and clamped to uint8."""
    blk = np.asarray(blk, dtype=np.int64)
    if not shortcut:
        return clip(_butterfly_cols(blk))
    flat = ~blk[1:].any(axis=0)
    dc = np.broadcast_to(((blk[:1] + 32) >> 6) + 128, blk.shape)
    if flat.all():
        return clip(dc)
    return clip(np.where(flat[None, :], dc, _butterfly_cols(blk)))


def idct_8x8(coeffs: np.ndarray, shortcut: bool = True) -> np.ndarray:
    """Dequantized (8, 8) coefficients -> (8, 8) uint8 samples."""
    return col_idct(row_idct(coeffs, shortcut), shortcut)
