"""Floating-point reference IDCT for accuracy checks."""

import numpy as np
from scipy.fft import idctn


def reference_idct(coeffs: np.ndarray) -> np.ndarray:
    """Orthonormal 2D IDCT (Type-III), level shift (+128), round and clip."""
    spatial = idctn(np.asarray(coeffs, dtype=np.float64), type=2, norm='ortho')
    return np.clip(np.round(spatial + 128.0), 0, 255).astype(np.uint8)
