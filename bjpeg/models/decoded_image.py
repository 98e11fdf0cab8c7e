"""Decoded raster returned to callers."""

from dataclasses import dataclass

import numpy as np


@dataclass
class DecodedImage:
    """8-bit grayscale (H, W) or packed RGB (H, W, 3) pixels."""

    width: int
    height: int
    pixels: np.ndarray

    @property
    def is_color(self) -> bool:
        return self.pixels.ndim == 3

    @property
    def data(self) -> bytes:
        """Row-major pixel bytes with no row padding."""
        return self.pixels.tobytes()

    @property
    def size(self) -> int:
        return self.pixels.nbytes
