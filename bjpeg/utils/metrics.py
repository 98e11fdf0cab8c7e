"""Metrics: PSNR against a reference decode, timing."""

import time
import numpy as np
from skimage.metrics import peak_signal_noise_ratio


def compute_psnr(reference: np.ndarray, decoded: np.ndarray) -> float:
    """PSNR in dB over all channels; inf for identical images."""
    if reference.shape != decoded.shape:
        raise ValueError(f"Shape mismatch: {reference.shape} vs {decoded.shape}")
    if np.array_equal(reference, decoded):
        return float('inf')
    return float(peak_signal_noise_ratio(reference, decoded, data_range=255))


def max_abs_error(reference: np.ndarray, decoded: np.ndarray) -> int:
    return int(np.max(np.abs(reference.astype(np.int16) - decoded.astype(np.int16))))


class Timer:
    """Simple timer for decode runtime."""

    def __init__(self):
        self.decode_time_ms = 0.0

    def measure_decode(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.decode_time_ms = (time.perf_counter() - start) * 1000.0
        return result
