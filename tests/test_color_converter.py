"""Tests for YCbCr -> RGB conversion and stride removal."""

import numpy as np
from bjpeg.engines.color_converter import remove_stride, ycbcr_to_rgb


def test_neutral_chroma_gives_gray():
    """Cb = Cr = 128 gives R = G = B = Y exactly."""
    y = np.arange(256, dtype=np.uint8).reshape(16, 16)
    neutral = np.full_like(y, 128)
    rgb = ycbcr_to_rgb(y, neutral, neutral)
    assert rgb.shape == (16, 16, 3)
    assert rgb.dtype == np.uint8
    for ch in range(3):
        assert np.array_equal(rgb[:, :, ch], y)


def test_known_colors():
    """Primary colours convert within 2 levels."""
    y = np.array([[76, 150, 29]], dtype=np.uint8)
    cb = np.array([[85, 44, 255]], dtype=np.uint8)
    cr = np.array([[255, 21, 107]], dtype=np.uint8)
    rgb = ycbcr_to_rgb(y, cb, cr).astype(int)
    # BT.601 red, green, blue
    assert np.abs(rgb[0, 0] - [254, 0, 0]).max() <= 2
    assert np.abs(rgb[0, 1] - [0, 255, 0]).max() <= 2
    assert np.abs(rgb[0, 2] - [0, 0, 255]).max() <= 2


def test_channels_are_clamped():
    """Out-of-range channels clamp to [0, 255]."""
    y = np.array([[255, 0]], dtype=np.uint8)
    cb = np.array([[255, 0]], dtype=np.uint8)
    cr = np.array([[255, 0]], dtype=np.uint8)
    rgb = ycbcr_to_rgb(y, cb, cr)
    assert rgb.min() >= 0 and rgb.max() <= 255
    assert rgb[0, 0, 0] == 255 and rgb[0, 1, 0] == 0


def test_remove_stride():
    """Cropping drops MCU padding and returns contiguous rows."""
    plane = np.arange(4 * 16, dtype=np.uint8).reshape(4, 16)
    out = remove_stride(plane, 13, 3)
    assert out.shape == (3, 13)
    assert out.flags['C_CONTIGUOUS']
    assert out.tobytes() == b''.join(plane[r, :13].tobytes() for r in range(3))
