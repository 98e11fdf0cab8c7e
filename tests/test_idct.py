"""Tests for the fixed-point IDCT."""

import numpy as np
import pytest
from bjpeg.engines.idct import idct_8x8, row_idct, col_idct
from bjpeg.utils.reference import reference_idct


def dc_block(dc):
    block = np.zeros((8, 8), dtype=np.int64)
    block[0, 0] = dc
    return block


def test_shortcut_matches_full_butterfly_for_every_dc():
    """Zero-AC shortcut must give the exact butterfly output for all DC values."""
    for dc in range(-1024, 1024):
        block = dc_block(dc)
        assert np.array_equal(idct_8x8(block), idct_8x8(block, shortcut=False)), dc


def test_row_and_column_passes_match_without_shortcut():
    """Per-row and per-column shortcuts match the full butterfly."""
    rng = np.random.default_rng(7)
    for _ in range(200):
        block = np.zeros((8, 8), dtype=np.int64)
        # sparse blocks so that some rows/columns take the shortcut
        rows = rng.choice(8, size=3, replace=False)
        block[rows, rng.integers(0, 8, size=3)] = rng.integers(-300, 300, size=3)
        block[:, 0] = rng.integers(-500, 500, size=8)
        assert np.array_equal(row_idct(block), row_idct(block, shortcut=False))
        rows_out = row_idct(block)
        assert np.array_equal(col_idct(rows_out), col_idct(rows_out, shortcut=False))


@pytest.mark.parametrize("k", [-128, -100, -1, 0, 1, 72, 127])
def test_flat_block_level(k):
    """A dequantized DC of 8k reconstructs to a flat 128 + k block."""
    out = idct_8x8(dc_block(8 * k))
    assert out.dtype == np.uint8
    assert np.all(out == 128 + k)


def test_output_is_clamped():
    """Samples clamp to [0, 255]."""
    assert np.all(idct_8x8(dc_block(4000)) == 255)
    assert np.all(idct_8x8(dc_block(-4000)) == 0)


def test_close_to_float_reference():
    """Fixed-point result stays within 2 levels of the orthonormal float IDCT."""
    rng = np.random.default_rng(1180)
    for _ in range(300):
        block = np.zeros((8, 8), dtype=np.int64)
        block[0, 0] = rng.integers(-600, 600)
        idx = rng.integers(0, 8, size=(6, 2))
        block[idx[:, 0], idx[:, 1]] = rng.integers(-120, 120, size=6)
        diff = idct_8x8(block).astype(int) - reference_idct(block).astype(int)
        assert np.abs(diff).max() <= 2


def test_single_horizontal_frequency_varies_along_rows_only():
    """A pure horizontal term gives identical rows."""
    block = dc_block(0)
    block[0, 1] = 200
    out = idct_8x8(block).astype(int)
    assert np.all(out == out[0])
    assert out[0, 0] > out[0, 7]
