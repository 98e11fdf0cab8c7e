"""Tests for chroma upsampling."""

import numpy as np
import pytest
from bjpeg.engines.upsampler import (
    double_width, upsample_bicubic, upsample_h, upsample_nearest, upsample_v,
)
from bjpeg.models.component import Component


def make_component(width, height, stride=None, rows=None, fill=None, seed=0):
    stride = stride or width
    rows = rows or height
    if fill is None:
        pixels = np.random.default_rng(seed).integers(0, 256, (rows, stride), dtype=np.uint8)
    else:
        pixels = np.full((rows, stride), fill, dtype=np.uint8)
    return Component(cid=2, ssx=1, ssy=1, qtsel=0, width=width, height=height, stride=stride, pixels=pixels)


def _clip(x):
    return min(max((x + 64) >> 7, 0), 255)


def scalar_double_row(row, n):
    """Sample-by-sample version of the 2x filter for one row."""
    p = [int(v) for v in row]
    out = [
        _clip(139 * p[0] - 11 * p[1]),
        _clip(104 * p[0] + 27 * p[1] - 3 * p[2]),
        _clip(28 * p[0] + 109 * p[1] - 9 * p[2]),
    ]
    for x in range(n - 3):
        out.append(_clip(-9 * p[x] + 111 * p[x + 1] + 29 * p[x + 2] - 3 * p[x + 3]))
        out.append(_clip(-3 * p[x] + 29 * p[x + 1] + 111 * p[x + 2] - 9 * p[x + 3]))
    out += [
        _clip(28 * p[-1] + 109 * p[-2] - 9 * p[-3]),
        _clip(104 * p[-1] + 27 * p[-2] - 3 * p[-3]),
        _clip(139 * p[-1] - 11 * p[-2]),
    ]
    return out


@pytest.mark.parametrize("n", [3, 4, 7, 16])
def test_double_width_matches_scalar_filter(n):
    """Vectorized filter matches the per-sample taps."""
    lines = np.random.default_rng(n).integers(0, 256, (5, n), dtype=np.uint8)
    out = double_width(lines, n)
    assert out.shape == (5, 2 * n)
    for row_in, row_out in zip(lines, out):
        assert row_out.tolist() == scalar_double_row(row_in, n)


def test_horizontal_edge_reads_stride_padding():
    """Right-edge taps use the padded row end."""
    c = make_component(width=5, height=2, stride=8)
    # right-hand edge taps come from the padded end of each row
    expected = [scalar_double_row(row, 5) for row in c.pixels[:2]]
    cropped = [scalar_double_row(row[:5], 5) for row in c.pixels[:2]]
    upsample_h(c)
    assert c.pixels.tolist() == expected
    assert expected != cropped


def test_upsample_h_shape():
    """Horizontal pass doubles width only."""
    c = make_component(width=6, height=4, stride=8, rows=8)
    upsample_h(c)
    assert (c.width, c.height, c.stride) == (12, 4, 12)
    assert c.pixels.shape == (4, 12)


def test_upsample_v_shape_and_filter():
    """Vertical pass is the horizontal filter down columns."""
    c = make_component(width=4, height=6, stride=8, rows=8)
    cols = c.pixels[:6, :4].T.copy()
    upsample_v(c)
    assert (c.width, c.height, c.stride) == (4, 12, 4)
    assert c.pixels.shape == (12, 4)
    for x in range(4):
        assert c.pixels[:, x].tolist() == scalar_double_row(cols[x], 6)


@pytest.mark.parametrize("value", [0, 17, 128, 255])
def test_constant_plane_stays_constant(value):
    """Taps sum to 128, so flat planes are unchanged."""
    c = make_component(width=5, height=5, stride=8, rows=8, fill=value)
    upsample_bicubic(c, 20, 20)
    assert np.all(c.pixels == value)


@pytest.mark.parametrize("ratio_x", [1, 2, 4, 8])
@pytest.mark.parametrize("ratio_y", [1, 2, 4, 8])
def test_repeated_passes_reach_target_without_overshoot(ratio_x, ratio_y):
    """Repeated 2x passes reach the target for ratios 1..8."""
    width, height = 67, 45
    cw = -(-width // ratio_x)
    ch = -(-height // ratio_y)
    c = make_component(width=cw, height=ch, stride=cw + 3, rows=ch + 5)
    upsample_bicubic(c, width, height)
    assert c.width == cw * ratio_x
    assert c.height == ch * ratio_y
    assert width <= c.width < width + ratio_x
    assert height <= c.height < height + ratio_y
    if ratio_x * ratio_y > 1:
        assert c.pixels.shape == (c.height, c.width)


def test_nearest_replicates_samples():
    """Nearest mode repeats each sample."""
    c = make_component(width=3, height=2)
    src = c.pixels.copy()
    upsample_nearest(c, 12, 4)
    assert (c.width, c.height, c.stride) == (12, 4, 12)
    assert np.array_equal(c.pixels, np.repeat(np.repeat(src, 2, axis=0), 4, axis=1))
