"""Tests for the command line front end."""

import importlib
import warnings

import cv2
import main
from main import run_cli
from bjpeg.utils.image_io import encode_jpeg
from bjpeg.utils.test_images import generate_gradient


def write_jpeg(tmp_path, name='in.jpg', **kwargs):
    path = tmp_path / name
    path.write_bytes(encode_jpeg(generate_gradient(24, 40), **kwargs))
    return str(path)


def test_help(capsys):
    """No arguments or --help prints usage and exits 0."""
    assert run_cli([]) == 0
    assert run_cli(['--help']) == 0
    assert 'Usage' in capsys.readouterr().out


def test_decode_and_save(tmp_path, capsys):
    """Decoding a file and saving a PNG of the same size."""
    out = str(tmp_path / 'out.png')
    assert run_cli([write_jpeg(tmp_path), '-o', out]) == 0
    text = capsys.readouterr().out
    assert '40x24 RGB' in text
    assert cv2.imread(out).shape == (24, 40, 3)


def test_compare_reports_psnr(tmp_path, capsys):
    """--compare prints PSNR against OpenCV."""
    assert run_cli([write_jpeg(tmp_path), '--compare', '--nearest']) == 0
    assert 'PSNR' in capsys.readouterr().out


def test_synthetic(capsys):
    """--synthetic encodes a generated image and compares it."""
    assert run_cli(['--synthetic', '60']) == 0
    text = capsys.readouterr().out
    assert 'Quality:   60' in text
    assert 'PSNR' in text


def test_failed_decode_returns_one(tmp_path, capsys):
    """Bad input exits 1 with the result code name."""
    path = tmp_path / 'bad.jpg'
    path.write_bytes(b'not a jpeg')
    assert run_cli([str(path)]) == 1
    assert 'NO_JPEG' in capsys.readouterr().out


def test_missing_output_path_is_usage_error():
    """-o without a path is a usage error."""
    assert run_cli(['in.jpg', '-o']) == 2


def test_import_keeps_runtime_warnings_visible():
    """Loading the CLI must not silence numpy overflow warnings."""
    with warnings.catch_warnings():
        warnings.resetwarnings()
        importlib.reload(main)
        assert not any(action == 'ignore' and category is RuntimeWarning
                       for action, _, category, _, _ in warnings.filters)
