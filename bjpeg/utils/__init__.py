"""Shared utilities."""

from .constants import ZIGZAG_ORDER
from .metrics import compute_psnr, max_abs_error, Timer
from .test_images import generate_colored_checkerboard, generate_gradient, generate_demo_image
from .image_io import read_bytes, save_image, encode_jpeg, decode_with_opencv

__all__ = [
    'ZIGZAG_ORDER',
    'compute_psnr',
    'max_abs_error',
    'Timer',
    'generate_colored_checkerboard',
    'generate_gradient',
    'generate_demo_image',
    'read_bytes',
    'save_image',
    'encode_jpeg',
    'decode_with_opencv',
]
