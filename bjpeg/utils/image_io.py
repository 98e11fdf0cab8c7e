"""Image I/O and reference JPEG codec using OpenCV."""

from pathlib import Path
from typing import Literal, Optional

import cv2
import numpy as np

SUBSAMPLING_FACTORS = {
    '4:4:4': cv2.IMWRITE_JPEG_SAMPLING_FACTOR_444,
    '4:2:2': cv2.IMWRITE_JPEG_SAMPLING_FACTOR_422,
    '4:2:0': cv2.IMWRITE_JPEG_SAMPLING_FACTOR_420,
    '4:4:0': cv2.IMWRITE_JPEG_SAMPLING_FACTOR_440,
    '4:1:1': cv2.IMWRITE_JPEG_SAMPLING_FACTOR_411,
}


def read_bytes(path: str) -> bytes:
    """Load a file's raw bytes."""
    return Path(path).read_bytes()


def save_image(image: np.ndarray, path: str) -> None:
    """Save a gray (H, W) or RGB (H, W, 3) image."""
    if image.ndim == 3:
        image = cv2.cvtColor(image, cv2.COLOR_RGB2BGR)
    if not cv2.imwrite(path, image):
        raise ValueError(f"Could not save image to {path}")


def encode_jpeg(
    image: np.ndarray,
    quality: int = 90,
    subsampling_mode: Literal['4:4:4', '4:2:2', '4:2:0', '4:4:0', '4:1:1'] = '4:2:0',
    restart_interval: int = 0,
    progressive: bool = False,
) -> bytes:
    """Encode gray or RGB pixels with libjpeg through OpenCV."""
    if subsampling_mode not in SUBSAMPLING_FACTORS:
        raise ValueError(f"Unknown subsampling mode: {subsampling_mode}")
    if image.ndim == 3:
        image = cv2.cvtColor(image, cv2.COLOR_RGB2BGR)
    params = [
        cv2.IMWRITE_JPEG_QUALITY, int(quality),
        cv2.IMWRITE_JPEG_SAMPLING_FACTOR, SUBSAMPLING_FACTORS[subsampling_mode],
        cv2.IMWRITE_JPEG_RST_INTERVAL, int(restart_interval),
        cv2.IMWRITE_JPEG_PROGRESSIVE, int(progressive),
    ]
    ok, buf = cv2.imencode('.jpg', image, params)
    if not ok:
        raise ValueError("OpenCV could not encode the image")
    return buf.tobytes()


def decode_with_opencv(data: bytes) -> Optional[np.ndarray]:
    """Reference decode: (H, W) gray or (H, W, 3) RGB, None if OpenCV rejects it."""
    img = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
    if img is None:
        return None
    if img.ndim == 3:
        img = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
    return img
