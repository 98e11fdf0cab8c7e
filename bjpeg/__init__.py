"""bjpeg - baseline JPEG decoder with fixed-point IDCT and bicubic chroma upsampling."""

from .errors import (
    DecodeResult,
    JPEGDecodeError,
    NotAJPEGError,
    UnsupportedJPEGError,
    JPEGSyntaxError,
    DecoderMemoryError,
    DecoderInternalError,
)
from .models import DecodedImage, DecoderOptions
from .engines.decoder import Decoder, decode_jpeg

__version__ = '1.0.0'

__all__ = [
    'DecodeResult',
    'JPEGDecodeError',
    'NotAJPEGError',
    'UnsupportedJPEGError',
    'JPEGSyntaxError',
    'DecoderMemoryError',
    'DecoderInternalError',
    'DecodedImage',
    'DecoderOptions',
    'Decoder',
    'decode_jpeg',
]
