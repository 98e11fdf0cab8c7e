"""Decoder engines - pure computation, no I/O."""

from .bit_reader import BitReader
from .huffman import HuffmanTable, build_huffman_table
from .idct import idct_8x8, row_idct, col_idct
from .upsampler import upsample_h, upsample_v, upsample_bicubic, upsample_nearest
from .color_converter import ycbcr_to_rgb, remove_stride
from .decoder import Decoder, decode_jpeg

__all__ = [
    'BitReader',
    'HuffmanTable',
    'build_huffman_table',
    'idct_8x8',
    'row_idct',
    'col_idct',
    'upsample_h',
    'upsample_v',
    'upsample_bicubic',
    'upsample_nearest',
    'ycbcr_to_rgb',
    'remove_stride',
    'Decoder',
    'decode_jpeg',
]
