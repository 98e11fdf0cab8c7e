"""JPEG constants shared by the engines."""

import numpy as np

# Linear coefficient index -> position in the row-major 8x8 block
ZIGZAG_ORDER = np.array([
     0,  1,  8, 16,  9,  2,  3, 10,
    17, 24, 32, 25, 18, 11,  4,  5,
    12, 19, 26, 33, 40, 48, 41, 34,
    27, 20, 13,  6,  7, 14, 21, 28,
    35, 42, 49, 56, 57, 50, 43, 36,
    29, 22, 15, 23, 30, 37, 44, 51,
    58, 59, 52, 45, 38, 31, 39, 46,
    53, 60, 61, 54, 47, 55, 62, 63,
], dtype=np.intp)

# itu-t81 table B.1
MARKER_PREFIX = 0xFF
SOF0 = 0xC0
DHT = 0xC4
RST0 = 0xD0
SOI = 0xD8
EOI = 0xD9
SOS = 0xDA
DQT = 0xDB
DRI = 0xDD
APP0 = 0xE0
COM = 0xFE

# Huffman lookup window
VLC_BITS = 16
VLC_SIZE = 1 << VLC_BITS

# IDCT weights: 2048 * sqrt(2) * cos(k * pi / 16)
W1 = 2841
W2 = 2676
W3 = 2408
W5 = 1609
W6 = 1108
W7 = 565

# Chroma filter taps, scaled by 128
CF4A, CF4B, CF4C, CF4D = -9, 111, 29, -3
CF3A, CF3B, CF3C = 28, 109, -9
CF3X, CF3Y, CF3Z = 104, 27, -3
CF2A, CF2B = 139, -11
