"""Entropy decoding of one 8x8 block."""

from typing import Tuple

import numpy as np

from bjpeg.engines.huffman import HuffmanTable
from bjpeg.engines.idct import idct_8x8
from bjpeg.errors import DecodeResult
from bjpeg.models.component import Component
from bjpeg.models.decoder_state import DecoderState
from bjpeg.utils.constants import VLC_BITS, ZIGZAG_ORDER


def extend(value: int, n_bits: int) -> int:
    """Sign-extend an `n_bits` magnitude (itu-t81 F.12)."""
    if n_bits and value < (1 << (n_bits - 1)):
        value += (-1 << n_bits) + 1
    return value


def decode_vlc(state: DecoderState, table: HuffmanTable) -> Tuple[int, int]:
    """Decode one symbol and its trailing magnitude bits.

    Returns (value, symbol). A window with no matching code records a
    syntax error and yields (0, 0), which callers treat as end-of-block.
    """
    reader = state.reader
    length, symbol = table.lookup(reader.peek(VLC_BITS))
    if not length:
        state.record(DecodeResult.SYNTAX_ERROR)
        return 0, 0
    reader.consume(length)
    n_bits = symbol & 0x0F
    if not n_bits:
        return 0, symbol
    return extend(reader.read(n_bits), n_bits), symbol


def decode_coefficients(state: DecoderState, c: Component) -> np.ndarray:
    """Dequantized, de-zigzagged (8, 8) coefficients of the next block."""
    qt = state.qtab[c.qtsel]
    block = np.zeros(64, dtype=np.int64)

    value, _ = decode_vlc(state, state.vlctab[c.dctabsel])
    c.dcpred += value
    block[0] = c.dcpred * qt[0]

    coef = 0
    while coef < 63:
        value, code = decode_vlc(state, state.vlctab[c.actabsel])
        if not code:
            break  # EOB
        if not code & 0x0F and code != 0xF0:
            state.fail(DecodeResult.SYNTAX_ERROR, f"bad AC symbol 0x{code:02X}")
        coef += (code >> 4) + 1
        if coef > 63:
            state.fail(DecodeResult.SYNTAX_ERROR, "AC coefficient index past 63")
        block[ZIGZAG_ORDER[coef]] = value * qt[coef]
    return block.reshape(8, 8)


def decode_block(state: DecoderState, c: Component, row: int, col: int) -> None:
    """Decode one block and write its samples at (row, col) of the plane."""
    coeffs = decode_coefficients(state, c)
    c.pixels[row:row + 8, col:col + 8] = idct_8x8(coeffs)
