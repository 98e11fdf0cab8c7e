"""Huffman VLC tables flattened to a 16-bit lookup."""

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from bjpeg.errors import JPEGSyntaxError
from bjpeg.utils.constants import VLC_BITS, VLC_SIZE


@dataclass
class HuffmanTable:
    """`lengths[w]`/`symbols[w]` decode the code that prefixes 16-bit window `w`.

    A length of 0 means no code of 16 bits or fewer matches.
    """

    lengths: np.ndarray
    symbols: np.ndarray

    def lookup(self, window: int) -> Tuple[int, int]:
        return int(self.lengths[window]), int(self.symbols[window])


def build_huffman_table(counts: Sequence[int], symbols: Sequence[int]) -> HuffmanTable:
    """Spread canonical codes over the 2^16-entry window table.

    `counts[i]` is the number of codes of length i + 1 (the DHT BITS list)
    and `symbols` the HUFFVAL bytes in code order. Over-subscribed code
    space is a syntax error; unused code space is left as length 0.
    """
    if len(counts) != 16:
        raise ValueError(f"Expected 16 code-length counts, got {len(counts)}")
    n_codes = sum(counts)
    if n_codes > len(symbols):
        raise JPEGSyntaxError("DHT has fewer symbols than codes")

    remain = VLC_SIZE
    code_lengths, spreads = [], []
    for codelen, count in enumerate(counts, start=1):
        if not count:
            continue
        spread = 1 << (VLC_BITS - codelen)
        remain -= count * spread
        if remain < 0:
            raise JPEGSyntaxError("over-subscribed Huffman table")
        code_lengths += [codelen] * count
        spreads += [spread] * count

    used = VLC_SIZE - remain
    lengths = np.zeros(VLC_SIZE, dtype=np.uint8)
    values = np.zeros(VLC_SIZE, dtype=np.uint8)
    if n_codes:
        lengths[:used] = np.repeat(np.array(code_lengths, dtype=np.uint8), spreads)
        values[:used] = np.repeat(np.array(symbols[:n_codes], dtype=np.uint8), spreads)
    return HuffmanTable(lengths, values)
