"""Mutable state owned by exactly one decode call."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

import numpy as np

from bjpeg.errors import DecodeResult, error_for
from bjpeg.models.component import Component
from bjpeg.models.decoder_options import DecoderOptions

if TYPE_CHECKING:
    from bjpeg.engines.bit_reader import BitReader
    from bjpeg.engines.huffman import HuffmanTable


@dataclass
class DecoderState:
    """Tables, geometry and components for one JPEG stream.

    `error` is sticky: the first failure recorded is the one reported,
    and every later step must stop as soon as it is set.
    """

    options: DecoderOptions = field(default_factory=DecoderOptions)
    reader: Optional['BitReader'] = None
    width: int = 0
    height: int = 0
    ncomp: int = 0
    mbwidth: int = 0
    mbheight: int = 0
    mbsizex: int = 0
    mbsizey: int = 0
    components: List[Component] = field(default_factory=list)
    qtab: np.ndarray = field(default_factory=lambda: np.zeros((4, 64), dtype=np.int64))
    qtused: int = 0
    qtavail: int = 0
    vlctab: List[Optional['HuffmanTable']] = field(default_factory=lambda: [None] * 4)
    rstinterval: int = 0
    finished: bool = False
    error: DecodeResult = DecodeResult.OK

    def record(self, result: DecodeResult) -> None:
        """Remember a failure unless an earlier one is already set."""
        if self.error == DecodeResult.OK:
            self.error = result

    def fail(self, result: DecodeResult, message: str = ""):
        """Record `result` and abort with whichever failure came first."""
        self.record(result)
        raise error_for(self.error, message)

    def check(self) -> None:
        """Abort if a failure was recorded without raising."""
        if self.error != DecodeResult.OK:
            raise error_for(self.error)
