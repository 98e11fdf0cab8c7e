"""Byte and bit access to the JPEG buffer.

Segment parsing uses the byte-level helpers (`byte`, `u16`, `skip`,
`read_length`); the entropy-coded scan uses `peek`/`consume`/`read`, which
strip byte stuffing and stop at EOI. Errors found here are recorded on the
owning DecoderState instead of raised, except where a header field would be
read past the end of the buffer.
"""

import logging

from bjpeg.errors import DecodeResult
from bjpeg.utils.constants import EOI, MARKER_PREFIX, RST0

logger = logging.getLogger(__name__)


class BitReader:
    """Cursor over one in-memory JPEG stream."""

    def __init__(self, data: bytes, state):
        self.data = bytes(data)
        self.state = state
        self.pos = 0
        self.size = len(self.data)
        self.length = 0
        self.buf = 0
        self.bufbits = 0
        self.eoi_seen = False
        self.exhausted = False

    # --- segment framing ---

    def byte(self, offset: int = 0) -> int:
        """Unconsumed byte at `offset`; running off the end is a syntax error."""
        if offset >= self.size:
            self.state.fail(DecodeResult.SYNTAX_ERROR, "unexpected end of segment")
        return self.data[self.pos + offset]

    def u16(self, offset: int = 0) -> int:
        return (self.byte(offset) << 8) | self.byte(offset + 1)

    def skip(self, count: int) -> None:
        self.pos += count
        self.size -= count
        self.length -= count
        if self.size < 0:
            self.state.record(DecodeResult.SYNTAX_ERROR)

    def read_length(self) -> None:
        """Load the current segment's payload length and step over it."""
        if self.size < 2:
            self.state.fail(DecodeResult.SYNTAX_ERROR, "truncated segment length")
        self.length = self.u16()
        if self.length > self.size:
            self.state.fail(DecodeResult.SYNTAX_ERROR, "segment longer than input")
        self.skip(2)

    def skip_segment(self) -> None:
        self.read_length()
        self.skip(self.length)

    # --- entropy-coded data ---

    def peek(self, bits: int) -> int:
        """Next `bits` bits (at most 16), right-aligned, without consuming them."""
        if not bits:
            return 0
        while self.bufbits < bits:
            if self.size <= 0:
                # past the end: pad with 1-bits
                self.exhausted = True
                self.buf = (self.buf << 8) | 0xFF
                self.bufbits += 8
                continue
            newbyte = self.data[self.pos]
            self.pos += 1
            self.size -= 1
            self.bufbits += 8
            self.buf = (self.buf << 8) | newbyte
            if newbyte != MARKER_PREFIX:
                continue
            if not self.size:
                self.state.record(DecodeResult.SYNTAX_ERROR)
                continue
            marker = self.data[self.pos]
            self.pos += 1
            self.size -= 1
            if marker in (0x00, MARKER_PREFIX):
                continue
            if marker == EOI:
                self.eoi_seen = True
                self.size = 0
            elif marker & 0xF8 == RST0:
                logger.debug("RST%d in scan data", marker & 7)
                self.buf = (self.buf << 8) | marker
                self.bufbits += 8
            else:
                self.state.record(DecodeResult.SYNTAX_ERROR)
        return (self.buf >> (self.bufbits - bits)) & ((1 << bits) - 1)

    def consume(self, bits: int) -> None:
        if self.bufbits < bits:
            self.peek(bits)
        self.bufbits -= bits
        self.buf &= (1 << self.bufbits) - 1

    def read(self, bits: int) -> int:
        value = self.peek(bits)
        self.consume(bits)
        return value

    def align_to_byte(self) -> None:
        self.bufbits &= 0xF8
        self.buf &= (1 << self.bufbits) - 1
