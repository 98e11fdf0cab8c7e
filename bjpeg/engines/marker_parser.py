"""Top-level segment handlers (itu-t81 annex B) and the baseline scan loop."""

import logging

import numpy as np

from bjpeg.engines.block_decoder import decode_block
from bjpeg.engines.huffman import build_huffman_table
from bjpeg.errors import DecodeResult
from bjpeg.models.component import Component
from bjpeg.models.decoder_state import DecoderState
from bjpeg.utils.constants import APP0, COM, DHT, DQT, DRI, EOI, MARKER_PREFIX, RST0, SOF0, SOS

logger = logging.getLogger(__name__)

MARKER_HANDLERS = dict()


def register_handler(marker: int):
    assert marker not in MARKER_HANDLERS

    def _register(handler):
        MARKER_HANDLERS[marker] = handler
        return handler

    return _register


def handler_for(marker: int):
    """Segment handler for `marker`, or None when the marker is unsupported."""
    if marker in MARKER_HANDLERS:
        return MARKER_HANDLERS[marker]
    if marker & 0xF0 == APP0:
        return skip_segment
    return None


@register_handler(COM)
def skip_segment(state: DecoderState) -> None:
    state.reader.skip_segment()


@register_handler(SOF0)
def parse_sof(state: DecoderState) -> None:
    # itu-t81 B.2.2
    r = state.reader
    r.read_length()
    if r.length < 9:
        state.fail(DecodeResult.SYNTAX_ERROR, "SOF segment too short")
    if r.byte(0) != 8:
        state.fail(DecodeResult.UNSUPPORTED, f"{r.byte(0)}-bit samples")
    state.height = r.u16(1)
    state.width = r.u16(3)
    state.ncomp = r.byte(5)
    r.skip(6)
    if not state.height:
        state.fail(DecodeResult.UNSUPPORTED, "height defined by DNL")
    if not state.width:
        state.fail(DecodeResult.SYNTAX_ERROR, "zero image width")
    if state.ncomp not in (1, 3):
        state.fail(DecodeResult.UNSUPPORTED, f"{state.ncomp} components")
    if r.length < state.ncomp * 3:
        state.fail(DecodeResult.SYNTAX_ERROR, "SOF segment too short")
    logger.debug("frame %dx%d, %d components", state.width, state.height, state.ncomp)

    ssxmax = ssymax = 0
    state.components = []
    for _ in range(state.ncomp):
        cid, sampling, qtsel = r.byte(0), r.byte(1), r.byte(2)
        ssx, ssy = sampling >> 4, sampling & 15
        if not ssx or not ssy:
            state.fail(DecodeResult.SYNTAX_ERROR, "zero sampling factor")
        if ssx & (ssx - 1) or ssy & (ssy - 1):
            state.fail(DecodeResult.UNSUPPORTED, f"sampling factor {ssx}x{ssy}")
        if qtsel & 0xFC:
            state.fail(DecodeResult.SYNTAX_ERROR, f"quantization table {qtsel}")
        r.skip(3)
        state.qtused |= 1 << qtsel
        ssxmax, ssymax = max(ssxmax, ssx), max(ssymax, ssy)
        state.components.append(Component(cid, ssx, ssy, qtsel))

    if state.ncomp == 1:
        c = state.components[0]
        c.ssx = c.ssy = ssxmax = ssymax = 1

    if state.options.max_pixels is not None and state.width * state.height > state.options.max_pixels:
        state.fail(DecodeResult.OUT_OF_MEMORY, f"{state.width}x{state.height} exceeds max_pixels")

    state.mbsizex = ssxmax << 3
    state.mbsizey = ssymax << 3
    state.mbwidth = (state.width + state.mbsizex - 1) // state.mbsizex
    state.mbheight = (state.height + state.mbsizey - 1) // state.mbsizey
    for c in state.components:
        c.width = (state.width * c.ssx + ssxmax - 1) // ssxmax
        c.height = (state.height * c.ssy + ssymax - 1) // ssymax
        c.stride = state.mbwidth * state.mbsizex * c.ssx // ssxmax
        if (c.width < 3 and c.ssx != ssxmax) or (c.height < 3 and c.ssy != ssymax):
            state.fail(DecodeResult.UNSUPPORTED, "subsampled plane smaller than 3 samples")
        rows = state.mbheight * state.mbsizey * c.ssy // ssymax
        c.pixels = np.zeros((rows, c.stride), dtype=np.uint8)
        logger.debug("  component %d: %dx%d sampling, plane %dx%d stride %d",
                     c.cid, c.ssx, c.ssy, c.width, c.height, c.stride)
    r.skip(r.length)


@register_handler(DHT)
def parse_dht(state: DecoderState) -> None:
    # itu-t81 B.2.4.2, several tables per segment
    r = state.reader
    r.read_length()
    while r.length >= 17:
        tc_th = r.byte(0)
        if tc_th & 0xEC:
            state.fail(DecodeResult.SYNTAX_ERROR, f"bad DHT class/id 0x{tc_th:02X}")
        if tc_th & 0x02:
            state.fail(DecodeResult.UNSUPPORTED, f"Huffman table id {tc_th & 0x0F}")
        slot = (tc_th | (tc_th >> 3)) & 3
        counts = [r.byte(i) for i in range(1, 17)]
        r.skip(17)
        n_codes = sum(counts)
        if r.length < n_codes:
            state.fail(DecodeResult.SYNTAX_ERROR, "DHT symbols run past segment")
        symbols = [r.byte(i) for i in range(n_codes)]
        state.vlctab[slot] = build_huffman_table(counts, symbols)
        r.skip(n_codes)
        logger.debug("Huffman table %s%d: %d codes", "AC" if slot & 2 else "DC", slot & 1, n_codes)
    if r.length:
        state.fail(DecodeResult.SYNTAX_ERROR, "trailing bytes in DHT")


@register_handler(DQT)
def parse_dqt(state: DecoderState) -> None:
    # itu-t81 B.2.4.1, 8-bit tables only
    r = state.reader
    r.read_length()
    while r.length >= 65:
        pq_tq = r.byte(0)
        if pq_tq & 0xFC:
            state.fail(DecodeResult.SYNTAX_ERROR, f"bad DQT precision/id 0x{pq_tq:02X}")
        state.qtavail |= 1 << pq_tq
        state.qtab[pq_tq] = [r.byte(i) for i in range(1, 65)]
        r.skip(65)
        logger.debug("quantization table %d", pq_tq)
    if r.length:
        state.fail(DecodeResult.SYNTAX_ERROR, "trailing bytes in DQT")


@register_handler(DRI)
def parse_dri(state: DecoderState) -> None:
    r = state.reader
    r.read_length()
    if r.length < 2:
        state.fail(DecodeResult.SYNTAX_ERROR, "DRI segment too short")
    state.rstinterval = r.u16()
    logger.debug("restart interval %d", state.rstinterval)
    r.skip(r.length)


@register_handler(EOI)
def end_without_scan(state: DecoderState) -> None:
    # EOI after a scan is consumed by decode_scan, so reaching it here means no image data
    state.fail(DecodeResult.SYNTAX_ERROR, "EOI before any scan")


def _parse_sos_header(state: DecoderState) -> None:
    # itu-t81 B.2.3
    r = state.reader
    r.read_length()
    if not state.ncomp:
        state.fail(DecodeResult.SYNTAX_ERROR, "SOS before SOF")
    if r.length < 4 + 2 * state.ncomp:
        state.fail(DecodeResult.SYNTAX_ERROR, "SOS segment too short")
    if r.byte(0) != state.ncomp:
        state.fail(DecodeResult.UNSUPPORTED, "non-interleaved scan")
    r.skip(1)
    for c in state.components:
        if r.byte(0) != c.cid:
            state.fail(DecodeResult.SYNTAX_ERROR, f"scan component {r.byte(0)} out of order")
        tables = r.byte(1)
        if tables & 0xEE:
            state.fail(DecodeResult.SYNTAX_ERROR, f"bad table selectors 0x{tables:02X}")
        c.dctabsel = tables >> 4
        c.actabsel = (tables & 1) | 2
        r.skip(2)
    if r.byte(0) != 0 or r.byte(1) != 63 or r.byte(2) != 0:
        state.fail(DecodeResult.UNSUPPORTED, "spectral selection or successive approximation")
    r.skip(r.length)

    if state.qtused & ~state.qtavail:
        state.fail(DecodeResult.SYNTAX_ERROR, "scan uses an undefined quantization table")
    for c in state.components:
        if state.vlctab[c.dctabsel] is None or state.vlctab[c.actabsel] is None:
            state.fail(DecodeResult.SYNTAX_ERROR, f"component {c.cid} uses an undefined Huffman table")


def _read_restart_marker(state: DecoderState, expected: int) -> None:
    r = state.reader
    r.align_to_byte()
    marker = r.read(16)
    if marker & 0xFFF8 != 0xFF00 | RST0 or marker & 7 != expected:
        state.fail(DecodeResult.SYNTAX_ERROR, f"expected RST{expected}, got 0x{marker:04X}")
    for c in state.components:
        c.dcpred = 0


def _check_end_of_image(state: DecoderState) -> None:
    r = state.reader
    if r.eoi_seen:
        return
    r.align_to_byte()
    while r.size >= 2 and r.byte(0) == MARKER_PREFIX and r.byte(1) == MARKER_PREFIX:
        r.skip(1)
    if r.exhausted or r.size < 2 or r.byte(0) != MARKER_PREFIX or r.byte(1) != EOI:
        state.fail(DecodeResult.SYNTAX_ERROR, "scan not followed by EOI")


@register_handler(SOS)
def decode_scan(state: DecoderState) -> None:
    """Decode every MCU of the single interleaved scan, then stop parsing."""
    _parse_sos_header(state)
    rstcount, nextrst = state.rstinterval, 0
    mbx = mby = 0
    while True:
        for c in state.components:
            for sby in range(c.ssy):
                for sbx in range(c.ssx):
                    decode_block(state, c, (mby * c.ssy + sby) << 3, (mbx * c.ssx + sbx) << 3)
                    state.check()
        mbx += 1
        if mbx >= state.mbwidth:
            mbx = 0
            mby += 1
            if mby >= state.mbheight:
                break
        if state.rstinterval:
            rstcount -= 1
            if not rstcount:
                _read_restart_marker(state, nextrst)
                nextrst = (nextrst + 1) & 7
                rstcount = state.rstinterval
    _check_end_of_image(state)
    state.finished = True
