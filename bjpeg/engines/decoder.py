"""Main decode pipeline: markers, scan, upsampling, colour conversion."""

import logging
from typing import Optional

from bjpeg.engines.bit_reader import BitReader
from bjpeg.engines.color_converter import remove_stride, ycbcr_to_rgb
from bjpeg.engines.marker_parser import handler_for
from bjpeg.engines.upsampler import upsample_bicubic, upsample_nearest
from bjpeg.errors import DecodeResult, JPEGDecodeError, error_for
from bjpeg.models.decoded_image import DecodedImage
from bjpeg.models.decoder_options import DecoderOptions
from bjpeg.models.decoder_state import DecoderState
from bjpeg.utils.constants import MARKER_PREFIX, SOI

logger = logging.getLogger(__name__)


def _parse(state: DecoderState) -> None:
    r = state.reader
    if r.size < 2:
        state.fail(DecodeResult.NO_JPEG, "input shorter than SOI")
    if r.byte(0) != MARKER_PREFIX or r.byte(1) != SOI:
        state.fail(DecodeResult.NO_JPEG, "missing SOI marker")
    r.skip(2)
    while not state.finished:
        state.check()
        if r.size < 2 or r.byte(0) != MARKER_PREFIX:
            state.fail(DecodeResult.SYNTAX_ERROR, "expected a marker")
        marker = r.byte(1)
        r.skip(2)
        handler = handler_for(marker)
        if handler is None:
            state.fail(DecodeResult.UNSUPPORTED, f"marker 0xFF{marker:02X}")
        logger.debug("marker 0xFF%02X -> %s", marker, handler.__name__)
        handler(state)
    state.check()


def _convert(state: DecoderState) -> DecodedImage:
    upsample = upsample_bicubic if state.options.upsampling == 'bicubic' else upsample_nearest
    for c in state.components:
        upsample(c, state.width, state.height)
        if c.width < state.width or c.height < state.height:
            state.fail(DecodeResult.INTERNAL_ERROR, f"component {c.cid} not upsampled to full size")

    if state.ncomp == 3:
        y, cb, cr = (remove_stride(c.pixels, state.width, state.height) for c in state.components)
        pixels = ycbcr_to_rgb(y, cb, cr)
    else:
        pixels = remove_stride(state.components[0].pixels, state.width, state.height)
    return DecodedImage(state.width, state.height, pixels)


def decode_jpeg(data: bytes, options: Optional[DecoderOptions] = None) -> DecodedImage:
    """Decode a complete baseline JPEG held in memory.

    Raises a JPEGDecodeError subclass matching the first failure found.
    """
    state = DecoderState(options=options or DecoderOptions())
    state.reader = BitReader(data, state)
    try:
        _parse(state)
        return _convert(state)
    except MemoryError as exc:
        state.record(DecodeResult.OUT_OF_MEMORY)
        raise error_for(state.error, "allocation failed") from exc
    except JPEGDecodeError as exc:
        state.record(exc.result)
        if exc.result != state.error:
            raise error_for(state.error, str(exc)) from exc
        raise


class Decoder:
    """Result-code interface: decode() never raises for bad input.

    Each call builds fresh state, so one Decoder must not be shared
    between threads.
    """

    def __init__(self, options: Optional[DecoderOptions] = None):
        self.options = options or DecoderOptions()
        self.result: Optional[DecodeResult] = None
        self._image: Optional[DecodedImage] = None

    def decode(self, data: bytes) -> DecodeResult:
        self._image = None
        try:
            self._image = decode_jpeg(data, self.options)
            self.result = DecodeResult.OK
        except JPEGDecodeError as exc:
            logger.debug("decode failed: %s (%s)", exc.result.name, exc)
            self.result = exc.result
        return self.result

    @property
    def image(self) -> DecodedImage:
        if self._image is None:
            raise RuntimeError(f"No decoded image (last result: {self.result})")
        return self._image

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def is_color(self) -> bool:
        return self.image.is_color

    def get_image(self) -> bytes:
        return self.image.data

    @property
    def image_size(self) -> int:
        return self.image.size
