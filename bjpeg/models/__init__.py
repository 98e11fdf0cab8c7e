"""Data models for decoder state, options and results."""

from .component import Component
from .decoded_image import DecodedImage
from .decoder_options import DecoderOptions
from .decoder_state import DecoderState

__all__ = ['Component', 'DecodedImage', 'DecoderOptions', 'DecoderState']
