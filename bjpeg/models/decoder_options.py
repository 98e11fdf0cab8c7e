"""Decoder configuration."""

from dataclasses import dataclass
from typing import Literal, Optional


@dataclass
class DecoderOptions:
    """Knobs for a single decode."""

    upsampling: Literal['bicubic', 'nearest'] = 'bicubic'
    max_pixels: Optional[int] = None

    def __post_init__(self):
        if self.upsampling not in ('bicubic', 'nearest'):
            raise ValueError(f"Upsampling must be 'bicubic' or 'nearest', got {self.upsampling}")
        if self.max_pixels is not None and self.max_pixels <= 0:
            raise ValueError(f"max_pixels must be positive, got {self.max_pixels}")
