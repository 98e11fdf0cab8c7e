"""Per-channel decoding state."""

from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass
class Component:
    """One colour or gray channel as described by the frame header."""

    cid: int
    ssx: int
    ssy: int
    qtsel: int
    width: int = 0
    height: int = 0
    stride: int = 0
    dctabsel: int = 0  # to be updated by SOS
    actabsel: int = 2
    dcpred: int = 0
    pixels: Optional[np.ndarray] = None
