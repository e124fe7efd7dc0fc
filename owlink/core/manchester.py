"""
OWLink Manchester Line Coding Module
Each bit becomes a LOW/HIGH transition so the LED spends half of every
bit period ON, independent of the data (flicker-free, self-clocking).
"""

import numpy as np
from typing import List

from core.ber import as_bits
from core.errors import MalformedFrameError, InvalidCodeWordError


class ManchesterEncoder:
    """
    Manchester encoder/decoder.
    - bit 1 -> (0, 1)  LOW to HIGH
    - bit 0 -> (1, 0)  HIGH to LOW

    Invalid pairs (0,0) and (1,1) cannot occur on a noise-free link.
    With strict=False they decode to 0; strict=True raises
    InvalidCodeWordError instead.
    """

    ENCODE_TABLE = {
        1: (0, 1),
        0: (1, 0),
    }

    DECODE_TABLE = {v: k for k, v in ENCODE_TABLE.items()}

    # Bit substituted for an invalid pair when not strict
    INVALID_CODE_BIT = 0

    def __init__(self, strict: bool = False):
        self.strict = strict

    def encode(self, bits: np.ndarray) -> np.ndarray:
        """Encode bits, doubling the length."""
        bits = as_bits(bits)

        encoded = np.zeros(2 * len(bits), dtype=int)
        encoded[0::2] = 1 - bits
        encoded[1::2] = bits
        return encoded

    def _pairs(self, signal: np.ndarray, threshold: float) -> np.ndarray:
        signal = np.asarray(signal, dtype=float).ravel()
        if len(signal) % 2 != 0:
            raise MalformedFrameError(
                f"Manchester signal length must be even, got {len(signal)}")
        binary = (signal > threshold).astype(int)
        return binary.reshape(-1, 2)

    def decode(self, signal: np.ndarray, threshold: float = 0.5) -> np.ndarray:
        """Binarize at threshold and decode consecutive pairs."""
        pairs = self._pairs(signal, threshold)
        decoded = np.zeros(len(pairs), dtype=int)

        for i, pair in enumerate(pairs):
            codeword = (int(pair[0]), int(pair[1]))
            if codeword in self.DECODE_TABLE:
                decoded[i] = self.DECODE_TABLE[codeword]
            elif self.strict:
                raise InvalidCodeWordError(i, codeword)
            else:
                decoded[i] = self.INVALID_CODE_BIT

        return decoded

    def find_invalid_pairs(self, signal: np.ndarray, threshold: float = 0.5) -> List[int]:
        """Indices of pairs that are not valid Manchester codewords."""
        pairs = self._pairs(signal, threshold)
        return [int(i) for i in np.flatnonzero(pairs[:, 0] == pairs[:, 1])]

    def get_overhead(self) -> float:
        """Return coding overhead ratio."""
        return 2.0 / 1.0  # 1 input bit -> 2 output bits
