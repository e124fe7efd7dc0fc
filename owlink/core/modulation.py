"""
OWLink Modulation Module
Implements On-Off Keying (OOK) for intensity-modulated optical links.
"""

import numpy as np
from typing import Optional, Tuple

from core.errors import ParameterError


class OOKModulator:
    """On-Off Keying modulation: bit 1 = light ON, bit 0 = light OFF."""

    def __init__(self, samples_per_bit: int = 1, threshold: float = 0.5):
        if samples_per_bit < 1:
            raise ParameterError("samples_per_bit must be >= 1")
        self.samples_per_bit = samples_per_bit
        self.threshold = threshold

    def modulate(self, bits: np.ndarray) -> np.ndarray:
        """Convert bit array to OOK waveform (identity for one sample per bit)."""
        waveform = np.repeat(np.asarray(bits).astype(float), self.samples_per_bit)
        return waveform

    def _bit_means(self, waveform: np.ndarray) -> np.ndarray:
        waveform = np.asarray(waveform, dtype=float)
        n_bits = len(waveform) // self.samples_per_bit
        segments = waveform[:n_bits * self.samples_per_bit].reshape(n_bits, self.samples_per_bit)
        return segments.mean(axis=1)

    def demodulate(self, waveform: np.ndarray, threshold: Optional[float] = None) -> np.ndarray:
        """Convert OOK waveform back to bits: level >= threshold -> 1."""
        if threshold is None:
            threshold = self.threshold
        return (self._bit_means(waveform) >= threshold).astype(int)

    def soft_demodulate(self, waveform: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Return both hard decisions and confidence scores."""
        means = self._bit_means(waveform)
        bits = (means >= self.threshold).astype(int)
        # Distance from threshold relative to the ON/OFF half-swing
        span = max(self.threshold, 1.0 - self.threshold)
        confidence = np.clip(np.abs(means - self.threshold) / span, 0.0, 1.0)
        return bits, confidence
