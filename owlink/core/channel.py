"""
OWLink AWGN Channel
Additive white Gaussian noise scaled to a target SNR relative to the
measured average signal power.
"""

import numpy as np
from typing import Dict, Optional, Tuple


class AWGNChannel:
    """
    Additive white Gaussian noise channel.

    The random source is pluggable: pass a seed for reproducible runs,
    or an existing numpy Generator to share one stream across stages.
    """

    def __init__(self, seed: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None):
        self.seed = seed
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def reseed(self, seed: Optional[int]):
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    @staticmethod
    def signal_power(signal: np.ndarray) -> float:
        """Average signal power: mean of squared samples."""
        signal = np.asarray(signal, dtype=float)
        if signal.size == 0:
            return 0.0
        return float(np.mean(signal ** 2))

    def noise_power(self, signal: np.ndarray, snr_db: float) -> float:
        snr_linear = 10 ** (snr_db / 10)
        return self.signal_power(signal) / snr_linear

    def add_noise(self, signal: np.ndarray, snr_db: float) -> np.ndarray:
        """Add zero-mean Gaussian noise with power signal_power / 10^(snr_db/10)."""
        signal = np.asarray(signal, dtype=float)
        noise = np.sqrt(self.noise_power(signal, snr_db)) * self.rng.standard_normal(signal.shape)
        return signal + noise

    def transmit(self, signal: np.ndarray, snr_db: float) -> Tuple[np.ndarray, Dict]:
        """
        Pass signal through the channel.
        Returns received signal and channel metrics.
        """
        received = self.add_noise(signal, snr_db)
        metrics = {
            'snr_db': float(snr_db),
            'signal_power': self.signal_power(signal),
            'noise_power': self.noise_power(signal, snr_db),
            'measured_noise_power': self.signal_power(received - np.asarray(signal, dtype=float)),
            'n_samples': int(np.size(signal)),
        }
        return received, metrics
