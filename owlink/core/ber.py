"""
OWLink Bit Error Rate Evaluation
Empirical BER from bit comparisons and the closed-form OOK reference
curve Q(sqrt(2*SNR)) over AWGN.
"""

import numpy as np
from scipy.special import erfc

from core.errors import InvalidBitError, LengthMismatchError


def as_bits(bits) -> np.ndarray:
    """Validate a 0/1 sequence and return it as a flat int array."""
    raw = np.asarray(bits).ravel()
    if raw.size and not np.isin(raw, (0, 1)).all():
        raise InvalidBitError("Bit sequence must contain only 0 and 1")
    return raw.astype(int)


def count_bit_errors(tx_bits, rx_bits) -> int:
    tx = as_bits(tx_bits)
    rx = as_bits(rx_bits)
    if len(tx) != len(rx):
        raise LengthMismatchError(
            f"Bit sequences differ in length: {len(tx)} vs {len(rx)}")
    return int(np.sum(tx != rx))


def empirical_ber(tx_bits, rx_bits) -> float:
    """Fraction of positions where rx differs from tx."""
    errors = count_bit_errors(tx_bits, rx_bits)
    n = len(as_bits(tx_bits))
    if n == 0:
        return 0.0
    return errors / n


def qfunc(x):
    """Gaussian tail probability Q(x) = 0.5 * erfc(x / sqrt(2))."""
    return 0.5 * erfc(np.asarray(x, dtype=float) / np.sqrt(2))


def theoretical_ber(snr_db) -> np.ndarray:
    """
    Theoretical OOK BER over AWGN: Q(sqrt(2 * snr_linear)).

    Args:
        snr_db: Scalar or array of SNR values in dB
    """
    snr_linear = 10 ** (np.asarray(snr_db, dtype=float) / 10)
    return qfunc(np.sqrt(2 * snr_linear))


def energy_ratio(encoded_signal) -> float:
    """Fraction of samples that are ON (LED duty cycle)."""
    signal = np.asarray(encoded_signal).ravel()
    if signal.size == 0:
        return 0.0
    return float(np.sum(signal == 1)) / signal.size
