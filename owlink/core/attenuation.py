"""
OWLink Free-Space Optical Link Budget
Free-space path loss and Beer-Lambert atmospheric attenuation
versus link distance for several weather conditions.
"""

import numpy as np
from typing import Dict, Optional

from core.errors import DomainError, ParameterError

SPEED_OF_LIGHT = 3e8  # m/s


def _check_positive(values: np.ndarray, name: str):
    if values.size == 0:
        raise DomainError(f"{name} must not be empty")
    if np.any(~np.isfinite(values)) or np.any(values <= 0):
        raise DomainError(f"{name} must be strictly positive")


def carrier_frequency(wavelength_m: float, c: float = SPEED_OF_LIGHT) -> float:
    """Optical carrier frequency in Hz for a wavelength in metres."""
    if wavelength_m <= 0 or c <= 0:
        raise DomainError("wavelength_m and c must be positive")
    return c / wavelength_m


def free_space_path_loss(distances, frequency_hz: float,
                         c: float = SPEED_OF_LIGHT) -> np.ndarray:
    """
    Free-space path loss in dB:
    20*log10(d) + 20*log10(f) + 20*log10(4*pi/c)

    Args:
        distances: Link distances in metres (all > 0)
        frequency_hz: Carrier frequency in Hz
        c: Speed of light in m/s
    """
    d = np.atleast_1d(np.asarray(distances, dtype=float))
    _check_positive(d, 'distances')
    if frequency_hz <= 0 or c <= 0:
        raise DomainError("frequency_hz and c must be positive")

    return 20 * np.log10(d) + 20 * np.log10(frequency_hz) + 20 * np.log10(4 * np.pi / c)


def received_power(pt_mw: float, gamma_db_per_km: float, distances) -> np.ndarray:
    """
    Received power in dBm using Beer-Lambert exponential decay.

    Args:
        pt_mw: Transmitter optical power in mW
        gamma_db_per_km: Atmospheric attenuation in dB/km
        distances: Link distances in metres (all > 0)
    """
    d = np.atleast_1d(np.asarray(distances, dtype=float))
    _check_positive(d, 'distances')
    if pt_mw <= 0:
        raise DomainError("pt_mw must be positive")

    gamma_per_m = gamma_db_per_km / 1000  # dB/km -> dB/m
    pr_mw = pt_mw * np.exp(-gamma_per_m * d)
    return 10 * np.log10(pr_mw)


class FSOLink:
    """
    Free-space optical link evaluated over a distance sweep:
    - Free-space path loss (reference curve)
    - Received power per weather condition (Beer-Lambert)
    """

    # Atmospheric attenuation coefficients (dB/km)
    WEATHER_CONDITIONS = {
        'clear_air': {'label': 'Clear Air', 'gamma_db_per_km': 0.1, 'style': '-o'},
        'light_fog': {'label': 'Light Fog', 'gamma_db_per_km': 10.0, 'style': '--s'},
        'heavy_fog': {'label': 'Heavy Fog', 'gamma_db_per_km': 100.0, 'style': ':^'},
    }

    def __init__(self, pt_mw: float = 10.0, wavelength_m: float = 1550e-9,
                 distances: Optional[np.ndarray] = None, c: float = SPEED_OF_LIGHT):
        self.pt_mw = pt_mw
        self.wavelength_m = wavelength_m
        self.c = c
        self.distances = np.arange(100, 2001, 100, dtype=float) if distances is None \
            else np.asarray(distances, dtype=float)
        self.conditions = {k: dict(v) for k, v in self.WEATHER_CONDITIONS.items()}

    @property
    def frequency_hz(self) -> float:
        return carrier_frequency(self.wavelength_m, self.c)

    PARAMETERS = ('pt_mw', 'wavelength_m', 'distances', 'c')

    def set_parameters(self, **kwargs):
        """Update link parameters."""
        unknown = [k for k in kwargs if k not in self.PARAMETERS]
        if unknown:
            raise ParameterError(f"Unknown link parameters: {unknown}")
        for key, value in kwargs.items():
            if key == 'distances':
                value = np.asarray(value, dtype=float)
            setattr(self, key, value)

    def add_condition(self, name: str, gamma_db_per_km: float,
                      label: Optional[str] = None, style: str = '-'):
        self.conditions[name] = {
            'label': label or name,
            'gamma_db_per_km': float(gamma_db_per_km),
            'style': style,
        }

    def path_loss(self) -> np.ndarray:
        return free_space_path_loss(self.distances, self.frequency_hz, self.c)

    def received_power_curves(self) -> Dict[str, Dict]:
        """Received power (dBm) per weather condition over the same distances."""
        curves = {}
        for name, cond in self.conditions.items():
            curves[name] = {
                'label': cond['label'],
                'style': cond['style'],
                'gamma_db_per_km': cond['gamma_db_per_km'],
                'received_dbm': received_power(self.pt_mw, cond['gamma_db_per_km'], self.distances),
            }
        return curves

    def get_state_dict(self) -> Dict:
        """Return link configuration for display."""
        return {
            'pt_mw': self.pt_mw,
            'pt_dbm': round(10 * np.log10(self.pt_mw), 2) if self.pt_mw > 0 else None,
            'wavelength_nm': round(self.wavelength_m * 1e9, 1),
            'frequency_thz': round(self.frequency_hz / 1e12, 2),
            'distance_range_m': [float(self.distances.min()), float(self.distances.max())]
            if self.distances.size else [],
            'conditions': {k: v['gamma_db_per_km'] for k, v in self.conditions.items()},
        }
