"""
OWLink Simulation Engine
Runs the three optical link pipelines with reference defaults:
- FSO link budget: distance -> path loss, received power per weather
- Li-Fi link: bits -> Manchester -> OOK -> threshold -> decode -> BER
- AWGN sweep: bits -> OOK -> noise per SNR -> demodulate -> BER vs theory
Results are plain dicts of lists/floats, ready for JSON or plotting.
"""

import numpy as np
import time
from typing import Dict, Optional, Sequence

from core.attenuation import FSOLink
from core.manchester import ManchesterEncoder
from core.modulation import OOKModulator
from core.channel import AWGNChannel
from core.errors import ParameterError
from core.ber import as_bits, count_bit_errors, empirical_ber, theoretical_ber, energy_ratio


class SimulationEngine:
    """
    Optical link simulation engine.
    One seeded random stream drives bit generation and channel noise,
    so a fixed seed reproduces every run in order.
    """

    DEFAULTS = {
        'pt_mw': 10.0,
        'wavelength_m': 1550e-9,
        'distances_m': list(range(100, 2001, 100)),
        'lifi_bits': 100,
        'sweep_bits': 1000,
        'snr_db_range': list(range(0, 21, 2)),
        'threshold': 0.5,
        'excerpt_length': 50,
    }

    def __init__(self, seed: Optional[int] = None, strict_manchester: bool = False):
        self.seed = seed
        self.rng = np.random.default_rng(seed)

        self.fso = FSOLink(pt_mw=self.DEFAULTS['pt_mw'],
                           wavelength_m=self.DEFAULTS['wavelength_m'],
                           distances=self.DEFAULTS['distances_m'])
        self.manchester = ManchesterEncoder(strict=strict_manchester)
        self.ook = OOKModulator(samples_per_bit=1, threshold=self.DEFAULTS['threshold'])
        self.channel = AWGNChannel(rng=self.rng)

        # State
        self.last_result = None
        self.run_count = 0

    def reseed(self, seed: Optional[int]):
        """Restart the shared random stream."""
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self.channel.rng = self.rng

    def generate_bits(self, n: int) -> np.ndarray:
        """Uniform random bits from the engine's random stream."""
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 0:
            raise ParameterError(f"Bit count must be non-negative, got {n}")
        return self.rng.integers(0, 2, size=n)

    def _finish(self, result: Dict, start_time: float) -> Dict:
        self.run_count += 1
        result['elapsed_ms'] = round((time.time() - start_time) * 1000, 2)
        result['run_id'] = self.run_count
        self.last_result = result
        return result

    def run_fso_link(self, pt_mw: Optional[float] = None, wavelength_m: Optional[float] = None,
                     distances: Optional[Sequence[float]] = None,
                     conditions: Optional[Dict[str, float]] = None) -> Dict:
        """
        Evaluate path loss and received power across distances.

        Args:
            pt_mw: Transmitter power in mW
            wavelength_m: Optical wavelength in metres
            distances: Distance vector in metres
            conditions: Optional {name: gamma_db_per_km} replacing the
                weather table for this run
        """
        start_time = time.time()
        link = FSOLink(
            pt_mw=self.fso.pt_mw if pt_mw is None else pt_mw,
            wavelength_m=self.fso.wavelength_m if wavelength_m is None else wavelength_m,
            distances=self.fso.distances if distances is None else distances,
        )
        if conditions is not None:
            link.conditions = {}
            for name, gamma in conditions.items():
                link.add_condition(name, gamma)

        fspl_db = link.path_loss()
        curves = link.received_power_curves()

        result = {
            'distances_m': link.distances.tolist(),
            'frequency_hz': float(link.frequency_hz),
            'fspl_db': fspl_db.tolist(),
            'received_power': {
                name: {
                    'label': c['label'],
                    'style': c['style'],
                    'gamma_db_per_km': c['gamma_db_per_km'],
                    'received_dbm': c['received_dbm'].tolist(),
                }
                for name, c in curves.items()
            },
            'link': link.get_state_dict(),
        }
        return self._finish(result, start_time)

    def run_lifi_transmission(self, n_bits: Optional[int] = None,
                              threshold: Optional[float] = None,
                              bits: Optional[Sequence[int]] = None) -> Dict:
        """
        Noise-free Li-Fi link with Manchester line coding.

        Args:
            n_bits: Number of random bits (ignored when bits is given)
            threshold: Receiver decision threshold
            bits: Explicit bit sequence to send
        """
        start_time = time.time()
        if threshold is None:
            threshold = self.DEFAULTS['threshold']

        if bits is None:
            original = self.generate_bits(self.DEFAULTS['lifi_bits'] if n_bits is None else n_bits)
        else:
            original = as_bits(bits)

        # 1. Manchester encoding
        encoded = self.manchester.encode(original)

        # 2. OOK modulation (LED drive)
        modulated = self.ook.modulate(encoded)

        # 3. Receiver: threshold + Manchester decode
        invalid = self.manchester.find_invalid_pairs(modulated, threshold)
        decoded = self.manchester.decode(modulated, threshold)

        # 4. Metrics
        result = {
            'original_bits': original.tolist(),
            'encoded': encoded.tolist(),
            'modulated': modulated.tolist(),
            'decoded_bits': decoded.tolist(),
            'bit_errors': count_bit_errors(original, decoded),
            'ber': empirical_ber(original, decoded),
            'energy_ratio': energy_ratio(encoded),
            'invalid_codewords': len(invalid),
            'threshold': float(threshold),
            'overhead': self.manchester.get_overhead(),
        }
        return self._finish(result, start_time)

    def run_ber_sweep(self, n_bits: Optional[int] = None,
                      snr_db_range: Optional[Sequence[float]] = None,
                      threshold: Optional[float] = None) -> Dict:
        """
        OOK over AWGN: simulated BER per SNR point vs Q(sqrt(2*SNR)).

        Args:
            n_bits: Number of random bits transmitted per SNR point
            snr_db_range: SNR values in dB
            threshold: Demodulator decision threshold
        """
        start_time = time.time()
        if n_bits is None:
            n_bits = self.DEFAULTS['sweep_bits']
        if snr_db_range is None:
            snr_db_range = self.DEFAULTS['snr_db_range']
        if threshold is None:
            threshold = self.DEFAULTS['threshold']
        snr_db = np.asarray(snr_db_range, dtype=float)

        tx_bits = self.generate_bits(n_bits)
        tx_signal = self.ook.modulate(tx_bits)

        simulated = np.zeros(len(snr_db))
        noisy_signal = tx_signal
        for i, snr in enumerate(snr_db):
            noisy_signal = self.channel.add_noise(tx_signal, snr)
            rx_bits = self.ook.demodulate(noisy_signal, threshold)
            simulated[i] = empirical_ber(tx_bits, rx_bits)

        excerpt = min(self.DEFAULTS['excerpt_length'], len(tx_signal))
        result = {
            'snr_db': snr_db.tolist(),
            'simulated_ber': simulated.tolist(),
            'theoretical_ber': theoretical_ber(snr_db).tolist(),
            'n_bits': int(n_bits),
            'threshold': float(threshold),
            # Last SNR point, for the transmitted/received comparison figure
            'tx_excerpt': tx_signal[:excerpt].tolist(),
            'rx_excerpt': noisy_signal[:excerpt].tolist(),
        }
        return self._finish(result, start_time)

    def get_system_status(self) -> Dict:
        """Get current engine configuration and counters."""
        return {
            'seed': self.seed,
            'defaults': dict(self.DEFAULTS),
            'fso_link': self.fso.get_state_dict(),
            'strict_manchester': self.manchester.strict,
            'runs': self.run_count,
        }
