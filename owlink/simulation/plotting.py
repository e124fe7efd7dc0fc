"""
OWLink Report Figures
matplotlib views of SimulationEngine results. Every function takes the
result dict as produced by the engine and only draws it.
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from typing import Dict, Sequence, Tuple


def format_metrics(ber: float, energy_ratio: float) -> Tuple[str, str]:
    """Console lines for the Li-Fi link metrics."""
    return (
        f'Bit Error Rate (BER): {ber:.4f}',
        f'Energy Efficiency (ON-time ratio): {energy_ratio * 100:.2f}%',
    )


def plot_received_power(result: Dict, ax=None):
    """Received power vs distance, one series per weather condition."""
    if ax is None:
        _, ax = plt.subplots()

    d = result['distances_m']
    for series in result['received_power'].values():
        ax.plot(d, series['received_dbm'], series['style'],
                linewidth=2, label=series['label'])

    ax.set_xlabel('Distance (m)')
    ax.set_ylabel('Received Power (dBm)')
    ax.set_title('FSO Link - Received Power vs Distance')
    ax.set_xlim(min(d), max(d))
    ax.tick_params(labelsize=12)
    ax.grid(True)
    ax.legend(loc='lower left')
    return ax


def plot_path_loss(result: Dict, ax=None):
    if ax is None:
        _, ax = plt.subplots()
    ax.plot(result['distances_m'], result['fspl_db'], linewidth=2)
    ax.set_xlabel('Distance (m)')
    ax.set_ylabel('Free-Space Path Loss (dB)')
    ax.grid(True)
    return ax


def plot_lifi_signals(result: Dict):
    """Original bits, Manchester signal, OOK signal and decoded bits."""
    original = result['original_bits']
    n = len(original)
    t_bits = np.arange(1, n + 1)
    t_chips = np.linspace(1, n, len(result['encoded']))

    panels = [
        (t_bits, original, 'Original Binary Data'),
        (t_chips, result['encoded'], 'Manchester Encoded Signal'),
        (t_chips, result['modulated'], 'OOK Modulated Signal'),
        (t_bits, result['decoded_bits'], 'Received Demodulated Bits'),
    ]

    fig, axes = plt.subplots(4, 1, sharex=True)
    for ax, (t, y, title) in zip(axes, panels):
        ax.step(t, y, where='post', linewidth=2)
        ax.set_title(title)
        ax.set_ylim(-0.2, 1.2)
        ax.grid(True)
    axes[-1].set_xlabel('Time')
    return fig


def animate_transmission(encoded: Sequence[int], modulated: Sequence[float],
                         interval_ms: int = 50):
    """Reveal the Manchester and OOK signals one sample per frame."""
    n = len(encoded)
    x = np.arange(1, n + 1)
    fig, (ax_enc, ax_ook) = plt.subplots(2, 1)
    if fig.canvas.manager is not None:
        fig.canvas.manager.set_window_title('Real-Time Transmission')

    line_enc, = ax_enc.step([], [], 'b', where='post', linewidth=2)
    line_ook, = ax_ook.step([], [], 'r', where='post', linewidth=2)
    for ax, title in ((ax_enc, 'Real-Time Manchester Encoding'),
                      (ax_ook, 'Real-Time OOK Signal')):
        ax.set_title(title)
        ax.set_ylim(-0.2, 1.2)
        ax.set_xlim(1, max(n, 2))
        ax.grid(True)

    def update(i):
        line_enc.set_data(x[:i + 1], encoded[:i + 1])
        line_ook.set_data(x[:i + 1], modulated[:i + 1])
        return line_enc, line_ook

    return FuncAnimation(fig, update, frames=n, interval=interval_ms,
                         blit=True, repeat=False)


def plot_signal_excerpt(result: Dict, ax=None):
    """Transmitted vs received OOK samples at the last swept SNR."""
    if ax is None:
        _, ax = plt.subplots()
    idx = np.arange(1, len(result['tx_excerpt']) + 1)
    ax.step(idx, result['tx_excerpt'], where='post', linewidth=1.5, label='Transmitted Signal')
    ax.step(idx, result['rx_excerpt'], where='post', linewidth=1.5, label='Received Signal')
    ax.set_title('OOK Transmission')
    ax.set_xlabel('Bit Index')
    ax.set_ylabel('Amplitude')
    ax.legend()
    return ax


def plot_ber_curve(result: Dict, ax=None):
    """Simulated vs theoretical BER on a log scale."""
    if ax is None:
        _, ax = plt.subplots()
    snr = result['snr_db']
    # Zero-error points cannot be drawn on a log axis
    simulated = np.where(np.asarray(result['simulated_ber']) > 0,
                         result['simulated_ber'], np.nan)
    ax.semilogy(snr, simulated, 'o-', label='Simulated BER')
    ax.semilogy(snr, result['theoretical_ber'], 'x--', label='Theoretical BER')
    ax.grid(True, which='both')
    ax.legend(loc='lower left')
    ax.set_xlabel('SNR (dB)')
    ax.set_ylabel('Bit Error Rate')
    ax.set_title('BER vs SNR for OOK over AWGN')
    return ax
