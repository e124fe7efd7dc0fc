"""
OWLink Report Runner
Runs the three link pipelines, prints the Li-Fi metrics and draws the
figures: received power vs distance, Li-Fi signal panels, the OOK
transmission excerpt and BER vs SNR.
"""

import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import matplotlib.pyplot as plt

from simulation.engine import SimulationEngine
from simulation.plotting import (animate_transmission, format_metrics, plot_ber_curve,
                                 plot_lifi_signals, plot_received_power, plot_signal_excerpt)


def build_report(engine: SimulationEngine, out_dir=None, animate: bool = False):
    """
    Run every pipeline and draw its figures.

    Args:
        engine: Engine supplying the pipelines and random stream
        out_dir: Directory for PNG files; figures stay open when None
        animate: Also build the frame-by-frame transmission animation

    Returns:
        Dict with the console metric lines, saved file paths and the
        animation object (kept alive for plt.show)
    """
    fso = engine.run_fso_link()
    lifi = engine.run_lifi_transmission()
    sweep = engine.run_ber_sweep()

    figures = {
        'fso_received_power': plot_received_power(fso).figure,
        'lifi_signals': plot_lifi_signals(lifi),
        'ook_transmission': plot_signal_excerpt(sweep).figure,
        'ber_vs_snr': plot_ber_curve(sweep).figure,
    }

    anim = None
    if animate:
        anim = animate_transmission(lifi['encoded'], lifi['modulated'], interval_ms=50)

    saved = []
    if out_dir is not None:
        os.makedirs(out_dir, exist_ok=True)
        for name, fig in figures.items():
            path = os.path.join(out_dir, f'{name}.png')
            fig.savefig(path)
            saved.append(path)

    metrics = format_metrics(lifi['ber'], lifi['energy_ratio'])
    for line in metrics:
        print(line)

    return {'metrics': list(metrics), 'saved': saved, 'animation': anim}


def main(argv=None):
    ap = argparse.ArgumentParser(description="OWLink optical link report")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--out", default=None, help="directory for PNG figures")
    ap.add_argument("--animate", action="store_true")
    ap.add_argument("--no-show", action="store_true")
    args = ap.parse_args(argv)

    engine = SimulationEngine(seed=args.seed)
    report = build_report(engine, out_dir=args.out, animate=args.animate)
    for path in report['saved']:
        print(f"Wrote {path}")

    if not args.no_show:
        plt.show()
    plt.close('all')
    return report


if __name__ == '__main__':
    main()
