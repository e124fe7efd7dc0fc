"""
OWLink Report Server
Flask application exposing the link simulations as a JSON API.
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from flask import Flask, request, jsonify
from core.errors import OWLinkError
from simulation.engine import SimulationEngine

app = Flask(__name__)
engine = SimulationEngine()


@app.errorhandler(OWLinkError)
def handle_link_error(err):
    return jsonify({'error': str(err), 'type': type(err).__name__}), 400


@app.route('/api/fso', methods=['POST'])
def fso():
    """Received power vs distance for each weather condition."""
    data = request.get_json(silent=True) or {}
    result = engine.run_fso_link(
        pt_mw=data.get('pt_mw'),
        wavelength_m=data.get('wavelength_m'),
        distances=data.get('distances'),
        conditions=data.get('conditions'),
    )
    return jsonify(result)


@app.route('/api/lifi', methods=['POST'])
def lifi():
    """Run a noise-free Manchester/OOK transmission."""
    data = request.get_json(silent=True) or {}
    if 'seed' in data:
        engine.reseed(data['seed'])
    result = engine.run_lifi_transmission(
        n_bits=data.get('n_bits'),
        threshold=data.get('threshold'),
        bits=data.get('bits'),
    )
    return jsonify(result)


@app.route('/api/ber_sweep', methods=['POST'])
def ber_sweep():
    """Run BER vs SNR sweep over AWGN."""
    data = request.get_json(silent=True) or {}
    if 'seed' in data:
        engine.reseed(data['seed'])
    result = engine.run_ber_sweep(
        n_bits=data.get('n_bits'),
        snr_db_range=data.get('snr_db_range'),
        threshold=data.get('threshold'),
    )
    return jsonify(result)


@app.route('/api/status', methods=['GET'])
def status():
    """Get engine status."""
    return jsonify(engine.get_system_status())


if __name__ == '__main__':
    print("\n" + "="*60)
    print("  OWLink Optical Wireless Link Simulator")
    print("  API: http://localhost:5000/api/status")
    print("="*60 + "\n")
    app.run(debug=True, port=5000)
