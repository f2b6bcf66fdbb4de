"""Seed management API routes.

Provides a single endpoint to create/update the layout seed stored in the
caller's session. Later /api/layout/* calls without an explicit seed reuse it.
"""
from flask import Blueprint, request, jsonify, session
import hashlib, random

bp_seed = Blueprint('seed_api', __name__)

SEED_MAX_INT = 9223372036854775807


def _coerce_seed(payload_seed):
    """Convert provided seed (int or str) into bounded 64-bit signed int."""
    if payload_seed is None:
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, bool):
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX_INT
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return random.randint(1, 1_000_000)
        if s.isdigit():
            return int(s) % SEED_MAX_INT
        h = hashlib.sha256(s.encode('utf-8')).digest()
        return int.from_bytes(h[:8], 'big') % SEED_MAX_INT
    # Fallback
    return random.randint(1, 1_000_000)


@bp_seed.route('/api/layout/seed', methods=['POST'])
def set_seed():
    """Set (or generate) the session layout seed.

    Body JSON (all optional):
      { "seed": <int|str|null>, "regenerate": <bool> }
    - If seed omitted or null and regenerate true => random seed.
    - If seed provided (int or string) => deterministic hashing.

    Response: { "seed": <int> }
    """
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return jsonify({"error": "request body must be a JSON object"}), 400
    regenerate = data.get('regenerate')
    provided = data.get('seed', None)
    if regenerate and provided is None:
        seed = _coerce_seed(None)
    else:
        seed = _coerce_seed(provided)
    session['layout_seed'] = seed
    return jsonify({"seed": seed})


@bp_seed.route('/api/layout/seed', methods=['DELETE'])
def clear_seed():
    """Forget the session seed so layouts become random again."""
    session.pop('layout_seed', None)
    return jsonify({"seed": None})
