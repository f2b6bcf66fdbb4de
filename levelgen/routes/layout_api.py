"""
project: levelgen
module: layout_api.py
License: MIT

Layout generation API routes.

Query parameters (GET) or JSON body keys (POST), all optional:
  rooms  number of non-spawn rooms (default LEVELGEN_ROOM_COUNT or 10)
  types  size of the room type catalog (default LEVELGEN_ROOM_TYPE_COUNT or 2)
  seed   integer seed; falls back to the session seed, then to a random one
  world  include scaled world positions per room (default false)
  grid   include the raw grid (default true)
"""

import os
import threading
from collections import OrderedDict

from flask import Blueprint, current_app, jsonify, request, session

from levelgen.layout import ConfigurationError, LevelConfig, generate

bp_layout = Blueprint("layout", __name__)

# In-process LRU cache (rooms,types,seed)->GenerationResult. Results are immutable so sharing is safe.
_layout_cache = OrderedDict()
_layout_cache_lock = threading.Lock()


def get_cached_layout(config: LevelConfig):
    if os.environ.get("LEVELGEN_DISABLE_CACHE") == "1" or config.seed is None:
        return generate(config)
    key = (config.room_count, config.room_type_count, config.seed)
    with _layout_cache_lock:
        result = _layout_cache.get(key)
        if result is not None:
            _layout_cache.move_to_end(key)
            return result
    result = generate(config)
    cap = current_app.config.get("LEVELGEN_CACHE_SIZE", 8)
    with _layout_cache_lock:
        _layout_cache[key] = result
        _layout_cache.move_to_end(key)
        while len(_layout_cache) > max(cap, 1):
            _layout_cache.popitem(last=False)
    return result


def _params():
    if request.method != "POST":
        return request.args
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("request body must be a JSON object", None)
    return data


def _int_param(params, name, field):
    raw = params.get(name)
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        raise ConfigurationError(f"{name} must be an integer", field)
    try:
        return int(raw)
    except (TypeError, ValueError, OverflowError):
        raise ConfigurationError(f"{name} must be an integer", field) from None


def _bool_param(params, name, default):
    raw = params.get(name)
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() not in {"0", "false", "no", "off", ""}


def _request_config() -> LevelConfig:
    params = _params()
    base = LevelConfig.from_env()
    seed = _int_param(params, "seed", "seed")
    if seed is None:
        seed = session.get("layout_seed", base.seed)
    cfg = base.merged(
        room_count=_int_param(params, "rooms", "room_count"),
        room_type_count=_int_param(params, "types", "room_type_count"),
        seed=seed,
        enable_metrics=current_app.config.get("LEVELGEN_ENABLE_METRICS", True),
    )
    max_rooms = current_app.config.get("LEVELGEN_MAX_ROOMS", 500)
    if isinstance(cfg.room_count, int) and cfg.room_count > max_rooms:
        raise ConfigurationError(f"room_count may not exceed {max_rooms}", "room_count")
    return cfg.validate()


@bp_layout.route("/api/layout/generate", methods=["GET", "POST"])
def generate_layout():
    """
    Generate (or fetch from cache) a layout snapshot.
    Response: { 'seed', 'bounds', 'width', 'height', 'rooms': [...], 'grid': [[...]], 'metrics': {...} }
    """
    params = _params()
    cfg = _request_config()
    result = get_cached_layout(cfg)
    return jsonify(
        result.to_dict(
            include_grid=_bool_param(params, "grid", True),
            world=_bool_param(params, "world", False),
        )
    )


@bp_layout.route("/api/layout/metrics")
def layout_metrics():
    """Return generation metrics for the requested layout.
    Response: { 'seed': <int>, 'metrics': {...} }
    """
    result = get_cached_layout(_request_config())
    return jsonify({"seed": result.seed, "metrics": dict(result.metrics)})
