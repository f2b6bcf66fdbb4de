"""
project: levelgen
module: __init__.py
License: MIT

Flask application object and HTTP wiring for the layout generator.

Configuration is sourced from environment variables (optionally loaded from
a .env file) with reasonable defaults for development. A local `instance/`
directory holds the rotating log file written by `levelgen.server`.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

from levelgen.layout.config import parse_bool
from levelgen.layout.errors import ConfigurationError, InternalConsistencyError

__version__ = "0.1.0"

# Load .env if present so SECRET_KEY and LEVELGEN_* values can be supplied
# without exporting shell variables during development.
load_dotenv()

app = Flask(__name__, instance_relative_config=True)


def _app_settings(environ=None):
    env = os.environ if environ is None else environ
    return {
        "SECRET_KEY": env.get("SECRET_KEY", "dev-secret-change-me"),
        "LEVELGEN_MAX_ROOMS": int(env.get("LEVELGEN_MAX_ROOMS", "500")),
        "LEVELGEN_CACHE_SIZE": int(env.get("LEVELGEN_CACHE_SIZE", "8")),
        # same truthiness rules as LevelConfig.from_env
        "LEVELGEN_ENABLE_METRICS": parse_bool(env.get("LEVELGEN_ENABLE_METRICS", "1").strip() or "1"),
    }


app.config.update(_app_settings())


# Register HTTP blueprints (import after app created)
from levelgen.routes.layout_api import bp_layout  # noqa: E402
from levelgen.routes.seed_api import bp_seed  # noqa: E402

app.register_blueprint(bp_layout)
app.register_blueprint(bp_seed)


@app.errorhandler(ConfigurationError)
def configuration_error(e):
    return jsonify(e.to_dict()), 400


@app.errorhandler(InternalConsistencyError)
def internal_consistency_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.exception("Layout generation failed (id=%s)", error_id)
    return jsonify({"error": "layout generation failed", "error_id": error_id}), 500


def create_app():
    """Return the Flask app instance with its instance directory in place."""
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # read-only checkouts still serve the API; only file logging needs it
        pass
    return app
