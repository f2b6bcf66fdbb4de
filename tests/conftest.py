import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from levelgen import create_app  # noqa: E402
from levelgen.routes.layout_api import _layout_cache, _layout_cache_lock  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update({"TESTING": True})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _clear_layout_cache():
    """Keep cached layouts from leaking between tests."""
    with _layout_cache_lock:
        _layout_cache.clear()
    yield
    with _layout_cache_lock:
        _layout_cache.clear()


@pytest.fixture(autouse=True)
def _clean_levelgen_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("LEVELGEN_"):
            monkeypatch.delenv(key, raising=False)
