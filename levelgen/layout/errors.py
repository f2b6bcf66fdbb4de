"""Error taxonomy for layout generation.

ConfigurationError is raised eagerly, before any room is placed, and is the
only error a caller is expected to handle. InternalConsistencyError means a
generation invariant broke; the run is abandoned with no partial result.
"""
from __future__ import annotations

from typing import Optional


class LevelGenerationError(Exception):
    """Base class for every error raised by the layout package."""


class ConfigurationError(LevelGenerationError, ValueError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self):
        return {"error": self.message, "field": self.field}


class InternalConsistencyError(LevelGenerationError, RuntimeError):
    """A logic defect surfaced during generation (never user-recoverable)."""


__all__ = ["LevelGenerationError", "ConfigurationError", "InternalConsistencyError"]
