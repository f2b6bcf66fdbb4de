import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

from .errors import ConfigurationError


@dataclass
class LevelConfig:
    room_count: int = 10
    room_type_count: int = 2
    seed: Optional[int] = None
    room_width: float = 10.0
    room_length: float = 10.0
    max_walk_steps: Optional[int] = None
    verify_connectivity: bool = True
    enable_metrics: bool = True

    def validate(self) -> "LevelConfig":
        """Check every field, raising ConfigurationError on the first bad one.

        Returns self so callers can chain ``LevelConfig(...).validate()``.
        """
        if not _is_int(self.room_count) or self.room_count < 0:
            raise ConfigurationError("room_count must be a non-negative integer", "room_count")
        if not _is_int(self.room_type_count) or self.room_type_count < 1:
            raise ConfigurationError("room_type_count must be an integer >= 1", "room_type_count")
        if self.seed is not None and not _is_int(self.seed):
            raise ConfigurationError("seed must be an integer or None", "seed")
        for name in ("room_width", "room_length"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive number", name)
        if self.max_walk_steps is not None and (not _is_int(self.max_walk_steps) or self.max_walk_steps < 1):
            raise ConfigurationError("max_walk_steps must be a positive integer or None", "max_walk_steps")
        return self

    def merged(self, **overrides) -> "LevelConfig":
        """Copy with the non-None overrides applied. Unknown keys are rejected."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            name = sorted(unknown)[0]
            raise ConfigurationError(f"unknown configuration option {name!r}", name)
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LevelConfig":
        env = os.environ if environ is None else environ
        cfg = cls()
        for env_key, attr, parse in _ENV_MAP:
            raw = env.get(env_key)
            if raw is None or raw.strip() == "":
                continue
            try:
                setattr(cfg, attr, parse(raw.strip()))
            except ValueError:
                raise ConfigurationError(f"{env_key}={raw!r} is not a valid value", attr) from None
        return cfg

    def to_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_bool(raw: str) -> bool:
    return raw.lower() not in {"0", "false", "no", "off"}


_ENV_MAP = (
    ("LEVELGEN_ROOM_COUNT", "room_count", int),
    ("LEVELGEN_ROOM_TYPE_COUNT", "room_type_count", int),
    ("LEVELGEN_SEED", "seed", int),
    ("LEVELGEN_ROOM_WIDTH", "room_width", float),
    ("LEVELGEN_ROOM_LENGTH", "room_length", float),
    ("LEVELGEN_MAX_WALK_STEPS", "max_walk_steps", int),
    ("LEVELGEN_VERIFY_CONNECTIVITY", "verify_connectivity", parse_bool),
    ("LEVELGEN_ENABLE_METRICS", "enable_metrics", parse_bool),
)


__all__ = ["LevelConfig"]
