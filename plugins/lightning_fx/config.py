"""
Bolt Simulation Configuration

All tunables for the lightning effect live in a single BoltConfig value.
Defaults reproduce the standalone storm demo at 30 ticks per second.
Validation happens on construction, so a bad value never reaches the
simulator.
"""

import numbers
from dataclasses import dataclass, fields, replace


class InvalidConfiguration(ValueError):
    """Raised when dimensions or simulation parameters are out of range."""


# Fields that are probabilities and must lie in [0, 1]
PROBABILITY_KEYS = (
    "spawn_chance", "kink_chance", "branch_base", "branch_min_chance",
    "flash_peak",
)

# Count and offset fields; must be integers
INTEGER_KEYS = (
    "max_active", "sub_steps_per_tick", "segment_min", "segment_max", "max_kink",
)


@dataclass(frozen=True)
class BoltConfig:
    """Parameters for bolt spawning, branching, and buffer fade."""

    spawn_chance: float = 0.02
    max_active: int = 25
    sub_steps_per_tick: int = 35
    segment_min: int = 10
    segment_max: int = 30
    kink_chance: float = 0.1
    max_kink: int = 4
    branch_base: float = 0.02
    branch_depth_decay: float = 2.5
    branch_min_chance: float = 0.002
    decay: float = 0.82
    flash_peak: float = 0.3
    flash_decay: float = 0.1

    def __post_init__(self):
        validate_config(self)

    def replace(self, **changes):
        """Return a validated copy with some fields changed."""
        unknown = set(changes) - set(config_keys())
        if unknown:
            raise InvalidConfiguration(
                f"Unknown parameter(s): {', '.join(sorted(unknown))}")
        return replace(self, **changes)

    def as_dict(self):
        return {k: getattr(self, k) for k in config_keys()}


def config_keys():
    """Names of all BoltConfig fields, in declaration order."""
    return [f.name for f in fields(BoltConfig)]


def validate_dimensions(width, height):
    if width <= 0 or height <= 0:
        raise InvalidConfiguration(
            f"Grid dimensions must be positive, got {width}x{height}")


def validate_config(cfg):
    """Raise InvalidConfiguration if any field is outside its domain."""
    for key in INTEGER_KEYS:
        val = getattr(cfg, key)
        if not isinstance(val, numbers.Integral) or isinstance(val, bool):
            raise InvalidConfiguration(f"{key} must be an integer, got {val!r}")

    for key in PROBABILITY_KEYS:
        val = getattr(cfg, key)
        if not 0.0 <= val <= 1.0:
            raise InvalidConfiguration(f"{key} must be in [0, 1], got {val}")

    if cfg.max_active <= 0:
        raise InvalidConfiguration(
            f"max_active must be positive, got {cfg.max_active}")
    if cfg.sub_steps_per_tick < 1:
        raise InvalidConfiguration(
            f"sub_steps_per_tick must be at least 1, got {cfg.sub_steps_per_tick}")
    if cfg.segment_min < 1 or cfg.segment_min > cfg.segment_max:
        raise InvalidConfiguration(
            f"segment range must satisfy 1 <= min <= max, "
            f"got ({cfg.segment_min}, {cfg.segment_max})")
    if cfg.max_kink < 0:
        raise InvalidConfiguration(f"max_kink must be >= 0, got {cfg.max_kink}")
    if cfg.branch_depth_decay < 0:
        raise InvalidConfiguration(
            f"branch_depth_decay must be >= 0, got {cfg.branch_depth_decay}")
    if not 0.0 < cfg.decay < 1.0:
        raise InvalidConfiguration(f"decay must be in (0, 1), got {cfg.decay}")
    if cfg.flash_decay < 0:
        raise InvalidConfiguration(
            f"flash_decay must be >= 0, got {cfg.flash_decay}")
