"""
Lightning Parameter Presets

Each preset is a named set of BoltConfig overrides known to give a
distinct look. Anything a preset leaves out falls back to the BoltConfig
default (the standalone storm demo).
"""

from .config import BoltConfig, config_keys

PRESETS = {
    "storm": {
        "name": "Storm",
        "description": "Standalone demo - sparse, fast, jagged strikes",
        "palette": "electric",
    },
    "backdrop": {
        "name": "Backdrop",
        "description": "Platformer backdrop - frequent, slower, smoother bolts",
        "spawn_chance": 0.07, "sub_steps_per_tick": 25, "max_kink": 2,
        "palette": "mono",
    },
    "drizzle": {
        "name": "Drizzle",
        "description": "Rare thin strikes that barely branch",
        "spawn_chance": 0.01, "max_active": 8, "branch_base": 0.005,
        "branch_min_chance": 0.0005, "decay": 0.75,
        "palette": "violet",
    },
    "tempest": {
        "name": "Tempest",
        "description": "Constant heavily forked lightning with long trails",
        "spawn_chance": 0.15, "max_active": 60, "sub_steps_per_tick": 45,
        "branch_base": 0.06, "branch_depth_decay": 1.5, "kink_chance": 0.2,
        "max_kink": 5, "decay": 0.9, "flash_peak": 0.2,
        "palette": "ember",
    },
}

PRESET_ORDER = ["storm", "backdrop", "drizzle", "tempest"]


def get_preset(name):
    """Get a preset by name. Returns None if not found."""
    return PRESETS.get(name)


def list_presets():
    """Return list of (key, name, description) for all presets."""
    return [(k, PRESETS[k]["name"], PRESETS[k]["description"])
            for k in PRESET_ORDER if k in PRESETS]


def config_from_preset(name, **overrides):
    """Build a validated BoltConfig from a preset plus explicit overrides."""
    preset = PRESETS[name]
    keys = set(config_keys())
    params = {k: v for k, v in preset.items() if k in keys}
    params.update(overrides)
    return BoltConfig().replace(**params)
