"""
Lightning Engine - One Buffer, One Simulator, One Tick

Runs the per-tick order for the effect:

    flash fall-off -> buffer.decay -> maybe_spawn -> advance(buffer)

and keeps the screen-flash level that the renderer overlays on new
strikes. The viewer, the CLI, and any scene code talk to this class; the
buffer stays reachable as `engine.buffer` for decorations that light
themselves with set_max / set_max_rect.
"""

import logging

import numpy as np

from .config import BoltConfig, InvalidConfiguration
from .intensity import IntensityBuffer
from .presets import config_from_preset, get_preset
from .simulator import BoltSimulator

logger = logging.getLogger(__name__)


class LightningEngine:

    engine_name = "lightning"
    engine_label = "Lightning"

    def __init__(self, width=320, height=240, config=None, rng=None):
        config = config if config is not None else BoltConfig()
        self.buffer = IntensityBuffer(width, height)
        self.simulator = BoltSimulator(width, height, config, rng=rng)
        self.flash = 0.0
        self.generation = 0

    @property
    def width(self):
        return self.buffer.width

    @property
    def height(self):
        return self.buffer.height

    @property
    def config(self):
        return self.simulator.config

    @property
    def cells(self):
        return self.buffer.cells

    def step(self):
        """Advance one tick. Returns the intensity cells."""
        cfg = self.config
        self.flash = max(0.0, self.flash - cfg.flash_decay)

        self.buffer.decay(cfg.decay)
        spawned = self.simulator.maybe_spawn()
        struck = self.simulator.advance(self.buffer)
        if spawned is not None or struck:
            self.flash = cfg.flash_peak

        self.generation += 1
        return self.buffer.cells

    def step_n(self, n):
        """Advance n ticks. Returns final cells."""
        for _ in range(n):
            self.step()
        return self.buffer.cells

    def render(self):
        """Flat RGBA bytes of the current buffer."""
        return self.buffer.to_image()

    def clear(self):
        """Blank the screen and drop every bolt (scene reset)."""
        self.buffer.clear()
        self.simulator.reset()
        self.flash = 0.0
        self.generation = 0
        logger.info("Lightning engine cleared")

    def set_params(self, **params):
        """Update simulation parameters.

        Raises InvalidConfiguration and keeps the old config if any key
        is unknown or any value is out of range.
        """
        self.simulator.config = self.config.replace(**params)

    def get_params(self):
        return self.config.as_dict()

    @property
    def stats(self):
        buf = self.buffer.stats
        return {
            "generation": self.generation,
            "bolts": self.simulator.population,
            "flash": self.flash,
            "mean": buf["mean"],
            "max": buf["max"],
            "lit_pct": buf["lit_pct"],
        }

    @classmethod
    def get_slider_defs(cls):
        """Slider definitions for the control panel.

        Each entry: {"key", "label", "section", "min", "max", "default",
        "fmt", "step"}; integer parameters carry step=1.
        """
        d = BoltConfig()
        return [
            {"key": "spawn_chance", "label": "Spawn chance", "section": "SPAWNING",
             "min": 0.0, "max": 0.3, "default": d.spawn_chance, "fmt": ".3f"},
            {"key": "max_active", "label": "Max bolts", "section": "SPAWNING",
             "min": 1, "max": 100, "default": d.max_active, "fmt": ".0f", "step": 1},
            {"key": "sub_steps_per_tick", "label": "Fall speed", "section": "SPAWNING",
             "min": 1, "max": 80, "default": d.sub_steps_per_tick, "fmt": ".0f", "step": 1},
            {"key": "branch_base", "label": "Branch base", "section": "BRANCHING",
             "min": 0.0, "max": 0.1, "default": d.branch_base, "fmt": ".3f"},
            {"key": "branch_depth_decay", "label": "Depth decay", "section": "BRANCHING",
             "min": 0.0, "max": 5.0, "default": d.branch_depth_decay, "fmt": ".2f"},
            {"key": "kink_chance", "label": "Kink chance", "section": "SHAPE",
             "min": 0.0, "max": 0.5, "default": d.kink_chance, "fmt": ".2f"},
            {"key": "max_kink", "label": "Max kink", "section": "SHAPE",
             "min": 0, "max": 10, "default": d.max_kink, "fmt": ".0f", "step": 1},
            {"key": "decay", "label": "Trail decay", "section": "RENDERING",
             "min": 0.5, "max": 0.98, "default": d.decay, "fmt": ".2f"},
            {"key": "flash_peak", "label": "Flash", "section": "RENDERING",
             "min": 0.0, "max": 1.0, "default": d.flash_peak, "fmt": ".2f"},
        ]


def create_engine(width, height, preset=None, seed=None, **overrides):
    """Build an engine from a preset name, optional seed, and overrides."""
    if preset is not None and get_preset(preset) is None:
        raise InvalidConfiguration(f"Unknown preset: {preset}")
    config = config_from_preset(preset or "storm", **overrides)
    return LightningEngine(width, height, config, rng=np.random.default_rng(seed))
