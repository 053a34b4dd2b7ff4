"""
Bolt Simulator - Stochastic Branching Random Walk

Owns the population of falling bolts. Each tick a root bolt may spawn at
the top row; every active bolt then descends `sub_steps_per_tick` rows,
writing 1/(depth+1) into the intensity buffer at each row it visits and
occasionally forking off a dimmer branch.

Branch probability per row:

    p = max(branch_base * exp(-branch_depth_decay * depth) * (1 - y/height),
            branch_min_chance)

so forks are most likely near the top and for shallow generations, with
a small floor that never vanishes.

Branches created during a pass are held aside and merged after the pass,
so a branch is first advanced on the tick after it is born. Finished
bolts are filtered out in one go at the end.
"""

import logging
import math

import numpy as np

from .bolt import make_bolt, roll_segment
from .config import BoltConfig, validate_dimensions

logger = logging.getLogger(__name__)


class BoltSimulator:

    def __init__(self, width, height, config=None, rng=None):
        """
        Args:
            width, height: Grid size the bolts fall through
            config: BoltConfig (defaults to the storm demo values)
            rng: numpy Generator; a fresh unseeded one if omitted
        """
        validate_dimensions(width, height)
        self.width = width
        self.height = height
        self._bolts = []
        self.config = config if config is not None else BoltConfig()
        self.rng = rng if rng is not None else np.random.default_rng()

    @property
    def config(self):
        return self._config

    @config.setter
    def config(self, config):
        """Swap parameters; a lowered cap drops the newest bolts beyond it."""
        self._config = config
        if len(self._bolts) > config.max_active:
            logger.debug("Cap lowered to %d, dropping %d bolts",
                         config.max_active, len(self._bolts) - config.max_active)
            del self._bolts[config.max_active:]

    @property
    def bolts(self):
        return tuple(self._bolts)

    @property
    def population(self):
        return len(self._bolts)

    def reset(self):
        """Drop every in-flight bolt."""
        self._bolts = []

    def branch_chance(self, depth, y):
        cfg = self.config
        p = cfg.branch_base * math.exp(-cfg.branch_depth_decay * depth) * (1.0 - y / self.height)
        return max(p, cfg.branch_min_chance)

    def maybe_spawn(self):
        """Possibly start a new root bolt on the top row. Returns it or None."""
        if len(self._bolts) >= self.config.max_active:
            return None
        if self.rng.random() >= self.config.spawn_chance:
            return None
        segment, drift = roll_segment(self.rng, self.config)
        bolt = make_bolt(
            x=int(self.rng.integers(0, self.width)),
            y=0,
            depth=0,
            segment_remaining=segment,
            drift=drift,
        )
        self._bolts.append(bolt)
        logger.debug("Spawned root bolt at x=%d", bolt.x)
        return bolt

    def advance(self, buffer):
        """Advance every active bolt by one tick's worth of rows.

        Returns the number of bolts that reached the bottom this tick.
        """
        cfg = self.config
        born = []

        for bolt in self._bolts:
            for _ in range(cfg.sub_steps_per_tick):
                buffer.set_max(bolt.x, bolt.y, bolt.brightness)
                if bolt.y >= self.height:
                    break

                # Fork at the current position, before this row's move
                if (self.rng.random() < self.branch_chance(bolt.depth, bolt.y)
                        and len(self._bolts) + len(born) < cfg.max_active):
                    born.append(bolt.spawn_child())

                if self.rng.random() < cfg.kink_chance:
                    bolt.x += int(self.rng.integers(-cfg.max_kink, cfg.max_kink + 1))
                bolt.x = min(max(bolt.x + bolt.drift, 0), self.width - 1)

                bolt.segment_remaining -= 1
                if bolt.segment_remaining <= 0:
                    bolt.segment_remaining, bolt.drift = roll_segment(self.rng, cfg)

                bolt.y += 1

        self._bolts.extend(born)
        before = len(self._bolts)
        self._bolts = [b for b in self._bolts if b.y < self.height]
        struck = before - len(self._bolts)

        if born or struck:
            logger.debug("Advance: %d branched, %d struck, %d active",
                         len(born), struck, len(self._bolts))
        return struck
