"""
Bolt - One Falling Path of the Lightning Effect

A bolt walks down the grid one row per sub-step. Its horizontal motion
comes from a per-segment drift in {-1, 0, 1} that is re-rolled every
few rows, plus occasional one-off kinks. Branches are new bolts that
start where their parent currently stands.
"""

from dataclasses import dataclass

DRIFTS = (-1, 0, 1)


@dataclass
class Bolt:
    x: int
    y: int
    depth: int
    segment_remaining: int
    drift: int

    @property
    def brightness(self):
        """Intensity written per row: 1 for root strikes, dimmer per generation."""
        return 1.0 / (self.depth + 1)

    def spawn_child(self):
        """New branch at the current position, continuing the same segment."""
        return make_bolt(
            x=self.x,
            y=self.y,
            depth=self.depth + 1,
            segment_remaining=self.segment_remaining,
            drift=self.drift,
        )


def make_bolt(x, y, depth, segment_remaining, drift):
    """Build a bolt. Every field is required; nothing is defaulted here."""
    if drift not in DRIFTS:
        raise ValueError(f"drift must be one of {DRIFTS}, got {drift}")
    return Bolt(
        x=int(x),
        y=int(y),
        depth=int(depth),
        segment_remaining=int(segment_remaining),
        drift=int(drift),
    )


def roll_segment(rng, config):
    """Draw a fresh (segment_remaining, drift) pair.

    Length is uniform over [segment_min, segment_max] inclusive.
    """
    length = int(rng.integers(config.segment_min, config.segment_max + 1))
    drift = int(rng.integers(-1, 2))
    return length, drift
