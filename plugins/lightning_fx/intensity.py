"""
Intensity Buffer - Fading Brightness Grid

A 2D float grid in [0, 1] that bolts and scene decorations write into.
Every tick the whole grid is multiplied by a decay factor, so anything
not rewritten fades geometrically. Writes are max-merges, which keeps the
grid inside [0, 1] without clamping and makes overlapping writes
order-independent.
"""

import numpy as np

from .config import validate_dimensions


class IntensityBuffer:

    def __init__(self, width, height):
        validate_dimensions(width, height)
        self.width = width
        self.height = height
        self.cells = np.zeros((height, width), dtype=np.float64)

    def in_bounds(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def decay(self, factor):
        """Fade every cell by a constant factor (once per tick, before writes)."""
        self.cells *= factor

    def set_max(self, x, y, intensity):
        """Raise cell (x, y) to intensity. Out-of-range coordinates are ignored."""
        if not self.in_bounds(x, y):
            return
        if intensity > self.cells[y, x]:
            self.cells[y, x] = intensity

    def set_max_rect(self, x, y, w, h, intensity=1.0):
        """Max-merge a rectangle, clipped to the grid.

        Used by scene decorations (platforms, floor lines, a character)
        to light themselves on top of the bolt trails.
        """
        x0, y0 = max(0, x), max(0, y)
        x1, y1 = min(self.width, x + w), min(self.height, y + h)
        if x0 >= x1 or y0 >= y1:
            return
        region = self.cells[y0:y1, x0:x1]
        np.maximum(region, intensity, out=region)

    def clear(self):
        self.cells[:] = 0.0

    def to_rgba(self):
        """Return the grid as a (height, width, 4) uint8 grayscale image.

        Channel value is round(min(1, v) * 255), alpha fully opaque.
        Rebuilt on every call since cells change every tick.
        """
        v = np.floor(np.minimum(self.cells, 1.0) * 255.0 + 0.5).astype(np.uint8)
        rgba = np.empty((self.height, self.width, 4), dtype=np.uint8)
        rgba[:, :, 0] = v
        rgba[:, :, 1] = v
        rgba[:, :, 2] = v
        rgba[:, :, 3] = 255
        return rgba

    def to_image(self):
        """Flat row-major RGBA bytes, length width * height * 4."""
        return self.to_rgba().reshape(-1)

    @property
    def stats(self):
        return {
            "mean": float(self.cells.mean()),
            "max": float(self.cells.max()),
            "lit_pct": float((self.cells > 0.01).sum()) / self.cells.size * 100,
        }
