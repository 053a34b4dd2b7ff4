"""
Colormaps for the Lightning Effect

Maps intensity [0, 1] to RGB. Each colormap is a (256, 3) uint8 lookup
table built from a handful of colour stops.
"""

import numpy as np


def _interpolate_colors(stops, n=256):
    """
    Build a LUT by smoothstep interpolation between colour stops.

    Args:
        stops: List of (position, (r, g, b)), positions ascending in [0, 1]
        n: Number of entries in the LUT
    """
    t = np.linspace(0.0, 1.0, n)
    positions = np.array([s[0] for s in stops], dtype=np.float64)
    colors = np.array([s[1] for s in stops], dtype=np.float64)

    # Segment index for every LUT entry
    idx = np.clip(np.searchsorted(positions, t, side="right") - 1, 0, len(stops) - 2)
    span = positions[idx + 1] - positions[idx]
    frac = np.where(span > 0, (t - positions[idx]) / np.where(span > 0, span, 1.0), 0.0)
    frac = np.clip(frac, 0.0, 1.0)
    frac = frac * frac * (3 - 2 * frac)

    lut = colors[idx] + frac[:, None] * (colors[idx + 1] - colors[idx])
    return lut.astype(np.uint8)


def mono():
    """Plain grayscale, identical to the raw buffer image."""
    return np.repeat(np.arange(256, dtype=np.uint8)[:, None], 3, axis=1)


def electric():
    """Blue-white arc light on a night sky."""
    return _interpolate_colors([
        (0.00, (2, 3, 10)),
        (0.15, (15, 25, 70)),
        (0.40, (60, 110, 220)),
        (0.70, (170, 210, 255)),
        (1.00, (255, 255, 255)),
    ])


def violet():
    """Purple storm glow."""
    return _interpolate_colors([
        (0.00, (4, 0, 8)),
        (0.25, (50, 10, 90)),
        (0.55, (150, 70, 220)),
        (0.80, (220, 170, 255)),
        (1.00, (255, 245, 255)),
    ])


def ember():
    """Hot orange discharge."""
    return _interpolate_colors([
        (0.00, (6, 2, 0)),
        (0.30, (90, 20, 0)),
        (0.60, (230, 110, 20)),
        (0.85, (255, 210, 120)),
        (1.00, (255, 255, 230)),
    ])


COLORMAPS = {
    "mono": mono,
    "electric": electric,
    "violet": violet,
    "ember": ember,
}

COLORMAP_ORDER = list(COLORMAPS.keys())


def get_colormap(name):
    """Get a colormap LUT (256, 3) uint8 array by name."""
    return COLORMAPS[name]()


def apply_colormap(field, lut):
    """
    Apply a colormap LUT to a 2D float field.

    Args:
        field: 2D numpy array with values in [0, 1]
        lut: (256, 3) uint8 colormap lookup table

    Returns:
        (H, W, 3) uint8 RGB image
    """
    indices = np.floor(np.clip(field, 0, 1) * 255 + 0.5).astype(np.uint8)
    return lut[indices]
