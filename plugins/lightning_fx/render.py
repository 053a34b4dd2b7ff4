"""
Display Pipeline

Turns the engine's intensity buffer into a finished RGB frame:

    colormap -> glow halo -> screen flash

None of this feeds back into the simulation; the raw grayscale image
from IntensityBuffer.to_image() remains the canonical output.
"""

import numpy as np
from scipy.ndimage import gaussian_filter

from .colormaps import apply_colormap, get_colormap


def apply_glow(rgb, sigma=6, intensity=0.8, factor=2):
    """Soft halo around bright strokes via downsample-blur-upsample.

    Thin one-pixel bolts vanish under heavy downsampling, so the factor
    stays small; the max over each block keeps them alive.
    """
    if intensity <= 0:
        return rgb
    h, w = rgb.shape[:2]
    ph, pw = -h % factor, -w % factor
    padded = np.pad(rgb.astype(np.float32), ((0, ph), (0, pw), (0, 0)))
    small = padded.reshape(
        padded.shape[0] // factor, factor, padded.shape[1] // factor, factor, 3
    ).max(axis=(1, 3))
    small_sigma = max(1.0, sigma / factor)
    glow = gaussian_filter(small, [small_sigma, small_sigma, 0])
    glow = np.repeat(np.repeat(glow, factor, axis=0), factor, axis=1)[:h, :w, :]

    result = rgb.astype(np.float32) + glow * intensity
    np.clip(result, 0, 255, out=result)
    return result.astype(np.uint8)


def apply_flash(rgb, level):
    """Blend toward white by `level` in [0, 1]."""
    if level <= 0:
        return rgb
    level = min(level, 1.0)
    result = rgb.astype(np.float32) * (1.0 - level) + 255.0 * level
    return np.clip(result + 0.5, 0, 255).astype(np.uint8)


def render_frame(engine, palette="electric", glow=True, lut=None):
    """Render an engine's current state to a (H, W, 3) uint8 image.

    Args:
        engine: LightningEngine
        palette: colormap name (ignored when `lut` is given)
        glow: add the blurred halo
        lut: precomputed (256, 3) LUT, to skip rebuilding one every frame
    """
    if lut is None:
        lut = get_colormap(palette)
    rgb = apply_colormap(engine.cells, lut)
    if glow:
        rgb = apply_glow(rgb)
    return apply_flash(rgb, engine.flash)
