#!/usr/bin/env python3
"""
Tests for the intensity buffer.

Verifies:
1. Geometric decay with no writes
2. Max-merge writes (idempotent, monotonic, out-of-range ignored)
3. Grayscale RGBA conversion
"""

import numpy as np

from lightning_fx.config import InvalidConfiguration
from lightning_fx.intensity import IntensityBuffer


def test_decay_is_geometric():
    buf = IntensityBuffer(6, 4)
    buf.cells[:] = 1.0
    buf.cells[2, 3] = 0.5
    for _ in range(10):
        buf.decay(0.82)
    assert abs(buf.cells[0, 0] - 0.82 ** 10) < 1e-12
    assert abs(buf.cells[0, 0] - 0.1374) < 1e-4, f"0.82^10 should be ~0.1374: {buf.cells[0, 0]}"
    assert abs(buf.cells[2, 3] - 0.5 * 0.82 ** 10) < 1e-12


def test_set_max_is_monotonic_and_idempotent():
    buf = IntensityBuffer(5, 5)
    buf.set_max(2, 3, 0.5)
    assert buf.cells[3, 2] == 0.5, "Cells are indexed [y, x]"

    buf.set_max(2, 3, 0.5)
    assert buf.cells[3, 2] == 0.5, "Repeated write must not change the cell"

    buf.set_max(2, 3, 0.25)
    assert buf.cells[3, 2] == 0.5, "Lower write must not dim the cell"

    buf.set_max(2, 3, 1.0)
    assert buf.cells[3, 2] == 1.0


def test_set_max_out_of_bounds_is_ignored():
    buf = IntensityBuffer(4, 3)
    for x, y in [(-1, 0), (4, 0), (0, -1), (0, 3), (100, 100)]:
        buf.set_max(x, y, 1.0)
    assert buf.cells.sum() == 0.0


def test_set_max_rect_clips():
    buf = IntensityBuffer(8, 6)
    buf.cells[1, 1] = 0.2
    buf.set_max_rect(-2, -2, 4, 4, 0.7)
    assert np.all(buf.cells[0:2, 0:2] == 0.7)
    assert buf.cells[2, 2] == 0.0
    buf.set_max_rect(6, 5, 10, 10)
    assert np.all(buf.cells[5, 6:8] == 1.0)
    buf.set_max_rect(20, 20, 3, 3)  # fully outside
    assert buf.cells.max() == 1.0


def test_to_image_layout():
    buf = IntensityBuffer(3, 2)
    buf.cells[0, 1] = 0.5
    buf.cells[1, 2] = 1.0
    img = buf.to_image()

    assert img.dtype == np.uint8
    assert img.shape == (3 * 2 * 4,)
    px = img.reshape(2, 3, 4)
    assert tuple(px[0, 1]) == (128, 128, 128, 255), "0.5 rounds half-up to 128"
    assert tuple(px[1, 2]) == (255, 255, 255, 255)
    assert tuple(px[0, 0]) == (0, 0, 0, 255)
    assert np.all(px[:, :, 3] == 255), "Alpha is always opaque"


def test_to_image_is_regenerated():
    buf = IntensityBuffer(2, 2)
    first = buf.to_image()
    buf.set_max(0, 0, 1.0)
    second = buf.to_image()
    assert first[0] == 0 and second[0] == 255


def test_clear_and_stats():
    buf = IntensityBuffer(10, 10)
    buf.set_max_rect(0, 0, 5, 2, 1.0)
    stats = buf.stats
    assert stats["max"] == 1.0
    assert abs(stats["lit_pct"] - 10.0) < 1e-9
    buf.clear()
    assert buf.stats["max"] == 0.0


def test_invalid_dimensions():
    for w, h in [(0, 5), (5, 0), (-1, 3)]:
        try:
            IntensityBuffer(w, h)
        except InvalidConfiguration:
            continue
        raise AssertionError(f"{w}x{h} should be rejected")


if __name__ == "__main__":
    test_decay_is_geometric()
    test_set_max_is_monotonic_and_idempotent()
    test_set_max_out_of_bounds_is_ignored()
    test_set_max_rect_clips()
    test_to_image_layout()
    test_to_image_is_regenerated()
    test_clear_and_stats()
    test_invalid_dimensions()
    print("\n✓ All intensity buffer tests passed!\n")
