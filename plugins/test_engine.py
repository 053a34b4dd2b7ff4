#!/usr/bin/env python3
"""
Tests for configuration, presets, the engine tick, and the display pipeline.

Verifies:
1. BoltConfig validation (no silent clamping)
2. Every preset builds a valid config
3. LightningEngine tick order, flash, params, and clear
4. Colormap / glow / flash rendering shapes and ranges
"""

import numpy as np

from lightning_fx.colormaps import COLORMAP_ORDER, apply_colormap, get_colormap
from lightning_fx.config import BoltConfig, InvalidConfiguration
from lightning_fx.engine import LightningEngine, create_engine
from lightning_fx.presets import PRESET_ORDER, config_from_preset, list_presets
from lightning_fx.render import apply_flash, apply_glow, render_frame


def _rejects(**params):
    try:
        BoltConfig(**params)
    except InvalidConfiguration:
        return True
    return False


def test_config_validation():
    assert _rejects(max_active=0), "max_active=0 must fail"
    assert _rejects(max_active=-3)
    assert _rejects(spawn_chance=1.5)
    assert _rejects(kink_chance=-0.1)
    assert _rejects(branch_base=2.0)
    assert _rejects(branch_min_chance=-0.5)
    assert _rejects(flash_peak=1.2)
    assert _rejects(sub_steps_per_tick=0)
    assert _rejects(segment_min=0)
    assert _rejects(segment_min=20, segment_max=10)
    assert _rejects(max_kink=-1)
    assert _rejects(branch_depth_decay=-1.0)
    assert _rejects(decay=1.0)
    assert _rejects(decay=0.0)
    assert _rejects(sub_steps_per_tick=2.5), "Counts must be integers"
    assert _rejects(max_kink=1.5)
    assert _rejects(max_active=3.0)
    assert _rejects(segment_min=2.0, segment_max=5)
    assert _rejects(segment_max=True)
    assert not _rejects(max_active=np.int64(4)), "numpy integers are integers"
    assert not _rejects(spawn_chance=0.0, kink_chance=1.0, branch_base=1.0)
    assert issubclass(InvalidConfiguration, ValueError)


def test_config_replace():
    cfg = BoltConfig()
    tuned = cfg.replace(spawn_chance=0.5)
    assert tuned.spawn_chance == 0.5 and cfg.spawn_chance == 0.02
    for bad in ({"max_active": 0}, {"not_a_param": 1}):
        try:
            cfg.replace(**bad)
        except InvalidConfiguration:
            continue
        raise AssertionError(f"replace({bad}) should fail")


def test_presets_build():
    assert [k for k, _, _ in list_presets()] == PRESET_ORDER
    for key in PRESET_ORDER:
        cfg = config_from_preset(key)
        assert isinstance(cfg, BoltConfig)
    assert config_from_preset("backdrop").spawn_chance == 0.07
    assert config_from_preset("storm", max_active=3).max_active == 3


def test_engine_step_and_flash():
    engine = LightningEngine(10, 5, BoltConfig(spawn_chance=1.0, max_active=1,
                                               sub_steps_per_tick=5),
                             rng=np.random.default_rng(0))
    engine.step()
    assert engine.generation == 1
    assert engine.simulator.population == 0
    assert engine.flash == engine.config.flash_peak
    for row in range(5):
        assert engine.cells[row].max() == 1.0

    # Next tick: the old trail has decayed once before the new bolt draws over it
    engine.set_params(spawn_chance=0.0)
    engine.step()
    assert abs(engine.cells.max() - 0.82) < 1e-12
    assert abs(engine.flash - (0.3 - 0.1)) < 1e-12


def test_engine_render_and_stats():
    engine = create_engine(16, 12, preset="tempest", seed=4)
    engine.step_n(20)
    img = engine.render()
    assert img.shape == (16 * 12 * 4,)
    stats = engine.stats
    assert stats["generation"] == 20
    assert 0.0 <= stats["max"] <= 1.0
    assert stats["bolts"] <= engine.config.max_active

    engine.clear()
    assert engine.cells.max() == 0.0
    assert engine.simulator.population == 0
    assert engine.generation == 0


def test_engine_params_rejected_keep_old():
    engine = LightningEngine(8, 8)
    before = engine.get_params()
    try:
        engine.set_params(max_active=0)
    except InvalidConfiguration:
        pass
    else:
        raise AssertionError("max_active=0 should be rejected")
    assert engine.get_params() == before

    keys = {d["key"] for d in LightningEngine.get_slider_defs()}
    assert keys <= set(before), "Every slider must map to a config field"


def test_lowering_cap_trims_population():
    engine = LightningEngine(40, 200, BoltConfig(spawn_chance=1.0, max_active=10,
                                                 sub_steps_per_tick=1, branch_base=1.0,
                                                 branch_min_chance=1.0),
                             rng=np.random.default_rng(8))
    engine.step_n(6)
    assert engine.simulator.population == 10
    oldest = engine.simulator.bolts[:2]

    engine.set_params(max_active=2)
    assert engine.simulator.population == 2
    assert engine.simulator.bolts == oldest, "The newest bolts are the ones dropped"
    for _ in range(5):
        engine.step()
        assert engine.simulator.population <= 2


def test_create_engine_unknown_preset():
    try:
        create_engine(8, 8, preset="hurricane")
    except InvalidConfiguration:
        pass
    else:
        raise AssertionError("Unknown preset should be rejected")


def test_colormaps():
    field = np.array([[0.0, 0.5, 1.0]])
    for name in COLORMAP_ORDER:
        lut = get_colormap(name)
        assert lut.shape == (256, 3) and lut.dtype == np.uint8
        rgb = apply_colormap(field, lut)
        assert rgb.shape == (1, 3, 3)
    mono = apply_colormap(field, get_colormap("mono"))
    assert tuple(mono[0, 2]) == (255, 255, 255)
    assert tuple(mono[0, 0]) == (0, 0, 0)


def test_glow_and_flash():
    rgb = np.zeros((9, 11, 3), dtype=np.uint8)
    rgb[4, 5] = 255
    glowed = apply_glow(rgb)
    assert glowed.shape == rgb.shape and glowed.dtype == np.uint8
    assert np.all(glowed >= rgb)
    assert glowed[4, 7].sum() > 0, "Glow should spill onto neighbours"

    assert np.all(apply_flash(rgb, 1.0) == 255)
    assert np.array_equal(apply_flash(rgb, 0.0), rgb)
    half = apply_flash(rgb, 0.5)
    assert half[0, 0, 0] == 128


def test_render_frame():
    engine = create_engine(20, 15, preset="storm", seed=1, spawn_chance=1.0)
    engine.step()
    frame = render_frame(engine, palette="violet")
    assert frame.shape == (15, 20, 3)
    assert frame.dtype == np.uint8


if __name__ == "__main__":
    test_config_validation()
    test_config_replace()
    test_presets_build()
    test_engine_step_and_flash()
    test_engine_render_and_stats()
    test_engine_params_rejected_keep_old()
    test_lowering_cap_trims_population()
    test_create_engine_unknown_preset()
    test_colormaps()
    test_glow_and_flash()
    test_render_frame()
    print("\n✓ All engine tests passed!\n")
