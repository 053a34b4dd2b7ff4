"""
Lightning Effect Viewer - Entry Point

Usage:
    python -m lightning_fx [preset] [--size WxH] [--window WxH] [--seed N]
                           [--palette NAME] [--snap N] [--verbose]
                           [--log-file PATH]

Examples:
    python -m lightning_fx
    python -m lightning_fx tempest
    python -m lightning_fx backdrop --size 200x150 --window 800x600
    python -m lightning_fx storm --seed 7 --snap 120

--snap N runs N ticks headless and writes a PNG to ./screenshots.
Use --list to see all available presets and palettes.
"""

import logging
import os
import sys

from .colormaps import COLORMAP_ORDER
from .logging_config import setup_logging
from .presets import PRESET_ORDER, get_preset, list_presets

logger = logging.getLogger(__name__)

_VALUE_ARGS = ("--size", "--window", "--seed", "--palette", "--snap", "--log-file")


def _parse_wxh(text):
    w, h = text.lower().split("x")
    return int(w), int(h)


def snap(preset, sim_w, sim_h, steps, seed=None, palette=None, out_dir="screenshots"):
    """Headless mode: run N ticks, save the rendered frame, return its path."""
    from PIL import Image

    from .engine import create_engine
    from .render import render_frame

    engine = create_engine(sim_w, sim_h, preset=preset, seed=seed)
    palette = palette or get_preset(preset).get("palette", "electric")

    logger.info("Running %s for %d ticks at %dx%d", preset, steps, sim_w, sim_h)
    engine.step_n(steps)

    rgb = render_frame(engine, palette=palette)
    os.makedirs(out_dir, exist_ok=True)
    path = os.path.join(out_dir, f"lightning_{preset}.png")
    Image.fromarray(rgb).save(path)
    logger.info("Saved %s (%d bolts in flight)", path, engine.stats["bolts"])
    return path


def main(argv=None):
    preset = "storm"
    sim_w, sim_h = 320, 240
    win_w, win_h = 960, 720
    seed = None
    palette = None
    snap_steps = 0
    level = logging.INFO
    log_file = None

    args = sys.argv[1:] if argv is None else list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in _VALUE_ARGS and i + 1 >= len(args):
            print(f"Missing value for {arg}")
            return 2
        if arg == "--size":
            sim_w, sim_h = _parse_wxh(args[i + 1])
            i += 2
        elif arg == "--window":
            win_w, win_h = _parse_wxh(args[i + 1])
            i += 2
        elif arg == "--seed":
            seed = int(args[i + 1])
            i += 2
        elif arg == "--palette":
            palette = args[i + 1]
            if palette not in COLORMAP_ORDER:
                print(f"Unknown palette: {palette}")
                return 2
            i += 2
        elif arg == "--snap":
            snap_steps = int(args[i + 1])
            i += 2
        elif arg == "--log-file":
            log_file = args[i + 1]
            i += 2
        elif arg in ("--verbose", "-v"):
            level = logging.DEBUG
            i += 1
        elif arg == "--list":
            print("\nAvailable presets:")
            for key, name, desc in list_presets():
                print(f"    {key:12s} {name:12s} {desc}")
            print(f"\nPalettes: {', '.join(COLORMAP_ORDER)}\n")
            return 0
        elif arg in ("--help", "-h"):
            print(__doc__)
            return 0
        elif arg in PRESET_ORDER:
            preset = arg
            i += 1
        else:
            print(f"Unknown argument: {arg}")
            print("Use --list to see available presets")
            return 2

    setup_logging(level, log_file=log_file, entry_name=__name__)

    if snap_steps > 0:
        snap(preset, sim_w, sim_h, snap_steps, seed=seed, palette=palette)
        return 0

    from .viewer import Viewer

    print("Starting Lightning Viewer")
    print(f"  Preset: {preset}")
    print(f"  Sim size: {sim_w}x{sim_h}")
    print(f"  Window: {win_w}x{win_h}")
    print()

    viewer = Viewer(width=win_w, height=win_h, sim_width=sim_w, sim_height=sim_h,
                    start_preset=preset, seed=seed, palette=palette)
    viewer.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
