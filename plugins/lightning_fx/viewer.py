"""
Interactive Pygame Viewer for the Lightning Effect

Ticks the engine at a fixed 30 Hz, independent of the display frame
rate, and shows the buffer through the colormap / glow / flash pipeline.

Controls:
  SPACE       Pause / Resume
  R           Reset (clear buffer and bolts) with current preset
  C           Clear buffer and bolts, keep parameters
  TAB         Toggle control panel
  G           Toggle glow
  H           Toggle HUD overlay
  S           Save screenshot
  Q / ESC     Quit
  1-9         Select preset
"""

import logging
import os
import time

import numpy as np
import pygame

from .colormaps import COLORMAP_ORDER, get_colormap
from .config import InvalidConfiguration
from .controls import ControlPanel, THEME
from .engine import create_engine
from .presets import PRESET_ORDER, get_preset
from .render import render_frame

logger = logging.getLogger(__name__)

PANEL_WIDTH = 280
TICK_RATE = 30.0


class Viewer:

    def __init__(self, width=960, height=720, sim_width=320, sim_height=240,
                 start_preset="storm", seed=None, palette=None):
        self.canvas_w = width
        self.canvas_h = height
        self.sim_width = sim_width
        self.sim_height = sim_height
        self.seed = seed

        self.running = True
        self.paused = False
        self.show_hud = True
        self.glow = True
        self.panel_visible = True
        self.panel = None
        self.preset_buttons = None
        self.palette_buttons = None
        self.sliders = {}
        self.tick_accumulator = 0.0
        self.fps_history = []

        self.palette = palette
        self.preset_key = start_preset
        self.engine = None
        self._apply_preset(start_preset, palette_override=palette)

    @property
    def total_w(self):
        return self.canvas_w + (PANEL_WIDTH if self.panel_visible else 0)

    def _apply_preset(self, key, palette_override=None):
        preset = get_preset(key)
        self.preset_key = key
        self.engine = create_engine(self.sim_width, self.sim_height,
                                    preset=key, seed=self.seed)
        self._set_palette(palette_override or preset.get("palette", "electric"))
        self._sync_sliders_from_engine()
        if self.preset_buttons:
            self.preset_buttons.select(PRESET_ORDER.index(key))
        logger.info("Preset: %s", preset["name"])

    def _set_palette(self, name):
        self.palette = name
        self.lut = get_colormap(name)
        if self.palette_buttons:
            self.palette_buttons.select(COLORMAP_ORDER.index(name))

    def _sync_sliders_from_engine(self):
        params = self.engine.get_params()
        for key, slider in self.sliders.items():
            slider.set_value(params[key])

    def _build_panel(self):
        panel = ControlPanel(self.canvas_w, 0, PANEL_WIDTH, self.canvas_h)

        panel.add_section("PRESET")
        self.preset_buttons = panel.add_button_row(
            [get_preset(k)["name"] for k in PRESET_ORDER],
            selected=PRESET_ORDER.index(self.preset_key),
            on_select=lambda idx, _name: self._apply_preset(PRESET_ORDER[idx]),
        )

        panel.add_section("PALETTE")
        self.palette_buttons = panel.add_button_row(
            COLORMAP_ORDER,
            selected=COLORMAP_ORDER.index(self.palette),
            on_select=lambda _idx, name: self._set_palette(name),
        )

        self.sliders = {}
        params = self.engine.get_params()
        section = None
        for sdef in self.engine.get_slider_defs():
            if sdef["section"] != section:
                section = sdef["section"]
                panel.add_section(section)
            self.sliders[sdef["key"]] = panel.add_slider(
                sdef["label"], sdef["min"], sdef["max"], params[sdef["key"]],
                fmt=sdef["fmt"], step=sdef.get("step"),
                on_change=self._make_param_callback(sdef["key"]),
            )

        panel.add_button("Clear", on_click=self.engine_clear)
        self.panel = panel

    def _make_param_callback(self, key):
        def callback(val):
            try:
                self.engine.set_params(**{key: val})
            except InvalidConfiguration as e:
                logger.warning("Rejected %s=%s: %s", key, val, e)
                self._sync_sliders_from_engine()
        return callback

    def engine_clear(self):
        self.engine.clear()

    def _render_surface(self):
        rgb = render_frame(self.engine, lut=self.lut, glow=self.glow)
        return pygame.surfarray.make_surface(rgb.swapaxes(0, 1).copy())

    def _draw_hud(self, screen, font, fps):
        if not self.show_hud:
            return
        stats = self.engine.stats
        line = (f"{get_preset(self.preset_key)['name']}  |  Tick: {stats['generation']:,}  |  "
                f"Bolts: {stats['bolts']}  |  Lit: {stats['lit_pct']:.1f}%  |  "
                f"{self.sim_width}x{self.sim_height}  |  FPS: {fps:.0f}")
        if self.paused:
            line = "[PAUSED]  " + line
        bg = pygame.Surface((self.canvas_w, 24), pygame.SRCALPHA)
        bg.fill((0, 0, 0, 140))
        screen.blit(bg, (0, 0))
        screen.blit(font.render(line, True, (210, 215, 225)), (10, 6))

    def _save_screenshot(self):
        screenshots_dir = os.path.join(os.getcwd(), "screenshots")
        os.makedirs(screenshots_dir, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        path = os.path.join(screenshots_dir, f"lightning_{self.preset_key}_{timestamp}.png")
        pygame.image.save(self._render_surface(), path)
        logger.info("Screenshot saved: %s", path)

    def run(self):
        pygame.init()
        pygame.display.set_caption("Lightning")
        screen = pygame.display.set_mode((self.total_w, self.canvas_h))
        clock = pygame.time.Clock()
        hud_font = pygame.font.SysFont("menlo", 13)
        panel_font = pygame.font.SysFont("menlo", 12)

        self._build_panel()
        last_time = time.time()

        while self.running:
            now = time.time()
            dt = min(now - last_time, 0.1)
            last_time = now

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    screen = self._handle_keydown(event, screen)
                elif self.panel_visible and self.panel:
                    self.panel.handle_event(event)

            # Fixed-rate ticks, decoupled from display fps
            if not self.paused:
                self.tick_accumulator += dt * TICK_RATE
                while self.tick_accumulator >= 1.0:
                    self.engine.step()
                    self.tick_accumulator -= 1.0

            screen.fill(THEME["bg"])
            scaled = pygame.transform.scale(self._render_surface(),
                                            (self.canvas_w, self.canvas_h))
            screen.blit(scaled, (0, 0))

            self.fps_history.append(max(dt, 1e-6))
            if len(self.fps_history) > 30:
                self.fps_history.pop(0)
            self._draw_hud(screen, hud_font, 1.0 / float(np.mean(self.fps_history)))

            if self.panel_visible and self.panel:
                self.panel.draw(screen, panel_font)

            pygame.display.flip()
            clock.tick(60)

        pygame.quit()

    def _handle_keydown(self, event, screen):
        key = event.key

        if key in (pygame.K_q, pygame.K_ESCAPE):
            self.running = False
        elif key == pygame.K_SPACE:
            self.paused = not self.paused
        elif key == pygame.K_r:
            self._apply_preset(self.preset_key, palette_override=self.palette)
        elif key == pygame.K_c:
            self.engine_clear()
        elif key == pygame.K_g:
            self.glow = not self.glow
        elif key == pygame.K_h:
            self.show_hud = not self.show_hud
        elif key == pygame.K_s:
            self._save_screenshot()
        elif key == pygame.K_TAB:
            self.panel_visible = not self.panel_visible
            screen = pygame.display.set_mode((self.total_w, self.canvas_h))
        elif pygame.K_1 <= key <= pygame.K_9:
            idx = key - pygame.K_1
            if idx < len(PRESET_ORDER):
                self._apply_preset(PRESET_ORDER[idx])
        return screen
