"""
Side-Panel Widgets for the Lightning Viewer

Flat, dark widgets drawn straight onto a pygame surface. The panel owns
layout (a running cursor down the page) and translates mouse positions
into panel-local coordinates before handing events to widgets.
"""

import pygame


THEME = {
    "bg": (6, 8, 14),
    "panel": (16, 18, 28),
    "track": (44, 48, 66),
    "track_fill": (120, 160, 255),
    "handle": (200, 210, 235),
    "handle_active": (255, 255, 255),
    "text": (175, 182, 200),
    "text_bright": (232, 236, 248),
    "text_dim": (96, 102, 122),
    "button": (34, 38, 54),
    "button_hover": (50, 56, 78),
    "button_active": (82, 110, 200),
    "divider": (38, 42, 58),
}


class Slider:
    """Labelled horizontal slider. `step` snaps the value (step=1 for ints)."""

    height = 36

    def __init__(self, x, y, width, label, min_val, max_val, value,
                 fmt=".3f", step=None, on_change=None):
        self.x = x
        self.y = y
        self.width = width
        self.label = label
        self.min_val = min_val
        self.max_val = max_val
        self.fmt = fmt
        self.step = step
        self.on_change = on_change
        self.dragging = False
        self.hovered = False
        self.value = self._snap(value)

        self.track_x = x + 8
        self.track_y = y + 22
        self.track_w = width - 16

    def _snap(self, val):
        val = max(self.min_val, min(self.max_val, val))
        if self.step:
            val = round(val / self.step) * self.step
            if self.step == 1:
                val = int(val)
        return val

    def _val_to_x(self, val):
        frac = (val - self.min_val) / (self.max_val - self.min_val)
        return self.track_x + frac * self.track_w

    def _x_to_val(self, px):
        frac = max(0.0, min(1.0, (px - self.track_x) / self.track_w))
        return self._snap(self.min_val + frac * (self.max_val - self.min_val))

    def _drag_to(self, px):
        new_val = self._x_to_val(px)
        if new_val != self.value:
            self.value = new_val
            if self.on_change:
                self.on_change(self.value)

    def handle_event(self, event):
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            mx, my = event.pos
            if (self.track_x - 4 <= mx <= self.track_x + self.track_w + 4
                    and abs(my - self.track_y) <= 12):
                self.dragging = True
                self._drag_to(mx)
                return True
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.dragging = False
        elif event.type == pygame.MOUSEMOTION:
            mx, my = event.pos
            self.hovered = (abs(mx - self._val_to_x(self.value)) < 12
                            and abs(my - self.track_y) < 12)
            if self.dragging:
                self._drag_to(mx)
                return True
        return False

    def set_value(self, val):
        """Move the handle without firing on_change."""
        self.value = self._snap(val)

    def draw(self, surface, font):
        surface.blit(font.render(self.label, True, THEME["text"]), (self.x + 8, self.y + 2))
        val_surf = font.render(f"{self.value:{self.fmt}}", True, THEME["text_bright"])
        surface.blit(val_surf, (self.x + self.width - val_surf.get_width() - 8, self.y + 2))

        hx = self._val_to_x(self.value)
        pygame.draw.rect(surface, THEME["track"],
                         pygame.Rect(self.track_x, self.track_y - 2, self.track_w, 4),
                         border_radius=2)
        pygame.draw.rect(surface, THEME["track_fill"],
                         pygame.Rect(self.track_x, self.track_y - 2, hx - self.track_x, 4),
                         border_radius=2)
        active = self.dragging or self.hovered
        pygame.draw.circle(surface, THEME["handle_active"] if active else THEME["handle"],
                           (int(hx), self.track_y), 9 if self.dragging else 7)


class Button:

    def __init__(self, x, y, width, height, label, on_click=None, active=False):
        self.rect = pygame.Rect(x, y, width, height)
        self.label = label
        self.on_click = on_click
        self.active = active
        self.hovered = False

    def handle_event(self, event):
        if event.type == pygame.MOUSEMOTION:
            self.hovered = self.rect.collidepoint(event.pos)
        elif (event.type == pygame.MOUSEBUTTONDOWN and event.button == 1
                and self.rect.collidepoint(event.pos)):
            if self.on_click:
                self.on_click()
            return True
        return False

    def draw(self, surface, font):
        if self.active:
            color = THEME["button_active"]
        elif self.hovered:
            color = THEME["button_hover"]
        else:
            color = THEME["button"]
        pygame.draw.rect(surface, color, self.rect, border_radius=4)

        label_surf = font.render(self.label, True, THEME["text_bright"])
        surface.blit(label_surf, label_surf.get_rect(center=self.rect.center))


class ButtonRow:
    """Wrapping row of mutually exclusive buttons."""

    def __init__(self, x, y, width, labels, selected=0, on_select=None, btn_height=26):
        self.labels = labels
        self.on_select = on_select
        self.buttons = []

        bx, by = x, y
        for label in labels:
            bw = max(len(label) * 8 + 16, 50)
            if bx + bw > x + width and bx > x:
                bx, by = x, by + btn_height + 4
            self.buttons.append(Button(bx, by, bw, btn_height, label))
            bx += bw + 4
        self.total_height = by - y + btn_height
        self.select(selected)

    def select(self, idx):
        self.selected = idx
        for i, btn in enumerate(self.buttons):
            btn.active = (i == idx)

    def handle_event(self, event):
        for i, btn in enumerate(self.buttons):
            if btn.handle_event(event):
                self.select(i)
                if self.on_select:
                    self.on_select(i, self.labels[i])
                return True
        return False

    def draw(self, surface, font):
        for btn in self.buttons:
            btn.draw(surface, font)


class SectionHeader:

    height = 24

    def __init__(self, x, y, width, title):
        self.x = x
        self.y = y
        self.width = width
        self.title = title

    def draw(self, surface, font):
        pygame.draw.line(surface, THEME["divider"],
                         (self.x + 8, self.y + 8), (self.x + self.width - 8, self.y + 8))
        surface.blit(font.render(self.title, True, THEME["text_dim"]), (self.x + 8, self.y + 12))


class ControlPanel:
    """Vertical stack of widgets rendered to its own surface."""

    def __init__(self, x, y, width, height):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.widgets = []
        self._cursor_y = 8

    def _push(self, widget, advance):
        self.widgets.append(widget)
        self._cursor_y += advance
        return widget

    def add_section(self, title):
        return self._push(SectionHeader(0, self._cursor_y, self.width, title),
                          SectionHeader.height + 4)

    def add_slider(self, label, min_val, max_val, value, fmt=".3f",
                   step=None, on_change=None):
        slider = Slider(0, self._cursor_y, self.width, label,
                        min_val, max_val, value, fmt, step, on_change)
        return self._push(slider, Slider.height + 6)

    def add_button_row(self, labels, selected=0, on_select=None):
        row = ButtonRow(8, self._cursor_y, self.width - 16, labels, selected, on_select)
        return self._push(row, row.total_height + 8)

    def add_button(self, label, on_click=None):
        return self._push(Button(8, self._cursor_y, self.width - 16, 28, label, on_click), 36)

    def handle_event(self, event):
        """Route an event to widgets in panel-local coordinates."""
        if hasattr(event, "pos"):
            lx, ly = event.pos[0] - self.x, event.pos[1] - self.y
            if not (0 <= lx <= self.width and 0 <= ly <= self.height):
                # Release drags that end outside the panel
                if event.type == pygame.MOUSEBUTTONUP:
                    for widget in self.widgets:
                        if isinstance(widget, Slider):
                            widget.dragging = False
                return False
            attrs = {k: v for k, v in event.__dict__.items() if k != "pos"}
            event = pygame.event.Event(event.type, {**attrs, "pos": (lx, ly)})

        for widget in self.widgets:
            if hasattr(widget, "handle_event") and widget.handle_event(event):
                return True
        return False

    def draw(self, target_surface, font):
        surface = pygame.Surface((self.width, self.height))
        surface.fill(THEME["panel"])
        pygame.draw.line(surface, THEME["divider"], (0, 0), (0, self.height))
        for widget in self.widgets:
            widget.draw(surface, font)
        target_surface.blit(surface, (self.x, self.y))
