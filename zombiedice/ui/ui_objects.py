from __future__ import annotations
import pygame
from dataclasses import dataclass, field
from typing import Any, Callable

from zombiedice.ui.settings import (
    BTN_DISABLED_COLOR, BTN_TEXT_ENABLED, BTN_TEXT_DISABLED,
    FIELD_BG, FIELD_BG_DISABLED, FIELD_BORDER, FIELD_BORDER_FOCUSED,
    TEXT_MUTED, TEXT_PRIMARY,
)

Color = tuple[int, int, int]


@dataclass
class UIButton:
    name: str
    rect: pygame.Rect
    label: str
    base_color: Color
    on_click: Callable[[], Any]
    # dynamic enable function: () -> bool
    is_enabled_fn: Callable[[], bool] = lambda: True
    border_radius: int = 8

    def enabled(self) -> bool:
        return bool(self.is_enabled_fn())

    def handle_click(self, pos) -> bool:
        """Run the action if ``pos`` hits an enabled button; returns True if consumed."""
        if not self.rect.collidepoint(pos):
            return False
        if not self.enabled():
            return False
        self.on_click()
        return True

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        enabled = self.enabled()
        color = self.base_color if enabled else BTN_DISABLED_COLOR
        pygame.draw.rect(surface, color, self.rect, border_radius=self.border_radius)
        pygame.draw.rect(surface, (200, 200, 200), self.rect, width=1, border_radius=self.border_radius)
        text_color = BTN_TEXT_ENABLED if enabled else BTN_TEXT_DISABLED
        text_surf = font.render(self.label, True, text_color)
        surface.blit(text_surf, text_surf.get_rect(center=self.rect.center))


@dataclass
class TextField:
    """Single-line text input. Numeric fields accept digits only."""
    name: str
    rect: pygame.Rect
    placeholder: str
    numeric: bool = False
    max_length: int = 32
    is_enabled_fn: Callable[[], bool] = lambda: True
    text: str = ""
    focused: bool = False
    on_submit: Callable[[], Any] | None = field(default=None, repr=False)

    def enabled(self) -> bool:
        return bool(self.is_enabled_fn())

    def insert(self, chars: str) -> None:
        if not self.enabled():
            return
        for ch in chars:
            if len(self.text) >= self.max_length:
                break
            if self.numeric and not ch.isdigit():
                continue
            if not ch.isprintable():
                continue
            self.text += ch

    def backspace(self) -> None:
        if self.enabled():
            self.text = self.text[:-1]

    def clear(self) -> None:
        self.text = ""

    def set_text(self, text: str) -> None:
        self.text = text[: self.max_length]

    def submit(self) -> None:
        if self.on_submit and self.enabled():
            self.on_submit()

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        enabled = self.enabled()
        pygame.draw.rect(surface, FIELD_BG if enabled else FIELD_BG_DISABLED, self.rect, border_radius=4)
        border = FIELD_BORDER_FOCUSED if self.focused and enabled else FIELD_BORDER
        pygame.draw.rect(surface, border, self.rect, width=2 if self.focused else 1, border_radius=4)
        if self.text:
            shown = self.text + ("|" if self.focused and enabled else "")
            text_surf = font.render(shown, True, TEXT_PRIMARY)
        else:
            text_surf = font.render(self.placeholder, True, TEXT_MUTED)
        surface.blit(text_surf, (self.rect.x + 8, self.rect.centery - text_surf.get_height() // 2))
