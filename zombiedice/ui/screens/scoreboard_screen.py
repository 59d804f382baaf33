"""Scoreboard screen: the pygame front end for a ScoreKeeper.

Everything drawn here comes from the GameView returned by the last command;
every click or key press is turned into one ScoreKeeper command.
"""
from __future__ import annotations
import pygame
from typing import Optional

from .base_screen import SimpleScreen
from zombiedice.game import ScoreKeeper
from zombiedice.core.view import GameView
from zombiedice.ui.formatting import leader_badge, log_detail, log_headline
from zombiedice.ui.settings import (
    WIDTH, HEIGHT, MARGIN, BG_COLOR, PANEL_BG, PANEL_BORDER,
    TEXT_PRIMARY, TEXT_ACCENT, TEXT_MUTED, TEXT_WHITE,
    BTN_COLOR, BTN_DANGER_COLOR, BTN_NEUTRAL_COLOR,
    ROW_SELECTED_BG, ROW_HEIGHT, BADGE_COLORS, LOG_VISIBLE_ENTRIES, LEADER_MARKER,
    FONT_SIZE, SMALL_FONT_SIZE, TITLE_FONT_SIZE,
)
from zombiedice.ui.ui_objects import TextField, UIButton

LEFT_WIDTH = 440
RIGHT_X = MARGIN * 2 + LEFT_WIDTH + 20
RIGHT_WIDTH = WIDTH - RIGHT_X - MARGIN
SELECTOR_TOP = 215
SELECTOR_ROWS = 7


class ScoreboardScreen(SimpleScreen):
    """Single screen with roster entry, turn entry, scoreboard, status and log."""

    def __init__(self, keeper: ScoreKeeper, font: Optional[pygame.font.Font] = None):
        super().__init__()
        self.keeper = keeper
        self.font = font or pygame.font.Font(None, FONT_SIZE)
        self.small_font = pygame.font.Font(None, SMALL_FONT_SIZE)
        self.title_font = pygame.font.Font(None, TITLE_FONT_SIZE)

        self.view: GameView = keeper.view()
        self.selected_player_id: str | None = self.view.next_player_id

        x = MARGIN
        can_add = lambda: self.view.can_add_player
        can_play = lambda: self.view.can_play
        unlocked = lambda: not self.view.locked

        self.name_field = TextField('name', pygame.Rect(x, 80, 300, 36), "Player name", is_enabled_fn=can_add, on_submit=self.add_player)
        self.target_field = TextField('target', pygame.Rect(x, 130, 300, 36), "Target brains", numeric=True, max_length=4, is_enabled_fn=unlocked, on_submit=self.apply_target)
        self.brains_field = TextField('brains', pygame.Rect(x, 460, 140, 36), "Brains", numeric=True, max_length=3, is_enabled_fn=can_play, on_submit=self.log_turn)
        self.shotguns_field = TextField('shotguns', pygame.Rect(x + 150, 460, 140, 36), "Shotguns", numeric=True, max_length=3, is_enabled_fn=can_play, on_submit=self.log_turn)
        self.note_field = TextField('note', pygame.Rect(x, 505, LEFT_WIDTH, 36), "Note (optional)", max_length=60, is_enabled_fn=can_play, on_submit=self.log_turn)
        self.fields = [self.name_field, self.target_field, self.brains_field, self.shotguns_field, self.note_field]
        self.target_field.set_text(str(self.view.target))

        self.buttons = [
            UIButton('add', pygame.Rect(x + 310, 80, 130, 36), "Add", BTN_COLOR, self.add_player, can_add),
            UIButton('apply_target', pygame.Rect(x + 310, 130, 130, 36), "Apply", BTN_NEUTRAL_COLOR, self.apply_target, unlocked),
            UIButton('log_turn', pygame.Rect(x + 300, 460, 140, 36), "Log Turn", BTN_COLOR, self.log_turn,
                     lambda: self.view.can_play and self.selected_player_id is not None),
            UIButton('undo', pygame.Rect(x, 570, 100, 40), "Undo", BTN_NEUTRAL_COLOR, self.undo, lambda: self.view.can_undo),
            UIButton('lock', pygame.Rect(x + 110, 570, 100, 40), "Lock", BTN_DANGER_COLOR, self.lock, lambda: self.view.can_lock),
            UIButton('new_game', pygame.Rect(x + 220, 570, 110, 40), "New Game", BTN_COLOR, self.new_game),
            UIButton('clear_data', pygame.Rect(x + 340, 570, 100, 40), "Clear", BTN_DANGER_COLOR, self.clear_data),
        ]
        self.focus(self.name_field)

    def button(self, name: str) -> UIButton:
        return next(b for b in self.buttons if b.name == name)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def _refresh(self, view: GameView) -> None:
        self.view = view
        if view.player(self.selected_player_id) is None:
            self.selected_player_id = view.next_player_id or (view.players[0].id if view.players else None)

    def add_player(self) -> None:
        before = len(self.view.players)
        self._refresh(self.keeper.add_player(self.name_field.text))
        if len(self.view.players) > before:
            self.name_field.clear()

    def log_turn(self) -> None:
        if self.selected_player_id is None:
            return
        turns_before = len(self.view.log)
        view = self.keeper.record_turn(
            self.selected_player_id,
            self.brains_field.text,
            self.shotguns_field.text,
            self.note_field.text,
        )
        self._refresh(view)
        if len(view.log) > turns_before:
            self.brains_field.clear()
            self.shotguns_field.clear()
            self.note_field.clear()
            if not view.locked and view.next_player_id:
                self.selected_player_id = view.next_player_id
            self.focus(self.brains_field)

    def apply_target(self) -> None:
        self._refresh(self.keeper.set_target(self.target_field.text))
        self.target_field.set_text(str(self.view.target))

    def undo(self) -> None:
        self._refresh(self.keeper.undo())
        if self.view.next_player_id:
            self.selected_player_id = self.view.next_player_id

    def lock(self) -> None:
        self._refresh(self.keeper.lock())

    def new_game(self) -> None:
        self._refresh(self.keeper.new_game())
        self.selected_player_id = self.view.next_player_id

    def clear_data(self) -> None:
        self._refresh(self.keeper.hard_reset())
        self.selected_player_id = None
        for f in self.fields:
            f.clear()
        self.target_field.set_text(str(self.view.target))
        self.focus(self.name_field)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def focus(self, target: TextField | None) -> None:
        for f in self.fields:
            f.focused = f is target

    def focused_field(self) -> TextField | None:
        return next((f for f in self.fields if f.focused), None)

    def _cycle_focus(self, step: int) -> None:
        current = self.focused_field()
        idx = self.fields.index(current) if current else -1
        for _ in range(len(self.fields)):
            idx = (idx + step) % len(self.fields)
            if self.fields[idx].enabled():
                self.focus(self.fields[idx])
                return

    def _move_selection(self, step: int) -> None:
        ids = [p.id for p in self.view.players]
        if not ids:
            return
        idx = ids.index(self.selected_player_id) if self.selected_player_id in ids else 0
        self.selected_player_id = ids[(idx + step) % len(ids)]

    def player_row_rects(self) -> list[tuple[str, pygame.Rect]]:
        rows = []
        for i, p in enumerate(self.view.players[:SELECTOR_ROWS]):
            rows.append((p.id, pygame.Rect(MARGIN, SELECTOR_TOP + i * ROW_HEIGHT, LEFT_WIDTH, ROW_HEIGHT)))
        return rows

    def handle_event(self, event: pygame.event.Event) -> None:  # type: ignore[override]
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for b in self.buttons:
                if b.handle_click(event.pos):
                    return
            for f in self.fields:
                if f.rect.collidepoint(event.pos) and f.enabled():
                    self.focus(f)
                    return
            if self.view.can_play:
                for pid, rect in self.player_row_rects():
                    if rect.collidepoint(event.pos):
                        self.selected_player_id = pid
                        return
            self.focus(None)

        elif event.type == pygame.TEXTINPUT:
            field = self.focused_field()
            if field:
                field.insert(event.text)

        elif event.type == pygame.KEYDOWN:
            field = self.focused_field()
            if event.key == pygame.K_TAB:
                self._cycle_focus(-1 if event.mod & pygame.KMOD_SHIFT else 1)
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                if field:
                    field.submit()
            elif event.key == pygame.K_BACKSPACE:
                if field:
                    field.backspace()
            elif event.key == pygame.K_UP:
                self._move_selection(-1)
            elif event.key == pygame.K_DOWN:
                self._move_selection(1)
            elif event.key == pygame.K_ESCAPE:
                # First press leaves the field, a second one closes the window
                if field:
                    self.focus(None)
                else:
                    self.request_exit()

    def update(self, dt: float) -> None:  # type: ignore[override]
        pass

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------
    def _wrap(self, text: str, font: pygame.font.Font, width: int) -> list[str]:
        lines: list[str] = []
        current = ""
        for word in text.split():
            trial = f"{current} {word}".strip()
            if font.size(trial)[0] <= width or not current:
                current = trial
            else:
                lines.append(current)
                current = word
        if current:
            lines.append(current)
        return lines

    def _blit(self, surface, text, font, color, pos) -> int:
        surf = font.render(text, True, color)
        surface.blit(surf, pos)
        return surf.get_height()

    def draw(self, surface: pygame.Surface) -> None:  # type: ignore[override]
        surface.fill(BG_COLOR)
        self._draw_controls(surface)
        self._draw_status(surface)
        self._draw_scoreboard(surface)
        self._draw_log(surface)

    def _draw_controls(self, surface: pygame.Surface) -> None:
        self._blit(surface, "ZOMBIE DICE", self.title_font, TEXT_ACCENT, (MARGIN, 22))
        for f in self.fields:
            f.draw(surface, self.font)
        for b in self.buttons:
            b.draw(surface, self.font)

        self._blit(surface, "Whose turn", self.small_font, TEXT_MUTED, (MARGIN, SELECTOR_TOP - 22))
        for pid, rect in self.player_row_rects():
            player = self.view.player(pid)
            if pid == self.selected_player_id:
                pygame.draw.rect(surface, ROW_SELECTED_BG, rect, border_radius=4)
            color = TEXT_PRIMARY if self.view.can_play else TEXT_MUTED
            if self.view.final_round.active and pid not in self.view.final_round.remaining_ids:
                color = TEXT_MUTED
            self._blit(surface, player.name, self.font, color, (rect.x + 8, rect.y + 5))
        hidden = len(self.view.players) - SELECTOR_ROWS
        if hidden > 0:
            y = SELECTOR_TOP + SELECTOR_ROWS * ROW_HEIGHT + 2
            self._blit(surface, f"+{hidden} more (Up/Down to select)", self.small_font, TEXT_MUTED, (MARGIN + 8, y))

    def _draw_status(self, surface: pygame.Surface) -> None:
        status = self.view.status
        badge_surf = self.font.render(status.badge, True, TEXT_WHITE)
        badge_rect = badge_surf.get_rect(topleft=(RIGHT_X + 10, 26)).inflate(20, 10)
        pygame.draw.rect(surface, BADGE_COLORS.get(status.kind, BADGE_COLORS[""]), badge_rect, border_radius=12)
        surface.blit(badge_surf, badge_surf.get_rect(center=badge_rect.center))

        y = 64
        for line in self._wrap(status.text, self.small_font, RIGHT_WIDTH):
            y += self._blit(surface, line, self.small_font, TEXT_PRIMARY, (RIGHT_X, y)) + 2
        self._blit(surface, leader_badge(self.view), self.font, TEXT_ACCENT, (RIGHT_X, y + 10))

    def _draw_scoreboard(self, surface: pygame.Surface) -> None:
        top = 150
        panel = pygame.Rect(RIGHT_X - 10, top, RIGHT_WIDTH + 10, 250)
        pygame.draw.rect(surface, PANEL_BG, panel, border_radius=8)
        pygame.draw.rect(surface, PANEL_BORDER, panel, width=1, border_radius=8)
        name_x, brains_x, turns_x = RIGHT_X, RIGHT_X + RIGHT_WIDTH - 180, RIGHT_X + RIGHT_WIDTH - 80
        y = top + 10
        for label, x in (("Player", name_x), ("Brains", brains_x), ("Turns", turns_x)):
            self._blit(surface, label, self.small_font, TEXT_MUTED, (x, y))
        y += 26
        for p in self.view.standings[:7]:
            name = p.name + (LEADER_MARKER if p.is_leader else "")
            self._blit(surface, name, self.font, TEXT_PRIMARY, (name_x, y))
            self._blit(surface, str(p.total), self.font, TEXT_PRIMARY, (brains_x, y))
            self._blit(surface, str(p.turns), self.font, TEXT_PRIMARY, (turns_x, y))
            y += ROW_HEIGHT

    def _draw_log(self, surface: pygame.Surface) -> None:
        y = 415
        self._blit(surface, f"Turn log ({self.view.target} to win)", self.small_font, TEXT_MUTED, (RIGHT_X, y))
        y += 24
        if not self.view.log:
            self._blit(surface, "No turns logged yet.", self.font, TEXT_MUTED, (RIGHT_X, y))
            return
        for entry in self.view.log[:LOG_VISIBLE_ENTRIES]:
            if y > HEIGHT - 40:
                break
            self._blit(surface, log_headline(entry), self.font, TEXT_PRIMARY, (RIGHT_X, y))
            self._blit(surface, log_detail(entry), self.small_font, TEXT_MUTED, (RIGHT_X + 220, y + 3))
            y += ROW_HEIGHT
