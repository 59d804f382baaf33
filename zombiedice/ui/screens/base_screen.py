import pygame
from typing import Protocol


class Screen(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def update(self, dt: float) -> None: ...
    def draw(self, surface: pygame.Surface) -> None: ...
    def wants_exit(self) -> bool: ...


class SimpleScreen:
    """Base for screens driven by App; a screen closes the window by calling ``request_exit``."""
    def __init__(self):
        self._exit_requested = False

    def handle_event(self, event: pygame.event.Event) -> None: pass
    def update(self, dt: float) -> None: pass
    def draw(self, surface: pygame.Surface) -> None: pass

    def wants_exit(self) -> bool:
        return self._exit_requested

    def request_exit(self) -> None:
        self._exit_requested = True
