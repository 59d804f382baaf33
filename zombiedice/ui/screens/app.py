import pygame
from typing import Optional
from .scoreboard_screen import ScoreboardScreen
from zombiedice.game import ScoreKeeper
from zombiedice.meta.save_manager import SaveManager
from zombiedice.ui.settings import FPS

class App:
    """High-level application controller.

    Restores the saved blob (rebuilding derived state from its log), attaches
    autosave so every accepted command rewrites the blob, and runs the pygame
    loop over the scoreboard screen.
    """
    def __init__(self, screen: pygame.Surface, font: pygame.font.Font, clock: pygame.time.Clock,
                 keeper: Optional[ScoreKeeper] = None, save_manager: Optional[SaveManager] = None):
        self.screen = screen
        self.font = font
        self.clock = clock
        self.keeper = keeper or ScoreKeeper()
        self.save_manager = save_manager or SaveManager()

        self.save_manager.load_into(self.keeper)
        self.save_manager.attach(self.keeper)

        self.scoreboard = ScoreboardScreen(self.keeper, font)

    def step(self, events) -> bool:
        """Process one frame worth of events; returns False when the app should exit."""
        for event in events:
            if event.type == pygame.QUIT:
                return False
            self.scoreboard.handle_event(event)
        return not self.scoreboard.wants_exit()

    def run(self):
        running = True
        while running:
            dt = self.clock.tick(FPS) / 1000.0
            running = self.step(pygame.event.get())
            if not running:
                break
            self.scoreboard.update(dt)
            self.scoreboard.draw(self.screen)
            pygame.display.flip()
        self.save_manager.detach()
        pygame.quit()


def main():
    from zombiedice.ui.settings import WIDTH, HEIGHT, FONT_SIZE
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("Zombie Dice Score Keeper")
    font = pygame.font.Font(None, FONT_SIZE)
    clock = pygame.time.Clock()
    App(screen, font, clock).run()
