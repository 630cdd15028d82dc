from __future__ import annotations

from typing import Optional, Tuple

import pygame

from .snake.game import Arena, Wall

WINDOW_BG = (15, 18, 25)
GRID_BG = (23, 28, 38)
GRID_LINE = (45, 52, 66)
TEXT = (230, 235, 245)
WALL = (200, 80, 80)

CELL_SIZE = 24
GRID_MARGIN = 20
TOP_BAR = 48


class ArenaView:
    # works on any surface, no display needed
    def __init__(self, arena: Arena, cell_size: int = CELL_SIZE, margin: int = GRID_MARGIN) -> None:
        self.arena = arena
        self.cell = cell_size
        self.margin = margin
        self.thick = max(4, cell_size // 6)

    @property
    def size(self) -> Tuple[int, int]:
        return (
            self.arena.size_x * self.cell + 2 * self.margin,
            self.arena.size_y * self.cell + 2 * self.margin,
        )

    def wall_rect(self, wall: Wall) -> Optional[pygame.Rect]:
        x1, y1, x2, y2 = wall
        x0, y0, cell, thick = self.margin, self.margin, self.cell, self.thick
        if y1 == y2 and abs(x1 - x2) == 1:
            # cells side by side: vertical segment on their shared edge
            x = x0 + max(x1, x2) * cell
            return pygame.Rect(x - thick // 2, y0 + y1 * cell, thick, cell)
        if x1 == x2 and abs(y1 - y2) == 1:
            y = y0 + max(y1, y2) * cell
            return pygame.Rect(x0 + x1 * cell, y - thick // 2, cell, thick)
        return None

    def render(self, surface: Optional[pygame.Surface] = None, offset: Tuple[int, int] = (0, 0)) -> pygame.Surface:
        if surface is None:
            surface = pygame.Surface(self.size)
            surface.fill(WINDOW_BG)
        ox, oy = offset
        cell = self.cell
        grid_w = self.arena.size_x * cell
        grid_h = self.arena.size_y * cell
        x0 = ox + self.margin
        y0 = oy + self.margin
        pygame.draw.rect(surface, GRID_BG, (x0, y0, grid_w, grid_h))
        # grid lines subtle
        for r in range(self.arena.size_y + 1):
            y = y0 + r * cell
            pygame.draw.line(surface, GRID_LINE, (x0, y), (x0 + grid_w, y))
        for c in range(self.arena.size_x + 1):
            x = x0 + c * cell
            pygame.draw.line(surface, GRID_LINE, (x, y0), (x, y0 + grid_h))
        thick = self.thick
        # border
        pygame.draw.rect(surface, WALL, (x0, y0 - thick // 2, grid_w, thick))
        pygame.draw.rect(surface, WALL, (x0, y0 + grid_h - thick // 2, grid_w, thick))
        pygame.draw.rect(surface, WALL, (x0 - thick // 2, y0, thick, grid_h))
        pygame.draw.rect(surface, WALL, (x0 + grid_w - thick // 2, y0, thick, grid_h))
        for wall in self.arena.walls:
            rect = self.wall_rect(wall)
            if rect is not None:
                surface.fill(WALL, rect.move(ox, oy))
        return surface


class ArenaWindow:
    def __init__(self, arena: Arena, title: str = "Snake") -> None:
        self.view = ArenaView(arena)
        self.title = title
        self.screen: Optional[pygame.Surface] = None
        self.font: Optional[pygame.font.Font] = None
        self.running = False

    def open(self) -> None:
        pygame.init()
        pygame.display.set_caption(self.title)
        w, h = self.view.size
        self.screen = pygame.display.set_mode((w, h + TOP_BAR))
        self.font = pygame.font.SysFont("Arial", 22)
        self.running = True

    def refresh(self, status: str = "") -> bool:
        if not self.running or self.screen is None:
            return False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.close()
                return False
        self.screen.fill(WINDOW_BG)
        if self.font is not None and status:
            self.screen.blit(self.font.render(status, True, TEXT), (GRID_MARGIN, 12))
        self.view.render(self.screen, offset=(0, TOP_BAR))
        pygame.display.flip()
        return True

    def close(self) -> None:
        if self.running:
            self.running = False
            self.screen = None
            pygame.quit()
