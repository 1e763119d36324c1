

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from falling_blocks.game import GameSnapshot, Piece


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (0, 240, 240),  # I
        2: (240, 240, 0),  # O
        3: (160, 0, 240),  # T
        4: (0, 240, 0),    # S
        5: (240, 0, 0),    # Z
        6: (0, 0, 240),    # J
        7: (170, 110, 40),  # L
    }
    return palette.get(abs(v), (200, 200, 200))


CONTROLS = (
    "a/Left  - Move left",
    "d/Right - Move right",
    "s/Down  - Soft drop",
    "w/Up    - Rotate",
    "h/Space - Hard drop",
    "g       - Hold",
    "p / r   - Pause / Resume",
    "q/Esc   - Quit",
)


class Renderer:
    """Draws a :class:`GameSnapshot`; never touches the engine itself."""

    def __init__(self, cell_size: int = 20, margin: int = 20, side_panel_cells: int = 12) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.side_panel_cells = side_panel_cells
        self._font: Optional[pygame.font.Font] = None

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, 24)
        return self._font

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        board_w = width * self.cell_size
        board_h = height * self.cell_size
        side_w = self.side_panel_cells * self.cell_size
        return self.margin * 3 + board_w + side_w, self.margin * 2 + board_h

    def _cell_rect(self, x0: int, y0: int, col: int, row: int) -> pygame.Rect:
        return pygame.Rect(
            x0 + col * self.cell_size,
            y0 + row * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _grid_surface(self, snapshot: GameSnapshot) -> pygame.Surface:
        state = snapshot.grid
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                pygame.draw.rect(surf, _color_for_value(int(state[y, x])), self._cell_rect(0, 0, x, y))

        if not snapshot.game_over:
            active = snapshot.active
            color = _color_for_value(int(active.color))
            # Landing ghost outline first, so the active piece covers it when they overlap
            for x, y in active.cells_at(active.x, snapshot.ghost_y):
                if 0 <= y < h:
                    pygame.draw.rect(surf, color, self._cell_rect(0, 0, x, y), 1)
            for x, y in active.cells_at(active.x, active.y):
                if 0 <= y < h:
                    pygame.draw.rect(surf, color, self._cell_rect(0, 0, x, y))
        return surf

    def _draw_mask(self, screen: pygame.Surface, piece: Piece, x0: int, y0: int) -> None:
        color = _color_for_value(int(piece.color))
        for row, col in piece.cells():
            pygame.draw.rect(screen, color, self._cell_rect(x0, y0, col, row))

    def _text(self, screen: pygame.Surface, text: str, pos: Tuple[int, int], color=(230, 230, 230)) -> None:
        screen.blit(self.font.render(text, True, color), pos)

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        screen.fill((10, 10, 14))
        grid_surf = self._grid_surface(snapshot)
        screen.blit(grid_surf, (self.margin, self.margin))

        h, w = snapshot.grid.shape
        x_panel = self.margin * 2 + w * self.cell_size
        y = self.margin

        self._text(screen, f"Score: {snapshot.score}", (x_panel, y))
        self._text(screen, f"Lines: {snapshot.lines_cleared_total}", (x_panel, y + 20))
        y += 50

        self._text(screen, "Next:", (x_panel, y))
        y += 20
        for piece in snapshot.preview:
            self._draw_mask(screen, piece, x_panel, y)
            y += 4 * self.cell_size

        hold_label = "Held:" if snapshot.can_hold else "Held (used):"
        self._text(screen, hold_label, (x_panel, y))
        y += 20
        if snapshot.held is not None:
            self._draw_mask(screen, snapshot.held, x_panel, y)
        y += 4 * self.cell_size

        for i, line in enumerate(CONTROLS):
            self._text(screen, line, (x_panel, y + i * 18), (150, 150, 160))

        center_x = self.margin + (w * self.cell_size) // 2
        center_y = self.margin + (h * self.cell_size) // 2
        if snapshot.paused:
            self._banner(screen, ["Paused", "Press 'r' to Resume"], center_x, center_y, (255, 255, 255))
        if snapshot.game_over:
            self._banner(
                screen,
                ["Game Over!", f"Score: {snapshot.score}", "Press any key to exit..."],
                center_x,
                center_y,
                (255, 100, 100),
            )
        pygame.display.flip()

    def _banner(self, screen: pygame.Surface, lines, center_x: int, center_y: int, color) -> None:
        for i, line in enumerate(lines):
            img = self.font.render(line, True, color)
            rect = img.get_rect(center=(center_x, center_y + i * 24))
            screen.blit(img, rect)


def render_to_array(snapshot: GameSnapshot, cell_size: int = 8) -> np.ndarray:
    """Board-only RGB image, handy for headless inspection."""
    renderer = Renderer(cell_size=cell_size, margin=0)
    surf = renderer._grid_surface(snapshot)
    return np.transpose(pygame.surfarray.array3d(surf), (1, 0, 2))
