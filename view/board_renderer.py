"""
Board renderer for the X/O game.
Draws a MatchState to a Pillow image and maps clicks back to cells.
"""

from typing import Optional
from PIL import Image, ImageDraw

from logic.game_state import MatchState, Player
from .config import ViewConfig


class BoardRenderer:
    """
    Turns the board into a picture.

    The image is square, BOARD_OUTPUT_SIZE pixels wide, and split into
    3x3 cells of CELL_OUTPUT_SIZE pixels. Cells of a winning line are
    filled with WIN_CELL_COLOR.
    """

    def __init__(self, config: Optional[ViewConfig] = None):
        """
        Args:
            config: View configuration. Uses defaults if not provided.
        """
        self.config = config or ViewConfig()

    def render(self, state: MatchState) -> Image.Image:
        """
        Draw the board.

        Args:
            state: The match state to draw.

        Returns:
            RGB image of the board.
        """
        size = self.config.BOARD_OUTPUT_SIZE
        cell_size = self.config.CELL_OUTPUT_SIZE

        image = Image.new("RGB", (size, size), self.config.BACKGROUND_COLOR)
        draw = ImageDraw.Draw(image)

        # Highlight the winning line
        if state.outcome.line is not None:
            for index in state.outcome.line:
                x0, y0 = self.cell_origin(index)
                draw.rectangle(
                    [x0, y0, x0 + cell_size - 1, y0 + cell_size - 1],
                    fill=self.config.WIN_CELL_COLOR
                )

        # Grid lines
        for i in range(1, 3):
            offset = i * cell_size
            draw.line([(offset, 0), (offset, size)],
                      fill=self.config.GRID_COLOR, width=self.config.GRID_LINE_WIDTH)
            draw.line([(0, offset), (size, offset)],
                      fill=self.config.GRID_COLOR, width=self.config.GRID_LINE_WIDTH)

        # Marks
        for index, cell in enumerate(state.board):
            if cell == Player.X:
                self._draw_x(draw, index)
            elif cell == Player.O:
                self._draw_o(draw, index)

        return image

    def cell_origin(self, index: int):
        """Top-left pixel of a cell."""
        cell_size = self.config.CELL_OUTPUT_SIZE
        row, col = divmod(index, 3)
        return col * cell_size, row * cell_size

    def cell_at(self, x: int, y: int, scale: float = 1.0) -> Optional[int]:
        """
        Convert a point on the image to a cell index.

        Args:
            x: X coordinate in display pixels.
            y: Y coordinate in display pixels.
            scale: Display size divided by BOARD_OUTPUT_SIZE.

        Returns:
            Cell index (0-8), or None if the point is off the board.
        """
        size = self.config.BOARD_OUTPUT_SIZE * scale
        if not (0 <= x < size and 0 <= y < size):
            return None

        cell_size = self.config.CELL_OUTPUT_SIZE * scale
        row = min(2, int(y // cell_size))
        col = min(2, int(x // cell_size))
        return row * 3 + col

    def _mark_box(self, index: int):
        x0, y0 = self.cell_origin(index)
        pad = self.config.MARK_PADDING
        cell_size = self.config.CELL_OUTPUT_SIZE
        return x0 + pad, y0 + pad, x0 + cell_size - pad, y0 + cell_size - pad

    def _draw_x(self, draw: ImageDraw.ImageDraw, index: int):
        x0, y0, x1, y1 = self._mark_box(index)
        width = self.config.MARK_LINE_WIDTH
        draw.line([(x0, y0), (x1, y1)], fill=self.config.X_COLOR, width=width)
        draw.line([(x0, y1), (x1, y0)], fill=self.config.X_COLOR, width=width)

    def _draw_o(self, draw: ImageDraw.ImageDraw, index: int):
        draw.ellipse(self._mark_box(index), outline=self.config.O_COLOR,
                     width=self.config.MARK_LINE_WIDTH)
