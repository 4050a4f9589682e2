"""
View configuration for the X/O game.
Sizes and colors used to draw the board and the window.
"""


class ViewConfig:
    """
    Configuration class for drawing settings.
    Colors are RGB tuples for Pillow, hex strings for Tk widgets.
    """

    # ==================== BOARD IMAGE ====================
    BOARD_SIZE = 3
    BOARD_OUTPUT_SIZE = 420                              # pixels, square
    CELL_OUTPUT_SIZE = BOARD_OUTPUT_SIZE // BOARD_SIZE   # 140 pixels per cell

    GRID_LINE_WIDTH = 4
    MARK_LINE_WIDTH = 10
    MARK_PADDING = 30   # Space between a mark and its cell border

    # ==================== BOARD COLORS ====================
    BACKGROUND_COLOR = (22, 33, 62)
    GRID_COLOR = (0, 212, 255)
    X_COLOR = (248, 250, 252)
    O_COLOR = (148, 163, 184)
    WIN_CELL_COLOR = (6, 95, 70)

    # ==================== WINDOW ====================
    WINDOW_TITLE = "X/O Game"
    WINDOW_BG = "#1a1a2e"
    TITLE_FG = "#00d4ff"
    STATUS_FG = "#ffd700"
    WIN_STATUS_FG = "#10b981"
    DRAW_STATUS_FG = "#fbbf24"
    ACTIVE_BUTTON_BG = "#00d4ff"
    BUTTON_BG = "#2d3748"
