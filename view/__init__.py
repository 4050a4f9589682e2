"""
View module for the X/O game.
Handles drawing the board for the window front end.
"""

from .config import ViewConfig
from .board_renderer import BoardRenderer
