"""
Game configuration for the X/O engine.
Timing, computer side and defaults for new matches.
"""

from .game_state import Player, Mode


class GameConfig:
    """
    Configuration class for game settings.
    Subclass or set attributes on an instance to change them.
    """

    # ==================== COMPUTER OPPONENT ====================
    # Which side the computer plays in PvC mode
    AI_PLAYER = Player.O

    # Pause before the computer's move shows up (milliseconds).
    # Only there so the move doesn't appear instantly.
    AI_MOVE_DELAY_MS = 350

    # ==================== MATCH SETTINGS ====================
    DEFAULT_MODE = Mode.PVP

    # ==================== DEBUG SETTINGS ====================
    # Print rejected moves, AI decisions and timer activity
    DEBUG_MODE = False
