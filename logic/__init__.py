"""
Logic module for the X/O game.
Handles board state, rules, the computer opponent and match flow.
"""

__version__ = "1.0.0"

from .game_state import Board, MatchState, Mode, Move, Outcome, OutcomeStatus, Player, Scoreboard
from .config import GameConfig
from .move_validator import MoveValidator, RejectReason, ValidationResult
from .win_checker import WinChecker
from .ai_player import AIPlayer, choose_move
from .scheduler import DeferredScheduler, ManualScheduler, TkScheduler
from .match_controller import MatchController
