"""
AI player for the X/O engine.
Picks a move with a fixed priority list: win, block, center, corner, side.
"""

from typing import Optional, Tuple
from .game_state import Board, MatchState, Player
from .win_checker import WinChecker


CENTER = 4
CORNERS = (0, 2, 6, 8)
SIDES = (1, 3, 5, 7)

_win_checker = WinChecker()


def _completes_line(board: Board, index: int, player: Player) -> bool:
    """Would marking index for player win the round?"""
    return _win_checker.check_winner(board.place(index, player)) == player


def rank_move(
    board: Board,
    self_player: Player,
    opponent_player: Player
) -> Tuple[Optional[int], Optional[str]]:
    """
    Pick a move and report which rule picked it.

    Returns:
        (index, tier) where tier is one of "win", "block", "center",
        "corner", "side", "fallback". (None, None) on a full board.
    """
    empty = board.empty_cells()
    if not empty:
        return None, None

    for index in empty:
        if _completes_line(board, index, self_player):
            return index, "win"

    for index in empty:
        if _completes_line(board, index, opponent_player):
            return index, "block"

    if CENTER in empty:
        return CENTER, "center"

    for index in CORNERS:
        if index in empty:
            return index, "corner"

    for index in SIDES:
        if index in empty:
            return index, "side"

    # Center, corners and sides cover every cell, so this never runs
    return empty[0], "fallback"


def choose_move(
    board: Board,
    self_player: Player,
    opponent_player: Player
) -> Optional[int]:
    """
    Choose a cell for self_player.

    This is a greedy one-move lookahead, not a full search, so it can
    still lose to a double threat.

    Returns:
        Cell index, or None if the board is full.
    """
    index, _ = rank_move(board, self_player, opponent_player)
    return index


class AIPlayer:
    """
    The computer opponent.
    """

    def __init__(self, player: Player = Player.O, debug: bool = False):
        """
        Initialize the AI player.

        Args:
            player: Which player the AI controls (default: O)
            debug: Print each decision
        """
        self.player = player
        self.debug = debug

        # Which rule produced the last move (for debugging)
        self.last_tier: Optional[str] = None

    def choose_move(self, board: Board) -> Optional[int]:
        """Choose a cell on board for this AI's player."""
        index, tier = rank_move(board, self.player, self.player.opposite())
        self.last_tier = tier

        if self.debug and index is not None:
            print(f"AI ({self.player.value}) picks cell {index} ({tier})")

        return index

    def get_best_move(self, state: MatchState) -> Optional[int]:
        """
        Get the move for the current position.

        Args:
            state: Current match state.

        Returns:
            Cell index, or None if it's not our turn or the round is over.
        """
        if state.outcome.is_terminal:
            return None

        if state.current_player != self.player:
            if self.debug:
                print(f"Warning: It's not {self.player.value}'s turn!")
            return None

        return self.choose_move(state.board)


# Quick test
if __name__ == "__main__":
    print("Testing AIPlayer...")

    ai = AIPlayer(Player.O)

    # X is about to win with 2
    move = ai.choose_move(Board.from_string("XX.|.O.|..."))
    print(f"Block: {move} ({ai.last_tier})")
    assert move == 2

    # O can win with 2
    move = ai.choose_move(Board.from_string("OO.|.X.|X.."))
    print(f"Win: {move} ({ai.last_tier})")
    assert move == 2

    print("\nAIPlayer test done!")
