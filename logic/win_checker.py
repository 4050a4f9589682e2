"""
Win checker for the X/O engine.
Decides if a board is won, drawn, or still in progress.
"""

from typing import Optional, Tuple
from .game_state import Board, Outcome, Player, Line


class WinChecker:
    """
    Checks for win conditions in X/O.

    Win condition: 3 marks of the same player in a row
    (horizontally, vertically, or diagonally)
    """

    # All possible winning lines, in the order they are checked
    WINNING_LINES: Tuple[Line, ...] = (
        # Rows
        (0, 1, 2),
        (3, 4, 5),
        (6, 7, 8),
        # Columns
        (0, 3, 6),
        (1, 4, 7),
        (2, 5, 8),
        # Diagonals
        (0, 4, 8),
        (2, 4, 6),
    )

    def detect(self, board: Board) -> Outcome:
        """
        Classify a board.

        If a move completes two lines at once, the one listed first
        in WINNING_LINES is reported.

        Args:
            board: The board to check.

        Returns:
            Outcome.win(...), Outcome.draw() or Outcome.in_progress().
        """
        for line in self.WINNING_LINES:
            winner = self._check_line(board, line)
            if winner is not None:
                return Outcome.win(winner, line)

        if board.is_full():
            return Outcome.draw()

        return Outcome.in_progress()

    def check_winner(self, board: Board) -> Optional[Player]:
        """
        Check if there's a winner.

        Returns:
            The winning Player, or None if no winner yet.
        """
        return self.detect(board).winner

    def get_winning_line(self, board: Board) -> Optional[Line]:
        """The first completed line, or None."""
        return self.detect(board).line

    def check_draw(self, board: Board) -> bool:
        """A draw is a full board with no completed line."""
        return self.detect(board).is_draw

    def _check_line(self, board: Board, line: Line) -> Optional[Player]:
        a, b, c = line
        if board[a] is not None and board[a] == board[b] == board[c]:
            return board[a]
        return None


# Quick test
if __name__ == "__main__":
    print("Testing WinChecker...")

    checker = WinChecker()

    outcome = checker.detect(Board.from_string("XXX|.O.|O.."))
    print(f"Test 1 (row): {outcome}")
    assert outcome.winner == Player.X and outcome.line == (0, 1, 2)

    outcome = checker.detect(Board.from_string("OX.|OX.|O.."))
    print(f"Test 2 (column): {outcome}")
    assert outcome.winner == Player.O and outcome.line == (0, 3, 6)

    outcome = checker.detect(Board.from_string("XOX|XOO|OXX"))
    print(f"Test 3 (draw): {outcome}")
    assert outcome.is_draw

    print("\nWinChecker test done!")
