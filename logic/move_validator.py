"""
Move validator for the X/O engine.
Validates that moves follow the rules.
"""

from enum import Enum
from typing import Optional, List
from dataclasses import dataclass
from .game_state import MatchState, Player, Mode


class RejectReason(Enum):
    """Why a move was refused."""
    INVALID_INDEX = "invalid_index"
    CELL_OCCUPIED = "cell_occupied"
    NOT_YOUR_TURN = "not_your_turn"
    ROUND_ALREADY_OVER = "round_already_over"


@dataclass(frozen=True)
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    reason: Optional[RejectReason] = None
    error_message: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def rejected(cls, reason: RejectReason, message: str) -> "ValidationResult":
        return cls(is_valid=False, reason=reason, error_message=message)


class MoveValidator:
    """
    Validates X/O moves.

    Rules:
    1. The round must not be over
    2. Index must be 0-8
    3. Can only place on empty cells
    4. Only the player whose turn it is may move
    5. In PvC mode, humans may not move for the computer
    """

    def validate_move(
        self,
        state: MatchState,
        index: int,
        player: Player,
        from_ai: bool = False
    ) -> ValidationResult:
        """
        Validate a move.

        Args:
            state: Current match state.
            index: Cell to mark (0-8).
            player: Player making the move.
            from_ai: True when the computer itself is moving.

        Returns:
            ValidationResult with is_valid, reason and error_message.
        """
        # Check if round is over
        if state.outcome.is_terminal:
            return ValidationResult.rejected(
                RejectReason.ROUND_ALREADY_OVER,
                "Round is already over!"
            )

        # bool is an int subclass but never a cell index
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index <= 8:
            return ValidationResult.rejected(
                RejectReason.INVALID_INDEX,
                f"Invalid cell {index!r}. Must be 0-8."
            )

        if not state.board.is_empty(index):
            return ValidationResult.rejected(
                RejectReason.CELL_OCCUPIED,
                f"Cell {index} is already occupied by {state.board[index].value}"
            )

        if player != state.current_player:
            return ValidationResult.rejected(
                RejectReason.NOT_YOUR_TURN,
                f"It's {state.current_player.value}'s turn, not {player.value}'s"
            )

        if state.mode == Mode.PVC and player == state.ai_player and not from_ai:
            return ValidationResult.rejected(
                RejectReason.NOT_YOUR_TURN,
                f"{player.value} is played by the computer"
            )

        return ValidationResult.ok()

    def get_valid_moves(self, state: MatchState) -> List[int]:
        """
        Get all cells the current player could mark.

        Returns:
            Ascending list of cell indices, empty when the round is over.
        """
        if state.outcome.is_terminal:
            return []

        return state.board.empty_cells()
