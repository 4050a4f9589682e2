"""
Match controller for the X/O engine.

Owns the MatchState and is the only thing that changes it. Every
command swaps in a new MatchState, cancels any pending computer move,
and notifies listeners.
"""

from dataclasses import replace
from typing import Callable, List, Optional, Union

from .ai_player import AIPlayer
from .config import GameConfig
from .game_state import MatchState, Mode, Player, Scoreboard, Move
from .move_validator import MoveValidator, ValidationResult
from .scheduler import DeferredScheduler, ManualScheduler
from .win_checker import WinChecker


Listener = Callable[[MatchState], None]


class MatchController:
    """
    Runs rounds and keeps score.

    Round flow:
    1. The current player (or the computer, in PvC) marks a cell
    2. The board is checked for a win or draw
    3. Round over: the score is updated and moves are refused
       until a new round starts
    4. Otherwise the turn passes to the other player
    """

    def __init__(
        self,
        scheduler: Optional[DeferredScheduler] = None,
        config: Optional[GameConfig] = None
    ):
        """
        Initialize the controller.

        Args:
            scheduler: Runs the delayed computer move. A ManualScheduler
                is used if not provided.
            config: Game configuration. Uses defaults if not provided.
        """
        self.config = config or GameConfig()
        self.scheduler = scheduler or ManualScheduler()

        self.validator = MoveValidator()
        self.win_checker = WinChecker()
        self.ai = AIPlayer(self.config.AI_PLAYER, debug=self.config.DEBUG_MODE)

        self.state = MatchState(
            mode=self.config.DEFAULT_MODE,
            ai_player=self.config.AI_PLAYER,
        )

        # Bumped on every state change; a delayed AI move only runs if
        # the generation it was scheduled under is still current
        self.generation = 0
        self._pending_token = None
        self._listeners: List[Listener] = []

        self._schedule_ai_if_needed()

    # ==================== LISTENERS ====================

    def add_listener(self, listener: Listener):
        """Call listener with the new state after every change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ==================== COMMANDS ====================

    def request_move(self, index: int) -> ValidationResult:
        """A move from the presentation layer, for whoever's turn it is."""
        return self.apply_move(index, self.state.current_player)

    def apply_move(self, index: int, player: Player) -> ValidationResult:
        """
        Mark a cell for player.

        Invalid moves are ignored and leave the state untouched.

        Args:
            index: Cell index (0-8).
            player: Player making the move.

        Returns:
            The ValidationResult for the move.
        """
        return self._apply_move(index, player, from_ai=False)

    def start_new_round(self) -> bool:
        """
        Start the next round with the alternated starting player.

        Returns:
            False (and does nothing) if the current round isn't finished.
        """
        if not self.state.outcome.is_terminal:
            if self.config.DEBUG_MODE:
                print("New round ignored: current round still in progress")
            return False

        starter = self.state.next_round_starting_player
        new_state = replace(
            self.state.fresh_round(starter),
            next_round_starting_player=starter.opposite(),
        )
        self._commit(new_state)
        return True

    def restart_current_round(self):
        """Clear the board and replay the round with the same starting player."""
        self._commit(self.state.fresh_round(self.state.round_starting_player))

    def full_reset(self):
        """Clear the board and scores. X starts, and X also starts the next new round."""
        new_state = replace(
            self.state.fresh_round(Player.X),
            scoreboard=Scoreboard(),
            next_round_starting_player=Player.X,
        )
        self._commit(new_state)

    def set_mode(self, mode: Union[Mode, str]):
        """
        Switch between PvP and PvC.

        Args:
            mode: A Mode or its value ("pvp" / "pvc").

        Raises:
            ValueError: If mode is not a known mode.
        """
        mode = Mode(mode)
        if mode == self.state.mode:
            return

        self._commit(replace(self.state, mode=mode))

    # ==================== STATUS ====================

    @property
    def ai_pending(self) -> bool:
        """True while a computer move is waiting to run."""
        return self._pending_token is not None

    def get_valid_moves(self) -> List[int]:
        return self.validator.get_valid_moves(self.state)

    # ==================== INTERNALS ====================

    def _apply_move(self, index: int, player: Player, from_ai: bool) -> ValidationResult:
        result = self.validator.validate_move(self.state, index, player, from_ai=from_ai)
        if not result.is_valid:
            if self.config.DEBUG_MODE:
                print(f"Move rejected ({result.reason.value}): {result.error_message}")
            return result

        state = self.state
        board = state.board.place(index, player)
        outcome = self.win_checker.detect(board)
        move = Move(player=player, index=index, move_number=len(state.moves))

        if outcome.is_terminal:
            new_state = replace(
                state,
                board=board,
                outcome=outcome,
                scoreboard=state.scoreboard.record(outcome),
                moves=state.moves + (move,),
            )
        else:
            new_state = replace(
                state,
                board=board,
                outcome=outcome,
                current_player=player.opposite(),
                moves=state.moves + (move,),
            )

        if self.config.DEBUG_MODE:
            print(f"{player.value} -> {index}  [{new_state.status_text}]")

        self._commit(new_state)
        return result

    def _commit(self, new_state: MatchState):
        """Swap in new_state, then reschedule the AI and notify listeners."""
        self._cancel_pending_ai()
        self.state = new_state
        self.generation += 1
        self._schedule_ai_if_needed()

        # A listener may issue a command. The nested commit notifies everyone
        # with the newer state, so the remaining listeners are skipped here.
        generation = self.generation
        for listener in list(self._listeners):
            if self.generation != generation:
                break
            listener(self.state)

    def _cancel_pending_ai(self):
        if self._pending_token is not None:
            self.scheduler.cancel(self._pending_token)
            self._pending_token = None
            if self.config.DEBUG_MODE:
                print("Pending AI move canceled")

    def _schedule_ai_if_needed(self):
        if not self.state.is_ai_turn:
            return

        generation = self.generation
        self._pending_token = self.scheduler.schedule(
            self.config.AI_MOVE_DELAY_MS,
            lambda: self._run_ai_move(generation)
        )

    def _run_ai_move(self, generation: int):
        """Scheduled callback: play the AI's move if nothing changed since."""
        if generation != self.generation:
            if self.config.DEBUG_MODE:
                print(f"Stale AI move dropped (gen {generation}, now {self.generation})")
            return

        self._pending_token = None

        if not self.state.is_ai_turn:
            return

        index = self.ai.get_best_move(self.state)
        if index is None:
            return

        self._apply_move(index, self.state.ai_player, from_ai=True)
