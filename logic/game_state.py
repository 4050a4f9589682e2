"""
Game state for the X/O engine.
Board, players, outcomes, scoreboard and the match record.
"""

from enum import Enum
from typing import Optional, List, Tuple
from dataclasses import dataclass, field, replace


class Player(Enum):
    """The two players in the game."""
    X = "X"
    O = "O"

    def opposite(self) -> "Player":
        """Get the opposite player."""
        return Player.O if self == Player.X else Player.X


class Mode(Enum):
    """Who sits on the O side."""
    PVP = "pvp"   # Two humans
    PVC = "pvc"   # Human vs computer


Line = Tuple[int, int, int]

# Characters accepted by Board.from_string for an empty cell
EMPTY_CHARS = ".-_"


@dataclass(frozen=True)
class Board:
    """
    The 3x3 grid, stored row-major (index = row * 3 + col).

    None means empty, otherwise the Player occupying the cell.
    Boards are never changed in place - place() returns a new one.
    """

    cells: Tuple[Optional[Player], ...] = (None,) * 9

    def __post_init__(self):
        if len(self.cells) != 9:
            raise ValueError(f"A board has 9 cells, got {len(self.cells)}")
        # Accept lists too, but always store a tuple
        object.__setattr__(self, "cells", tuple(self.cells))

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """
        Build a board from a 9 character string like "XO.X.....".

        Whitespace and "|" separators ("XO.|X..|...") are ignored.
        """
        chars = [c for c in text if c not in " \n\t|"]
        cells = []
        for char in chars:
            if char in EMPTY_CHARS:
                cells.append(None)
            else:
                cells.append(Player(char.upper()))
        return cls(tuple(cells))

    def __getitem__(self, index: int) -> Optional[Player]:
        return self.cells[index]

    def __iter__(self):
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def place(self, index: int, player: Player) -> "Board":
        """Return a copy of the board with player's mark at index."""
        cells = list(self.cells)
        cells[index] = player
        return Board(tuple(cells))

    def empty_cells(self) -> List[int]:
        """Indices of all empty cells, ascending."""
        return [i for i, cell in enumerate(self.cells) if cell is None]

    def is_empty(self, index: int) -> bool:
        return self.cells[index] is None

    def is_full(self) -> bool:
        return all(cell is not None for cell in self.cells)

    def to_rows(self) -> List[List[Optional[Player]]]:
        """The board as 3 rows of 3 cells."""
        return [list(self.cells[row * 3:row * 3 + 3]) for row in range(3)]

    def to_string(self) -> str:
        return "".join(cell.value if cell else "." for cell in self.cells)


class OutcomeStatus(Enum):
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    """
    Classification of a board.

    Exactly one status holds. winner and line are set only for WIN.
    """
    status: OutcomeStatus = OutcomeStatus.IN_PROGRESS
    winner: Optional[Player] = None
    line: Optional[Line] = None

    @classmethod
    def in_progress(cls) -> "Outcome":
        return cls(OutcomeStatus.IN_PROGRESS)

    @classmethod
    def win(cls, player: Player, line: Line) -> "Outcome":
        return cls(OutcomeStatus.WIN, winner=player, line=tuple(line))

    @classmethod
    def draw(cls) -> "Outcome":
        return cls(OutcomeStatus.DRAW)

    @property
    def is_terminal(self) -> bool:
        """Win and draw both end the round."""
        return self.status != OutcomeStatus.IN_PROGRESS

    @property
    def is_win(self) -> bool:
        return self.status == OutcomeStatus.WIN

    @property
    def is_draw(self) -> bool:
        return self.status == OutcomeStatus.DRAW


@dataclass(frozen=True)
class Scoreboard:
    """Round results since the last full reset."""
    x_wins: int = 0
    o_wins: int = 0
    draws: int = 0

    def record(self, outcome: Outcome) -> "Scoreboard":
        """
        Count a finished round.

        Args:
            outcome: The round's outcome. In-progress outcomes are ignored.

        Returns:
            The updated scoreboard.
        """
        if outcome.is_win:
            if outcome.winner == Player.X:
                return replace(self, x_wins=self.x_wins + 1)
            return replace(self, o_wins=self.o_wins + 1)
        if outcome.is_draw:
            return replace(self, draws=self.draws + 1)
        return self

    def wins_for(self, player: Player) -> int:
        return self.x_wins if player == Player.X else self.o_wins

    @property
    def total(self) -> int:
        """Number of completed rounds."""
        return self.x_wins + self.o_wins + self.draws


@dataclass(frozen=True)
class Move:
    """
    A move in the current round.
    """
    player: Player          # Who made the move
    index: int              # Cell index (0-8)
    move_number: int        # Position in the round (0-8)


@dataclass(frozen=True)
class MatchState:
    """
    The complete state of a match.

    Tracks:
    - The board and whose turn it is
    - The outcome of the current round
    - Game mode and which side the computer plays
    - Scores and the starting-player alternation
    - Moves of the current round
    """

    board: Board = field(default_factory=Board)
    current_player: Player = Player.X
    outcome: Outcome = field(default_factory=Outcome.in_progress)
    mode: Mode = Mode.PVP
    scoreboard: Scoreboard = field(default_factory=Scoreboard)

    # Who began the current round, and who begins the next one
    round_starting_player: Player = Player.X
    next_round_starting_player: Player = Player.X

    ai_player: Player = Player.O
    moves: Tuple[Move, ...] = ()

    def fresh_round(self, starting_player: Player) -> "MatchState":
        """Empty board and in-progress outcome, with starting_player to move."""
        return replace(
            self,
            board=Board(),
            current_player=starting_player,
            outcome=Outcome.in_progress(),
            round_starting_player=starting_player,
            moves=(),
        )

    @property
    def is_ai_turn(self) -> bool:
        """True when the computer should move next."""
        return (
            self.mode == Mode.PVC
            and not self.outcome.is_terminal
            and self.current_player == self.ai_player
        )

    @property
    def status_text(self) -> str:
        if self.outcome.is_win:
            return f"Winner: {self.outcome.winner.value}"
        if self.outcome.is_draw:
            return "Draw!"
        return f"Turn: {self.current_player.value}"

    def print_board(self):
        """Print the board to console."""
        print("\n+---+---+---+")

        for row in range(3):
            row_str = "|"
            for col in range(3):
                cell = self.board[row * 3 + col]
                mark = cell.value if cell else str(row * 3 + col)
                row_str += f" {mark} |"
            print(f"{row_str}")
            print("+---+---+---+")

        print(f"\n{self.status_text}")
        print(
            f"Score  X: {self.scoreboard.x_wins}  "
            f"O: {self.scoreboard.o_wins}  "
            f"Draws: {self.scoreboard.draws}"
        )
