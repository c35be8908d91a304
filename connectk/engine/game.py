import logging
import math
from functools import lru_cache
from typing import List, Optional, Tuple, Dict, Any

from connectk.core.config import settings
from connectk.engine.errors import (
    BoardTooSmall,
    BoardTooLarge,
    WinSequenceTooLong,
    WinSequenceTooShort,
    ColumnOutOfRange,
    ColumnFull,
    MoveAfterGameOver,
)
from connectk.models.enums import EMPTY, Side, Outcome

# Logger setup
logger = logging.getLogger(__name__)

# Directions: Horizontal, Vertical, Diagonal /, Diagonal \
DIRECTIONS = [(0, 1), (1, 0), (1, 1), (1, -1)]


@lru_cache(maxsize=64)
def line_windows(rows: int, cols: int, length: int) -> Tuple[Tuple[Tuple[int, int], ...], ...]:
    """
    Every run of `length` consecutive cells on a rows x cols grid, overlaps
    included, for all four directions. Cached per board shape.
    """
    windows = []
    for dr, dc in DIRECTIONS:
        for r in range(rows):
            for c in range(cols):
                end_r = r + dr * (length - 1)
                end_c = c + dc * (length - 1)
                if 0 <= end_r < rows and 0 <= end_c < cols:
                    windows.append(tuple((r + dr * i, c + dc * i) for i in range(length)))
    return tuple(windows)


class GameState:
    def __init__(
        self,
        rows: int = settings.default_rows,
        cols: int = settings.default_cols,
        win_length: int = settings.default_win_length,
        min_size: int = settings.min_size,
        max_size: int = settings.max_size,
    ):
        """
        Board uses (row, col) indexing.
        Row 0 is the BOTTOM of the board, so pieces fall towards row 0.
        Values: 0=Empty, 1=Side A, 2=Side B
        """
        if rows < min_size or cols < min_size:
            raise BoardTooSmall(f"Board {rows}x{cols} is below the minimum size {min_size}")
        if rows > max_size or cols > max_size:
            raise BoardTooLarge(f"Board {rows}x{cols} exceeds the maximum size {max_size}")
        if win_length > rows or win_length > cols:
            raise WinSequenceTooLong(f"Win length {win_length} does not fit a {rows}x{cols} board")
        if win_length < 2:
            raise WinSequenceTooShort(f"Win length must be at least 2, got {win_length}")

        self.rows = rows
        self.cols = cols
        self.win_length = win_length
        self.min_size = min_size
        self.max_size = max_size
        self._windows = line_windows(rows, cols, win_length)

        # These attributes change from game to game on the same board
        self.reset()

    def reset(self):
        """Clears the board, log and outcome. Dimensions are kept."""
        self.board = [[EMPTY for _ in range(self.cols)] for _ in range(self.rows)]
        self.side_to_move = Side.A
        self.moves_played = 0
        self.turns_left = self.rows * self.cols
        self.history: List[Dict[str, Any]] = []
        self.outcome = Outcome.ONGOING

    def clone(self) -> "GameState":
        """Independent copy: no row buffer or log record is shared."""
        # Skip __init__: dimensions were validated when this state was built
        other = GameState.__new__(GameState)
        other.rows = self.rows
        other.cols = self.cols
        other.win_length = self.win_length
        other.min_size = self.min_size
        other.max_size = self.max_size
        other._windows = self._windows
        other.board = [row[:] for row in self.board]
        other.side_to_move = self.side_to_move
        other.moves_played = self.moves_played
        other.turns_left = self.turns_left
        other.history = [dict(record) for record in self.history]
        other.outcome = self.outcome
        return other

    # --- Queries ---

    @property
    def last_move(self) -> Optional[Dict[str, Any]]:
        return self.history[-1] if self.history else None

    def is_valid_move(self, col: int) -> bool:
        if self.outcome != Outcome.ONGOING:
            return False
        if col < 0 or col >= self.cols:
            return False
        return self.board[self.rows - 1][col] == EMPTY

    def legal_moves(self) -> List[int]:
        """Columns that can still take a piece, ascending. Empty once the game is over."""
        if self.outcome != Outcome.ONGOING:
            return []
        top = self.board[self.rows - 1]
        return [c for c in range(self.cols) if top[c] == EMPTY]

    def turns_remaining(self, side: Side) -> int:
        """The side to move gets the odd turn when the total is odd."""
        if side == self.side_to_move:
            return math.ceil(self.turns_left / 2)
        return self.turns_left // 2

    def max_sequences(self) -> int:
        """Number of distinct win_length windows on a board of this size."""
        return len(self._windows)

    # --- Mutation ---

    def move(self, column: int) -> int:
        """
        Drops a piece for the side to move into `column`.
        Returns the row it landed on. Raises before touching any state if the
        move is not allowed.
        """
        if column < 0 or column >= self.cols:
            raise ColumnOutOfRange(column, f"Column {column} is outside 0..{self.cols - 1}")
        if self.outcome != Outcome.ONGOING:
            raise MoveAfterGameOver(column, f"Game is over ({self.outcome})")

        # Gravity: Find the lowest empty row
        for r in range(self.rows):
            if self.board[r][column] == EMPTY:
                side = self.side_to_move
                self.board[r][column] = side
                self.history.append({
                    "side": side,
                    "row": r,
                    "column": column
                })
                self.side_to_move = side.opponent
                self.moves_played += 1
                self.turns_left -= 1
                self.outcome = self._compute_outcome()
                return r

        raise ColumnFull(column, f"Column {column} is full")

    def undo(self) -> bool:
        """Takes back the last move. Returns False if there is nothing to take back."""
        if self.moves_played == 0:
            return False

        last = self.history.pop()
        self.board[last["row"]][last["column"]] = EMPTY
        self.side_to_move = last["side"]
        self.moves_played -= 1
        self.turns_left += 1
        # The undone move was the one that could have ended the game
        self.outcome = Outcome.ONGOING
        logger.debug("Undo %s at (%d, %d)", last["side"].name, last["row"], last["column"])
        return True

    # --- Outcome & Sequences ---

    def _compute_outcome(self) -> Outcome:
        # Only the side that just moved can have completed a line
        last = self.history[-1] if self.history else None
        if last is not None and self.check_win(last["row"], last["column"]):
            return Outcome.win_for(last["side"])
        if self.turns_left == 0:
            return Outcome.DRAW
        return Outcome.ONGOING

    def check_win(self, r: int, c: int) -> bool:
        """Checks for a win_length run through the piece at (r, c)."""
        player = self.board[r][c]
        if player == EMPTY:
            return False
        need = self.win_length

        for dr, dc in DIRECTIONS:
            count = 1
            # Check positive direction
            for i in range(1, need):
                nr, nc = r + dr * i, c + dc * i
                if 0 <= nr < self.rows and 0 <= nc < self.cols and self.board[nr][nc] == player:
                    count += 1
                else:
                    break
            # Check negative direction
            for i in range(1, need):
                nr, nc = r - dr * i, c - dc * i
                if 0 <= nr < self.rows and 0 <= nc < self.cols and self.board[nr][nc] == player:
                    count += 1
                else:
                    break

            if count >= need:
                return True
        return False

    def sequence_profile(self, side: Side) -> List[int]:
        """
        profile[k] = number of windows in which `side` holds exactly k cells,
        the opponent holds none, and `side` still has enough turns to fill the
        remaining empty cells.
        """
        profile = [0] * (self.win_length + 1)
        budget = self.turns_remaining(side)
        board = self.board
        for window in self._windows:
            own = 0
            for r, c in window:
                cell = board[r][c]
                if cell == side:
                    own += 1
                elif cell != EMPTY:
                    break
            else:
                if self.win_length - own <= budget:
                    profile[own] += 1
        return profile

    def count_sequences(self, side: Side, length: int) -> int:
        """Reachable windows holding exactly `length` pieces of `side` and none of the opponent's."""
        if not 1 <= length <= self.win_length:
            raise ValueError(f"Sequence length must be in 1..{self.win_length}, got {length}")
        return self.sequence_profile(side)[length]

    # --- Formatting ---

    def get_visual_board(self) -> str:
        """ASCII grid, top row first, column numbers underneath."""
        symbols = {EMPTY: "-", Side.A: "x", Side.B: "o"}
        lines = []
        for r in range(self.rows - 1, -1, -1):
            lines.append(" ".join(symbols[self.board[r][c]] for c in range(self.cols)))
        lines.append(" ".join(str(c % 10) for c in range(self.cols)))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"GameState({self.rows}x{self.cols}, k={self.win_length}, "
            f"moves={self.moves_played}, outcome={self.outcome})"
        )
