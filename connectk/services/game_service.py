"""
Game Service - Human vs Computer Sessions

A session owns one GameState and one Advisor and is the single place where a
front end changes the game. It handles:
- Human moves followed by the computer's reply
- Handing a move over to the computer
- Take-backs, restarts and board resizes

Front ends (console, GUI, ...) only read GameSnapshot objects back.
"""

import logging
from typing import Optional

from connectk.core.config import settings
from connectk.engine.advisor import Advisor, ply_for_budget
from connectk.engine.game import GameState
from connectk.models.enums import Side, Outcome
from connectk.schemas.game_schema import GameSnapshot, MoveRecord, Recommendation

logger = logging.getLogger(__name__)


class GameSession:
    """Represents one human-vs-computer game on a resizable board"""

    def __init__(
        self,
        rows: int = settings.default_rows,
        cols: int = settings.default_cols,
        win_length: int = settings.default_win_length,
        computer_side: Optional[Side] = Side.B,
        skill: float = settings.skill,
        ply: Optional[int] = None,
        advisor: Optional[Advisor] = None,
    ):
        self.computer_side = computer_side
        self.skill = skill
        self.fixed_ply = ply
        self.advisor = advisor or Advisor()
        self.last_recommendation: Optional[Recommendation] = None
        self._new_game(rows, cols, win_length)

    def _new_game(self, rows: int, cols: int, win_length: int):
        # Build first so a bad size leaves the current game untouched
        state = GameState(rows, cols, win_length)
        self.state = state
        self.ply = self.fixed_ply if self.fixed_ply is not None else ply_for_budget(rows, cols)
        self.last_recommendation = None
        logger.info("New %dx%d game (k=%d), look-ahead %d", rows, cols, win_length, self.ply)

        if self.computer_side == Side.A:
            self._computer_reply()

    # --- Actions ---

    def play_human(self, column: int) -> GameSnapshot:
        """Applies the human's move, then lets the computer answer if the game goes on."""
        self.state.move(column)
        self.last_recommendation = None
        logger.debug("Human played %d\n%s", column, self.state.get_visual_board())

        if self.state.outcome == Outcome.ONGOING and self.state.side_to_move == self.computer_side:
            self._computer_reply()
        return self.snapshot()

    def play_computer(self) -> GameSnapshot:
        """The computer takes over the side to move and plays it from now on."""
        self.last_recommendation = None
        if self.state.outcome == Outcome.ONGOING:
            self.computer_side = self.state.side_to_move
            self._computer_reply()
        return self.snapshot()

    def takeback(self) -> GameSnapshot:
        """
        Undoes moves until it is the human's turn again, so the computer's
        reply goes together with the move that caused it. Without a computer
        side a single move is undone.
        """
        if not self.state.undo():
            return self.snapshot()
        self.last_recommendation = None
        while self.state.side_to_move == self.computer_side and self.state.undo():
            pass

        # Back at the computer's opening: it plays it again
        if self.state.side_to_move == self.computer_side:
            self._computer_reply()
        return self.snapshot()

    def restart(self) -> GameSnapshot:
        self._new_game(self.state.rows, self.state.cols, self.state.win_length)
        return self.snapshot()

    def resize(self, rows: int, cols: int, win_length: int) -> GameSnapshot:
        self._new_game(rows, cols, win_length)
        return self.snapshot()

    def _computer_reply(self):
        recommendation = self.advisor.recommend(self.state, self.ply, self.skill)
        self.last_recommendation = recommendation
        if recommendation.move is None:
            return
        self.state.move(recommendation.move)
        logger.debug(
            "Computer played %d (score %s)\n%s",
            recommendation.move, recommendation.score, self.state.get_visual_board()
        )

    # --- Views ---

    def snapshot(self) -> GameSnapshot:
        state = self.state
        last = state.last_move
        return GameSnapshot(
            rows=state.rows,
            cols=state.cols,
            win_length=state.win_length,
            board=[[int(cell) for cell in row] for row in state.board],
            side_to_move=state.side_to_move,
            outcome=state.outcome,
            moves_played=state.moves_played,
            legal_moves=state.legal_moves(),
            last_move=MoveRecord(**last) if last else None,
            computer_side=self.computer_side,
        )
