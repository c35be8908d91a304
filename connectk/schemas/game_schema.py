from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from connectk.models.enums import Side, Outcome


class MoveRecord(BaseModel):
    # Allow extra fields so log entries can carry annotations
    model_config = ConfigDict(extra='ignore')

    side: Side
    row: int
    column: int


class Recommendation(BaseModel):
    move: Optional[int] = Field(None, description="Advised column, None when there is nothing to play or ply is 0.")
    score: float = 0
    ply: int = Field(0, description="Look-ahead actually searched after skill degradation.")
    randomized: bool = False


class GameSnapshot(BaseModel):
    """Read-only view of a session for whatever front end drives it."""
    rows: int
    cols: int
    win_length: int
    board: List[List[int]]
    side_to_move: Side
    outcome: Outcome
    moves_played: int
    legal_moves: List[int]
    last_move: Optional[MoveRecord] = None
    computer_side: Optional[Side] = None


class MatchResult(BaseModel):
    skill_a: float
    skill_b: float
    outcome: Outcome
    moves: int
    history: List[MoveRecord]

    @property
    def winner(self) -> int:
        """1 (side A), 2 (side B), or 0 (Draw)."""
        if self.outcome == Outcome.SIDE_A_WINS:
            return 1
        if self.outcome == Outcome.SIDE_B_WINS:
            return 2
        return 0
