"""
Match Runner - Computer vs Computer

Plays the advisor against itself at different skill levels and keeps an
in-memory Elo ladder, which is how the skill dial is calibrated.
"""

import logging
import random
from typing import Dict, List, Optional

from connectk.core.config import settings
from connectk.engine.advisor import Advisor, ply_for_budget
from connectk.engine.elo import EloRating, update_elo
from connectk.engine.game import GameState
from connectk.models.enums import Side, Outcome
from connectk.schemas.game_schema import MatchResult, MoveRecord

logger = logging.getLogger(__name__)


def play_match(
    advisor: Advisor,
    skill_a: float,
    skill_b: float,
    rows: int = settings.default_rows,
    cols: int = settings.default_cols,
    win_length: int = settings.default_win_length,
    ply: Optional[int] = None,
) -> MatchResult:
    """Plays one game to completion; side A uses `skill_a`, side B `skill_b`."""
    state = GameState(rows, cols, win_length)
    if ply is None:
        ply = ply_for_budget(rows, cols)
    if ply < 1:
        raise ValueError(f"Matches need a look-ahead of at least 1 ply, got {ply}")
    skills = {Side.A: skill_a, Side.B: skill_b}

    while state.outcome == Outcome.ONGOING:
        advice = advisor.recommend(state, ply, skills[state.side_to_move])
        state.move(advice.move)

    return MatchResult(
        skill_a=skill_a,
        skill_b=skill_b,
        outcome=state.outcome,
        moves=state.moves_played,
        history=[MoveRecord(**record) for record in state.history],
    )


def level_name(skill: float) -> str:
    return f"skill-{skill:.2f}"


def run_ladder(
    levels: List[float],
    rounds: int = 1,
    rows: int = settings.default_rows,
    cols: int = settings.default_cols,
    win_length: int = settings.default_win_length,
    ply: Optional[int] = None,
    advisor: Optional[Advisor] = None,
    rng: Optional[random.Random] = None,
) -> Dict[str, EloRating]:
    """
    Round robin between skill levels. Every ordered pair plays once per round
    so each level gets both colours; pairs are shuffled within a round.
    """
    advisor = advisor or Advisor()
    rng = rng or advisor.rng
    ratings: Dict[str, EloRating] = {}

    for r in range(1, rounds + 1):
        # Create all pairs for this round
        round_pairs = [
            (a, b)
            for i, a in enumerate(levels)
            for j, b in enumerate(levels)
            if i != j
        ]
        rng.shuffle(round_pairs)

        for skill_a, skill_b in round_pairs:
            result = play_match(advisor, skill_a, skill_b, rows, cols, win_length, ply)
            update_elo(ratings, level_name(skill_a), level_name(skill_b), result.winner)
            logger.info(
                "Round %d: %s vs %s -> %s in %d moves",
                r, level_name(skill_a), level_name(skill_b), result.outcome, result.moves
            )

    return ratings
