import logging
import math
import random
from typing import Optional, Tuple

from connectk.core.config import settings
from connectk.engine.game import GameState
from connectk.engine.heuristic import WIN_SENTINEL, evaluate, terminal_score
from connectk.models.enums import Side, Outcome
from connectk.schemas.game_schema import Recommendation

logger = logging.getLogger(__name__)


def ply_for_budget(rows: int, cols: int, max_positions: int = settings.max_positions) -> int:
    """
    How many plies to look ahead so the search stays around `max_positions`
    positions, treating rows*cols as the branching factor of two plies.
    """
    ply = math.floor(2 * math.log(max_positions) / math.log(rows * cols))
    return max(ply, 1)


class Advisor:
    """
    Depth-limited minimax. Side A maximizes, side B minimizes.

    Randomness (skill degradation and the no-improvement fallback) comes from
    the injected `rng` so games can be replayed with a seed.
    """

    def __init__(self, rng: Optional[random.Random] = None, prune: bool = settings.prune):
        self.rng = rng if rng is not None else random.Random(settings.seed)
        self.prune = prune
        self.nodes = 0

    def recommend(self, state: GameState, ply: int, skill: float = settings.skill) -> Recommendation:
        """
        Advises a move for the side to move in `state`, searching `ply` plies.

        `skill` in [0, 1] weakens play at random: near 0 the advice is a
        random legal move, at 1 it is always the full-depth search result.
        """
        if ply < 0:
            raise ValueError(f"ply must be >= 0, got {ply}")
        if not 0.0 <= skill <= 1.0:
            raise ValueError(f"skill must be within [0, 1], got {skill}")

        self.nodes = 0

        # Top level only: decide whether to intentionally reduce play quality
        if state.outcome == Outcome.ONGOING and skill < math.sqrt(self.rng.random()):
            rand = math.sqrt(self.rng.random())
            if skill >= rand:
                # Lean towards a shallower search at moderate skill
                ply = math.ceil(ply * rand)
            else:
                # Otherwise weaken through a random move
                move = self.rng.choice(state.legal_moves())
                logger.debug("Skill %.2f: random move %d", skill, move)
                return Recommendation(move=move, score=0, ply=0, randomized=True)

        move, score = self._search(state, ply, -math.inf, math.inf)
        logger.debug(
            "Advised column %s (score %s) at ply %d after %d positions",
            move, score, ply, self.nodes
        )
        return Recommendation(move=move, score=score, ply=ply)

    def _search(self, state: GameState, ply: int, alpha: float, beta: float) -> Tuple[Optional[int], float]:
        self.nodes += 1

        # Opening: always start in the middle
        if state.moves_played == 0:
            return state.cols >> 1, 0

        if ply == 0:
            return None, evaluate(state)

        if state.outcome != Outcome.ONGOING:
            # Sooner wins (more ply left) score further from zero
            score = terminal_score(state.outcome)
            if state.outcome == Outcome.SIDE_A_WINS:
                score += ply
            elif state.outcome == Outcome.SIDE_B_WINS:
                score -= ply
            return None, score

        maximizing = state.side_to_move == Side.A
        best_move = None
        best_score = -(WIN_SENTINEL + ply) if maximizing else WIN_SENTINEL + ply
        legal_moves = state.legal_moves()

        for col in legal_moves:
            child = state.clone()
            child.move(col)
            _, score = self._search(child, ply - 1, alpha, beta)

            # Strict comparison: ties keep the lowest column
            if maximizing:
                if score > best_score:
                    best_move, best_score = col, score
                alpha = max(alpha, best_score)
            else:
                if score < best_score:
                    best_move, best_score = col, score
                beta = min(beta, best_score)

            # Cut-off only skips moves that cannot change this node's result
            if self.prune and alpha >= beta:
                break

        # No move improved on the initial extreme: pick one at random
        if best_move is None:
            best_move = self.rng.choice(legal_moves)

        return best_move, best_score
