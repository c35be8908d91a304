import unittest

from connectk.engine.game import GameState
from connectk.engine.heuristic import (
    WIN_SENTINEL,
    evaluate,
    neighbour_balance,
    positional_weight,
    terminal_score,
)
from connectk.models.enums import Side, Outcome


class TestEvaluate(unittest.TestCase):
    def test_empty_board_is_balanced(self):
        self.assertEqual(evaluate(GameState(6, 7, 4)), 0)

    def test_terminal_positions(self):
        state = GameState(4, 4, 4)
        for col in [0, 1, 0, 1, 0, 1, 0]:
            state.move(col)
        self.assertEqual(evaluate(state), WIN_SENTINEL)

        state = GameState(4, 4, 4)
        for col in [2, 0, 1, 0, 1, 0, 1, 0]:
            state.move(col)
        self.assertEqual(state.outcome, Outcome.SIDE_B_WINS)
        self.assertEqual(evaluate(state), -WIN_SENTINEL)

        self.assertEqual(terminal_score(Outcome.DRAW), 0)

    def test_single_centre_piece(self):
        """
        A at (0,3) on 6x7: weight 0 + 3, no neighbours. 41 turns left and B
        (to move) has the extra one, so A trails and gets 1 + 1/41.
        """
        state = GameState(6, 7, 4)
        state.move(3)
        self.assertAlmostEqual(evaluate(state), 3 * (1 + 1 / 41))

    def test_neighbour_pressure_and_tempo(self):
        state = GameState(6, 7, 4)
        state.move(3)
        state.move(3)
        # A: 3 - 1 (B above). B: 1 + 3 - 1 (A below).
        # 40 turns left, equal split, A to move gets 1 + 1/120.
        expected = 2 * (1 + 1 / 120) - 3
        self.assertAlmostEqual(evaluate(state), expected)

    def test_partial_sequence_bonus(self):
        state = GameState(6, 7, 4)
        for col in [0, 6, 1]:
            state.move(col)
        # A: (0,0) 0+1 and (0,1) 1+1, times 1 + 1/39 (19 turns to B's 20),
        # plus one open pair cubed. B: (0,6) weight 1, no multiplier.
        self.assertEqual(state.count_sequences(Side.A, 2), 1)
        expected = 3 * (1 + 1 / 39) + 1 ** 3 - 1
        self.assertAlmostEqual(evaluate(state), expected)

    def test_tempo_multiplier_goes_to_side_with_fewer_turns(self):
        state = GameState(6, 7, 4)
        for col in [0, 6]:
            state.move(col)
        state.move(3)
        # B to move with 20 turns against A's 19: only A's points are scaled
        self.assertGreater(state.turns_remaining(Side.B), state.turns_remaining(Side.A))
        a_points = positional_weight(state, 0, 0) + positional_weight(state, 0, 3)
        b_points = positional_weight(state, 0, 6)
        profile = state.sequence_profile(Side.A)
        bonus = sum(profile[k] ** 3 for k in range(2, 4))
        self.assertAlmostEqual(evaluate(state), a_points * (1 + 1 / 39) + bonus - b_points)

        # Hand the odd turn to A instead: now B trails and only B is scaled
        state.side_to_move = Side.A
        self.assertGreater(state.turns_remaining(Side.A), state.turns_remaining(Side.B))
        self.assertAlmostEqual(evaluate(state), a_points + bonus - b_points * (1 + 1 / 39))

    def test_heuristic_stays_below_sentinel(self):
        state = GameState(20, 20, 4)
        for col in range(20):
            state.move(col)
        self.assertLess(abs(evaluate(state)), WIN_SENTINEL)


class TestComponents(unittest.TestCase):
    def test_positional_weight(self):
        state = GameState(6, 7, 4)
        self.assertEqual(positional_weight(state, 0, 0), 0)
        self.assertEqual(positional_weight(state, 2, 3), 5)
        self.assertEqual(positional_weight(state, 3, 3), 6)
        self.assertEqual(positional_weight(state, 5, 6), 2)

    def test_neighbour_balance(self):
        state = GameState(6, 7, 4)
        for col in [2, 3, 3, 4]:
            state.move(col)
        # Around (0,3): A at (0,2) and (1,3), B at (0,4)
        self.assertEqual(neighbour_balance(state, 0, 3, Side.A), 1)
        self.assertEqual(neighbour_balance(state, 0, 3, Side.B), -1)
        # Corner cell only sees three neighbours
        self.assertEqual(neighbour_balance(state, 0, 0, Side.A), 0)


if __name__ == '__main__':
    unittest.main()
