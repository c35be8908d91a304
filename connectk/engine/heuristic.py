from connectk.engine.game import GameState
from connectk.models.enums import Side, Outcome

# --- Scoring System ---
# Logic: a finished game scores +/- WIN_SENTINEL, adjusted by remaining ply
# during search so that faster wins rank above slower ones.
# Must stay far above any heuristic score: the cubic sequence bonus alone
# can reach a few billion on a 20x20 board.
WIN_SENTINEL = 10 ** 12
DRAW_SCORE = 0


def terminal_score(outcome: Outcome) -> int:
    if outcome == Outcome.SIDE_A_WINS:
        return WIN_SENTINEL
    if outcome == Outcome.SIDE_B_WINS:
        return -WIN_SENTINEL
    return DRAW_SCORE


def neighbour_balance(state: GameState, row: int, col: int, side: Side) -> int:
    """Own pieces minus opponent pieces among the (up to 8) cells around (row, col)."""
    balance = 0
    board = state.board
    for r in range(max(row - 1, 0), min(row + 1, state.rows - 1) + 1):
        for c in range(max(col - 1, 0), min(col + 1, state.cols - 1) + 1):
            if r == row and c == col:
                continue
            cell = board[r][c]
            if cell == side:
                balance += 1
            elif cell == side.opponent:
                balance -= 1
    return balance


def positional_weight(state: GameState, row: int, col: int) -> int:
    """Distance from the nearer edge along each axis; central cells weigh more."""
    points = row if row < state.rows / 2 else state.rows - row
    points += col if col < state.cols / 2 else state.cols - col
    return points


def evaluate(state: GameState) -> float:
    """
    Signed assessment of the position: positive favours side A, negative
    favours side B, 0 is balanced (or a draw).

    Per side the score is built from:
    1. positional weight plus neighbour pressure for every piece on the board,
    2. a tempo multiplier for the trailing side, the one with fewer turns
       left (or, when equal, a smaller one for the side to move),
    3. count(side, k) ** 3 for every partial sequence length k < win_length.
    """
    if state.outcome != Outcome.ONGOING:
        return terminal_score(state.outcome)

    points = {Side.A: 0.0, Side.B: 0.0}
    for r in range(state.rows):
        for c in range(state.cols):
            cell = state.board[r][c]
            if cell in points:
                points[cell] += positional_weight(state, r, c) + neighbour_balance(state, r, c, cell)

    # Reward tempo for the side with fewer turns to go
    remaining_a = state.turns_remaining(Side.A)
    remaining_b = state.turns_remaining(Side.B)
    advantage = 1 / state.turns_left
    if remaining_a < remaining_b:
        points[Side.A] *= 1 + advantage
    elif remaining_b < remaining_a:
        points[Side.B] *= 1 + advantage
    else:
        # Slight first-mover advantage
        points[state.side_to_move] *= 1 + advantage / 3

    for side in (Side.A, Side.B):
        profile = state.sequence_profile(side)
        for length in range(state.win_length - 1, 1, -1):
            points[side] += profile[length] ** 3

    return points[Side.A] - points[Side.B]
