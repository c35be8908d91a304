from enum import IntEnum, StrEnum

EMPTY = 0

class Side(IntEnum):
    """Cell markers. The value doubles as the board cell value."""
    A = 1
    B = 2

    @property
    def opponent(self) -> "Side":
        return Side.B if self is Side.A else Side.A

class Outcome(StrEnum):
    ONGOING = "ONGOING"
    DRAW = "DRAW"
    SIDE_A_WINS = "SIDE_A_WINS"
    SIDE_B_WINS = "SIDE_B_WINS"

    @classmethod
    def win_for(cls, side: Side) -> "Outcome":
        return cls.SIDE_A_WINS if side is Side.A else cls.SIDE_B_WINS
