import logging

from connectk.core.config import settings
from connectk.engine.errors import GameError
from connectk.models.enums import Side, Outcome
from connectk.services.game_service import GameSession

COMMANDS = "number = drop, u = take back, c = computer plays, r = restart, s RxCxK = resize, q = quit"


def main():
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    print("=======================================")
    print("   CONNECT K: Human vs Computer")
    print("=======================================")

    session = GameSession()
    print(session.state.get_visual_board())

    while True:
        snapshot = session.snapshot()
        if snapshot.outcome != Outcome.ONGOING:
            if snapshot.outcome == Outcome.DRAW:
                print("\nGame Over! It's a Draw.")
            else:
                winner = Side.A if snapshot.outcome == Outcome.SIDE_A_WINS else Side.B
                winner_name = "Computer" if winner == snapshot.computer_side else "Human"
                print(f"\nGame Over! Winner: {winner_name}")
            print("(u = take back, r = restart, q = quit)")

        try:
            user_input = input(f"\nYour Move ({COMMANDS}): ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            # Closed stdin or Ctrl-C ends the session like "q"
            print()
            break

        try:
            if user_input == "q":
                break
            elif user_input == "u":
                session.takeback()
            elif user_input == "c":
                session.play_computer()
            elif user_input == "r":
                session.restart()
            elif user_input.startswith("s "):
                rows, cols, win_length = (int(x) for x in user_input[2:].split("x"))
                session.resize(rows, cols, win_length)
            else:
                session.play_human(int(user_input))
        except GameError as e:
            print(f"Not allowed: {e}")
            continue
        except ValueError:
            print("Please enter a valid command.")
            continue

        recommendation = session.last_recommendation
        if recommendation is not None and recommendation.move is not None:
            print(f"Computer plays Column: {recommendation.move}")

        # Show Board
        print("\n" + session.state.get_visual_board())


if __name__ == "__main__":
    main()
