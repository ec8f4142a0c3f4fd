import argparse
import logging

from tile1024.controller import MoveController
from tile1024.game import WIN_VALUE, GameConfig, GameSession, Outcome


def parse_args():
    parser = argparse.ArgumentParser(description="Play 1024 in the terminal")
    parser.add_argument("--seed", type=int, default=None, help="seed for tile spawns")
    parser.add_argument("--win-value", type=int, default=WIN_VALUE)
    parser.add_argument("--verbose", action="store_true", help="log every move step")
    return parser.parse_args()


def announce(outcome: Outcome):
    if outcome is Outcome.WON:
        print("You made the 1024 tile! Keep going or press n for a new game.")
    elif outcome is Outcome.LOST:
        print("Game over! No moves left. Press n for a new game.")


if __name__ == "__main__":
    args = parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    game = GameSession(GameConfig(win_value=args.win_value, seed=args.seed))
    controller = MoveController(game, on_outcome=announce)

    key_mapping = {
        "w": "up",
        "d": "right",
        "s": "down",
        "a": "left",
    }

    print(game.display())

    while True:
        key = input()
        if key == "n":
            controller.new_game()
        elif key in key_mapping:
            result = controller.handle_intent(key_mapping[key])
            if result is None:
                print("That move changes nothing.")
                continue
            controller.finish_presentation()
        else:
            break
        print(game.display())
