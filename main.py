import argparse

from rails.game import Game


def print_prompt(snapshot):
    prompt = snapshot["prompt"]
    if prompt is None:
        return
    piles = snapshot["piles"]
    print()
    for player in snapshot["players"]:
        hand = ", ".join(f"{c} x{n}" for c, n in player["hand"].items())
        print(f"=== {player['name']} ({player['score']} pts) === stations: {player['stations']}, "
              f"wagons: {player['wagons']}, cards: {hand}")
    print(f"Face up: {' '.join(piles['visible'])}  (draw pile: {piles['drawPile']}, "
          f"destinations: {piles['destinations']})")
    if snapshot["log"]:
        print(f"  {snapshot['log'][-1]}")
    choices = prompt["buttons"] or prompt["selectable"]
    if len(choices) <= 12:
        print(f">>> {prompt['player']}: {prompt['instruction']} [{' / '.join(choices)}]")
    else:
        print(f">>> {prompt['player']}: {prompt['instruction']} ({len(choices)} choices, '?' to list)")
    if prompt["canPass"]:
        print("    (empty line to pass)")


def read_line(prompt):
    while True:
        value = input("> ").strip()
        if value == "?":
            print(" / ".join(sorted(prompt.choices())))
            continue
        return value


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Play a game in the terminal.")
    parser.add_argument("players", nargs="+", help="player names (2 to 5)")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    game = Game(args.players, read_input=read_line, publish=print_prompt, seed=args.seed, silent=False)
    game.play()
