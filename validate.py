from collections import Counter
import statistics

from rails.game import Game
from rails.players import RandomInput


def run_silent_game(seed=None, num_players=2, max_turns=2000):
    names = [f"Player {i}" for i in range(num_players)]
    game = Game(names, read_input=RandomInput(seed), seed=seed, max_turns=max_turns)
    game.setup()

    action_counts = Counter()
    tunnel_attempts = 0
    tunnel_failures = 0

    while not game.game_over:
        log_start = len(game.state.log_messages)
        action = game.step()
        action_counts[action.type.value] += 1

        new_lines = game.state.log_messages[log_start:]
        tunnel_attempts += sum(1 for line in new_lines if line.startswith("Tunnel "))
        tunnel_failures += sum(1 for line in new_lines
                               if "tunnel surcharge" in line or "gives up the tunnel" in line)

    players = game.state.list_of_players
    return {
        'turns': game.turn,
        'scores': [p.score for p in players],
        'trains_left': [p.remaining_wagons for p in players],
        'routes_claimed': [r.name for p in players for r in p.routes],
        'tickets_completed': sum(len(r['completed']) for r in game.results),
        'tickets_failed': sum(len(r['failed']) for r in game.results),
        'action_counts': action_counts,
        'tunnel_attempts': tunnel_attempts,
        'tunnel_failures': tunnel_failures,
        'hand_sizes': [p.card_count() for p in players],
        'final_round': game.final_round,
    }


def run_validation(num_games=100, num_players=2):
    all_scores = []
    all_turns = []
    route_popularity = Counter()
    total_tickets_completed = 0
    total_tickets_failed = 0
    total_action_counts = Counter()
    total_tunnel_attempts = 0
    total_tunnel_failures = 0
    all_hand_sizes = []
    normal_endings = 0

    print(f"Running {num_games} games...")

    for i in range(num_games):
        results = run_silent_game(seed=i, num_players=num_players)
        all_turns.append(results['turns'])
        all_scores.extend(results['scores'])
        route_popularity.update(results['routes_claimed'])
        total_tickets_completed += results['tickets_completed']
        total_tickets_failed += results['tickets_failed']
        total_action_counts += results['action_counts']
        total_tunnel_attempts += results['tunnel_attempts']
        total_tunnel_failures += results['tunnel_failures']
        all_hand_sizes.extend(results['hand_sizes'])
        normal_endings += results['final_round']

    print("\n" + "="*50)
    print("VALIDATION RESULTS")
    print("="*50)

    print(f"\nGames completed: {num_games}, ended by final round: {normal_endings}")

    print(f"\n--- TURNS ---")
    print(f"Min: {min(all_turns)}, Max: {max(all_turns)}, Mean: {sum(all_turns)/len(all_turns):.1f}")

    print(f"\n--- SCORES ---")
    print(f"Min: {min(all_scores)}, Max: {max(all_scores)}")
    print(f"Mean: {sum(all_scores)/len(all_scores):.1f}")
    if len(all_scores) > 1:
        print(f"Std: {statistics.stdev(all_scores):.1f}")

    print(f"\n--- DESTINATIONS ---")
    total_tickets = total_tickets_completed + total_tickets_failed
    completion_rate = total_tickets_completed / total_tickets * 100 if total_tickets > 0 else 0
    print(f"Completed: {total_tickets_completed}, Failed: {total_tickets_failed}")
    print(f"Completion rate: {completion_rate:.1f}%")

    print(f"\n--- TUNNELS ---")
    if total_tunnel_attempts > 0:
        failure_rate = total_tunnel_failures / total_tunnel_attempts * 100
        print(f"Attempts: {total_tunnel_attempts}, Failures: {total_tunnel_failures}")
        print(f"Failure rate: {failure_rate:.1f}%")
    else:
        print("No tunnel attempts")

    print(f"\n--- ACTION DISTRIBUTION ---")
    total_actions = sum(total_action_counts.values())
    for action_type, count in total_action_counts.most_common():
        pct = count / total_actions * 100
        print(f"{action_type}: {count} ({pct:.1f}%)")

    print(f"\n--- FINAL HAND SIZES ---")
    print(f"Mean: {sum(all_hand_sizes)/len(all_hand_sizes):.1f}")

    print(f"\n--- TOP 10 MOST CLAIMED ROUTES ---")
    for route, count in route_popularity.most_common(10):
        print(f"{route}: {count}")


if __name__ == "__main__":
    run_validation(100)
