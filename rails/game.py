import itertools
import random

import networkx as nx

from rails.board import load_board
from rails.channel import DecisionChannel
from rails.constants import (
    FINAL_ROUND_WAGONS,
    INITIAL_DESTINATIONS_KEEP_MIN,
    LONGEST_PATH_BONUS,
)
from rails.helpers.action import ActionType
from rails.helpers.destinations import load_destinations
from rails.helpers.game_state import GameState
from rails.turn import TurnEngine


class Game:
    def __init__(self, player_names, read_input, publish=None, board=None, destinations=None,
                 seed=None, silent=True, max_turns=None):
        self.rng = random.Random(seed)
        self.board = board if board is not None else load_board()
        if destinations is None:
            destinations = load_destinations()
        self.state = GameState.new_game(player_names, self.board, destinations, rng=self.rng)
        self.num_players = len(player_names)
        self.publish = publish
        self.silent = silent
        self.max_turns = max_turns

        self.channel = DecisionChannel(read_input, publish=self._publish)
        self.engine = TurnEngine(self.state, self.channel)

        self.current_player_idx = 0
        self.final_round = False
        self.final_round_starter = None
        self.game_over = False
        self.started = False
        self.turn = 0
        self.consecutive_passes = 0
        self.results = []
        self.last_snapshot = None

    def get_current_player(self):
        return self.state.list_of_players[self.current_player_idx]

    def snapshot(self, prompt=None):
        return self.state.snapshot(
            prompt=prompt,
            current_player=None if self.game_over else self.get_current_player(),
            phase=self.engine.phase,
            final_round=self.final_round,
            game_over=self.game_over,
        )

    def _publish(self, prompt=None):
        self.last_snapshot = self.snapshot(prompt)
        if self.publish is not None:
            self.publish(self.last_snapshot)

    def setup(self):
        """Deal the starting destinations: one long and three short, keep at least two."""
        pool = self.state.destination_pool
        for idx, player in enumerate(self.state.list_of_players):
            self.current_player_idx = idx
            offered = pool.deal_initial_hand()
            self.engine.choose_destinations(player, offered, INITIAL_DESTINATIONS_KEEP_MIN)
        self.current_player_idx = 0
        self.started = True
        self.state.check_invariants()

    def step(self):
        player = self.get_current_player()
        self.state.log(f"{player.name}'s turn.")
        action = self.engine.play_turn(player)
        self.turn += 1
        self.state.check_invariants()

        if action.type is ActionType.PASS:
            self.consecutive_passes += 1
        else:
            self.consecutive_passes = 0

        if not self.final_round and any(
            p.remaining_wagons <= FINAL_ROUND_WAGONS for p in self.state.list_of_players
        ):
            self.final_round = True
            self.final_round_starter = self.current_player_idx
            self.state.log(f"{player.name} has {player.remaining_wagons} wagons left: final round.")

        self.current_player_idx = (self.current_player_idx + 1) % self.num_players

        if self.final_round and self.current_player_idx == self.final_round_starter:
            self._end_game()
        elif self.consecutive_passes >= self.num_players:
            self.state.log("Nobody can act any more.")
            self._end_game()
        elif self.max_turns is not None and self.turn >= self.max_turns:
            self._end_game()
        return action

    def _end_game(self):
        self.game_over = True
        self._final_scoring()
        self._publish()

    def _final_scoring(self):
        players = self.state.list_of_players
        longest_routes = []
        self.results = []

        for player in players:
            longest = self._calculate_longest_path(player.routes)
            longest_routes.append(longest)

            completed, failed, points = self._score_destinations(player)
            player.score += points
            self.results.append({
                "name": player.name,
                "completed": [d.name for d in completed],
                "failed": [d.name for d in failed],
                "longest": longest,
            })

        if longest_routes:
            max_length = max(longest_routes)
            if max_length > 0:
                for idx, length in enumerate(longest_routes):
                    if length == max_length:
                        players[idx].score += LONGEST_PATH_BONUS
                        self.results[idx]["bonus"] = True

        for player, result in zip(players, self.results):
            result["score"] = player.score
            self.state.log(
                f"{player.name}: {player.score} points "
                f"({len(result['completed'])} destination(s) completed, {len(result['failed'])} failed)."
            )

    def _score_destinations(self, player):
        """Best destination result over every way of lending one foreign route to each station."""
        own_graph = nx.Graph()
        for route in player.routes:
            own_graph.add_edge(route.city_a, route.city_b)

        borrowable = []
        for city in player.stations:
            foreign = [r for r in self.board.routes_at(city.name)
                       if r.owner is not None and r.owner is not player]
            if foreign:
                borrowable.append(foreign)

        best = None
        for borrowed in itertools.product(*borrowable):
            graph = own_graph.copy()
            for route in borrowed:
                graph.add_edge(route.city_a, route.city_b)
            completed, failed = [], []
            for destination in player.destinations:
                if (graph.has_node(destination.city_a) and graph.has_node(destination.city_b)
                        and nx.has_path(graph, destination.city_a, destination.city_b)):
                    completed.append(destination)
                else:
                    failed.append(destination)
            points = sum(d.points for d in completed) - sum(d.points for d in failed)
            if best is None or points > best[2]:
                best = (completed, failed, points)
        return best

    def _calculate_longest_path(self, routes):
        graph = nx.MultiGraph()
        for route in routes:
            graph.add_edge(route.city_a, route.city_b, key=route.name, weight=route.length)
        if not graph.nodes():
            return 0

        longest = 0

        def dfs(node, visited_edges, current_length):
            nonlocal longest
            longest = max(longest, current_length)

            for _, neighbor, key, weight in graph.edges(node, keys=True, data='weight'):
                if key not in visited_edges:
                    visited_edges.add(key)
                    dfs(neighbor, visited_edges, current_length + weight)
                    visited_edges.remove(key)

        for start_node in graph.nodes():
            dfs(start_node, set(), 0)

        return longest

    def play(self):
        if not self.started:
            self.setup()
        while not self.game_over:
            player = self.get_current_player()
            action = self.step()
            if not self.silent:
                print(f"Turn {self.turn}: {player.name} - {action.type.value} {action.token}".rstrip())

        if not self.silent:
            print(f"Game ended after {self.turn} turns")
            for player in self.state.list_of_players:
                print(f"{player.name}: {player.score} points, {player.remaining_wagons} wagons left")

        return [p.score for p in self.state.list_of_players]
