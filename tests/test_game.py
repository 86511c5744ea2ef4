"""Tests for game setup, turn order, the final round and final scoring."""

import pytest

from rails.board import Route
from rails.channel import ScriptedInput
from rails.constants import CardColor
from rails.game import Game
from rails.helpers.action import Action, ActionType, PASS
from rails.helpers.destinations import Destination
from rails.players import RandomInput

from conftest import make_board, make_destinations

DRAW = Action(type=ActionType.DRAW_WAGON_CARDS, token="GRAY")


def small_game(names=("Alice", "Bob"), answers=(), **kwargs):
    return Game(list(names), ScriptedInput(answers), board=make_board(),
                destinations=make_destinations(), seed=1, **kwargs)


def scripted_turns(game, on_turn):
    """Replace real turns with ``on_turn(player, turn_index)`` and record who played."""
    played = []

    def play_turn(player):
        played.append(player.name)
        return on_turn(player, len(played))

    game.engine.play_turn = play_turn
    game.started = True
    return played


class TestNewGame:
    @pytest.mark.parametrize("names", [["Alice"], ["A", "B", "C", "D", "E", "F"], ["Alice", "Alice"]])
    def test_bad_player_list(self, names):
        with pytest.raises(ValueError):
            Game(names, ScriptedInput([]))

    def test_initial_state(self):
        game = Game(["Alice", "Bob", "Carol"], ScriptedInput([]), seed=4)
        players = game.state.list_of_players
        assert [p.card_count() for p in players] == [4, 4, 4]
        assert [p.score for p in players] == [12, 12, 12]
        assert [p.remaining_wagons for p in players] == [45, 45, 45]
        assert len({p.color for p in players}) == 3
        assert len(game.state.deck.visible) == 5
        assert game.state.count_cards() == 110
        assert game.get_current_player() is players[0]

    def test_setup_deals_destinations(self):
        game = Game(["Alice", "Bob"], ScriptedInput(["", ""]), seed=1)
        game.setup()
        for player in game.state.list_of_players:
            assert len(player.destinations) == 4
            assert [d.long for d in player.destinations].count(True) == 1
        assert game.started
        assert game.get_current_player().name == "Alice"

    def test_setup_keeps_at_least_two(self):
        first = lambda p: p.buttons[0]  # noqa: E731
        game = Game(["Alice", "Bob"], ScriptedInput([first, first, ""]), seed=1)
        game.setup()
        alice, bob = game.state.list_of_players
        assert len(alice.destinations) == 2
        assert len(bob.destinations) == 4

    def test_snapshot_shape(self):
        published = []
        game = Game(["Alice", "Bob"], ScriptedInput(["", ""]), publish=published.append, seed=1)
        game.setup()
        state = published[0]
        assert state["currentPlayer"] == "Alice"
        assert state["prompt"]["player"] == "Alice"
        assert state["prompt"]["canPass"] is True
        assert len(state["prompt"]["buttons"]) == 4
        piles = state["piles"]
        assert piles["drawPile"] + len(piles["visible"]) + len(piles["discard"]) == 110 - 8
        assert piles["destinations"] == 40 - 3
        assert len(state["routes"]) == 100
        assert state["gameOver"] is False


class TestTurnOrder:
    def test_final_round_gives_everyone_else_one_turn(self):
        game = small_game(names=("Alice", "Bob", "Carol"))

        def on_turn(player, index):
            if index == 2:
                player.remaining_wagons = 2
            return DRAW

        played = scripted_turns(game, on_turn)
        game.play()
        assert played == ["Alice", "Bob", "Carol", "Alice"]
        assert game.final_round
        assert game.game_over
        assert "Bob has 2 wagons left: final round." in game.state.log_messages

    def test_final_round_on_last_seat(self):
        game = small_game(names=("Alice", "Bob"))

        def on_turn(player, index):
            if index == 4:
                player.remaining_wagons = 1
            return DRAW

        played = scripted_turns(game, on_turn)
        game.play()
        assert played == ["Alice", "Bob", "Alice", "Bob", "Alice"]

    def test_everyone_passing_ends_the_game(self):
        game = small_game(names=("Alice", "Bob", "Carol"))
        played = scripted_turns(game, lambda player, index: DRAW if index == 1 else PASS)
        game.play()
        assert played == ["Alice", "Bob", "Carol", "Alice"]
        assert not game.final_round
        assert "Nobody can act any more." in game.state.log_messages

    def test_max_turns(self):
        game = small_game(max_turns=5)
        played = scripted_turns(game, lambda player, index: DRAW)
        game.play()
        assert len(played) == 5
        assert game.turn == 5
        assert game.game_over

    def test_game_over_is_published(self):
        published = []
        game = small_game(max_turns=1, publish=published.append)
        scripted_turns(game, lambda player, index: DRAW)
        game.play()
        assert published[-1]["gameOver"] is True
        assert published[-1]["currentPlayer"] is None


class TestFinalScoring:
    def setup_table(self, with_station=True):
        game = small_game()
        alice, bob = game.state.list_of_players
        alice.score = bob.score = 0
        board = game.board
        for player, names in ((alice, ["Paris - Bruxelles", "Bruxelles - Amsterdam"]),
                              (bob, ["Dieppe - Paris", "London - Dieppe"])):
            for name in names:
                route = board.route(name)
                route.claim(player)
                player.routes.append(route)
        if with_station:
            dieppe = board.city("Dieppe")
            dieppe.build_station(alice)
            alice.stations.append(dieppe)
        alice.destinations = [Destination("Paris", "Amsterdam", 8), Destination("Dieppe", "Bruxelles", 6)]
        bob.destinations = [Destination("London", "Munchen", 20, long=True)]
        return game, alice, bob

    def test_station_borrows_a_route(self):
        game, alice, bob = self.setup_table()
        game._end_game()
        assert alice.score == 8 + 6 + 10
        assert bob.score == -20
        alice_result, bob_result = game.results
        assert alice_result["completed"] == ["Paris - Amsterdam", "Dieppe - Bruxelles"]
        assert alice_result["longest"] == 8
        assert alice_result["bonus"] is True
        assert bob_result["failed"] == ["London - Munchen"]
        assert bob_result["longest"] == 3
        assert "bonus" not in bob_result

    def test_without_station(self):
        game, alice, bob = self.setup_table(with_station=False)
        game._end_game()
        assert alice.score == 8 - 6 + 10
        assert game.results[0]["failed"] == ["Dieppe - Bruxelles"]

    def test_tied_longest_path_both_get_the_bonus(self):
        game = small_game()
        alice, bob = game.state.list_of_players
        alice.score = bob.score = 0
        for player, name in ((alice, "Paris - Bruxelles"), (bob, "London - Dieppe")):
            route = game.board.route(name)
            route.claim(player)
            player.routes.append(route)
        game._end_game()
        assert alice.score == bob.score == 10


class TestLongestPath:
    def test_no_routes(self):
        assert small_game()._calculate_longest_path([]) == 0

    def test_triangle_with_tail(self):
        routes = [
            Route("A - B", "A", "B", 2),
            Route("B - C", "B", "C", 3),
            Route("C - A", "C", "A", 1),
            Route("C - D", "C", "D", 4),
        ]
        assert small_game()._calculate_longest_path(routes) == 10

    def test_parallel_routes_both_count(self):
        routes = [
            Route("A - B", "A", "B", 2, CardColor.RED),
            Route("A - B (2)", "A", "B", 2, CardColor.BLUE),
            Route("B - C", "B", "C", 1),
        ]
        assert small_game()._calculate_longest_path(routes) == 5


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_random_game_runs_to_the_end(seed):
    game = Game(["Alice", "Bob", "Carol"], RandomInput(seed), seed=seed, max_turns=1500)
    scores = game.play()
    assert game.game_over
    assert len(scores) == 3
    assert scores == [r["score"] for r in game.results]
    game.state.check_invariants()
    owners = [r.owner for r in game.board.routes if r.owner is not None]
    assert len(owners) == sum(len(p.routes) for p in game.state.list_of_players)
