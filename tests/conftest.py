import random
from types import SimpleNamespace

import pytest

from rails.board import Board, Route
from rails.channel import DecisionChannel, ScriptedInput
from rails.constants import CardColor, RouteKind
from rails.helpers.deck import WagonDeck
from rails.helpers.destinations import Destination, DestinationPool
from rails.helpers.game_state import GameState
from rails.helpers.player_state import PlayerState
from rails.turn import TurnEngine


def make_board():
    return Board([
        Route("Paris - Bruxelles", "Paris", "Bruxelles", 2, CardColor.RED),
        Route("Paris - Zurich", "Paris", "Zurich", 3, CardColor.GRAY, RouteKind.TUNNEL),
        Route("Zurich - Munchen", "Zurich", "Munchen", 2, CardColor.BLUE, RouteKind.TUNNEL),
        Route("London - Dieppe", "London", "Dieppe", 2, CardColor.GRAY, RouteKind.FERRY, locomotives=1),
        Route("Dieppe - Paris", "Dieppe", "Paris", 1, CardColor.PINK),
        Route("Bruxelles - Amsterdam", "Bruxelles", "Amsterdam", 6, CardColor.GRAY),
    ])


def make_destinations():
    return [
        Destination("Paris", "Amsterdam", 8),
        Destination("London", "Paris", 5),
        Destination("Zurich", "Bruxelles", 6),
        Destination("Munchen", "Dieppe", 9),
        Destination("Amsterdam", "Zurich", 7),
        Destination("London", "Munchen", 20, long=True),
        Destination("Amsterdam", "Munchen", 21, long=True),
    ]


@pytest.fixture
def table():
    """Build a turn engine over a small board with hand-picked piles and answers."""
    def build(answers=(), draw_pile=(), visible=(), discard=(), hands=(),
              players=("Alice", "Bob"), destinations=()):
        board = make_board()
        deck = WagonDeck(
            draw_pile=list(draw_pile),
            visible=list(visible),
            discard_pile=list(discard),
            rng=random.Random(0),
        )
        pool = DestinationPool(list(destinations), rng=random.Random(0))
        player_states = [PlayerState(name) for name in players]
        for player, hand in zip(player_states, hands):
            for card, count in hand.items():
                player.hand[card] = count
        state = GameState(board, deck, pool, player_states)
        script = ScriptedInput(answers)
        engine = TurnEngine(state, DecisionChannel(script))
        return SimpleNamespace(
            board=board,
            deck=deck,
            pool=pool,
            players=player_states,
            alice=player_states[0],
            state=state,
            script=script,
            engine=engine,
        )

    return build
