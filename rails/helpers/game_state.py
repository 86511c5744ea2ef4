import random

from rails.constants import INITIAL_HAND_SIZE, MIN_PLAYERS, MAX_PLAYERS, PLAYER_COLORS, VISIBLE_CARDS
from rails.errors import GameInvariantError
from .deck import WagonDeck
from .destinations import DestinationPool
from .player_state import PlayerState


class GameState:
    def __init__(self, board, deck, destination_pool, players):
        self.board = board
        self.deck = deck
        self.destination_pool = destination_pool
        self.list_of_players = players
        self.log_messages = []
        self.card_total = self.count_cards()

    @classmethod
    def new_game(cls, player_names, board, destinations, rng=None):
        if not MIN_PLAYERS <= len(player_names) <= MAX_PLAYERS:
            raise ValueError(f"{len(player_names)} players, expected {MIN_PLAYERS} to {MAX_PLAYERS}")
        if len(set(player_names)) != len(player_names):
            raise ValueError("player names must be unique")
        rng = rng or random.Random()

        colors = list(PLAYER_COLORS)
        rng.shuffle(colors)
        players = [PlayerState(name, colors[i]) for i, name in enumerate(player_names)]

        deck = WagonDeck(rng=rng)
        for player in players:
            for _ in range(INITIAL_HAND_SIZE):
                player.add_card(deck.draw())
        deck.refill_visible()

        return cls(board, deck, DestinationPool(destinations, rng=rng), players)

    def log(self, message):
        self.log_messages.append(message)

    def count_cards(self):
        in_hands = sum(p.card_count() + p.staged_count() for p in self.list_of_players)
        return len(self.deck) + in_hands

    def check_invariants(self):
        if not 0 <= len(self.deck.visible) <= VISIBLE_CARDS:
            raise GameInvariantError(f"visible display holds {len(self.deck.visible)} cards")
        total = self.count_cards()
        if total != self.card_total:
            raise GameInvariantError(f"{total} wagon cards in play, expected {self.card_total}")
        for player in self.list_of_players:
            if any(n < 0 for n in player.hand.values()):
                raise GameInvariantError(f"{player.name} holds a negative card count")

    def snapshot(self, prompt=None, current_player=None, phase=None, final_round=False, game_over=False):
        return {
            "prompt": prompt.as_dict() if prompt else None,
            "phase": phase.value if phase else None,
            "currentPlayer": current_player.name if current_player else None,
            "cities": [
                {"name": c.name, "owner": c.owner.name if c.owner else None}
                for c in self.board.cities
            ],
            "routes": [
                {
                    "name": r.name,
                    "cityA": r.city_a,
                    "cityB": r.city_b,
                    "length": r.length,
                    "color": r.color.token,
                    "kind": r.kind.value,
                    "locomotives": r.locomotives,
                    "owner": r.owner.name if r.owner else None,
                }
                for r in self.board.routes
            ],
            "players": [
                p.public_state(is_current=p is current_player) for p in self.list_of_players
            ],
            "piles": dict(self.deck.counts(), destinations=len(self.destination_pool)),
            "log": list(self.log_messages),
            "finalRound": final_round,
            "gameOver": game_over,
        }
