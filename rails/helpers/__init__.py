from .deck import WagonDeck
from .destinations import Destination, DestinationPool, load_destinations
from .player_state import PlayerState
from .game_state import GameState

__all__ = [
    'WagonDeck',
    'Destination',
    'DestinationPool',
    'load_destinations',
    'PlayerState',
    'GameState',
]
