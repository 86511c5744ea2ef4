from .board import Board, City, Route, load_board
from .channel import DecisionChannel, Prompt
from .game import Game
from .turn import TurnEngine, TurnPhase

__all__ = [
    'Board',
    'City',
    'Route',
    'load_board',
    'DecisionChannel',
    'Prompt',
    'Game',
    'TurnEngine',
    'TurnPhase',
]
