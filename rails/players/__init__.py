from .random_player import random_choose, RandomInput

__all__ = [
    'random_choose',
    'RandomInput',
]
