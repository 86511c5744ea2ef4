class GameInvariantError(RuntimeError):
    """Shared game state drifted into a shape the rules never allow."""


class GameAborted(Exception):
    """Raised in the game thread when its input source is closed."""
