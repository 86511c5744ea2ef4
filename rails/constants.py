from enum import Enum


class CardColor(Enum):
    BLACK = "Black"
    BLUE = "Blue"
    GREEN = "Green"
    ORANGE = "Orange"
    PINK = "Pink"
    RED = "Red"
    WHITE = "White"
    YELLOW = "Yellow"
    LOCOMOTIVE = "Locomotive"
    # Only found on routes: any single color pays for it.
    GRAY = "gray"

    @property
    def token(self):
        return self.name


class RouteKind(Enum):
    NORMAL = "normal"
    TUNNEL = "tunnel"
    FERRY = "ferry"


WAGON_COLORS = [
    CardColor.BLACK,
    CardColor.BLUE,
    CardColor.GREEN,
    CardColor.ORANGE,
    CardColor.PINK,
    CardColor.RED,
    CardColor.WHITE,
    CardColor.YELLOW,
]
HAND_COLORS = WAGON_COLORS + [CardColor.LOCOMOTIVE]

CARDS_PER_COLOR = 12
LOCOMOTIVE_CARDS = 14
DECK_SIZE = CARDS_PER_COLOR * len(WAGON_COLORS) + LOCOMOTIVE_CARDS

VISIBLE_CARDS = 5
MAX_VISIBLE_LOCOMOTIVES = 2
INITIAL_HAND_SIZE = 4
TUNNEL_REVEAL = 3

MIN_PLAYERS = 2
MAX_PLAYERS = 5
PLAYER_COLORS = ["YELLOW", "RED", "BLUE", "GREEN", "PINK"]

INITIAL_WAGONS = 45
INITIAL_STATIONS = 3
STATION_POINTS = 4
INITIAL_SCORE = INITIAL_STATIONS * STATION_POINTS
FINAL_ROUND_WAGONS = 2

# remaining stations -> cards to pay for the next one
STATION_COST = {3: 1, 2: 2, 1: 3}

ROUTE_POINTS = {1: 1, 2: 2, 3: 4, 4: 7, 5: 15, 6: 21}
MIN_ROUTE_LENGTH = 1
MAX_ROUTE_LENGTH = 6

DESTINATIONS_PER_DRAW = 3
DESTINATIONS_KEEP_MIN = 1
INITIAL_SHORT_DESTINATIONS = 3
INITIAL_LONG_DESTINATIONS = 1
INITIAL_DESTINATIONS_KEEP_MIN = 2

LONGEST_PATH_BONUS = 10

DECK_TOKEN = CardColor.GRAY.token
DESTINATIONS_TOKEN = "destinations"
