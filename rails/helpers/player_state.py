from rails.constants import HAND_COLORS, INITIAL_WAGONS, INITIAL_STATIONS, INITIAL_SCORE


class PlayerState:
    def __init__(self, name, color=None):
        self.name = name
        self.color = color
        self.hand = {card: 0 for card in HAND_COLORS}
        self.staged = {card: 0 for card in HAND_COLORS}
        self.remaining_wagons = INITIAL_WAGONS
        self.remaining_stations = INITIAL_STATIONS
        self.score = INITIAL_SCORE
        self.destinations = []
        self.routes = []
        self.stations = []

    def __repr__(self):
        return f"PlayerState({self.name!r})"

    def add_card(self, card):
        self.hand[card] += 1

    def card_count(self):
        return sum(self.hand.values())

    def staged_count(self):
        return sum(self.staged.values())

    def stage(self, card):
        if self.hand[card] <= 0:
            raise ValueError(f"{self.name} has no {card.token} card to stage")
        self.hand[card] -= 1
        self.staged[card] += 1

    def unstage_all(self):
        for card, count in self.staged.items():
            self.hand[card] += count
            self.staged[card] = 0

    def take_staged(self):
        paid = []
        for card, count in self.staged.items():
            paid.extend([card] * count)
            self.staged[card] = 0
        return paid

    def public_state(self, is_current=False):
        return {
            "name": self.name,
            "color": self.color,
            "score": self.score,
            "stations": self.remaining_stations,
            "wagons": self.remaining_wagons,
            "destinations": [d.name for d in self.destinations],
            "hand": {c.token: n for c, n in self.hand.items() if n},
            "staged": {c.token: n for c, n in self.staged.items() if n},
            "isCurrent": is_current,
        }
