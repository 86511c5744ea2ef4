import csv
import random
from dataclasses import dataclass
from pathlib import Path

from rails.constants import (
    DESTINATIONS_PER_DRAW,
    INITIAL_SHORT_DESTINATIONS,
    INITIAL_LONG_DESTINATIONS,
)

DATA_PATH = Path(__file__).parent.parent / 'data' / 'destinations.csv'


@dataclass(frozen=True)
class Destination:
    city_a: str
    city_b: str
    points: int
    long: bool = False

    @property
    def name(self):
        return f"{self.city_a} - {self.city_b}"

    def __str__(self):
        return f"{self.name} ({self.points})"


def load_destinations(data_path=None):
    data_path = Path(data_path) if data_path else DATA_PATH
    destinations = []
    with open(data_path, 'r', newline='') as f:
        reader = csv.DictReader(f)
        for row in reader:
            kind = row['Type'].strip().lower()
            if kind not in ('short', 'long'):
                raise ValueError(f"unknown destination type {row['Type']!r}")
            destinations.append(Destination(
                row['Source'], row['Target'], int(row['Points']), long=kind == 'long'
            ))
    return destinations


class DestinationPool:
    """Shared pile of short destinations plus the long ones dealt at setup.

    Both piles are unordered; every draw samples uniformly.
    """

    def __init__(self, destinations, rng=None):
        self.rng = rng or random.Random()
        self.short = [d for d in destinations if not d.long]
        self.long = [d for d in destinations if d.long]

    def __len__(self):
        return len(self.short)

    def _sample(self, pile, n):
        picked = self.rng.sample(pile, min(n, len(pile)))
        for destination in picked:
            pile.remove(destination)
        return picked

    def deal_initial_hand(self, n_short=INITIAL_SHORT_DESTINATIONS, n_long=INITIAL_LONG_DESTINATIONS):
        return self._sample(self.long, n_long) + self._sample(self.short, n_short)

    def draw_for_action(self, n=DESTINATIONS_PER_DRAW):
        return self._sample(self.short, n)

    def return_declined(self, cards):
        for destination in cards:
            if destination.long:
                raise ValueError(f"long destination {destination.name} cannot go back to the pile")
        self.short.extend(cards)
