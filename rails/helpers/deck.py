import random

from rails.constants import (
    CardColor,
    WAGON_COLORS,
    CARDS_PER_COLOR,
    LOCOMOTIVE_CARDS,
    VISIBLE_CARDS,
    MAX_VISIBLE_LOCOMOTIVES,
)
from rails.errors import GameInvariantError


def full_deck():
    cards = []
    for color in WAGON_COLORS:
        cards.extend([color] * CARDS_PER_COLOR)
    cards.extend([CardColor.LOCOMOTIVE] * LOCOMOTIVE_CARDS)
    return cards


class WagonDeck:
    """Hidden draw pile, face-up display and discard pile of wagon cards.

    The top of the draw pile is the end of ``draw_pile``. A full deck is
    built and shuffled when no draw pile is given.
    """

    def __init__(self, draw_pile=None, visible=None, discard_pile=None, rng=None):
        self.rng = rng or random.Random()
        if draw_pile is None:
            draw_pile = full_deck()
            self.rng.shuffle(draw_pile)
        self.draw_pile = list(draw_pile)
        self.visible = list(visible or [])
        self.discard_pile = list(discard_pile or [])
        self._check_visible()

    def __len__(self):
        return len(self.draw_pile) + len(self.visible) + len(self.discard_pile)

    def is_exhausted(self):
        return not self.draw_pile and not self.discard_pile

    def reshuffle_discard(self):
        if not self.discard_pile:
            return False
        self.draw_pile.extend(self.discard_pile)
        self.discard_pile = []
        self.rng.shuffle(self.draw_pile)
        return True

    def draw(self):
        """Pop the top hidden card, or None when no card is left anywhere."""
        if not self.draw_pile and not self.reshuffle_discard():
            return None
        return self.draw_pile.pop()

    def discard(self, card):
        # The display only runs short once both other piles are empty.
        if len(self.visible) < VISIBLE_CARDS:
            self.visible.append(card)
        else:
            self.discard_pile.append(card)
        self._check_visible()

    def take_visible(self, card):
        self.visible.remove(card)
        return self.refill_visible()

    def refill_visible(self):
        """Top the display back up to five cards.

        Returns the number of times the whole display was thrown away
        because it showed three locomotives or more.
        """
        resets = 0
        while True:
            while len(self.visible) < VISIBLE_CARDS:
                card = self.draw()
                if card is None:
                    break
                self.visible.append(card)
            if self.visible.count(CardColor.LOCOMOTIVE) <= MAX_VISIBLE_LOCOMOTIVES:
                break
            # Too few other cards left to ever show a legal display: keep this one.
            if not self._can_reset_visible():
                break
            self.discard_pile.extend(self.visible)
            self.visible = []
            resets += 1
        self._check_visible()
        return resets

    def _can_reset_visible(self):
        others = sum(
            1 for card in self.draw_pile + self.visible + self.discard_pile
            if card is not CardColor.LOCOMOTIVE
        )
        return others >= VISIBLE_CARDS - MAX_VISIBLE_LOCOMOTIVES

    def _check_visible(self):
        if not 0 <= len(self.visible) <= VISIBLE_CARDS:
            raise GameInvariantError(f"visible display holds {len(self.visible)} cards")

    def counts(self):
        return {
            "drawPile": len(self.draw_pile),
            "visible": [c.token for c in self.visible],
            "discard": [c.token for c in self.discard_pile],
        }
