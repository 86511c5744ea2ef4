from dataclasses import dataclass
from enum import Enum

from rails.constants import (
    CardColor,
    WAGON_COLORS,
    STATION_COST,
    DECK_TOKEN,
    DESTINATIONS_TOKEN,
)

LOCOMOTIVE = CardColor.LOCOMOTIVE


class ActionType(Enum):
    DRAW_WAGON_CARDS = "draw_wagon_cards"
    DRAW_DESTINATIONS = "draw_destinations"
    BUILD_STATION = "build_station"
    CAPTURE_ROUTE = "capture_route"
    PASS = "pass"


@dataclass
class Action:
    type: ActionType
    token: str = ""
    # None on a wagon draw means the hidden pile
    card: CardColor = None
    city: object = None
    route: object = None


PASS = Action(type=ActionType.PASS)


def run_color(staged, route_color=None):
    """Color the non-locomotive part of a payment is locked to, if any."""
    if route_color is not None and route_color is not CardColor.GRAY:
        return route_color
    for card, count in staged.items():
        if count and card is not LOCOMOTIVE:
            return card
    return None


def is_consistent(staged, route_color=None):
    colors = {card for card, count in staged.items() if count and card is not LOCOMOTIVE}
    if route_color is not None and route_color is not CardColor.GRAY:
        return colors <= {route_color}
    return len(colors) <= 1


def can_complete(hand, staged, total, route_color=None, locomotives_min=0):
    """Whether ``hand`` can still bring ``staged`` up to a legal payment of ``total`` cards.

    A legal payment is a run of one color (the route color when it has one)
    where locomotives stand in for any card, with at least
    ``locomotives_min`` locomotives.
    """
    if not is_consistent(staged, route_color):
        return False
    staged_count = sum(staged.values())
    remaining = total - staged_count
    if remaining < 0:
        return False
    staged_wild = staged.get(LOCOMOTIVE, 0)
    if staged_count - staged_wild > total - locomotives_min:
        return False
    wild = hand.get(LOCOMOTIVE, 0)
    if wild < max(0, locomotives_min - staged_wild):
        return False
    color = run_color(staged, route_color)
    if color is None:
        best = max(hand.get(c, 0) for c in WAGON_COLORS)
    else:
        best = hand.get(color, 0)
    return best + wild >= remaining


def can_pay(hand, total, route_color=None, locomotives_min=0):
    return can_complete(hand, {}, total, route_color, locomotives_min)


def stageable_cards(hand, staged, total, route_color=None, locomotives_min=0):
    """Cards of ``hand`` that can be staged next without making the payment impossible."""
    options = []
    for card, count in hand.items():
        if count <= 0:
            continue
        trial_hand = dict(hand)
        trial_hand[card] -= 1
        trial_staged = dict(staged)
        trial_staged[card] = trial_staged.get(card, 0) + 1
        if can_complete(trial_hand, trial_staged, total, route_color, locomotives_min):
            options.append(card)
    return options


def station_cost(player):
    return STATION_COST.get(player.remaining_stations, 0)


def _draw_card_actions(game_state):
    actions = []
    deck = game_state.deck
    for card in dict.fromkeys(deck.visible):
        actions.append(Action(type=ActionType.DRAW_WAGON_CARDS, token=card.token, card=card))
    if not deck.is_exhausted():
        actions.append(Action(type=ActionType.DRAW_WAGON_CARDS, token=DECK_TOKEN))
    return actions


def _draw_destinations_actions(game_state):
    if len(game_state.destination_pool) == 0:
        return []
    return [Action(type=ActionType.DRAW_DESTINATIONS, token=DESTINATIONS_TOKEN)]


def _build_station_actions(game_state, player):
    actions = []
    if player.remaining_stations <= 0:
        return actions
    if not can_pay(player.hand, station_cost(player)):
        return actions
    for city in game_state.board.unowned_cities():
        actions.append(Action(type=ActionType.BUILD_STATION, token=city.name, city=city))
    return actions


def _capture_route_actions(game_state, player):
    actions = []
    for route in game_state.board.unowned_routes():
        if player.remaining_wagons < route.length:
            continue
        if not can_pay(player.hand, route.length, route.color, route.locomotives):
            continue
        actions.append(Action(type=ActionType.CAPTURE_ROUTE, token=route.name, route=route))
    return actions


def legal_actions(game_state, player):
    """Legal top-level actions for ``player``, keyed by the token that selects them."""
    actions = []
    actions.extend(_draw_card_actions(game_state))
    actions.extend(_draw_destinations_actions(game_state))
    actions.extend(_build_station_actions(game_state, player))
    actions.extend(_capture_route_actions(game_state, player))
    return {action.token: action for action in actions}


def second_draw_actions(game_state):
    """Cards a player may take after a first non-locomotive draw."""
    return {
        action.token: action
        for action in _draw_card_actions(game_state)
        if action.card is not LOCOMOTIVE
    }
