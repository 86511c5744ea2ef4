from enum import Enum

from rails.constants import (
    CardColor,
    DESTINATIONS_PER_DRAW,
    DESTINATIONS_KEEP_MIN,
    ROUTE_POINTS,
    STATION_POINTS,
    TUNNEL_REVEAL,
)
from rails.helpers.action import (
    ActionType,
    PASS,
    can_complete,
    legal_actions,
    second_draw_actions,
    stageable_cards,
    station_cost,
)


class TurnPhase(Enum):
    CHOOSING_ACTION = "choosing_action"
    DRAWING_WAGON_CARDS = "drawing_wagon_cards"
    DRAWING_DESTINATIONS = "drawing_destinations"
    BUILDING_STATION = "building_station"
    CAPTURING_ROUTE = "capturing_route"
    TURN_COMPLETE = "turn_complete"


ACTION_PHASES = {
    ActionType.DRAW_WAGON_CARDS: TurnPhase.DRAWING_WAGON_CARDS,
    ActionType.DRAW_DESTINATIONS: TurnPhase.DRAWING_DESTINATIONS,
    ActionType.BUILD_STATION: TurnPhase.BUILDING_STATION,
    ActionType.CAPTURE_ROUTE: TurnPhase.CAPTURING_ROUTE,
}


class TurnEngine:
    """Runs one player's turn against the shared game state.

    Every action handler returns True once the turn is spent and False when
    the action was declined; a declined action has already put any staged
    cards back in the hand, and the player chooses again.
    """

    def __init__(self, game_state, channel):
        self.state = game_state
        self.channel = channel
        self.phase = TurnPhase.TURN_COMPLETE
        self.player = None
        self._handlers = {
            ActionType.DRAW_WAGON_CARDS: self._draw_wagon_cards,
            ActionType.DRAW_DESTINATIONS: self._draw_destinations,
            ActionType.BUILD_STATION: self._build_station,
            ActionType.CAPTURE_ROUTE: self._capture_route,
        }

    def _ask(self, player, instruction, selectable=(), buttons=(), can_pass=False):
        return self.channel.request_choice(
            instruction, selectable=selectable, buttons=buttons, can_pass=can_pass, player=player
        )

    def play_turn(self, player):
        self.player = player
        while True:
            self.phase = TurnPhase.CHOOSING_ACTION
            actions = legal_actions(self.state, player)
            token = self._ask(player, "Choose an action.", selectable=list(actions))
            if token == "":
                self.state.log(f"{player.name} has nothing to do and passes.")
                self.phase = TurnPhase.TURN_COMPLETE
                return PASS

            action = actions[token]
            self.phase = ACTION_PHASES[action.type]
            if self._handlers[action.type](player, action):
                self.phase = TurnPhase.TURN_COMPLETE
                return action

    def _decline(self, player, message):
        player.unstage_all()
        self.state.log(message)
        return False

    def _discard_staged(self, player):
        paid = player.take_staged()
        for card in paid:
            self.state.deck.discard(card)
        return paid

    # Wagon cards

    def _take_card(self, player, action):
        deck = self.state.deck
        if action.card is None:
            card = deck.draw()
            if card is None:
                self.state.log("No wagon card available.")
                return None
            player.add_card(card)
            return card

        resets = deck.take_visible(action.card)
        player.add_card(action.card)
        if resets:
            self.state.log("Three locomotives were face up: the visible cards are replaced.")
        return action.card

    def _draw_wagon_cards(self, player, action):
        drawn = [self._describe_draw(action, self._take_card(player, action))]
        if action.card is CardColor.LOCOMOTIVE:
            self.state.log(f"{player.name} takes a face-up locomotive.")
            return True

        options = second_draw_actions(self.state)
        token = self._ask(player, "Choose a second wagon card.", selectable=list(options))
        if token:
            second = options[token]
            drawn.append(self._describe_draw(second, self._take_card(player, second)))
        self.state.log(f"{player.name} draws {' and '.join(d for d in drawn if d)}.")
        return True

    @staticmethod
    def _describe_draw(action, card):
        if card is None:
            return ""
        if action.card is None:
            return "a hidden card"
        return f"a face-up {card.token}"

    # Destinations

    def _draw_destinations(self, player, action):
        drawn = self.state.destination_pool.draw_for_action(DESTINATIONS_PER_DRAW)
        self.choose_destinations(player, drawn, DESTINATIONS_KEEP_MIN)
        return True

    def choose_destinations(self, player, offered, keep_min):
        """Let ``player`` discard destinations one by one while more than ``keep_min`` remain."""
        kept = list(offered)
        declined = []
        while len(kept) > keep_min:
            choice = self._ask(
                player,
                f"Choose a destination to discard, or pass to keep the rest (keep at least {keep_min}).",
                buttons=[d.name for d in kept],
                can_pass=True,
            )
            if choice == "":
                break
            destination = next(d for d in kept if d.name == choice)
            kept.remove(destination)
            declined.append(destination)

        player.destinations.extend(kept)
        self.state.destination_pool.return_declined([d for d in declined if not d.long])
        self.state.log(f"{player.name} keeps {len(kept)} destination(s).")
        return kept

    # Payments

    def _stage_payment(self, player, total, instruction, route_color=None, locomotives_min=0):
        while player.staged_count() < total:
            options = stageable_cards(player.hand, player.staged, total, route_color, locomotives_min)
            choice = self._ask(player, instruction, buttons=[c.token for c in options], can_pass=True)
            if choice == "":
                return False
            player.stage(CardColor[choice])
        return True

    def _build_station(self, player, action):
        city = action.city
        cost = station_cost(player)
        instruction = f"Choose a card to pay for a station in {city.name} ({cost} card(s) of one color)."
        if not self._stage_payment(player, cost, instruction):
            return self._decline(player, f"{player.name} cancels the station in {city.name}.")

        city.build_station(player)
        player.stations.append(city)
        player.remaining_stations -= 1
        self._discard_staged(player)
        player.score += STATION_POINTS
        self.state.log(f"{player.name} builds a station in {city.name}.")
        return True

    def _capture_route(self, player, action):
        route = action.route
        instruction = f"Choose a card to pay for {route.name} ({route.length} card(s))."
        if not self._stage_payment(player, route.length, instruction, route.color, route.locomotives):
            return self._decline(player, f"{player.name} gives up capturing {route.name}.")
        if route.is_tunnel and not self._pay_tunnel_surcharge(player, route):
            return False

        self._discard_staged(player)
        route.claim(player)
        player.routes.append(route)
        player.remaining_wagons -= route.length
        player.score += ROUTE_POINTS[route.length]
        self.state.log(f"{player.name} captures {route.name}.")
        return True

    def _pay_tunnel_surcharge(self, player, route):
        deck = self.state.deck
        revealed = []
        for _ in range(TUNNEL_REVEAL):
            card = deck.draw()
            if card is None:
                break
            revealed.append(card)
        # Discarded only after the reveal so a reshuffle cannot draw them twice.
        for card in revealed:
            deck.discard(card)

        match = CardColor.LOCOMOTIVE if route.is_gray else route.color
        extra = revealed.count(match)
        shown = ", ".join(c.token for c in revealed) or "nothing"
        self.state.log(f"Tunnel {route.name} reveals {shown}: {extra} extra card(s).")
        if extra == 0:
            return True

        total = route.length + extra
        if not can_complete(player.hand, player.staged, total, route.color, route.locomotives):
            return self._decline(player, f"{player.name} cannot pay the tunnel surcharge on {route.name}.")
        instruction = f"Tunnel {route.name}: choose {extra} more card(s), or pass to give up."
        if not self._stage_payment(player, total, instruction, route.color, route.locomotives):
            return self._decline(player, f"{player.name} gives up the tunnel {route.name}.")
        return True
