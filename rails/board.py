import csv
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import networkx as nx

from rails.constants import CardColor, RouteKind, MIN_ROUTE_LENGTH, MAX_ROUTE_LENGTH
from rails.errors import GameInvariantError

DATA_DIR = Path(__file__).parent / 'data'


@dataclass(eq=False)
class City:
    name: str
    owner: Optional[object] = None

    def build_station(self, player):
        if self.owner is not None:
            raise GameInvariantError(f"{self.name} already hosts a station")
        self.owner = player

    def __str__(self):
        return self.name


@dataclass(eq=False)
class Route:
    name: str
    city_a: str
    city_b: str
    length: int
    color: CardColor = CardColor.GRAY
    kind: RouteKind = RouteKind.NORMAL
    locomotives: int = 0
    owner: Optional[object] = field(default=None, repr=False)

    @property
    def is_tunnel(self):
        return self.kind is RouteKind.TUNNEL

    @property
    def is_gray(self):
        return self.color is CardColor.GRAY

    def claim(self, player):
        if self.owner is not None:
            raise GameInvariantError(f"{self.name} is already owned")
        self.owner = player

    def __str__(self):
        return self.name


class Board:
    def __init__(self, routes):
        self.graph = nx.MultiGraph()
        self._cities = {}
        self._routes = {}
        for route in routes:
            if not MIN_ROUTE_LENGTH <= route.length <= MAX_ROUTE_LENGTH:
                raise ValueError(f"{route.name}: length {route.length} out of range")
            if route.locomotives > route.length:
                raise ValueError(f"{route.name}: needs more locomotives than its length")
            if route.name in self._routes:
                raise ValueError(f"duplicate route name {route.name}")
            for name in (route.city_a, route.city_b):
                if name not in self._cities:
                    self._cities[name] = City(name)
                    self.graph.add_node(name, city=self._cities[name])
            self._routes[route.name] = route
            self.graph.add_edge(route.city_a, route.city_b, key=route.name, route=route)

    @property
    def cities(self):
        return list(self._cities.values())

    @property
    def routes(self):
        return list(self._routes.values())

    def city(self, name):
        return self._cities[name]

    def route(self, name):
        return self._routes[name]

    def unowned_cities(self):
        return [c for c in self._cities.values() if c.owner is None]

    def unowned_routes(self):
        return [r for r in self._routes.values() if r.owner is None]

    def routes_at(self, city_name):
        return [data['route'] for _, _, data in self.graph.edges(city_name, data=True)]


def _route_kind(tunnel, locomotives):
    if tunnel.strip().lower() == 'true':
        return RouteKind.TUNNEL
    if locomotives > 0:
        return RouteKind.FERRY
    return RouteKind.NORMAL


def load_routes(data_path=None):
    data_path = Path(data_path) if data_path else DATA_DIR / 'routes.csv'
    routes = []
    seen = {}
    with open(data_path, 'r', newline='') as f:
        reader = csv.DictReader(f)
        for row in reader:
            city1, city2 = row['Source'], row['Target']
            locomotives = int(row['Locomotives'])
            pair = tuple(sorted([city1, city2]))
            seen[pair] = seen.get(pair, 0) + 1
            name = f"{city1} - {city2}"
            if seen[pair] > 1:
                name = f"{name} ({seen[pair]})"
            routes.append(Route(
                name=name,
                city_a=city1,
                city_b=city2,
                length=int(row['Length']),
                color=CardColor(row['Color']),
                kind=_route_kind(row['Tunnel'], locomotives),
                locomotives=locomotives,
            ))
    return routes


def load_board(data_path=None):
    return Board(load_routes(data_path))


if __name__ == "__main__":
    board = load_board()
    print(f"{len(board.cities)} cities, {len(board.routes)} routes")
