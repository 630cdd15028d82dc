from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, NamedTuple, Optional, Tuple


class Move(IntEnum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


MOVE_KEYS = {"N": Move.NORTH, "E": Move.EAST, "S": Move.SOUTH, "W": Move.WEST}


class Wall(NamedTuple):
    # wall between the cells (x1, y1) and (x2, y2)
    x1: int
    y1: int
    x2: int
    y2: int


@dataclass
class Arena:
    size_x: int
    size_y: int
    walls: List[Wall] = field(default_factory=list)

    @property
    def nb_walls(self) -> int:
        return len(self.walls)


def _ints(text: str) -> Optional[List[int]]:
    try:
        return [int(tok) for tok in text.split()]
    except ValueError:
        return None


def parse_sizes(data: str) -> Optional[Tuple[int, int, int]]:
    # "sizeX sizeY nbWalls"
    values = _ints(data)
    if values is None or len(values) < 3:
        return None
    size_x, size_y, nb_walls = values[:3]
    if size_x <= 0 or size_y <= 0 or nb_walls < 0:
        return None
    return size_x, size_y, nb_walls


def parse_walls(data: str, nb_walls: int) -> Optional[List[Wall]]:
    # nb_walls groups of 4 integers, extra values are ignored
    values = _ints(data)
    if values is None or len(values) < 4 * nb_walls:
        return None
    return [Wall(*values[4 * i:4 * i + 4]) for i in range(nb_walls)]


def parse_move(text: str) -> Optional[Move]:
    try:
        return Move(int(text.strip()))
    except ValueError:
        return None


def move_from_key(text: str) -> Optional[Move]:
    t = text.strip().upper()
    if not t:
        return None
    return MOVE_KEYS.get(t[0])
