# levelgen/world/maze.py
"""Maze carving for dungeon and volcano levels.

Two strategies turn a map full of walls into passages:

``eat``
    The classic walk that "eats" two cells at a time from (1, 1).  It leaves a
    sparse tree of corridors and does not reach every wall pocket; that is the
    expected look of these levels.
``prim``
    Randomized frontier growth.  Slower to read but every floor cell ends up
    connected.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List

import structlog

from game_rng import GameRNG
from levelgen.constants import CARVE_ORDER, Direction
from levelgen.entities.components import Coordinate
from levelgen.world.cells import Empty
from levelgen.world.game_map import GameMap

log = structlog.get_logger()

EAT_ORIGIN = Coordinate(1, 1)
# Each position tries every direction twice before giving up.
EAT_ATTEMPTS = 2 * len(CARVE_ORDER)


@dataclass
class _EatFrame:
    pos: Coordinate
    cursor: int
    remaining: int = EAT_ATTEMPTS


def _can_eat(game_map: GameMap, pos: Coordinate, direction: Direction) -> bool:
    """Both cells ahead must be wall and the move must stay 2 cells inside."""
    if direction is Direction.W and pos.x <= 2:
        return False
    if direction is Direction.E and pos.x >= game_map.width - 3:
        return False
    if direction is Direction.N and pos.y <= 2:
        return False
    if direction is Direction.S and pos.y >= game_map.height - 3:
        return False
    return game_map.is_wall(pos.step(direction)) and game_map.is_wall(
        pos.step(direction, 2)
    )


def eat_maze(game_map: GameMap, rng: GameRNG, origin: Coordinate = EAT_ORIGIN) -> int:
    """Carve corridors by eating through walls. Returns the number of cells opened.

    Runs on an explicit stack of frames instead of recursion; each frame
    resumes its direction cycle once the branch it spawned is exhausted.
    """
    game_map[origin] = Empty()
    opened = 1
    stack: List[_EatFrame] = [_EatFrame(origin, rng.below(len(CARVE_ORDER)))]
    while stack:
        frame = stack[-1]
        if frame.remaining == 0:
            stack.pop()
            continue

        direction = CARVE_ORDER[frame.cursor]
        frame.cursor = (frame.cursor + 1) % len(CARVE_ORDER)
        frame.remaining -= 1

        if not _can_eat(game_map, frame.pos, direction):
            continue

        game_map[frame.pos.step(direction)] = Empty()
        ahead = frame.pos.step(direction, 2)
        game_map[ahead] = Empty()
        opened += 2
        stack.append(_EatFrame(ahead, rng.below(len(CARVE_ORDER))))

    return opened


def _interior_neighbours(game_map: GameMap, pos: Coordinate) -> List[Coordinate]:
    """Orthogonal neighbours that are not on the outer ring."""
    out = []
    for direction in (Direction.E, Direction.W, Direction.S, Direction.N):
        n = pos.step(direction)
        if game_map.is_interior(n.x, n.y):
            out.append(n)
    return out


def prim_maze(game_map: GameMap, rng: GameRNG) -> int:
    """Randomized frontier growth. Every opened cell touches exactly one
    earlier one, so the floor forms a single connected tree."""
    start = Coordinate(
        rng.get_int(1, game_map.width - 2), rng.get_int(1, game_map.height - 2)
    )
    frontier = [start]
    opened = 0
    while frontier:
        i = rng.below(len(frontier))
        wall = frontier.pop(i)
        if not game_map.is_wall(wall):
            continue
        neighbours = _interior_neighbours(game_map, wall)
        if sum(1 for n in neighbours if game_map.is_empty(n)) > 1:
            continue
        game_map[wall] = Empty()
        opened += 1
        frontier.extend(n for n in neighbours if game_map.is_wall(n))
    return opened


CARVE_STRATEGIES: Dict[str, Callable[[GameMap, GameRNG], int]] = {
    "eat": eat_maze,
    "prim": prim_maze,
}


def carve_maze(game_map: GameMap, rng: GameRNG, strategy: str = "eat") -> GameMap:
    """Carve passages into ``game_map`` (pre-filled with walls) in place."""
    carver = CARVE_STRATEGIES.get(strategy)
    if carver is None:
        log.error("Unknown carve strategy", strategy=strategy, known=list(CARVE_STRATEGIES))
        raise ValueError(f"Unknown carve strategy: '{strategy}'")

    opened = carver(game_map, rng)
    log.info(
        "Maze carved",
        strategy=strategy,
        opened=opened,
        width=game_map.width,
        height=game_map.height,
    )
    return game_map


__all__ = ["CARVE_STRATEGIES", "carve_maze", "eat_maze", "prim_maze"]
