from collections import deque

import numpy as np
import pytest

from game_rng import GameRNG
from levelgen.constants import CellKind
from levelgen.world.game_map import GameMap
from levelgen.world.maze import carve_maze, eat_maze


def _floor_is_connected(game_map: GameMap) -> bool:
    floor = set(game_map.positions_of(CellKind.EMPTY))
    if not floor:
        return False
    start = next(iter(floor))
    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
            if (nx, ny) in floor and (nx, ny) not in seen:
                seen.add((nx, ny))
                queue.append((nx, ny))
    return len(seen) == len(floor)


def _border_is_wall(kinds: np.ndarray) -> bool:
    return bool(
        np.all(kinds[0, :] == CellKind.WALL)
        and np.all(kinds[-1, :] == CellKind.WALL)
        and np.all(kinds[:, 0] == CellKind.WALL)
        and np.all(kinds[:, -1] == CellKind.WALL)
    )


@pytest.mark.parametrize("seed", [1, 2, 3, 99])
def test_eat_opens_origin_and_keeps_border(seed):
    game_map = GameMap()
    carve_maze(game_map, GameRNG(seed=seed))
    assert game_map.is_empty((1, 1))
    assert _border_is_wall(game_map.kinds())


def test_eat_reports_opened_cells():
    game_map = GameMap()
    opened = eat_maze(game_map, GameRNG(seed=4))
    assert opened == game_map.count(CellKind.EMPTY)
    assert opened > 1


def test_eat_floor_is_a_single_tree():
    game_map = GameMap()
    carve_maze(game_map, GameRNG(seed=21), "eat")
    assert _floor_is_connected(game_map)


def test_eat_is_deterministic_for_a_seed():
    first = carve_maze(GameMap(), GameRNG(seed=1234)).kinds()
    second = carve_maze(GameMap(), GameRNG(seed=1234)).kinds()
    assert np.array_equal(first, second)


@pytest.mark.parametrize("seed", [5, 6, 7])
def test_prim_floor_is_connected(seed):
    game_map = GameMap()
    carve_maze(game_map, GameRNG(seed=seed), "prim")
    assert _floor_is_connected(game_map)
    assert _border_is_wall(game_map.kinds())


def test_unknown_strategy_raises():
    with pytest.raises(ValueError):
        carve_maze(GameMap(), GameRNG(seed=1), "drunkard")
