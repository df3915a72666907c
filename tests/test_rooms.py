import pytest

from game_rng import GameRNG
from levelgen.world.cells import Door, Empty, Wall
from levelgen.world.game_map import GameMap
from levelgen.world.rooms import Rect, build_treasure_room, treasure_rooms


def test_perimeter_is_deduplicated_row_major():
    room = Rect(2, 3, 5, 4)
    perimeter = room.perimeter()
    assert len(perimeter) == 2 * 5 + 2 * 4 - 4
    assert len(set(perimeter)) == len(perimeter)
    assert perimeter == sorted(perimeter, key=lambda p: (p.y, p.x))


@pytest.mark.parametrize("seed", range(10))
def test_room_has_one_closed_door_on_perimeter(seed):
    game_map = GameMap(20, 15)
    room = build_treasure_room(6, 5, (2, 3), 7, game_map, GameRNG(seed=seed))

    doors = [(pos, cell) for pos, cell in game_map.iter_cells() if isinstance(cell, Door)]
    assert len(doors) == 1
    pos, door = doors[0]
    assert room.on_perimeter(pos)
    assert door.code == 7
    assert not door.open

    for p in room.perimeter():
        if p != pos:
            assert isinstance(game_map[p], Wall)
    assert all(isinstance(game_map[p], Empty) for p in room.interior())


def test_room_too_small_raises():
    with pytest.raises(ValueError):
        build_treasure_room(2, 5, (1, 1), 1, GameMap(20, 15), GameRNG(seed=1))


@pytest.mark.parametrize("seed", range(40))
def test_treasure_rooms_fit_the_map(seed):
    game_map = GameMap()
    for room in treasure_rooms(game_map, GameRNG(seed=seed)):
        assert 4 <= room.width <= 9
        assert 4 <= room.height <= 9
        assert game_map.in_bounds(room.x, room.y)
        assert game_map.in_bounds(room.x2, room.y2)
        assert 1 <= game_map[_door_of(game_map, room)].code <= 9


def _door_of(game_map, room):
    return next(p for p in room.perimeter() if isinstance(game_map[p], Door))
