# levelgen/world/rooms.py
from typing import Iterator, List, NamedTuple, Tuple

import structlog

from game_rng import GameRNG
from levelgen.entities.components import Coordinate
from levelgen.world.cells import Door, Empty, Wall
from levelgen.world.game_map import GameMap

log = structlog.get_logger()

# --- Configuration ---
ROOM_MIN_SIZE = 4
ROOM_SIZE_SPREAD = 6  # sizes fall in [4, 9]
BAND_WIDTH = 10
ROOM_CHANCE = 13  # one band in thirteen gets a room
DOOR_CODES = 9


class Rect(NamedTuple):
    """A rectangle on the map, given by its upper-left corner and size."""

    x: int
    y: int
    width: int
    height: int

    @property
    def x2(self) -> int:
        return self.x + self.width - 1

    @property
    def y2(self) -> int:
        return self.y + self.height - 1

    def contains(self, pos: Tuple[int, int]) -> bool:
        x, y = pos
        return self.x <= x <= self.x2 and self.y <= y <= self.y2

    def on_perimeter(self, pos: Tuple[int, int]) -> bool:
        x, y = pos
        return self.contains(pos) and (
            x in (self.x, self.x2) or y in (self.y, self.y2)
        )

    def perimeter(self) -> List[Coordinate]:
        """Every border cell once, in row-major order (2w + 2h - 4 cells)."""
        return [
            Coordinate(x, y)
            for y in range(self.y, self.y2 + 1)
            for x in range(self.x, self.x2 + 1)
            if self.on_perimeter((x, y))
        ]

    def interior(self) -> Iterator[Coordinate]:
        for y in range(self.y + 1, self.y2):
            for x in range(self.x + 1, self.x2):
                yield Coordinate(x, y)


def build_treasure_room(
    width: int,
    height: int,
    origin: Tuple[int, int],
    door_glyph: int,
    game_map: GameMap,
    rng: GameRNG,
    reveal: bool = False,
) -> Rect:
    """Wall off a rectangle, hollow it out and cut one closed door.

    ``door_glyph`` is the room type; it is stored as the door's code.
    """
    if width < 3 or height < 3:
        log.error("Room too small", width=width, height=height)
        raise ValueError("A room needs at least a 3x3 footprint.")

    room = Rect(origin[0], origin[1], width, height)
    game_map.fill_rect(room.x, room.y, width, height, lambda: Wall(visible=reveal))
    for pos in room.interior():
        game_map[pos] = Empty()

    perimeter = room.perimeter()
    door_at = perimeter[rng.below(len(perimeter))]
    game_map[door_at] = Door(open=False, visible=reveal, code=door_glyph)

    log.debug(
        "Treasure room built",
        origin=tuple(origin),
        width=width,
        height=height,
        door=door_at,
        code=door_glyph,
    )
    return room


def treasure_rooms(game_map: GameMap, rng: GameRNG, reveal: bool = False) -> List[Rect]:
    """Sweep the map in vertical bands, occasionally dropping a room in one."""
    rooms: List[Rect] = []
    if game_map.height <= BAND_WIDTH:
        log.debug("Map too short for treasure rooms", height=game_map.height)
        return rooms
    x = 2 + rng.below(BAND_WIDTH)
    while x < game_map.width - BAND_WIDTH:
        if rng.below(ROOM_CHANCE) == 0:
            width = rng.below(ROOM_SIZE_SPREAD) + ROOM_MIN_SIZE
            height = rng.below(ROOM_SIZE_SPREAD) + ROOM_MIN_SIZE
            y = rng.below(game_map.height - 10) + 2
            code = rng.below(DOOR_CODES) + 1
            rooms.append(
                build_treasure_room(width, height, (x, y), code, game_map, rng, reveal)
            )
        x += BAND_WIDTH

    if rooms:
        log.info("Treasure rooms placed", count=len(rooms))
    return rooms


__all__ = ["Rect", "build_treasure_room", "treasure_rooms"]
