from enum import Enum, IntEnum
from typing import Final

# Classic Larn playfield
MAP_WIDTH: Final[int] = 67
MAP_HEIGHT: Final[int] = 17

# Smallest playfield whose carved maze always has room for a fully stocked
# level: the eat walk opens at least 2 * 20 * 6 - 1 = 239 floor cells here.
MIN_MAP_WIDTH: Final[int] = 41
MIN_MAP_HEIGHT: Final[int] = 13

HOME_LEVEL: Final[int] = 0
FIRST_DUNGEON_LEVEL: Final[int] = 1
MAX_DUNGEON: Final[int] = 10
FIRST_VOLCANO_LEVEL: Final[int] = MAX_DUNGEON + 1
MAX_VOLCANO: Final[int] = 13

# Fixed denominator for rare placement; a numerator p gives p/151 per level.
RARE_MODULUS: Final[int] = 151

# Display colours (RGB)
Color = tuple[int, int, int]
COLOR_DEFAULT_FG: Final[Color] = (192, 192, 192)
COLOR_DEFAULT_BG: Final[Color] = (0, 0, 0)
COLOR_WALL_FG: Final[Color] = (150, 150, 170)
COLOR_GOLD: Final[Color] = (255, 215, 0)
COLOR_MAGIC: Final[Color] = (160, 120, 255)
COLOR_DANGER: Final[Color] = (220, 60, 60)
COLOR_WATER: Final[Color] = (80, 140, 255)
COLOR_PORTAL: Final[Color] = (90, 220, 120)

BLANK_GLYPH: Final[str] = " "


class LevelCategory(str, Enum):
    """Population policy branch a level belongs to."""

    HOME = "home"
    DUNGEON = "dungeon"
    VOLCANO = "volcano"


class SpecialLevel(IntEnum):
    """Target numbers of the buildings reachable from the home level."""

    HOUSE = 14
    COLLEGE = 15
    BANK = 16
    DND_STORE = 17
    TRADING_POST = 18
    REVENUE_OFFICE = 19


class CellKind(IntEnum):
    """Tag stored in the kind layer of a level map."""

    WALL = 0
    EMPTY = 1
    DOOR = 2
    STAIRS = 3
    ENTRANCE = 4
    ITEM = 5
    MONSTER = 6


class Direction(Enum):
    """Movement directions; north is towards row 0."""

    N = (0, -1)
    S = (0, 1)
    E = (1, 0)
    W = (-1, 0)
    NE = (1, -1)
    NW = (-1, -1)
    SE = (1, 1)
    SW = (-1, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


# Cyclic order the maze carver walks through when a direction fails.
CARVE_ORDER: Final[tuple[Direction, ...]] = (
    Direction.W,
    Direction.E,
    Direction.N,
    Direction.S,
)


def category_for_level(level: int) -> LevelCategory:
    """Map a level number to its population category."""
    if level == HOME_LEVEL:
        return LevelCategory.HOME
    if FIRST_DUNGEON_LEVEL <= level <= MAX_DUNGEON:
        return LevelCategory.DUNGEON
    if FIRST_VOLCANO_LEVEL <= level <= MAX_VOLCANO:
        return LevelCategory.VOLCANO
    raise ValueError(f"Level {level} is outside 0..{MAX_VOLCANO}")


def is_bottom_level(level: int) -> bool:
    """True for the last dungeon and last volcano level (no stairs down)."""
    return level in (MAX_DUNGEON, MAX_VOLCANO)


__all__ = [
    "MAP_WIDTH",
    "MAP_HEIGHT",
    "MIN_MAP_WIDTH",
    "MIN_MAP_HEIGHT",
    "HOME_LEVEL",
    "FIRST_DUNGEON_LEVEL",
    "MAX_DUNGEON",
    "FIRST_VOLCANO_LEVEL",
    "MAX_VOLCANO",
    "RARE_MODULUS",
    "LevelCategory",
    "SpecialLevel",
    "CellKind",
    "Direction",
    "CARVE_ORDER",
    "category_for_level",
    "is_bottom_level",
]
