# levelgen/entities/monsters.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Final, Tuple

import structlog

from game_rng import GameRNG
from levelgen.constants import (
    BLANK_GLYPH,
    COLOR_DANGER,
    COLOR_DEFAULT_BG,
    CellKind,
    Color,
)
from levelgen.world.cells import Empty

log = structlog.get_logger()


@dataclass(frozen=True)
class MonsterType:
    """Static data shared by every monster of one kind."""

    type_id: int
    name: str
    glyph: str
    level: int
    armor_class: int
    damage: int
    hp: int
    experience: int


def _table(*rows: Tuple[str, str, int, int, int, int, int]) -> Tuple[MonsterType, ...]:
    return tuple(
        MonsterType(type_id, name, glyph, level, ac, damage, hp, exp)
        for type_id, (name, glyph, level, ac, damage, hp, exp) in enumerate(rows, start=1)
    )


# name, glyph, level, armor class, damage, hit points, experience
MONSTER_TYPES: Final[Tuple[MonsterType, ...]] = _table(
    ("bat", "B", 1, 0, 1, 1, 1),
    ("gnome", "G", 1, 10, 1, 2, 2),
    ("hobgoblin", "H", 1, 14, 2, 3, 2),
    ("jackal", "J", 1, 17, 1, 1, 1),
    ("kobold", "K", 1, 20, 1, 1, 1),
    ("orc", "O", 2, 12, 1, 4, 2),
    ("snake", "S", 2, 15, 1, 3, 1),
    ("giant centipede", "c", 2, 14, 0, 1, 2),
    ("jaculi", "j", 2, 20, 1, 2, 1),
    ("troglodyte", "t", 2, 10, 2, 4, 3),
    ("giant ant", "A", 2, 8, 1, 5, 5),
    ("floating eye", "E", 3, 8, 1, 5, 2),
    ("leprechaun", "L", 3, 3, 0, 13, 45),
    ("nymph", "N", 3, 3, 0, 18, 45),
    ("quasit", "Q", 3, 5, 3, 10, 15),
    ("rust monster", "R", 3, 4, 0, 18, 25),
    ("zombie", "Z", 3, 12, 2, 6, 7),
    ("assassin bug", "a", 4, 9, 3, 20, 15),
    ("bugbear", "b", 4, 5, 4, 20, 35),
    ("hell hound", "h", 4, 5, 2, 16, 35),
    ("ice lizard", "i", 4, 11, 2, 16, 25),
    ("centaur", "C", 4, 6, 4, 24, 45),
    ("troll", "T", 5, 4, 5, 50, 300),
    ("yeti", "Y", 5, 6, 4, 35, 100),
    ("white dragon", "d", 5, 2, 4, 55, 1000),
    ("elf", "e", 5, 8, 1, 22, 35),
    ("gelatinous cube", "g", 5, 9, 1, 22, 45),
    ("metamorph", "m", 6, 7, 3, 30, 40),
    ("vortex", "v", 6, 4, 3, 30, 55),
    ("ziller", "z", 6, 15, 3, 30, 35),
    ("violet fungi", "F", 6, 12, 3, 38, 100),
    ("wraith", "W", 6, 3, 1, 30, 325),
    ("forvalaka", "f", 6, 2, 5, 50, 280),
    ("lama nobe", "l", 7, 7, 3, 35, 80),
    ("osequip", "o", 7, 4, 4, 35, 100),
    ("rothe", "r", 7, 15, 5, 50, 250),
    ("xorn", "X", 7, 0, 6, 60, 300),
    ("vampire", "V", 7, 3, 4, 50, 1000),
    ("invisible stalker", "I", 7, 3, 6, 50, 350),
    ("poltergeist", "p", 8, 1, 8, 50, 450),
    ("disenchantress", "q", 8, 3, 1, 50, 500),
    ("shambling mound", "s", 8, 2, 5, 45, 400),
    ("yellow mold", "y", 8, 12, 4, 35, 250),
    ("umber hulk", "U", 8, 3, 7, 65, 600),
    ("gnome king", "k", 9, -1, 10, 100, 3000),
    ("mimic", "M", 9, 5, 6, 55, 99),
    ("water lord", "w", 9, -10, 15, 150, 15000),
    ("bronze dragon", "D", 9, 2, 9, 80, 4000),
    ("green dragon", "D", 9, 3, 8, 70, 2500),
    ("purple worm", "P", 9, -1, 11, 120, 15000),
    ("xvart", "x", 9, -2, 12, 90, 1000),
    ("spirit naga", "n", 10, -20, 12, 95, 20000),
    ("silver dragon", "D", 10, -1, 12, 100, 10000),
    ("platinum dragon", "D", 10, -5, 15, 130, 24000),
    ("green urchin", "u", 10, -3, 12, 85, 5000),
    ("red dragon", "D", 10, -2, 13, 110, 14000),
)

MONSTERS_BY_NAME: Final[dict[str, MonsterType]] = {m.name: m for m in MONSTER_TYPES}

# Highest type id that can appear on each (clamped) level 1..12.
LEVEL_THRESHOLDS: Final[Tuple[int, ...]] = (5, 11, 17, 22, 27, 33, 39, 42, 46, 50, 53, 56)

# Only ever summoned by special events, never by random spawning.
WATER_LORD: Final[MonsterType] = MONSTERS_BY_NAME["water lord"]


def monster_type(type_id: int) -> MonsterType:
    if not 1 <= type_id <= len(MONSTER_TYPES):
        raise ValueError(f"Unknown monster type id {type_id}")
    return MONSTER_TYPES[type_id - 1]


def monster_for_level(level: int, rng: GameRNG) -> MonsterType:
    """Draw a monster type suited to ``level``.

    Shallow levels (below 5) draw from every type up to the level's threshold.
    Deeper levels draw from a sliding window of the three most recent
    threshold bands, so early monsters stop appearing.
    """
    lev = min(max(level, 1), len(LEVEL_THRESHOLDS))
    while True:
        if lev < 5:
            type_id = 1 + rng.below(LEVEL_THRESHOLDS[lev - 1])
        else:
            low = LEVEL_THRESHOLDS[lev - 4]
            type_id = low + 1 + rng.below(LEVEL_THRESHOLDS[lev - 1] - low)
        if type_id != WATER_LORD.type_id:
            return monster_type(type_id)


@dataclass
class Monster:
    """A spawned creature as it sits in a map cell.

    ``entity_id`` is the handle into :class:`MonsterRegistry`; the registry
    and the map hold this very object, never a copy.
    """

    entity_id: int
    type: MonsterType
    visible: bool = False
    displaced: Any = field(default_factory=Empty)

    kind: ClassVar[CellKind] = CellKind.MONSTER
    walkable: ClassVar[bool] = False

    @property
    def name(self) -> str:
        return self.type.name

    @property
    def symbol(self) -> str:
        return self.type.glyph

    @property
    def glyph(self) -> str:
        return self.symbol if self.visible else BLANK_GLYPH

    @property
    def fg(self) -> Color:
        return COLOR_DANGER

    @property
    def bg(self) -> Color:
        return COLOR_DEFAULT_BG


__all__ = [
    "MonsterType",
    "MONSTER_TYPES",
    "MONSTERS_BY_NAME",
    "LEVEL_THRESHOLDS",
    "WATER_LORD",
    "monster_type",
    "monster_for_level",
    "Monster",
]
