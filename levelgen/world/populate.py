# levelgen/world/populate.py
"""Stocks a carved level with its stairs, features, treasure and equipment.

The order of the placement calls below is part of the level format: a seed
reproduces a level only while every roll happens in the same sequence.
"""

from typing import Callable, Final, Tuple

import structlog

from game_rng import GameRNG
from levelgen.constants import (
    FIRST_DUNGEON_LEVEL,
    FIRST_VOLCANO_LEVEL,
    HOME_LEVEL,
    MAX_DUNGEON,
    CellKind,
    LevelCategory,
    SpecialLevel,
    is_bottom_level,
)
from levelgen.items.objects import (
    Altar,
    Armor,
    ArmorType,
    Belt,
    Book,
    Chest,
    Fountain,
    Gem,
    GemStone,
    GoldPile,
    Pit,
    Ring,
    RingType,
    Shield,
    Special,
    SpecialType,
    Statue,
    Trap,
    TrapType,
    Weapon,
    WeaponType,
    new_potion,
    new_scroll,
)
from levelgen.world.cells import Entrance, StairDirection, Stairs
from levelgen.world.game_map import GameMap
from levelgen.world.placement import Placer

log = structlog.get_logger()

# glyph, target level, label
HOME_ENTRANCES: Final[Tuple[Tuple[str, int, str], ...]] = (
    ("E", FIRST_DUNGEON_LEVEL, "the dungeon entrance"),
    ("H", SpecialLevel.HOUSE, "your home"),
    ("C", SpecialLevel.COLLEGE, "the College of Larn"),
    ("B", SpecialLevel.BANK, "the 1st National Bank of Larn"),
    ("V", FIRST_VOLCANO_LEVEL, "the volcanic shaft"),
    ("D", SpecialLevel.DND_STORE, "the DND store"),
    ("T", SpecialLevel.TRADING_POST, "the Larn trading post"),
    ("L", SpecialLevel.REVENUE_OFFICE, "the Larn Revenue Service"),
)

# stone, value multiplier per level, value floor
GEM_TABLE: Final[Tuple[Tuple[GemStone, int, int], ...]] = (
    (GemStone.DIAMOND, 10, 10),
    (GemStone.RUBY, 6, 6),
    (GemStone.EMERALD, 4, 4),
    (GemStone.SAPPHIRE, 3, 2),
)

FEATURE_FACTORIES: Final[Tuple[Callable[[], object], ...]] = (
    Altar,
    Statue,
    Pit,
    Fountain,
    lambda: Trap(TrapType.ARROW),
)

SPECIAL_ODDS: Final[Tuple[Tuple[SpecialType, int], ...]] = (
    (SpecialType.ORB, 3),
    (SpecialType.SCARAB, 4),
    (SpecialType.CUBE, 4),
    (SpecialType.DEVICE, 3),
    (SpecialType.AMULET, 3),
)


def populate(
    level: int,
    category: LevelCategory,
    game_map: GameMap,
    placer: Placer,
    rng: GameRNG,
) -> None:
    """Place everything that belongs on ``level`` except monsters.

    ``category`` may also be given by value, e.g. ``"dungeon"``.
    """
    try:
        category = LevelCategory(category)
    except ValueError:
        log.error("Unknown level category", level=level, category=category)
        raise ValueError(f"Unknown level category: {category!r}") from None

    before = _occupied(game_map)
    match category:
        case LevelCategory.HOME:
            _place_entrances(placer)
        case LevelCategory.DUNGEON | LevelCategory.VOLCANO:
            _place_stairs(level, category, placer)
            _place_features(level, placer, rng)
            _place_treasure(level, placer, rng)
            _place_equipment(level, placer, rng)
            _place_specials(placer)

    placed = _occupied(game_map) - before
    log.info("Level populated", level=level, category=category.value, objects=placed)


def _occupied(game_map: GameMap) -> int:
    return sum(
        game_map.count(kind)
        for kind in (CellKind.STAIRS, CellKind.ENTRANCE, CellKind.ITEM)
    )


def _place_entrances(placer: Placer) -> None:
    for glyph, target, label in HOME_ENTRANCES:
        placer.place(None, Entrance(glyph, int(target), label))


def _place_stairs(level: int, category: LevelCategory, placer: Placer) -> None:
    if level != FIRST_DUNGEON_LEVEL:
        up_target = level - 1
        if category is LevelCategory.VOLCANO and level == FIRST_VOLCANO_LEVEL:
            up_target = HOME_LEVEL
        placer.place(None, Stairs(StairDirection.UP, up_target))
    if not is_bottom_level(level):
        placer.place(None, Stairs(StairDirection.DOWN, level + 1))


def _place_features(level: int, placer: Placer, rng: GameRNG) -> None:
    placer.place_many(rng.below(3), lambda: Book(level))
    for factory in FEATURE_FACTORIES:
        placer.place_many(rng.below(3), factory)
    # At most one of each; a roll of 0 places nothing.
    placer.place_many(rng.below(3) - 1, lambda: Trap(TrapType.TELEPORT))
    placer.place_many(rng.below(3) - 1, lambda: Trap(TrapType.DART))

    if level == FIRST_DUNGEON_LEVEL:
        placer.place(None, Chest(level))
    else:
        placer.place_many(rng.below(2), lambda: Chest(level))

    if not is_bottom_level(level):
        placer.place_many(rng.below(2), lambda: Trap(TrapType.DOOR))


def _place_treasure(level: int, placer: Placer, rng: GameRNG) -> None:
    if level <= MAX_DUNGEON:
        for stone, per_level, floor in GEM_TABLE:
            placer.place_many(
                rng.below(2),
                lambda stone=stone, per_level=per_level, floor=floor: Gem(
                    stone, rng.below(per_level * level + 1) + floor
                ),
            )

    placer.place_many(rng.below(4) + 4, lambda: new_potion(rng))
    placer.place_many(rng.below(5) + 4, lambda: new_scroll(rng))
    placer.place_many(
        rng.below(12) + 12,
        lambda: GoldPile(12 * rng.below(level + 1) + (level << 3) + 10),
    )


def _place_equipment(level: int, placer: Placer, rng: GameRNG) -> None:
    # Attribute rolls happen whether or not the item is placed.
    placer.place_rare(2, Armor(ArmorType.RING_MAIL))
    placer.place_rare(1, Armor(ArmorType.STUDDED_LEATHER))
    placer.place_rare(3, Armor(ArmorType.SPLINT_MAIL))
    placer.place_rare(5, Shield(rng.below(3)))

    placer.place_rare(2, Weapon(WeaponType.BATTLE_AXE, rng.below(3)))
    placer.place_rare(5, Weapon(WeaponType.LONG_SWORD, rng.below(3)))
    placer.place_rare(5, Weapon(WeaponType.FLAIL, rng.below(3)))
    placer.place_rare(7, Weapon(WeaponType.SPEAR, rng.below(5)))
    placer.place_rare(2, Weapon(WeaponType.SWORD_OF_SLASHING))
    if level == FIRST_DUNGEON_LEVEL:
        placer.place_rare(4, Weapon(WeaponType.BESSMANS_HAMMER))

    if rng.below(4) == 3 and level > 3:
        placer.place_rare(3, Weapon(WeaponType.SUN_SWORD, 3))
        placer.place_rare(5, Weapon(WeaponType.TWO_HANDED_SWORD, rng.below(3) + 1))
        placer.place_rare(3, Belt(4))
        placer.place_rare(3, Ring(RingType.ENERGY, 3))
        placer.place_rare(4, Armor(ArmorType.PLATE_MAIL, 5))

    placer.place_rare(4, Ring(RingType.REGENERATION, rng.below(3)))
    placer.place_rare(1, Ring(RingType.PROTECTION, rng.below(3)))
    placer.place_rare(2, Ring(RingType.STRENGTH, 4))


def _place_specials(placer: Placer) -> None:
    for special, numerator in SPECIAL_ODDS:
        placer.place_rare(numerator, Special(special))


__all__ = ["HOME_ENTRANCES", "populate"]
