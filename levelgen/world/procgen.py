# levelgen/world/procgen.py
from dataclasses import dataclass, field
from typing import List, Optional

import structlog

from game_rng import GameRNG
from levelgen.config import GenerationConfig, check_dimensions
from levelgen.constants import (
    FIRST_DUNGEON_LEVEL,
    HOME_LEVEL,
    MAX_VOLCANO,
    LevelCategory,
    category_for_level,
)
from levelgen.entities.monsters import Monster
from levelgen.entities.registry import MonsterRegistry
from levelgen.entities.spawner import spawn
from levelgen.world.cells import Empty, Wall
from levelgen.world.game_map import GameMap
from levelgen.world.maze import carve_maze
from levelgen.world.placement import Placer
from levelgen.world.populate import populate
from levelgen.world.rooms import treasure_rooms

log = structlog.get_logger()


@dataclass
class GeneratedLevel:
    """A finished level and the monsters spawned on it."""

    level: int
    category: LevelCategory
    seed: int
    game_map: GameMap
    monsters: List[Monster] = field(default_factory=list)


def new_level_map(level: int, width: int, height: int, reveal: bool = False) -> GameMap:
    """Base grid: open visible floor for home, otherwise solid wall."""
    if level == HOME_LEVEL:
        return GameMap(width, height, fill=lambda: Empty(visible=True))
    return GameMap(width, height, fill=lambda: Wall(visible=reveal))


def generate_level(
    level: int,
    config: Optional[GenerationConfig] = None,
    seed: Optional[int] = None,
    registry: Optional[MonsterRegistry] = None,
    category: Optional[LevelCategory] = None,
) -> GeneratedLevel:
    """Build and furnish one level.

    ``seed`` wins over ``config.seed``; with neither, a fresh seed is drawn and
    logged so the level can be reproduced.  All randomness comes from the one
    GameRNG created here.
    """
    config = config or GenerationConfig()
    if isinstance(level, bool) or not isinstance(level, int):
        log.error("Level must be an integer", level=level)
        raise TypeError(f"Level must be an integer, got {type(level).__name__}")
    if not HOME_LEVEL <= level <= MAX_VOLCANO:
        log.error("Level out of range", level=level, max_level=MAX_VOLCANO)
        raise ValueError(f"Level {level} is outside {HOME_LEVEL}..{MAX_VOLCANO}")
    check_dimensions(config.width, config.height)

    expected = category_for_level(level)
    if category is not None and category is not expected:
        log.error("Category does not match level", level=level, category=category)
        raise ValueError(f"Level {level} belongs to {expected.value}, not {category!r}")

    rng = GameRNG(seed=seed if seed is not None else config.seed)
    registry = registry if registry is not None else MonsterRegistry()
    log.info(
        "Starting level generation",
        level=level,
        category=expected.value,
        seed=rng.initial_seed,
        width=config.width,
        height=config.height,
        carver=config.carver,
    )

    game_map = new_level_map(level, config.width, config.height, config.reveal)
    if level != HOME_LEVEL:
        carve_maze(game_map, rng, config.carver)
    if level > FIRST_DUNGEON_LEVEL:
        treasure_rooms(game_map, rng, config.reveal)

    placer = Placer(game_map, rng, reveal=config.reveal)
    populate(level, expected, game_map, placer, rng)

    monsters: List[Monster] = []
    if level != HOME_LEVEL:
        monsters = spawn(level, game_map, placer, registry, rng, fresh=True)

    log.info(
        "Level generation complete",
        level=level,
        seed=rng.initial_seed,
        monsters=len(monsters),
    )
    return GeneratedLevel(level, expected, rng.initial_seed, game_map, monsters)


__all__ = ["GeneratedLevel", "generate_level", "new_level_map"]
