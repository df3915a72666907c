# levelgen/entities/spawner.py
from typing import List

import structlog

from game_rng import GameRNG
from levelgen.constants import CellKind
from levelgen.entities.monsters import Monster, monster_for_level
from levelgen.entities.registry import MonsterRegistry
from levelgen.world.game_map import GameMap
from levelgen.world.placement import Placer

log = structlog.get_logger()


def spawn_count(level: int, rng: GameRNG, fresh: bool) -> int:
    """A fresh level gets an extra 2..13 monsters on top of the base count."""
    count = (level >> 1) + 1
    if fresh:
        count += rng.below(12) + 2
    return count


def spawn(
    level: int,
    game_map: GameMap,
    placer: Placer,
    registry: MonsterRegistry,
    rng: GameRNG,
    fresh: bool = True,
) -> List[Monster]:
    """Create, place and register monsters for ``level``.

    The returned objects are the ones now sitting in ``game_map``.
    """
    count = spawn_count(level, rng, fresh)
    spawned: List[Monster] = []
    for _ in range(count):
        monster = registry.create_monster(monster_for_level(level, rng), level)
        pos, _displaced = placer.place(None, monster)
        registry.set_position(monster.entity_id, pos)
        spawned.append(monster)

    log.info(
        "Monsters spawned",
        level=level,
        fresh=fresh,
        count=len(spawned),
        on_map=game_map.count(CellKind.MONSTER),
    )
    return spawned


__all__ = ["spawn", "spawn_count"]
