# levelgen/game_state.py
from typing import Dict, List

import polars as pl
import structlog

from game_rng import GameRNG
from levelgen.config import GenerationConfig
from levelgen.constants import HOME_LEVEL, Direction
from levelgen.entities.monsters import Monster
from levelgen.entities.registry import MonsterRegistry
from levelgen.entities.spawner import spawn
from levelgen.world.placement import Placer
from levelgen.world.procgen import GeneratedLevel, generate_level

log = structlog.get_logger()


class GameState:
    """Owner of every level built during one game.

    Levels are generated on first entry from a seed drawn off the master
    ``GameRNG`` and cached afterwards.  Re-entering a cached level may top up
    its monsters; the grid itself is never rebuilt.
    """

    def __init__(self, config: GenerationConfig | None = None, seed: int | None = None):
        log.info("Initializing GameState...")
        self.config: GenerationConfig = config or GenerationConfig()
        self.rng_instance: GameRNG = GameRNG(
            seed=seed if seed is not None else self.config.seed
        )
        log.debug("GameRNG initialized", seed=self.rng_instance.initial_seed)
        self.registry: MonsterRegistry = MonsterRegistry()
        self.levels: Dict[int, GeneratedLevel] = {}
        self.current_level: int | None = None

    def enter_level(self, level: int) -> GeneratedLevel:
        cached = self.levels.get(level)
        if cached is None:
            cached = generate_level(
                level,
                config=self.config,
                seed=self.rng_instance.derive_seed(),
                registry=self.registry,
            )
            self.levels[level] = cached
        elif self.config.top_up_on_revisit and level != HOME_LEVEL:
            self._top_up(cached)
        self.current_level = level
        log.info("Entered level", level=level, monsters=len(self.monsters(level)))
        return cached

    def _top_up(self, generated: GeneratedLevel) -> None:
        rng = GameRNG(seed=self.rng_instance.derive_seed())
        placer = Placer(generated.game_map, rng, reveal=self.config.reveal)
        added = spawn(
            generated.level, generated.game_map, placer, self.registry, rng, fresh=False
        )
        generated.monsters.extend(added)
        log.debug("Monsters topped up", level=generated.level, added=len(added))

    def _level_of(self, entity_id: int) -> GeneratedLevel:
        rows = self.registry.get_active_monsters().filter(pl.col("entity_id") == entity_id)
        if rows.height == 0:
            log.error("Unknown monster", entity_id=entity_id)
            raise KeyError(f"No active monster with id {entity_id}")
        level = int(rows["level"][0])
        if level not in self.levels:
            log.error("Monster on a level that was never generated", entity_id=entity_id, level=level)
            raise KeyError(f"Level {level} has not been generated")
        return self.levels[level]

    def move_monster(self, entity_id: int, direction: Direction) -> bool:
        generated = self._level_of(entity_id)
        origin = self.registry.get_position(entity_id)
        if origin is None:
            return False
        return self.registry.move_monster(
            generated.game_map, entity_id, origin.step(direction)
        )

    def kill_monster(self, entity_id: int) -> bool:
        generated = self._level_of(entity_id)
        monster = self.registry.get_monster(entity_id)
        killed = self.registry.kill_monster(generated.game_map, entity_id)
        if killed and monster is not None:
            generated.monsters = [m for m in generated.monsters if m is not monster]
        return killed

    def monsters(self, level: int) -> List[Monster]:
        generated = self.levels.get(level)
        return list(generated.monsters) if generated is not None else []


__all__ = ["GameState"]
