# levelgen/entities/registry.py
from typing import Dict, Self

import polars as pl
import structlog

from levelgen.entities.components import Coordinate
from levelgen.entities.monsters import Monster, MonsterType
from levelgen.world.cells import Empty
from levelgen.world.game_map import GameMap

log = structlog.get_logger()

MONSTER_SCHEMA: dict[str, pl.DataType] = {
    "entity_id": pl.UInt32,
    "is_active": pl.Boolean,
    "type_id": pl.UInt8,
    "name": pl.Utf8,
    "level": pl.Int16,
    "x": pl.Int16,
    "y": pl.Int16,
    "hp": pl.Int16,
    "max_hp": pl.Int16,
}


class MonsterRegistry:
    """Owning store for every monster spawned in a game.

    Rows live in a polars DataFrame; the Monster objects that sit in map
    cells are kept alongside, keyed by the same entity id.  Positions stay
    null until a monster is placed.
    """

    def __init__(self: Self):
        self.monsters_df: pl.DataFrame = pl.DataFrame(schema=MONSTER_SCHEMA)
        self._monsters: Dict[int, Monster] = {}
        self._next_entity_id: int = 0
        log.debug("MonsterRegistry initialized", schema=list(MONSTER_SCHEMA.keys()))

    def __len__(self) -> int:
        return len(self._monsters)

    def _get_next_id(self: Self) -> int:
        current_id = self._next_entity_id
        self._next_entity_id += 1
        if self._next_entity_id > 2**32 - 1:
            log.critical("Entity ID counter overflowed", next_id=self._next_entity_id)
            raise OverflowError("Entity ID counter overflowed (UInt32 limit reached).")
        return current_id

    def _active_mask(self: Self, entity_id: int) -> pl.Expr:
        return (pl.col("entity_id") == entity_id) & pl.col("is_active")

    def create_monster(self: Self, kind: MonsterType, level: int) -> Monster:
        new_id = self._get_next_id()
        row = {
            "entity_id": [new_id],
            "is_active": [True],
            "type_id": [kind.type_id],
            "name": [kind.name],
            "level": [level],
            "x": [None],
            "y": [None],
            "hp": [kind.hp],
            "max_hp": [kind.hp],
        }
        new_df = pl.DataFrame(row, schema=MONSTER_SCHEMA)
        if self.monsters_df.height == 0:
            self.monsters_df = new_df
        else:
            self.monsters_df = pl.concat([self.monsters_df, new_df], how="vertical")

        monster = Monster(new_id, kind)
        self._monsters[new_id] = monster
        log.debug("Monster created", entity_id=new_id, name=kind.name, level=level)
        return monster

    def get_monster(self: Self, entity_id: int) -> Monster | None:
        return self._monsters.get(entity_id)

    def get_position(self: Self, entity_id: int) -> Coordinate | None:
        row = self.monsters_df.filter(self._active_mask(entity_id)).select("x", "y")
        if row.height == 0:
            return None
        x, y = row.row(0)
        if x is None or y is None:
            return None
        return Coordinate(x, y)

    def set_position(self: Self, entity_id: int, position: Coordinate) -> bool:
        mask = self._active_mask(entity_id)
        if self.monsters_df.filter(mask).height == 0:
            log.warning("Cannot set position of unknown monster", entity_id=entity_id)
            return False
        x, y = position
        self.monsters_df = self.monsters_df.with_columns(
            pl.when(mask).then(pl.lit(x, dtype=pl.Int16)).otherwise(pl.col("x")).alias("x"),
            pl.when(mask).then(pl.lit(y, dtype=pl.Int16)).otherwise(pl.col("y")).alias("y"),
        )
        return True

    def get_active_monsters(self: Self) -> pl.DataFrame:
        return self.monsters_df.filter(pl.col("is_active"))

    def monsters_on_level(self: Self, level: int) -> pl.DataFrame:
        return self.get_active_monsters().filter(pl.col("level") == level)

    def monster_at(self: Self, level: int, position: Coordinate) -> int | None:
        x, y = position
        hits = self.monsters_on_level(level).filter(
            (pl.col("x") == x) & (pl.col("y") == y)
        )
        if hits.height == 0:
            return None
        return int(hits["entity_id"][0])

    def move_monster(
        self: Self, game_map: GameMap, entity_id: int, destination: Coordinate
    ) -> bool:
        """Step a monster to ``destination``, keeping map and table in sync.

        The vacated slot gets back what the monster had displaced; whatever
        sits at the destination becomes the new displaced cell.  Returns False
        (and changes nothing) when the destination cannot be entered.
        """
        monster = self._monsters.get(entity_id)
        origin = self.get_position(entity_id)
        if monster is None or origin is None:
            log.warning("Cannot move unplaced or unknown monster", entity_id=entity_id)
            return False
        if not game_map.in_bounds(*destination):
            return False
        target = game_map[destination]
        if not target.walkable:
            log.debug("Move blocked", entity_id=entity_id, destination=destination)
            return False

        game_map[origin] = monster.displaced
        monster.displaced = target
        game_map[destination] = monster
        self.set_position(entity_id, destination)
        log.debug("Monster moved", entity_id=entity_id, origin=origin, destination=destination)
        return True

    def kill_monster(self: Self, game_map: GameMap, entity_id: int) -> bool:
        """Remove a monster from the map and mark its row inactive."""
        monster = self._monsters.pop(entity_id, None)
        if monster is None:
            log.warning("Attempted to kill unknown monster", entity_id=entity_id)
            return False
        position = self.get_position(entity_id)
        if position is not None and game_map[position] is monster:
            game_map[position] = monster.displaced if monster.displaced is not None else Empty()

        mask = self._active_mask(entity_id)
        self.monsters_df = self.monsters_df.with_columns(
            pl.when(mask).then(pl.lit(False)).otherwise(pl.col("is_active")).alias("is_active")
        )
        log.info("Monster killed", entity_id=entity_id, name=monster.name, pos=position)
        return True

    def compact_registry(self: Self) -> None:
        initial_count = self.monsters_df.height
        self.monsters_df = self.monsters_df.filter(pl.col("is_active"))
        log.info(
            "Registry compacted",
            initial_count=initial_count,
            final_count=self.monsters_df.height,
            removed_count=initial_count - self.monsters_df.height,
        )


__all__ = ["MONSTER_SCHEMA", "MonsterRegistry"]
