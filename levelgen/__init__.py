"""Larn-style level generation: maze carving, treasure rooms, object placement and monster spawning."""

from .config import GenerationConfig, load_generation_config
from .game_state import GameState
from .world.maze import carve_maze
from .world.placement import Placer
from .world.populate import populate
from .world.procgen import GeneratedLevel, generate_level
from .world.rooms import build_treasure_room
from .entities.spawner import spawn

__all__ = [
    "GenerationConfig",
    "load_generation_config",
    "GameState",
    "GeneratedLevel",
    "generate_level",
    "carve_maze",
    "build_treasure_room",
    "Placer",
    "populate",
    "spawn",
]
