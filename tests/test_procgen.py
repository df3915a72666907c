import pytest

from levelgen.config import GenerationConfig
from levelgen.constants import MAP_HEIGHT, MAP_WIDTH, CellKind, LevelCategory
from levelgen.entities.monsters import Monster
from levelgen.entities.registry import MonsterRegistry
from levelgen.items.objects import Item
from levelgen.world.cells import Wall
from levelgen.world.procgen import generate_level


def _snapshot(generated):
    cells = [repr(cell) for _, cell in generated.game_map.iter_cells()]
    monsters = [(m.entity_id, m.type.type_id) for m in generated.monsters]
    return cells, monsters


@pytest.mark.parametrize("level", [0, 1, 6, 11])
def test_level_dimensions_and_kinds(level):
    generated = generate_level(level, seed=100 + level)
    kinds = generated.game_map.kinds()
    assert kinds.shape == (MAP_HEIGHT, MAP_WIDTH)
    assert set(kinds.ravel()) <= {int(k) for k in CellKind}
    assert generated.level == level
    assert generated.seed == 100 + level


def test_categories():
    assert generate_level(0, seed=1).category is LevelCategory.HOME
    assert generate_level(10, seed=1).category is LevelCategory.DUNGEON
    assert generate_level(13, seed=1).category is LevelCategory.VOLCANO


def test_same_seed_same_level():
    assert _snapshot(generate_level(7, seed=4242)) == _snapshot(generate_level(7, seed=4242))


def test_config_seed_is_used_when_no_seed_given():
    config = GenerationConfig(seed=77)
    assert _snapshot(generate_level(3, config=config)) == _snapshot(generate_level(3, seed=77))


def test_monsters_on_grid_and_in_registry():
    registry = MonsterRegistry()
    generated = generate_level(8, seed=5, registry=registry)
    on_grid = [cell for _, cell in generated.game_map.iter_cells() if isinstance(cell, Monster)]
    assert len(on_grid) == len(generated.monsters) == len(registry)
    assert {id(m) for m in on_grid} == {id(m) for m in generated.monsters}


def test_reveal_shows_walls_items_and_monsters():
    generated = generate_level(6, config=GenerationConfig(reveal=True), seed=9)
    for _, cell in generated.game_map.iter_cells():
        if isinstance(cell, (Wall, Item, Monster)):
            assert cell.visible


def test_hidden_level_renders_blank_walls():
    generated = generate_level(6, seed=9)
    walls = [cell for _, cell in generated.game_map.iter_cells() if isinstance(cell, Wall)]
    assert walls
    assert all(wall.glyph == " " for wall in walls)


def test_prim_carver_level():
    generated = generate_level(2, config=GenerationConfig(carver="prim"), seed=12)
    assert generated.game_map.count(CellKind.EMPTY) > 0
    assert generated.monsters


def test_custom_dimensions():
    generated = generate_level(3, config=GenerationConfig(width=41, height=21), seed=2)
    assert generated.game_map.kinds().shape == (21, 41)


@pytest.mark.parametrize("level", [-1, 14, 99])
def test_level_out_of_range(level):
    with pytest.raises(ValueError):
        generate_level(level, seed=1)


def test_level_must_be_int():
    with pytest.raises(TypeError):
        generate_level("3", seed=1)
