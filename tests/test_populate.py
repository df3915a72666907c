import pytest

from game_rng import GameRNG
from levelgen.constants import LevelCategory, category_for_level
from levelgen.items.objects import (
    Armor,
    ArmorType,
    Belt,
    Chest,
    Gem,
    GemStone,
    GoldPile,
    Item,
    Potion,
    Ring,
    RingType,
    Scroll,
    Trap,
    TrapType,
    Weapon,
    WeaponType,
)
from levelgen.world.cells import Door, Empty, Entrance, StairDirection, Stairs, Wall
from levelgen.world.game_map import GameMap
from levelgen.world.maze import carve_maze
from levelgen.world.placement import Placer
from levelgen.world.populate import HOME_ENTRANCES, populate
from levelgen.world.procgen import generate_level


def _cells_of(game_map, cls):
    return [cell for _, cell in game_map.iter_cells() if isinstance(cell, cls)]


def _stairs(game_map, direction):
    return [s for s in _cells_of(game_map, Stairs) if s.direction is direction]


def _stocked(level, seed, category=None):
    """Populate an all-floor map so every roll lands without a maze."""
    game_map = GameMap(fill=Empty)
    rng = GameRNG(seed=seed)
    category = category_for_level(level) if category is None else category
    populate(level, category, game_map, Placer(game_map, rng), rng)
    return game_map


def _is_second_tier(item):
    match item:
        case Weapon(type=WeaponType.SUN_SWORD | WeaponType.TWO_HANDED_SWORD):
            return True
        case Belt() | Ring(type=RingType.ENERGY) | Armor(type=ArmorType.PLATE_MAIL):
            return True
    return False


@pytest.mark.parametrize("seed", range(5))
def test_first_level_has_one_chest_and_no_up_stairs(seed):
    game_map = generate_level(1, seed=seed).game_map
    assert len(_cells_of(game_map, Chest)) == 1
    assert _stairs(game_map, StairDirection.UP) == []
    down = _stairs(game_map, StairDirection.DOWN)
    assert len(down) == 1
    assert down[0].target == 2


@pytest.mark.parametrize("level", [10, 13])
def test_bottom_levels_have_no_down_stairs(level):
    game_map = generate_level(level, seed=17).game_map
    assert _stairs(game_map, StairDirection.DOWN) == []
    up = _stairs(game_map, StairDirection.UP)
    assert len(up) == 1
    assert up[0].target == level - 1


def test_middle_level_has_both_stairs():
    game_map = generate_level(5, seed=3).game_map
    assert [s.target for s in _stairs(game_map, StairDirection.UP)] == [4]
    assert [s.target for s in _stairs(game_map, StairDirection.DOWN)] == [6]


def test_first_volcano_level_leads_home():
    game_map = generate_level(11, seed=3).game_map
    assert [s.target for s in _stairs(game_map, StairDirection.UP)] == [0]


@pytest.mark.parametrize("seed", range(5))
def test_volcano_has_no_gems(seed):
    assert _cells_of(generate_level(12, seed=seed).game_map, Gem) == []


@pytest.mark.parametrize("seed", range(3))
def test_home_level_has_only_the_eight_entrances(seed):
    generated = generate_level(0, seed=seed)
    entrances = _cells_of(generated.game_map, Entrance)
    assert len(entrances) == 8
    assert sorted(e.target for e in entrances) == sorted(int(t) for _, t, _ in HOME_ENTRANCES)
    assert _cells_of(generated.game_map, Item) == []
    assert _cells_of(generated.game_map, Wall) == []
    assert generated.monsters == []


def test_dungeon_level_is_stocked():
    game_map = generate_level(4, seed=8).game_map
    # potions, scrolls and gold alone guarantee at least 4 + 4 + 12 items
    assert len(_cells_of(game_map, Item)) >= 20


def test_unknown_category_raises():
    game_map = GameMap()
    rng = GameRNG(seed=1)
    carve_maze(game_map, rng)
    with pytest.raises(ValueError):
        populate(1, "swamp", game_map, Placer(game_map, rng), rng)


def test_category_must_match_level():
    with pytest.raises(ValueError):
        generate_level(3, seed=1, category=LevelCategory.VOLCANO)


@pytest.mark.parametrize("seed", range(20))
@pytest.mark.parametrize("level", [1, 4, 10])
def test_gem_values_scale_with_level(level, seed):
    bounds = {
        GemStone.DIAMOND: (10, 10 * level + 10),
        GemStone.RUBY: (6, 6 * level + 6),
        GemStone.EMERALD: (4, 4 * level + 4),
        GemStone.SAPPHIRE: (2, 3 * level + 2),
    }
    gems = _cells_of(_stocked(level, seed), Gem)
    assert len(gems) <= 4
    for gem in gems:
        low, high = bounds[gem.stone]
        assert low <= gem.value <= high


@pytest.mark.parametrize("seed", range(20))
@pytest.mark.parametrize("level", [1, 6, 12])
def test_gold_piles_follow_the_level_formula(level, seed):
    piles = _cells_of(_stocked(level, seed), GoldPile)
    assert 12 <= len(piles) <= 23
    base = 8 * level + 10
    for pile in piles:
        assert base <= pile.amount <= base + 12 * level
        assert (pile.amount - base) % 12 == 0


@pytest.mark.parametrize("seed", range(30))
@pytest.mark.parametrize("level", [2, 11])
def test_potion_and_scroll_counts(level, seed):
    game_map = _stocked(level, seed)
    assert 4 <= len(_cells_of(game_map, Potion)) <= 7
    assert 4 <= len(_cells_of(game_map, Scroll)) <= 8


@pytest.mark.parametrize("seed", range(40))
@pytest.mark.parametrize("level", [10, 13])
def test_bottom_levels_have_no_trap_doors(level, seed):
    traps = _cells_of(_stocked(level, seed), Trap)
    assert [t for t in traps if t.type is TrapType.DOOR] == []


def test_trap_doors_appear_above_the_bottom():
    found = any(
        t.type is TrapType.DOOR
        for seed in range(40)
        for t in _cells_of(_stocked(9, seed), Trap)
    )
    assert found


@pytest.mark.parametrize("level", [1, 2, 3])
def test_no_second_tier_equipment_on_shallow_levels(level):
    for seed in range(150):
        items = _cells_of(_stocked(level, seed), Item)
        assert not any(_is_second_tier(item) for item in items), seed


def test_second_tier_equipment_appears_deeper():
    found = any(
        _is_second_tier(item)
        for seed in range(400)
        for item in _cells_of(_stocked(7, seed), Item)
    )
    assert found


@pytest.mark.parametrize("seed", range(10))
def test_first_level_has_no_treasure_room(seed):
    assert _cells_of(generate_level(1, seed=seed).game_map, Door) == []


def test_category_by_value():
    game_map = _stocked(2, 4, category="dungeon")
    assert [s.target for s in _stairs(game_map, StairDirection.UP)] == [1]
    assert [s.target for s in _stairs(game_map, StairDirection.DOWN)] == [3]


def test_volcano_by_value_leads_home():
    game_map = _stocked(11, 4, category="volcano")
    assert [s.target for s in _stairs(game_map, StairDirection.UP)] == [0]
