from pathlib import Path

import pytest
import yaml

from levelgen.config import GenerationConfig, load_generation_config
from levelgen.constants import MIN_MAP_HEIGHT, MIN_MAP_WIDTH
from levelgen.world.procgen import generate_level

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


def test_shipped_config_matches_defaults():
    config = load_generation_config(CONFIG_DIR / "generation.yaml")
    assert config == GenerationConfig()


def test_yaml_keys_map_to_fields(tmp_path):
    path = tmp_path / "gen.yaml"
    path.write_text("map_width: 41\nmap_height: 21\nreveal: true\ncarver: prim\nseed: 12\n")
    config = load_generation_config(path)
    assert (config.width, config.height) == (41, 21)
    assert config.reveal is True
    assert config.carver == "prim"
    assert config.seed == 12


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_generation_config(path) == GenerationConfig()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_generation_config(tmp_path / "nope.yaml")


def test_malformed_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("map_width: [67\n")
    with pytest.raises(yaml.YAMLError):
        load_generation_config(path)


def test_unknown_key(tmp_path):
    path = tmp_path / "extra.yaml"
    path.write_text("map_depth: 3\n")
    with pytest.raises(ValueError):
        load_generation_config(path)


@pytest.mark.parametrize(
    "data, error",
    [
        ({"map_width": "wide"}, TypeError),
        ({"map_width": True}, TypeError),
        ({"map_height": 0}, ValueError),
        ({"map_width": 40}, ValueError),
        ({"map_height": 12}, ValueError),
        ({"reveal": "yes"}, TypeError),
        ({"seed": -5}, ValueError),
        ({"log_level": "LOUD"}, ValueError),
    ],
)
def test_invalid_values(data, error):
    with pytest.raises(error):
        GenerationConfig.from_dict(data)


def test_not_a_mapping():
    with pytest.raises(TypeError):
        GenerationConfig.from_dict(["map_width", 67])


def test_replace_skips_none():
    config = GenerationConfig(seed=3).replace(seed=None, carver="prim")
    assert config.seed == 3
    assert config.carver == "prim"


@pytest.mark.parametrize(
    "width, height",
    [(10, 8), (5, 5), (MIN_MAP_WIDTH - 1, 21), (67, MIN_MAP_HEIGHT - 1)],
)
def test_too_small_map_is_rejected(width, height):
    with pytest.raises(ValueError, match="at least"):
        GenerationConfig(width=width, height=height)


def test_too_small_map_in_yaml(tmp_path):
    path = tmp_path / "tiny.yaml"
    path.write_text("map_width: 10\nmap_height: 8\n")
    with pytest.raises(ValueError):
        load_generation_config(path)


@pytest.mark.parametrize("level", [1, 5, 10, 13])
@pytest.mark.parametrize("carver", ["eat", "prim"])
def test_smallest_map_generates(level, carver):
    config = GenerationConfig(width=MIN_MAP_WIDTH, height=MIN_MAP_HEIGHT, carver=carver)
    generated = generate_level(level, config=config, seed=level)
    assert generated.game_map.width == MIN_MAP_WIDTH
    assert generated.game_map.height == MIN_MAP_HEIGHT


def test_generate_level_checks_dimensions():
    # Frozen dataclass validation can be bypassed; generation still refuses.
    config = GenerationConfig()
    object.__setattr__(config, "width", 12)
    with pytest.raises(ValueError):
        generate_level(3, config=config, seed=1)
