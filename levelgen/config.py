# levelgen/config.py
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import yaml

from levelgen.constants import MAP_HEIGHT, MAP_WIDTH, MIN_MAP_HEIGHT, MIN_MAP_WIDTH

log = structlog.get_logger()

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "generation.yaml"

# YAML key -> GenerationConfig field
_KEY_MAP = {
    "map_width": "width",
    "map_height": "height",
    "reveal": "reveal",
    "carver": "carver",
    "seed": "seed",
    "top_up_on_revisit": "top_up_on_revisit",
    "log_level": "log_level",
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def check_dimensions(width: int, height: int) -> None:
    """Reject playfields too small to hold a stocked level."""
    if width < MIN_MAP_WIDTH or height < MIN_MAP_HEIGHT:
        log.error(
            "Map dimensions too small",
            width=width,
            height=height,
            min_width=MIN_MAP_WIDTH,
            min_height=MIN_MAP_HEIGHT,
        )
        raise ValueError(
            f"Map must be at least {MIN_MAP_WIDTH}x{MIN_MAP_HEIGHT}, got {width}x{height}"
        )


@dataclass(frozen=True)
class GenerationConfig:
    width: int = MAP_WIDTH
    height: int = MAP_HEIGHT
    reveal: bool = False
    carver: str = "eat"
    seed: Optional[int] = None
    top_up_on_revisit: bool = True
    log_level: str = "INFO"

    def __post_init__(self):
        # bool is an int subclass; reject it for the dimensions
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                log.error("Config value has wrong type", key=name, value=value)
                raise TypeError(f"'{name}' must be an integer, got {type(value).__name__}")
        check_dimensions(self.width, self.height)
        for name in ("reveal", "top_up_on_revisit"):
            if not isinstance(getattr(self, name), bool):
                log.error("Config value has wrong type", key=name, value=getattr(self, name))
                raise TypeError(f"'{name}' must be a boolean")
        if not isinstance(self.carver, str):
            raise TypeError("'carver' must be a string")
        if self.seed is not None and (
            isinstance(self.seed, bool) or not isinstance(self.seed, int) or self.seed < 0
        ):
            log.error("Config seed invalid", seed=self.seed)
            raise ValueError("'seed' must be a non-negative integer or null")
        if not isinstance(self.log_level, str) or self.log_level.upper() not in _LOG_LEVELS:
            log.error("Unknown log level", log_level=self.log_level)
            raise ValueError(f"'log_level' must be one of {_LOG_LEVELS}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationConfig":
        """Build a config from the YAML mapping; unknown keys are rejected."""
        if not isinstance(data, dict):
            log.error("Generation config must be a mapping", got=type(data).__name__)
            raise TypeError("Generation config must be a mapping")
        unknown = set(data) - set(_KEY_MAP)
        if unknown:
            log.error("Unknown generation config keys", keys=sorted(unknown))
            raise ValueError(f"Unknown generation config keys: {sorted(unknown)}")
        return cls(**{_KEY_MAP[key]: value for key, value in data.items()})

    def replace(self, **overrides: Any) -> "GenerationConfig":
        """Copy with the non-None ``overrides`` applied (CLI flags)."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return GenerationConfig(**values)


def load_generation_config(config_path: Path = DEFAULT_CONFIG_PATH) -> GenerationConfig:
    """Loads the generation YAML file into a validated GenerationConfig."""
    config_path = Path(config_path)
    if not config_path.is_file():
        log.error("Generation config file not found", path=str(config_path))
        raise FileNotFoundError(f"Generation configuration file not found: {config_path}")
    try:
        with config_path.open("r") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        log.error(
            "Error parsing YAML for generation config",
            path=str(config_path),
            error=str(e),
            exc_info=True,
        )
        raise
    if config_data is None:
        log.warning("Generation config file is empty.", path=str(config_path))
        config_data = {}
    log.info("Generation config loaded", path=str(config_path))
    return GenerationConfig.from_dict(config_data)


__all__ = ["DEFAULT_CONFIG_PATH", "GenerationConfig", "check_dimensions", "load_generation_config"]
