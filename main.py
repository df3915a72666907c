# main.py
import argparse
import logging
import sys
import time
import traceback
from pathlib import Path
from typing import List, Optional

import numpy as np
import polars as pl
import structlog

from levelgen.config import DEFAULT_CONFIG_PATH, GenerationConfig, load_generation_config
from levelgen.constants import CellKind
from levelgen.world.game_map import GameMap
from levelgen.world.maze import CARVE_STRATEGIES
from levelgen.world.procgen import generate_level
from utils.logging_utils import setup_logging

log = structlog.get_logger()

DEFAULT_LEVEL = 1
DEFAULT_OUTPUT_FILE = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a Larn-style level and print it as text."
    )
    parser.add_argument(
        "--level",
        type=int,
        default=DEFAULT_LEVEL,
        help=f"Level number, 0 (home) to 13 (default: {DEFAULT_LEVEL})",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for GameRNG (default: from config or entropy)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Generation YAML file (default: {DEFAULT_CONFIG_PATH} if present)",
    )
    parser.add_argument(
        "--reveal", action="store_true", help="Show the whole level (debug reveal)."
    )
    parser.add_argument(
        "--carver", choices=sorted(CARVE_STRATEGIES), default=None, help="Maze carving strategy."
    )
    parser.add_argument(
        "--output-file",
        type=Path,
        default=DEFAULT_OUTPUT_FILE,
        help="Write the cell-kind grid to this Arrow IPC file.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Logging level (default: from config)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--json-logs", action="store_true", help="Emit logs as one JSON object per line."
    )
    return parser


def resolve_config(args: argparse.Namespace) -> GenerationConfig:
    """Config file values with command line flags layered on top."""
    if args.config is not None:
        config = load_generation_config(args.config)
    elif DEFAULT_CONFIG_PATH.is_file():
        config = load_generation_config(DEFAULT_CONFIG_PATH)
    else:
        config = GenerationConfig()
    return config.replace(
        seed=args.seed,
        carver=args.carver,
        reveal=True if args.reveal else None,
        log_level=args.log_level,
    )


def kind_frame(game_map: GameMap) -> pl.DataFrame:
    """One row per cell: x, y, kind code and kind name."""
    kinds = game_map.kinds()
    ys, xs = np.indices(kinds.shape)
    names = np.array([kind.name for kind in CellKind])
    return pl.DataFrame(
        {
            "x": xs.ravel().astype(np.int16),
            "y": ys.ravel().astype(np.int16),
            "kind": kinds.ravel(),
            "kind_name": names[kinds.ravel()].tolist(),
        }
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = resolve_config(args)
    except (OSError, ValueError, TypeError) as e:
        print(f"FATAL: invalid configuration: {e}", file=sys.stderr)
        return 2

    log_level = (
        logging.DEBUG
        if args.verbose
        else getattr(logging, config.log_level.upper(), logging.INFO)
    )
    setup_logging(log_level, json_logs=args.json_logs)

    start_time = time.time()
    try:
        generated = generate_level(args.level, config=config)
    except (ValueError, TypeError) as e:
        log.error("Level generation failed", level=args.level, error=str(e))
        print(f"FATAL: {e}", file=sys.stderr)
        return 2
    except Exception:
        print("\n--- ERROR during level generation ---", file=sys.stderr)
        traceback.print_exc()
        return 1

    print(f"--- Level {generated.level} ({generated.category.value}) seed={generated.seed} ---")
    for row in generated.game_map.as_text(show_hidden=config.reveal):
        print(row)
    print(f"Monsters: {len(generated.monsters)}")
    for monster in generated.monsters:
        print(f"  #{monster.entity_id} {monster.name}")

    if args.output_file is not None:
        frame = kind_frame(generated.game_map)
        frame.write_ipc(args.output_file)
        print(f"Saved cell grid ({frame.shape}) to {args.output_file}")

    log.info("Done", elapsed=f"{time.time() - start_time:.3f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
