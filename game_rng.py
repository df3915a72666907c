"""Seeded random source for level generation.

Every stochastic decision made while building a level (carving direction,
placement walks, quantity rolls, rarity rolls) draws from one ``GameRNG``
instance created for that build.  Nothing in the generator touches the
module-level ``random`` state, so two builds never perturb each other and a
seed always reproduces the same level.

The integer helpers mirror the conventions the population tables are written
in:

* ``below(n)`` returns a value in ``[0, n)``.
* ``get_int(a, b)`` returns a value in ``[a, b]``.
* ``one_in(n, numerator)`` is the ``numerator``-in-``n`` chance used for rare
  placement.
"""

from __future__ import annotations

import random
from typing import Any, Dict, Optional, Sequence

import numpy as np
import structlog

log = structlog.get_logger()

SEED_BITS = 32


def fresh_seed() -> int:
    """Draw a seed from the OS entropy pool."""
    return random.SystemRandom().randint(0, 2**SEED_BITS - 1)


class GameRNG:
    def __init__(self, seed: Optional[int] = None) -> None:
        if seed is not None and seed < 0:
            raise ValueError("seed must be non-negative")
        self.initial_seed = seed if seed is not None else fresh_seed()
        self.rng = np.random.default_rng(self.initial_seed)
        self.weighted_choice_cache: Dict[Any, np.ndarray] = {}
        self.weighted_choice_cache_size = 32

    # ------------------------------------------------------------------
    # integer helpers
    # ------------------------------------------------------------------
    def get_int(self, a: int, b: int) -> int:
        if a > b:
            raise ValueError("a <= b")
        return int(self.rng.integers(a, b + 1))

    def below(self, n: int) -> int:
        if n <= 0:
            raise ValueError("n must be positive")
        return int(self.rng.integers(0, n))

    def one_in(self, n: int, numerator: int = 1) -> bool:
        """Return True with probability ``numerator / n``."""
        return self.below(n) < numerator

    def get_float(self, a: float = 0.0, b: float = 1.0) -> float:
        if a > b:
            raise ValueError("a <= b")
        return a + (b - a) * float(self.rng.random())

    def derive_seed(self) -> int:
        """Draw a child seed, e.g. one per level from a master stream."""
        return self.get_int(0, 2**SEED_BITS - 1)

    # ------------------------------------------------------------------
    # weighted helpers
    # ------------------------------------------------------------------
    def weighted_choice(
        self,
        items: Sequence[Any],
        weights: Sequence[float],
        cache_key: Any | None = None,
    ) -> Any:
        if len(items) != len(weights):
            raise ValueError("items/weights length mismatch")
        if not items:
            raise ValueError("items empty")
        total = float(sum(weights))
        if total <= 0:
            raise ValueError("weight sum must be positive")

        cdf = None
        if cache_key is not None:
            cdf = self.weighted_choice_cache.get(cache_key)
        if cdf is None:
            cdf = np.cumsum(np.asarray(weights, dtype=float))
            cdf[-1] = total
            if cache_key is not None:
                if len(self.weighted_choice_cache) >= self.weighted_choice_cache_size:
                    # Oldest entry goes first; dicts keep insertion order.
                    oldest = next(iter(self.weighted_choice_cache))
                    del self.weighted_choice_cache[oldest]
                self.weighted_choice_cache[cache_key] = cdf

        r = self.get_float(0.0, total)
        idx = int(np.searchsorted(cdf, r, side="right"))
        return items[min(idx, len(items) - 1)]


__all__ = ["GameRNG", "fresh_seed"]
