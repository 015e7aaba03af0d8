"""Random source driven by an explicit JAX PRNG key.

Every property check owns one `RandomSource`; nothing random is global, so
two checks started from the same seed see the same inputs.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from typing import Any, Final

import jax

_BLOCK_SIZE: Final[int] = 256


def fresh_seed() -> int:
    return int.from_bytes(os.urandom(4), "little") & 0x7FFFFFFF


class RandomSource:
    """Uniform draws in [0, 1), sampled a block at a time from `jax.random`."""

    __slots__ = ("seed", "_key", "_block", "_block_size")

    def __init__(self, seed: int | None = None, *, block_size: int = _BLOCK_SIZE) -> None:
        if block_size < 1:
            raise ValueError("block_size must be positive")
        self.seed = fresh_seed() if seed is None else int(seed)
        self._key = jax.random.PRNGKey(self.seed)
        self._block: list[float] = []
        self._block_size = block_size

    def _refill(self) -> None:
        self._key, subkey = jax.random.split(self._key)
        self._block = jax.random.uniform(subkey, (self._block_size,)).tolist()

    def uniform(self) -> float:
        if not self._block:
            self._refill()
        return self._block.pop()

    def random_range(self, lo: float, hi: float) -> float:
        return self.uniform() * (hi - lo) + lo

    def one_of(self, items: Sequence[Any]) -> Any:
        if not items:
            raise ValueError("one_of requires at least one item")
        index = int(self.random_range(0, len(items)))
        return items[min(index, len(items) - 1)]

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed})"
