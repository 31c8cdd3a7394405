"""Injectable random number streams for map generation.

Every generation component takes an ``rng`` argument instead of reaching for
the global ``random`` module. Tests pass a seeded ``random.Random`` (or any
object with the same methods); the pipeline derives a named stream from the
configured master seed.

Usage:
    provider = RNGProvider(master_seed=42)
    stream = provider.get("map.maze")

    generator = MazeGenerator(6, 6, stream)

A single run consumes one stream sequentially, so the order of draws
(start room, shuffles, repairs, loops, variations, props) determines output.
"""

from __future__ import annotations

import zlib
from collections.abc import Sequence
from random import Random
from typing import TYPE_CHECKING, TypeAlias, TypeVar

if TYPE_CHECKING:
    from tilemaze.types import RandomSeed

T = TypeVar("T")


class RNGStream:
    """A named ``Random`` exposing the methods generation draws from."""

    def __init__(self, domain: str, rng: Random) -> None:
        self._domain = domain
        self._rng = rng

    @property
    def domain(self) -> str:
        return self._domain

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        """Return random integer N such that a <= N <= b."""
        return self._rng.randint(a, b)

    def randrange(self, start: int, stop: int | None = None, step: int = 1) -> int:
        """Return randomly selected element from range(start, stop, step)."""
        return self._rng.randrange(start, stop, step)

    def choice(self, seq: Sequence[T]) -> T:
        """Return random element from non-empty sequence."""
        return self._rng.choice(seq)

    def shuffle(self, x: list) -> None:
        """Shuffle list x in place (Fisher-Yates)."""
        self._rng.shuffle(x)


# Anything generation code may draw from.
# Use this in type hints: `def foo(rng: RNG) -> int:`
RNG: TypeAlias = Random | RNGStream


class RNGProvider:
    """Derives named RNG streams from one master seed."""

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self._master_seed = master_seed
        self._streams: dict[str, RNGStream] = {}

    @property
    def master_seed(self) -> RandomSeed:
        return self._master_seed

    def get(self, domain: str) -> RNGStream:
        """Get the stream for ``domain``, creating it on first use."""
        if domain not in self._streams:
            if self._master_seed is None:
                # No seed: system entropy, output differs per run
                rng = Random()
            else:
                # crc32 rather than hash(): hash() is salted per interpreter
                rng = Random(zlib.crc32(f"{self._master_seed}:{domain}".encode()))
            self._streams[domain] = RNGStream(domain, rng)
        return self._streams[domain]
