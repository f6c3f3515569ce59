import logging
from typing import Iterable, Optional, Protocol, Sequence, TypeVar

import numpy as np

T = TypeVar('T')

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def pick(self, options: Sequence[T]) -> T:
        ...


class NumpyRandomSource:
    """Uniform draws backed by a numpy Generator; pass a seed for replays."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def pick(self, options: Sequence[T]) -> T:
        if not options:
            raise ValueError("Cannot pick from an empty sequence")
        index = int(self._rng.integers(len(options)))
        logger.debug("drew index %d of %d", index, len(options))
        return options[index]


class ScriptedRandomSource:
    """Replays a fixed list of indexes, cycling when it runs out."""

    def __init__(self, indexes: Iterable[int]):
        self.indexes = list(indexes)
        if not self.indexes:
            raise ValueError("ScriptedRandomSource needs at least one index")
        self._pos = 0
        self.calls = 0

    def pick(self, options: Sequence[T]) -> T:
        index = self.indexes[self._pos % len(self.indexes)]
        self._pos += 1
        self.calls += 1
        return options[index % len(options)]
