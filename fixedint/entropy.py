"""Source of uniformly random 32-bit words.

Default (no seed) draws from os.urandom. Call set_seed(n) at test start for
reproducible values.
"""

import os

import numpy as np

from fixedint.constants import WORD_MASK
from fixedint.errors import EntropyError


class EntropySource:
    """Random word supplier. When seed is None, uses os.urandom."""

    def __init__(self, seed=None):
        self._seed = seed
        if seed is not None:
            self._generator = np.random.default_rng(seed)
        else:
            self._generator = None  # OS-level randomness

    @property
    def seed(self):
        return self._seed

    def random_words(self, count: int) -> np.ndarray:
        if count < 0:
            raise ValueError(f"word count must be non-negative, got {count}")
        if self._generator is not None:
            return self._generator.integers(0, WORD_MASK, size=count,
                                            dtype=np.uint32, endpoint=True)
        try:
            raw = os.urandom(4 * count)
        except (OSError, NotImplementedError) as exc:
            raise EntropyError(f"operating system entropy source failed: {exc}") from exc
        return np.frombuffer(raw, dtype='<u4').astype(np.uint32)


# Global instance
_global_source = EntropySource(seed=None)


def set_seed(seed: int | None):
    """Set global seed for reproducibility. None = OS randomness."""
    global _global_source
    _global_source = EntropySource(seed=seed)


def get_source() -> EntropySource:
    return _global_source


def random_words(count: int) -> np.ndarray:
    return _global_source.random_words(count)
