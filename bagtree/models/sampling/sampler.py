from typing import Optional

import numpy as np


def bootstrap(n: int, rng: np.random.Generator) -> np.ndarray:
    """
    Draws n indices uniformly with replacement from [0, n).

    :param int n: size of the pool, and of the sample
    :param np.random.Generator rng: the random generator
    :return np.ndarray: the sampled indices, about n * (1 - 1/e) of them distinct
    """
    if n < 1:
        raise ValueError(f"bootstrap pool size must be at least 1, got {n}")
    return rng.integers(0, n, size=n)


def sub_sample(n: int, k: int, rng: np.random.Generator) -> np.ndarray:
    """
    Draws k distinct indices uniformly without replacement from [0, n).

    :param int n: size of the pool
    :param int k: number of indices to draw, at most n
    :param np.random.Generator rng: the random generator
    :return np.ndarray: the sampled indices
    """
    if not (0 <= k <= n):
        raise ValueError(f"Cannot draw {k} distinct indices from a pool of {n}")
    if k == 0:
        return np.empty(0, dtype=int)
    return rng.choice(n, size=k, replace=False)


class Sampler:
    """Bootstrap row sampling and attribute sub-sampling over a single random generator."""
    def __init__(self, seed: Optional[int | np.random.SeedSequence] = None):
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def bootstrap(self, n: int) -> np.ndarray:
        return bootstrap(n, self.rng)

    def sub_sample(self, n: int, k: int) -> np.ndarray:
        return sub_sample(n, k, self.rng)
