import numpy as np

from discretebn.errors import ConfigurationError


def pick_one(distribution, rng=np.random.default_rng()) -> int:
    """
    Randomly pick the index of a value according to a distribution.

    For example, if a node 'fight' has values true (index 0) and false (index 1) and
    its distribution is [0.8, 0.2], this returns 0 with probability 0.8 and 1 with probability 0.2.

    distribution: a sequence of probabilities
    rng: anything with a random() method returning a float in [0, 1)
        (an np.random.Generator, or a random.Random)

    We draw r and return the smallest i such that distribution[0] + ... + distribution[i] > r.
    If rounding keeps the cumulative sum at or below r, the last index is returned.
    """
    cumulative = np.cumsum(np.asarray(distribution, dtype=float).reshape(-1))
    if cumulative.size == 0:
        raise ConfigurationError("I need a non-empty distribution to pick from")
    r = rng.random()
    i = int(np.searchsorted(cumulative, r, side='right'))
    return min(i, cumulative.size - 1)
