import numpy as np


def entropy(num_positive: float, num_negative: float) -> float:
    """
    Two-class Shannon entropy, in bits, of a partition with the given label counts.

    A partition holding a single class (either count zero) has zero entropy.
    """
    if num_positive == 0 or num_negative == 0:
        return 0.0

    total = num_positive + num_negative
    probs = np.array([num_positive, num_negative], dtype=float) / total
    return float(-np.sum(probs * np.log2(probs)))


def gini_impurity(num_positive: float, num_negative: float) -> float:
    total = num_positive + num_negative
    return float(1. - np.square(num_positive / total) - np.square(num_negative / total))
