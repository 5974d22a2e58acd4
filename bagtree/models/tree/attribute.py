from collections import Counter
from typing import Dict

import numpy as np

from bagtree.const import Label
from bagtree.utils import get_logger
from .impurity import entropy, gini_impurity


class AttributeStatistics:
    """
    Value/label tally of a single attribute over the records of a dataset.

    Pairs are streamed in with `insert` until the declared capacity is reached,
    at which point the tally consolidates into the splitting measures:
    - info: weighted entropy of the labels within each attribute value
    - split_info: entropy of the attribute's own value distribution
    - gini: weighted Gini impurity of the labels within each attribute value

    The raw per-value buckets are dropped once consolidated.
    """
    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")

        self.logger = get_logger(self.__class__.__name__)

        self.capacity = capacity
        self.size = 0

        self._positive_counts = Counter()
        self._negative_counts = Counter()

        self._keys = None
        self._key_counts = None
        self._info = 0.0
        self._split_info = 0.0
        self._gini = 0.0

    def insert(self, value: int, label: Label) -> bool:
        """
        Counts one occurrence of `value` under the bucket of `label`.

        :param int value: the attribute value of a record
        :param Label label: the class label of the same record
        :return bool: False if the declared capacity was already reached, True otherwise
        """
        if self.size >= self.capacity:
            self.logger.error(f"Attribute statistics overflow, capacity of {self.capacity} entries exceeded")
            return False

        if label is Label.POSITIVE:
            self._positive_counts[value] += 1
        else:
            self._negative_counts[value] += 1

        self.size += 1

        if self.size == self.capacity:
            self._consolidate()

        return True

    def _consolidate(self) -> None:
        # set order, neither sorted nor insertion ordered
        key_set = set(self._positive_counts) | set(self._negative_counts)

        keys = {}
        key_counts = np.zeros(len(key_set), dtype=int)
        positives = np.zeros(len(key_set), dtype=float)
        negatives = np.zeros(len(key_set), dtype=float)

        for i, key in enumerate(key_set):
            keys[key] = i
            positives[i] = self._positive_counts.get(key, 0)
            negatives[i] = self._negative_counts.get(key, 0)
            key_counts[i] = positives[i] + negatives[i]

        ratios = key_counts / self.capacity
        self._info = float(sum(r * entropy(p, n) for r, p, n in zip(ratios, positives, negatives)))
        self._gini = float(sum(r * gini_impurity(p, n) for r, p, n in zip(ratios, positives, negatives)))
        self._split_info = -float(np.sum(ratios * np.log2(ratios)))

        self._keys = keys
        self._key_counts = key_counts

        self._positive_counts = None
        self._negative_counts = None

    def _check_consolidated(self) -> None:
        if not self.is_consolidated:
            raise RuntimeError(
                f"Attribute statistics not consolidated, {self.size} of {self.capacity} entries inserted")

    @property
    def is_consolidated(self) -> bool:
        return self._keys is not None

    @property
    def keys(self) -> Dict[int, int]:
        self._check_consolidated()
        return dict(self._keys)

    def key_count(self, key_index: int) -> int:
        self._check_consolidated()
        return int(self._key_counts[key_index])

    @property
    def num_keys(self) -> int:
        self._check_consolidated()
        return len(self._keys)

    @property
    def info(self) -> float:
        self._check_consolidated()
        return self._info

    @property
    def split_info(self) -> float:
        self._check_consolidated()
        return self._split_info

    @property
    def gini(self) -> float:
        self._check_consolidated()
        return self._gini

    def __repr__(self) -> str:
        if not self.is_consolidated:
            return f"AttributeStatistics(size={self.size}, capacity={self.capacity})"
        return f"AttributeStatistics(num_keys={self.num_keys}, info={self._info:.4f}, " \
               f"split_info={self._split_info:.4f}, gini={self._gini:.4f})"
