from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import ArrayLike

from bagtree.const import BT_FULL_ATTRIBUTE_RATIO, Label
from bagtree.models.sampling.sampler import sub_sample
from bagtree.utils import get_logger
from .attribute import AttributeStatistics
from .impurity import entropy, gini_impurity


@dataclass(frozen=True)
class Record:
    values: Tuple[int, ...]
    label: Label

    @classmethod
    def from_row(cls, row: Sequence[int]) -> "Record":
        """Builds a record from a raw row whose first entry is the class label."""
        return cls(values=tuple(int(v) for v in row[1:]), label=Label.from_value(row[0]))

    @property
    def num_attributes(self) -> int:
        return len(self.values)

    def value(self, attribute: int) -> int:
        return self.values[attribute]


class Dataset:
    """
    Table of discrete-attribute records with the statistics driving split selection.

    Everything is computed at construction and the dataset is not mutated afterwards,
    apart from `split_values`, recorded by the most recent call to `split`.

    The splitting criterion depends on `f_ratio`:
    - f_ratio == 1: gain ratio over all attributes, with attributes of below-average gain discarded
    - f_ratio < 1: reduction of Gini impurity, over a random pool of max(1, floor(f_ratio * num_attributes)) attributes
    """
    def __init__(self,
                 records: Sequence[Record],
                 f_ratio: float = BT_FULL_ATTRIBUTE_RATIO,
                 rng: Optional[np.random.Generator] = None):
        """
        :param records: the records of the dataset, in order
        :param f_ratio: ratio of attributes considered for splitting, 1 for the gain ratio criterion
        :param rng: random generator used for masking attributes, only drawn from when f_ratio < 1
        """
        self.logger = get_logger(self.__class__.__name__)

        self.records: Tuple[Record, ...] = tuple(records)
        if len(self.records) == 0:
            raise ValueError("Dataset requires at least one record")

        self.num_records = len(self.records)
        self.num_attributes = self.records[0].num_attributes
        if any(r.num_attributes != self.num_attributes for r in self.records):
            raise ValueError(f"All records must have {self.num_attributes} attributes")
        if self.num_attributes == 0:
            raise ValueError("Dataset requires at least one attribute")
        if not (0.0 < f_ratio <= 1.0):
            raise ValueError(f"f_ratio must be in (0, 1], got {f_ratio}")

        self.f_ratio = f_ratio
        self.split_values: Optional[Dict[int, int]] = None

        self.num_positive = sum(1 for r in self.records if r.label is Label.POSITIVE)
        self.num_negative = self.num_records - self.num_positive

        self.attributes = self._build_attributes()

        self.is_pure = self.num_positive * self.num_negative == 0 and self.num_records > 0
        if self.is_pure:
            self.label = self.records[0].label
        else:
            self.label = Label.POSITIVE if self.num_positive > self.num_negative else Label.NEGATIVE

        self.f = 0
        if f_ratio == BT_FULL_ATTRIBUTE_RATIO:
            self.split_attribute = self._max_gain_ratio_attribute()
        else:
            self.f = max(1, int(np.floor(f_ratio * self.num_attributes)))
            self.split_attribute = self._max_delta_gini_attribute(
                rng if rng is not None else np.random.default_rng())

    @classmethod
    def from_permutation(cls,
                         src: "Dataset",
                         indices: ArrayLike,
                         f_ratio: float = BT_FULL_ATTRIBUTE_RATIO,
                         rng: Optional[np.random.Generator] = None) -> "Dataset":
        """Creates a dataset holding the records of `src` selected by `indices`, in that order."""
        return cls([src.records[int(i)] for i in np.asarray(indices).ravel()], f_ratio=f_ratio, rng=rng)

    @classmethod
    def from_arrays(cls,
                    X: ArrayLike,
                    y: ArrayLike,
                    f_ratio: float = BT_FULL_ATTRIBUTE_RATIO,
                    rng: Optional[np.random.Generator] = None) -> "Dataset":
        X = np.asarray(X)
        y = np.asarray(y).ravel()

        if X.ndim != 2:
            raise ValueError(f"Input data must be a 2D array (n_samples, n_features). Got {X.shape}")
        if X.shape[0] != y.shape[0]:
            raise ValueError("Number of samples in data and labels must be the same")
        if not np.issubdtype(X.dtype, np.integer) and not np.all(np.equal(np.mod(X, 1), 0)):
            raise ValueError("Attribute values must be discrete integers")

        records = [Record(values=tuple(int(v) for v in row), label=Label.from_value(label))
                   for row, label in zip(X, y)]
        return cls(records, f_ratio=f_ratio, rng=rng)

    def _build_attributes(self) -> List[AttributeStatistics]:
        attributes = []
        for i in range(self.num_attributes):
            attribute = AttributeStatistics(self.num_records)
            for record in self.records:
                attribute.insert(record.values[i], record.label)
            attributes.append(attribute)
        return attributes

    def gains(self) -> np.ndarray:
        info = entropy(self.num_positive, self.num_negative)
        return np.array([info - a.info for a in self.attributes], dtype=float)

    def gain_ratios(self) -> np.ndarray:
        gains = self.gains()
        split_infos = np.array([a.split_info for a in self.attributes], dtype=float)

        ratios = np.full(self.num_attributes, -np.inf)
        usable = split_infos != 0.0
        ratios[usable] = gains[usable] / split_infos[usable]

        # discard attributes whose gain is below the average gain, equal gains never are
        mean_gain = np.mean(gains)
        ratios[(gains < mean_gain) & ~np.isclose(gains, mean_gain)] = -np.inf
        return ratios

    def delta_ginis(self) -> np.ndarray:
        gini = gini_impurity(self.num_positive, self.num_negative)
        return np.array([gini - a.gini for a in self.attributes], dtype=float)

    def _max_gain_ratio_attribute(self) -> int:
        ratios = self.gain_ratios()
        best = int(np.argmax(ratios))
        return -1 if ratios[best] == -np.inf else best

    def _max_delta_gini_attribute(self, rng: np.random.Generator) -> int:
        delta_ginis = self.delta_ginis()

        # only f attributes keep their delta Gini, the rest can never be selected
        mask = sub_sample(self.num_attributes, self.num_attributes - self.f, rng)
        delta_ginis[mask] = 0.

        best = int(np.argmax(delta_ginis))
        return -1 if delta_ginis[best] <= 0.0 else best

    def split(self, attribute: int) -> List[List[Record]]:
        """
        Partitions the records by their value of `attribute`, one partition per observed value.

        The partitions follow the value -> key index order of the attribute statistics,
        which is also recorded in `split_values`.

        :param int attribute: index of the attribute to split on
        :return List[List[Record]]: the partitions
        :raises RuntimeError: if a record holds a value the statistics never observed
        """
        statistics = self.attributes[attribute]
        split_values = statistics.keys
        partitions: List[List[Record]] = [[] for _ in range(statistics.num_keys)]

        for record in self.records:
            value = record.values[attribute]
            if value not in split_values:
                self.logger.error(f"Value {value} of attribute {attribute} missing from its statistics")
                raise RuntimeError(f"Attribute {attribute} has no statistics for value {value}")
            partitions[split_values[value]].append(record)

        self.split_values = split_values
        return partitions

    def __len__(self) -> int:
        return self.num_records

    def __iter__(self):
        return iter(self.records)

    def __repr__(self) -> str:
        return f"Dataset(num_records={self.num_records}, num_attributes={self.num_attributes}, " \
               f"num_positive={self.num_positive}, num_negative={self.num_negative}, f_ratio={self.f_ratio})"
