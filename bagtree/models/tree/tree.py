from typing import Optional

import numpy as np
from numpy.typing import ArrayLike
from sklearn.base import BaseEstimator, ClassifierMixin
from sklearn.exceptions import NotFittedError

from bagtree.const import BT_FULL_ATTRIBUTE_RATIO, Label
from bagtree.decorators import time_func
from bagtree.utils import get_logger
from .dataset import Dataset, Record
from .node import Node, grow


class DecisionTree(ClassifierMixin, BaseEstimator):
    """
    Multiway decision tree over discrete attributes, for binary {+1, -1} labels.

    With f_ratio == 1 every split maximises the gain ratio over all attributes (C4.5 style),
    otherwise every split maximises the Gini reduction over a random pool of attributes.
    Used on its own and as the base estimator of the bagging and random forest ensembles.
    """
    def __init__(self, f_ratio: float = BT_FULL_ATTRIBUTE_RATIO, seed: Optional[int] = None):
        self.f_ratio = f_ratio
        self.seed = seed

    @property
    def logger(self):
        return get_logger(self.__class__.__name__)

    @time_func
    def fit(self, X: ArrayLike, y: ArrayLike) -> "DecisionTree":
        rng = np.random.default_rng(self.seed)
        return self.fit_dataset(Dataset.from_arrays(X, y, f_ratio=self.f_ratio, rng=rng), rng=rng)

    def fit_dataset(self, data: Dataset, rng: Optional[np.random.Generator] = None) -> "DecisionTree":
        """
        Grows the tree from an already built dataset.

        The dataset is rebuilt when it was constructed with a different f_ratio than the tree's.
        """
        rng = rng if rng is not None else np.random.default_rng(self.seed)
        if data.f_ratio != self.f_ratio:
            data = Dataset(data.records, f_ratio=self.f_ratio, rng=rng)

        self.root_: Node = grow(data, rng)
        self.n_features_in_ = data.num_attributes
        self.classes_ = np.array([Label.NEGATIVE.value, Label.POSITIVE.value], dtype=int)
        return self

    def query(self, record: Record) -> Label:
        self._check_fitted()
        return self.root_.query(record.values)

    def predict(self, X: ArrayLike) -> np.ndarray:
        self._check_fitted()

        X = np.asarray(X)
        if X.ndim == 1:
            X = X.reshape(1, -1)

        if X.shape[1] != self.n_features_in_:
            raise ValueError(
                f"X has {X.shape[1]} features, but this model was fitted with {self.n_features_in_} features")

        return np.asarray([self.root_.query(tuple(int(v) for v in x)).value for x in X], dtype=int)

    @property
    def depth(self) -> int:
        self._check_fitted()
        return self.root_.depth

    @property
    def n_leaves(self) -> int:
        self._check_fitted()
        return self.root_.n_leaves

    def _check_fitted(self):
        if not hasattr(self, "root_") or self.root_ is None:
            raise NotFittedError("Estimator not fitted. "
                                 "Call fit with appropriate input data before using this estimator.")
