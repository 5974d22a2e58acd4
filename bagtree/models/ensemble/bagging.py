from typing import List, Optional

import numpy as np
from joblib import Parallel, delayed
from numpy.typing import ArrayLike
from sklearn.base import BaseEstimator, ClassifierMixin
from sklearn.exceptions import NotFittedError

from bagtree.const import BT_DEFAULT_N_TREES, BT_FULL_ATTRIBUTE_RATIO, BT_VOTE_WEIGHTS, Label
from bagtree.decorators import time_func
from bagtree.models.sampling.sampler import Sampler
from bagtree.models.tree.dataset import Dataset, Record
from bagtree.models.tree.tree import DecisionTree
from bagtree.utils import get_logger


def _train_member(data: Dataset,
                  indices: np.ndarray,
                  f_ratio: float,
                  seed: np.random.SeedSequence) -> DecisionTree:
    rng = np.random.default_rng(seed)
    sample = Dataset.from_permutation(data, indices, f_ratio=f_ratio, rng=rng)
    return DecisionTree(f_ratio=f_ratio).fit_dataset(sample, rng=rng)


class BaggingEnsemble(ClassifierMixin, BaseEstimator):
    """
    Bagging binary classifier: n_trees gain ratio decision trees, each grown on a bootstrap
    resample of the training data, combined by majority vote.

    Ties in the vote go to the positive label.
    """
    def __init__(self, n_trees: int = BT_DEFAULT_N_TREES, seed: Optional[int] = None, n_jobs: Optional[int] = None):
        self.n_trees = n_trees
        self.seed = seed
        self.n_jobs = n_jobs

    @property
    def logger(self):
        return get_logger(self.__class__.__name__)

    def _member_f_ratio(self) -> float:
        return BT_FULL_ATTRIBUTE_RATIO

    @time_func
    def fit(self, X: ArrayLike, y: ArrayLike) -> "BaggingEnsemble":
        return self.fit_dataset(Dataset.from_arrays(X, y))

    def fit_dataset(self, data: Dataset) -> "BaggingEnsemble":
        if not isinstance(self.n_trees, (int, np.integer)) or self.n_trees < 1:
            raise ValueError(f"n_trees must be a positive integer, got {self.n_trees}")

        f_ratio = self._member_f_ratio()

        # bootstrap indices come from the parent sequence, each member gets its own child for attribute masking
        bootstrap_seed, *member_seeds = np.random.SeedSequence(self.seed).spawn(self.n_trees + 1)
        sampler = Sampler(bootstrap_seed)
        samples = [sampler.bootstrap(data.num_records) for _ in range(self.n_trees)]

        self.logger.info(f"Training {self.n_trees} trees on {data.num_records} records with f_ratio={f_ratio}")

        self.trees_: List[DecisionTree] = Parallel(n_jobs=self.n_jobs)(
            delayed(_train_member)(data, indices, f_ratio, seed)
            for indices, seed in zip(samples, member_seeds)
        )
        self.n_features_in_ = data.num_attributes
        self.classes_ = np.array([Label.NEGATIVE.value, Label.POSITIVE.value], dtype=int)
        return self

    def vote_sum(self, values) -> int:
        return sum(BT_VOTE_WEIGHTS[tree.root_.query(values)] for tree in self.trees_)

    def query(self, record: Record) -> Label:
        self._check_fitted()
        return Label.POSITIVE if self.vote_sum(record.values) >= 0 else Label.NEGATIVE

    def predict(self, X: ArrayLike) -> np.ndarray:
        self._check_fitted()

        X = np.asarray(X)
        if X.ndim == 1:
            X = X.reshape(1, -1)

        if X.shape[1] != self.n_features_in_:
            raise ValueError(
                f"X has {X.shape[1]} features, but this model was fitted with {self.n_features_in_} features")

        preds = [Label.POSITIVE.value if self.vote_sum(tuple(int(v) for v in x)) >= 0 else Label.NEGATIVE.value
                 for x in X]
        return np.asarray(preds, dtype=int)

    def _check_fitted(self):
        if not hasattr(self, "trees_") or self.trees_ is None or len(self.trees_) == 0:
            raise NotFittedError("Estimator not fitted. "
                                 "Call fit with appropriate input data before using this estimator.")
