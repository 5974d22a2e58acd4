import numpy as np
import pytest
from sklearn.exceptions import NotFittedError

from bagtree.const import Label
from bagtree.models.ensemble.bagging import BaggingEnsemble
from bagtree.models.ensemble.forest import RandomForestEnsemble
from bagtree.models.tree.dataset import Dataset, Record
from bagtree.models.tree.node import LeafNode
from bagtree.models.tree.tree import DecisionTree
from conftest import make_records


def _rule_data(seed=0, n=120):
    rng = np.random.default_rng(seed)
    X = rng.integers(0, 3, size=(n, 5))
    y = np.where((X[:, 1] == 2) | (X[:, 4] == 0), 1, -1)
    return X, y


def test_bagging_with_constant_attribute_predicts_majority():
    rows = [(-1, 0)] * 90 + [(1, 0)] * 10
    data = Dataset(make_records(rows))
    bag = BaggingEnsemble(n_trees=5, seed=1).fit_dataset(data)

    assert len(bag.trees_) == 5
    assert all(isinstance(tree.root_, LeafNode) for tree in bag.trees_)
    assert bag.query(Record(values=(0,), label=Label.POSITIVE)) is Label.NEGATIVE
    assert bag.query(Record(values=(3,), label=Label.POSITIVE)) is Label.NEGATIVE


def test_bagging_members_use_gain_ratio_trees(separable_rows):
    bag = BaggingEnsemble(n_trees=3, seed=0).fit_dataset(Dataset(make_records(separable_rows)))
    assert all(tree.f_ratio == 1.0 for tree in bag.trees_)


def test_vote_ties_go_to_positive():
    positive = DecisionTree().fit_dataset(Dataset([Record(values=(0,), label=Label.POSITIVE)]))
    negative = DecisionTree().fit_dataset(Dataset([Record(values=(0,), label=Label.NEGATIVE)]))

    bag = BaggingEnsemble(n_trees=2)
    bag.trees_ = [positive, negative]
    bag.n_features_in_ = 1

    assert bag.vote_sum((0,)) == 0
    assert bag.query(Record(values=(0,), label=Label.NEGATIVE)) is Label.POSITIVE
    np.testing.assert_array_equal(bag.predict(np.array([[0]])), [1])


def test_bagging_fit_predict():
    X, y = _rule_data()
    bag = BaggingEnsemble(n_trees=7, seed=4).fit(X, y)

    preds = bag.predict(X)
    assert preds.shape == y.shape
    assert set(np.unique(preds)) <= {-1, 1}
    assert bag.score(X, y) > 0.8


def test_bagging_is_reproducible_across_n_jobs():
    X, y = _rule_data(seed=2)

    sequential = BaggingEnsemble(n_trees=4, seed=9, n_jobs=1).fit(X, y)
    parallel = BaggingEnsemble(n_trees=4, seed=9, n_jobs=2).fit(X, y)

    np.testing.assert_array_equal(sequential.predict(X), parallel.predict(X))


def test_invalid_n_trees_is_rejected(separable_rows):
    with pytest.raises(ValueError):
        BaggingEnsemble(n_trees=0).fit_dataset(Dataset(make_records(separable_rows)))


def test_unfitted_ensemble_raises():
    with pytest.raises(NotFittedError):
        BaggingEnsemble().predict(np.array([[0]]))


def test_forest_upper_clamp_keeps_ratio():
    X, y = _rule_data(seed=3)
    forest = RandomForestEnsemble(n_trees=5, f_ratio=0.4, seed=0).fit(X, y)

    assert all(tree.f_ratio == 0.4 for tree in forest.trees_)
    assert set(np.unique(forest.predict(X))) <= {-1, 1}


def test_forest_upper_clamp_caps_ratio_at_one():
    assert RandomForestEnsemble(f_ratio=3.0, ratio_clamp="upper")._member_f_ratio() == 1.0


def test_forest_lower_clamp_degenerates_to_gain_ratio_trees():
    X, y = _rule_data(seed=3)
    forest = RandomForestEnsemble(n_trees=3, f_ratio=0.2, ratio_clamp="lower", seed=0).fit(X, y)

    assert forest._member_f_ratio() == 1.0
    assert all(tree.f_ratio == 1.0 for tree in forest.trees_)


def test_forest_rejects_invalid_configuration(separable_rows):
    data = Dataset(make_records(separable_rows))
    with pytest.raises(ValueError):
        RandomForestEnsemble(ratio_clamp="sideways").fit_dataset(data)
    with pytest.raises(ValueError):
        RandomForestEnsemble(f_ratio=0.0).fit_dataset(data)


def test_forest_is_reproducible_with_seed():
    X, y = _rule_data(seed=6)

    first = RandomForestEnsemble(n_trees=6, f_ratio=0.4, seed=21).fit(X, y)
    second = RandomForestEnsemble(n_trees=6, f_ratio=0.4, seed=21).fit(X, y)

    np.testing.assert_array_equal(first.predict(X), second.predict(X))


def test_forest_exposes_sklearn_params():
    params = RandomForestEnsemble(n_trees=3, f_ratio=0.3).get_params()
    assert params == {"n_trees": 3, "f_ratio": 0.3, "ratio_clamp": "upper", "seed": None, "n_jobs": None}
