import pytest

from bagtree.const import Label
from bagtree.models.eval.evaluator import ConfusionMatrix, Evaluator, format_report
from bagtree.models.tree.dataset import Dataset
from bagtree.models.tree.tree import DecisionTree
from conftest import make_records

P, N = Label.POSITIVE, Label.NEGATIVE


def test_confusion_matrix_from_pairs():
    pairs = [(P, P), (P, P), (P, N), (N, N), (N, P), (N, N), (N, N)]
    matrix = ConfusionMatrix.from_pairs(pairs)

    assert (matrix.tp, matrix.tn, matrix.fp, matrix.fn) == (2, 3, 1, 1)
    assert matrix.positives == 3
    assert matrix.negatives == 4


def test_derived_measures():
    matrix = ConfusionMatrix(tp=6, tn=3, fp=2, fn=1)

    assert matrix.accuracy == pytest.approx(9 / 12)
    assert matrix.error_rate == pytest.approx(3 / 12)
    assert matrix.sensitivity == pytest.approx(6 / 7)
    assert matrix.specificity == pytest.approx(3 / 5)
    assert matrix.precision == pytest.approx(6 / 8)
    assert matrix.recall == pytest.approx(6 / 7)

    precision, recall = 6 / 8, 6 / 7
    assert matrix.fbeta(1.0) == pytest.approx(2 * precision * recall / (precision + recall))
    assert matrix.fbeta(2.0) == pytest.approx(5 * precision * recall / (4 * precision + recall))


def test_undefined_measures_are_zero():
    matrix = ConfusionMatrix(tp=0, tn=4, fp=0, fn=0)

    assert matrix.accuracy == 1.0
    assert matrix.precision == 0.0
    assert matrix.recall == 0.0
    assert matrix.fbeta(1.0) == 0.0
    assert ConfusionMatrix().accuracy == 0.0


def test_as_dict_keys():
    metrics = ConfusionMatrix(tp=1, tn=1, fp=1, fn=1).as_dict()
    assert {"tp", "tn", "fp", "fn", "accuracy", "error_rate", "f1", "f0.5", "f2"} <= set(metrics)


def test_short_report_lists_counts():
    assert format_report(ConfusionMatrix(tp=5, tn=4, fp=3, fn=2)) == "5\n4\n3\n2\n"


def test_full_report():
    report = format_report(ConfusionMatrix(tp=5, tn=4, fp=3, fn=2), full=True)

    assert "True Positive: 5" in report
    assert "Error Rate: " in report
    assert "F-0.5: " in report
    assert report.rstrip().endswith("\\\\")
    assert report.rstrip().splitlines()[-1].startswith("0.643 & 0.357 & ")


def test_evaluator_on_held_out_dataset(separable_rows):
    train = Dataset(make_records(separable_rows))
    test = Dataset(make_records([(1, 0, 5), (-1, 1, 5), (-1, 0, 0)]))
    evaluator = Evaluator(DecisionTree().fit_dataset(train))

    assert evaluator.predictions(test) == [(P, P), (N, N), (P, N)]

    matrix = evaluator.evaluate(test)
    assert (matrix.tp, matrix.tn, matrix.fp, matrix.fn) == (1, 1, 1, 0)

    frame = evaluator.predictions_frame(test)
    assert list(frame.columns) == ["predicted", "actual"]
    assert frame["predicted"].tolist() == [1, -1, 1]

    assert evaluator.score(test)["accuracy"] == pytest.approx(2 / 3)
