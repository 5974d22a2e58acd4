from dataclasses import dataclass
from typing import List, Mapping, Protocol, Tuple

import pandas as pd

import bagtree.models.eval.metrics as em
from bagtree.const import BT_REPORT_F_BETAS, BT_REPORT_NUM_DECIMALS, Label
from bagtree.decorators import time_func
from bagtree.models.tree.dataset import Dataset, Record
from bagtree.utils import get_logger


class Classifier(Protocol):
    def query(self, record: Record) -> Label:
        ...


@dataclass(frozen=True)
class ConfusionMatrix:
    tp: int = 0
    tn: int = 0
    fp: int = 0
    fn: int = 0

    @classmethod
    def from_pairs(cls, pairs: List[Tuple[Label, Label]]) -> "ConfusionMatrix":
        """Tallies (predicted, actual) label pairs."""
        tp = tn = fp = fn = 0
        for predicted, actual in pairs:
            if predicted is Label.POSITIVE:
                if actual is Label.POSITIVE:
                    tp += 1
                else:
                    fp += 1
            else:
                if actual is Label.NEGATIVE:
                    tn += 1
                else:
                    fn += 1
        return cls(tp=tp, tn=tn, fp=fp, fn=fn)

    @property
    def positives(self) -> int:
        return self.tp + self.fn

    @property
    def negatives(self) -> int:
        return self.tn + self.fp

    @property
    def accuracy(self) -> float:
        return em.accuracy_score(self.tp, self.tn, self.fp, self.fn)

    @property
    def error_rate(self) -> float:
        return em.error_rate(self.tp, self.tn, self.fp, self.fn)

    @property
    def sensitivity(self) -> float:
        return em.sensitivity_score(self.tp, self.fn)

    @property
    def specificity(self) -> float:
        return em.specificity_score(self.tn, self.fp)

    @property
    def precision(self) -> float:
        return em.precision_score(self.tp, self.fp)

    @property
    def recall(self) -> float:
        return em.recall_score(self.tp, self.fn)

    def fbeta(self, beta: float) -> float:
        return em.fbeta_score(self.tp, self.fp, self.fn, beta)

    def as_dict(self) -> Mapping[str, float]:
        metrics = {
            "tp": self.tp,
            "tn": self.tn,
            "fp": self.fp,
            "fn": self.fn,
            "accuracy": self.accuracy,
            "error_rate": self.error_rate,
            "sensitivity": self.sensitivity,
            "specificity": self.specificity,
            "precision": self.precision,
            "recall": self.recall,
        }
        for beta in BT_REPORT_F_BETAS:
            metrics[f"f{beta:g}"] = self.fbeta(beta)
        return metrics


def format_report(matrix: ConfusionMatrix, full: bool = False) -> str:
    """
    Renders a confusion matrix for the console.

    The short form lists TP, TN, FP and FN one per line. The full form adds every
    derived measure, followed by a single '&'-separated row ready for a LaTeX table.
    """
    if not full:
        return f"{matrix.tp}\n{matrix.tn}\n{matrix.fp}\n{matrix.fn}\n"

    lines = [
        f"True Positive: {matrix.tp}",
        f"True Negative: {matrix.tn}",
        f"False Positive: {matrix.fp}",
        f"False Negative: {matrix.fn}",
        f"Accuracy: {matrix.accuracy}",
        f"Error Rate: {matrix.error_rate}",
        f"Sensitivity: {matrix.sensitivity}",
        f"Specificity: {matrix.specificity}",
        f"Precision: {matrix.precision}",
        f"Recall: {matrix.recall}",
    ]
    lines += [f"F-{beta:g}: {matrix.fbeta(beta)}" for beta in BT_REPORT_F_BETAS]

    row = [matrix.accuracy, matrix.error_rate, matrix.sensitivity, matrix.specificity,
           matrix.precision, matrix.recall] + [matrix.fbeta(beta) for beta in BT_REPORT_F_BETAS]
    table_row = " & ".join(f"{value:.{BT_REPORT_NUM_DECIMALS}f}" for value in row) + " \\\\"

    return "\n".join(lines) + "\n\n" + table_row + "\n"


class Evaluator:
    """Runs a trained classifier over a held-out dataset and tallies its confusion matrix."""

    def __init__(self, classifier: Classifier) -> None:
        self.logger = get_logger(self.__class__.__name__)
        self.classifier = classifier

    def predictions(self, data: Dataset) -> List[Tuple[Label, Label]]:
        return [(self.classifier.query(record), record.label) for record in data]

    def predictions_frame(self, data: Dataset) -> pd.DataFrame:
        pairs = self.predictions(data)
        return pd.DataFrame({
            "predicted": [predicted.value for predicted, _ in pairs],
            "actual": [actual.value for _, actual in pairs],
        })

    @time_func
    def evaluate(self, data: Dataset) -> ConfusionMatrix:
        matrix = ConfusionMatrix.from_pairs(self.predictions(data))
        self.logger.info(f"Evaluated {data.num_records} records: TP={matrix.tp} TN={matrix.tn} "
                         f"FP={matrix.fp} FN={matrix.fn}, accuracy {matrix.accuracy:.4f}")
        return matrix

    def score(self, data: Dataset) -> Mapping[str, float]:
        return self.evaluate(data).as_dict()
