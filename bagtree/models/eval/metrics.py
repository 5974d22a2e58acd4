def _ratio(numerator: float, denominator: float) -> float:
    return float(numerator / denominator) if denominator > 0 else 0.0


def accuracy_score(tp: int, tn: int, fp: int, fn: int) -> float:
    """
    Computes the accuracy, the fraction of correctly labelled records.

    :param int tp: The number of true positives.
    :param int tn: The number of true negatives.
    :param int fp: The number of false positives.
    :param int fn: The number of false negatives.
    :return float: The accuracy, 0.0 for an empty confusion matrix.
    """
    return _ratio(tp + tn, tp + tn + fp + fn)


def error_rate(tp: int, tn: int, fp: int, fn: int) -> float:
    """
    Computes the error rate, the fraction of mislabelled records.

    :param int tp: The number of true positives.
    :param int tn: The number of true negatives.
    :param int fp: The number of false positives.
    :param int fn: The number of false negatives.
    :return float: The error rate, 0.0 for an empty confusion matrix.
    """
    return _ratio(fp + fn, tp + tn + fp + fn)


def sensitivity_score(tp: int, fn: int) -> float:
    """
    Computes the sensitivity (true positive rate), equal to the recall for binary labels.

    :param int tp: The number of true positives.
    :param int fn: The number of false negatives.
    :return float: The sensitivity, 0.0 when there are no actual positives.
    """
    return _ratio(tp, tp + fn)


def specificity_score(tn: int, fp: int) -> float:
    """
    Computes the specificity (true negative rate).

    :param int tn: The number of true negatives.
    :param int fp: The number of false positives.
    :return float: The specificity, 0.0 when there are no actual negatives.
    """
    return _ratio(tn, tn + fp)


def precision_score(tp: int, fp: int) -> float:
    """
    Computes the precision.

    :param int tp: The number of true positives.
    :param int fp: The number of false positives.
    :return float: The precision, 0.0 when nothing was predicted positive.
    """
    return _ratio(tp, tp + fp)


def recall_score(tp: int, fn: int) -> float:
    """
    Computes the recall.

    :param int tp: The number of true positives.
    :param int fn: The number of false negatives.
    :return float: The recall, 0.0 when there are no actual positives.
    """
    return _ratio(tp, tp + fn)


def fbeta_score(tp: int, fp: int, fn: int, beta: float) -> float:
    """
    Computes the F-beta score.

    :param int tp: The number of true positives.
    :param int fp: The number of false positives.
    :param int fn: The number of false negatives.
    :param float beta: The beta parameter weighting recall vs precision.
    :return float: The F-beta score, 0.0 when precision and recall are both 0.
    """
    precision = precision_score(tp, fp)
    recall = recall_score(tp, fn)
    return _ratio((1 + beta**2) * precision * recall, (beta**2 * precision) + recall)
