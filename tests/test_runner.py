import json
import logging
from logging.handlers import RotatingFileHandler

import pytest

from bagtree.__main__ import main
from bagtree.models.ensemble.forest import RandomForestEnsemble
from bagtree.models.experiments.runner import ExperimentRunner
from bagtree.models.factory import build_classifier
from bagtree.models.tree.tree import DecisionTree


def test_build_classifier():
    assert isinstance(build_classifier({"model_name": "tree"}), DecisionTree)

    forest = build_classifier({"model_name": "forest", "params": {"n_trees": 4, "f_ratio": 0.5}})
    assert isinstance(forest, RandomForestEnsemble)
    assert forest.n_trees == 4


@pytest.mark.parametrize("config, error", [
    (None, TypeError),
    ({}, ValueError),
    ({"model_name": "svm"}, ValueError),
    ({"model_name": "tree", "params": {"max_depth": 3}}, ValueError),
    ({"model_name": "tree", "params": [1]}, TypeError),
])
def test_build_classifier_rejects_bad_config(config, error):
    with pytest.raises(error):
        build_classifier(config)


def test_runner_writes_metrics(write_records, separable_rows, tmp_path):
    train = write_records("train.txt", separable_rows)
    test = write_records("test.txt", separable_rows)

    runner = ExperimentRunner(
        model_config={"model_name": "tree", "metrics_path": str(tmp_path / "metrics")},
        data_config={"train_path": str(train), "test_path": str(test)},
    )
    matrix = runner.run()

    assert matrix.accuracy == 1.0
    metrics = json.loads((tmp_path / "metrics" / "tree_metrics.json").read_text())
    assert metrics["tp"] == 2
    assert metrics["accuracy"] == 1.0


def test_cli_tree_prints_counts(write_records, separable_rows, capsys):
    train = write_records("train.txt", separable_rows)

    assert main(["tree", str(train), str(train)]) == 0
    assert capsys.readouterr().out.split() == ["2", "2", "0", "0"]


def test_cli_bagging_full_report(write_records, separable_rows, capsys):
    train = write_records("train.txt", separable_rows * 5)

    assert main(["bagging", "5", str(train), str(train), "--full", "--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert "True Positive: " in out
    assert "F-2: " in out


def test_cli_forest(write_records, separable_rows, capsys):
    train = write_records("train.txt", separable_rows * 5)

    assert main(["forest", str(train), str(train), "--k", "3", "--f-ratio", "0.5", "--seed", "2"]) == 0
    counts = [int(v) for v in capsys.readouterr().out.split()]
    assert sum(counts) == 20


@pytest.fixture
def detach_file_handlers():
    yield
    for name in ("ExperimentRunner.DecisionTree", "ExperimentRunner.BaggingEnsemble"):
        logger = logging.getLogger(name)
        for handler in [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]:
            logger.removeHandler(handler)
            handler.close()


def test_runner_writes_log_file(write_records, separable_rows, tmp_path, detach_file_handlers):
    train = write_records("train.txt", separable_rows)
    log_path = tmp_path / "logs" / "run.log"

    runner = ExperimentRunner(
        model_config={"model_name": "tree", "log_path": str(log_path)},
        data_config={"train_path": str(train), "test_path": str(train)},
    )
    runner.run()

    assert "Training tree on 4 records" in log_path.read_text()


def test_runner_attaches_one_handler_per_log_file(write_records, separable_rows, tmp_path, detach_file_handlers):
    train = write_records("train.txt", separable_rows)
    config = {"model_name": "tree", "log_path": str(tmp_path / "run.log")}
    data_config = {"train_path": str(train), "test_path": str(train)}

    first = ExperimentRunner(model_config=config, data_config=data_config)
    second = ExperimentRunner(model_config=config, data_config=data_config)

    assert first.logger is second.logger
    assert sum(isinstance(h, RotatingFileHandler) for h in first.logger.handlers) == 1


def test_cli_log_path(write_records, separable_rows, tmp_path, capsys, detach_file_handlers):
    train = write_records("train.txt", separable_rows * 5)
    log_path = tmp_path / "bagging.log"

    assert main(["bagging", "3", str(train), str(train), "--seed", "1", "--log-path", str(log_path)]) == 0
    assert "Metrics of bagging" in log_path.read_text()
