import json
import pathlib
from typing import Any, Dict, Mapping, Optional

from bagtree.data.factory import build_loader
from bagtree.decorators import time_func
from bagtree.models.eval.evaluator import ConfusionMatrix, Evaluator
from bagtree.models.factory import build_classifier
from bagtree.utils import get_logger


class ExperimentRunner:
    """
    Trains one classifier on a training file and evaluates it on a test file.

    model_config: 'model_name', optional 'params', 'metrics_path' (directory for a JSON dump of the metrics)
        and 'log_path' (rotating log file of the run)
    data_config: 'train_path', 'test_path' and optional 'seed'
    """
    def __init__(self, model_config: Dict[str, Any], data_config: Dict[str, Any]) -> None:
        self._model_name = model_config.get("model_name", None)
        self._model = build_classifier(model_config)

        log_path = model_config.get("log_path", None)
        self.logger = get_logger(
            f"{self.__class__.__name__}.{self._model.__class__.__name__}",
            log_path=pathlib.Path(log_path) if log_path is not None else None,
        )

        self._metrics_path = model_config.get("metrics_path", None)
        assert self._metrics_path is None or isinstance(
            self._metrics_path, (str, pathlib.Path)
        ), "metrics_path must be a string or pathlib.Path"
        self._metrics_path = (
            (pathlib.Path(self._metrics_path) / f"{self._model_name}_metrics.json")
            if self._metrics_path is not None
            else None
        )

        self._train_path = data_config.get("train_path", None)
        self._test_path = data_config.get("test_path", None)
        assert self._train_path is not None, "train_path is required"
        assert self._test_path is not None, "test_path is required"
        self._seed = data_config.get("seed", None)

        self._matrix: Optional[ConfusionMatrix] = None

    @property
    def model(self):
        return self._model

    @property
    def matrix(self) -> Optional[ConfusionMatrix]:
        return self._matrix

    def _save_metrics(self, metrics: Mapping[str, float]) -> None:
        if not self._metrics_path:
            return

        if not self._metrics_path.parent.exists():
            self.logger.warning(f"Metrics path parent directory does not exist, creating it: {self._metrics_path.parent}")
            self._metrics_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self._metrics_path, "w") as f:
            json.dump(dict(metrics), f, indent=4)
        self.logger.info(f"Metrics saved to {self._metrics_path}")

    @time_func
    def run(self) -> ConfusionMatrix:
        train = build_loader({"dataset_path": self._train_path, "seed": self._seed}).load()
        test = build_loader({"dataset_path": self._test_path, "seed": self._seed}).load()

        self.logger.info(f"Training {self._model_name} on {train.num_records} records")
        self._model.fit_dataset(train)

        self._matrix = Evaluator(self._model).evaluate(test)
        metrics = self._matrix.as_dict()
        self.logger.info(f"Metrics of {self._model_name}: {metrics}")

        self._save_metrics(metrics)
        return self._matrix
