import pathlib
from typing import Any

import numpy as np
import pandas as pd

from bagtree.const import BT_FULL_ATTRIBUTE_RATIO, Label
from bagtree.decorators import time_func
from bagtree.models.tree.dataset import Dataset, Record
from bagtree.utils import get_logger


class RecordLoader(object):
    """
    Loads a dataset of labelled records from a text file.

    Each line holds whitespace-separated integers, the first being the class label (+1 or -1)
    and the rest the attribute values. Blank lines are skipped.
    """
    def __init__(self, **kwargs) -> None:
        self.init(**kwargs)

    def _process_dataset_path(self, dataset_path: Any) -> pathlib.Path:
        """
        Processes the dataset path such that:
        * the dataset path is set and not None
        * the dataset path is str or pathlib.Path
        * the dataset path is converted to absolute pathlib.Path and validated to exist

        :param Any dataset_path: The dataset path to process
        :return pathlib.Path: The processed dataset path
        :raises ValueError: If the dataset path is not set or does not exist
        """
        if dataset_path is None:
            self.logger.error("No dataset path provided.")
            raise ValueError("dataset_path is required")

        if not isinstance(dataset_path, (str, pathlib.Path)):
            self.logger.error("dataset_path must be a string or pathlib.Path.")
            raise TypeError("dataset_path must be a string or pathlib.Path")

        dataset_path = pathlib.Path(dataset_path).resolve()

        if not dataset_path.exists():
            self.logger.error(f"Dataset path does not exist: {dataset_path}")
            raise ValueError(f"Dataset path does not exist: {dataset_path}")

        return dataset_path

    def init(self, **kwargs) -> None:
        self.logger = get_logger(self.__class__.__name__)

        self.dataset_path = self._process_dataset_path(kwargs.get("dataset_path", None))

        # Ratio of attributes considered at each split, 1 selects the gain ratio criterion
        self.f_ratio = kwargs.get("f_ratio", BT_FULL_ATTRIBUTE_RATIO)
        assert isinstance(self.f_ratio, (int, float)), "f_ratio must be a number"
        assert 0.0 < self.f_ratio <= 1.0, "f_ratio must be in (0, 1]"

        # Seed of the generator used for attribute masking when f_ratio < 1
        self.seed = kwargs.get("seed", None)
        assert self.seed is None or isinstance(self.seed, int), "seed must be an integer"

    def _load_frame(self) -> pd.DataFrame:
        try:
            return pd.read_csv(self.dataset_path, sep=r"\s+", header=None, skip_blank_lines=True)
        except pd.errors.EmptyDataError:
            self.logger.error(f"Dataset file is empty: {self.dataset_path}")
            raise ValueError(f"Dataset file is empty: {self.dataset_path}")
        except pd.errors.ParserError as e:
            self.logger.error(f"Rows of {self.dataset_path} do not have the same number of columns: {e}")
            raise ValueError(f"Malformed dataset file {self.dataset_path}: {e}")
        except Exception as e:
            self.logger.error(f"An error occurred while loading the dataset: {e}")
            raise RuntimeError(f"Failed to load dataset from {self.dataset_path}: {e}")

    @time_func
    def load(self) -> Dataset:
        """
        Loads the dataset from the specified path.

        :return Dataset: The loaded dataset.
        :raises ValueError: if the file is empty, ragged, non-integer or holds unsupported labels.
        :raises RuntimeError: if something wrong happens when reading the file.
        """
        self.logger.info(f"Loading dataset from path: {self.dataset_path}")
        df = self._load_frame()

        if df.shape[1] < 2:
            raise ValueError(f"Dataset rows need a label and at least one attribute, got {df.shape[1]} column(s)")
        if df.isna().any().any():
            raise ValueError(f"Rows of {self.dataset_path} do not have the same number of columns")
        if not all(pd.api.types.is_integer_dtype(df[col]) for col in df.columns):
            raise ValueError(f"Dataset {self.dataset_path} must only hold integers")

        labels = df.iloc[:, 0].to_numpy()
        unknown = sorted(set(np.unique(labels).tolist()) - {label.value for label in Label})
        if unknown:
            self.logger.error(f"Unsupported class labels {unknown} in {self.dataset_path}")
            raise ValueError(f"Unsupported class labels {unknown}, expected +1 or -1")

        records = [Record.from_row(row) for row in df.itertuples(index=False, name=None)]
        self.logger.info(f"Loaded {len(records)} records with {df.shape[1] - 1} attributes")

        rng = np.random.default_rng(self.seed)
        return Dataset(records, f_ratio=self.f_ratio, rng=rng)
