from .ensemble.bagging import BaggingEnsemble
from .ensemble.forest import RandomForestEnsemble
from .tree.dataset import Dataset, Record
from .tree.tree import DecisionTree

__all__ = ["BaggingEnsemble", "RandomForestEnsemble", "Dataset", "Record", "DecisionTree"]
