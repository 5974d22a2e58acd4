from typing import Any, Dict, Type

from sklearn.base import BaseEstimator

from bagtree.models.ensemble.bagging import BaggingEnsemble
from bagtree.models.ensemble.forest import RandomForestEnsemble
from bagtree.models.tree.tree import DecisionTree


# "model_name": model_class
BT_MODEL_REGISTRY: dict[str, Type[BaseEstimator]] = {
    "tree": DecisionTree,
    "bagging": BaggingEnsemble,
    "forest": RandomForestEnsemble,
}


def build_classifier(config: Dict[str, Any]) -> BaseEstimator:
    """
    Factory function to build a classifier based on the provided configuration.

    :param config: A dictionary with the required 'model_name' key and an optional 'params' dictionary.
    :return: An unfitted classifier.
    """
    if config is None or not isinstance(config, dict):
        raise TypeError("Model config must be provided and of type dictionary")

    model_name = config.get("model_name", None)
    if model_name is None:
        raise ValueError(f"Model config missing required 'model_name' key. Supported values: {list(BT_MODEL_REGISTRY)}")
    if model_name not in BT_MODEL_REGISTRY:
        raise ValueError(f"Unsupported model: {model_name}. Supported models: {list(BT_MODEL_REGISTRY)}")

    params = config.get("params", {})
    if not isinstance(params, dict):
        raise TypeError("params must be a dictionary")

    model_cls = BT_MODEL_REGISTRY[model_name]
    valid_params = model_cls().get_params()
    unknown = set(params) - set(valid_params)
    if unknown:
        raise ValueError(f"Unknown parameters {sorted(unknown)} for model '{model_name}'. "
                         f"Valid parameters: {sorted(valid_params)}")

    return model_cls(**params)
