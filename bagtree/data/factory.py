from typing import Any, Dict

from bagtree.data.loader._base import RecordLoader


SUPPORTED_DATASET_TYPES: set[str] = {"records"}


def build_loader(config: Dict[str, Any]) -> RecordLoader:
    """
    Factory function to build a data loader based on the provided configuration.

    :param config: A dictionary containing configuration parameters for the loader.
    :return: An instance of a RecordLoader.
    """
    if config is None or not isinstance(config, dict):
        raise TypeError("Loader config must be provided and of type dictionary")

    loader_type = config.get("dataset_type", "records")

    # NOTE: whitespace-separated integer records are the only supported format for now
    if loader_type == "records":
        return RecordLoader(**config)
    else:
        raise ValueError(f"Unsupported loader type: {loader_type}. Supported types: {SUPPORTED_DATASET_TYPES}.")
