from typing import Optional

from bagtree.const import (
    BT_DEFAULT_FOREST_F_RATIO,
    BT_DEFAULT_N_TREES,
    BT_DEFAULT_RATIO_CLAMP,
    BT_FULL_ATTRIBUTE_RATIO,
    BT_RATIO_CLAMPS,
)
from .bagging import BaggingEnsemble


class RandomForestEnsemble(BaggingEnsemble):
    """
    Random forest binary classifier: bagging where every split of every member tree
    maximises the Gini reduction over a random pool of max(1, floor(f_ratio * num_attributes)) attributes.

    `ratio_clamp` picks how f_ratio is bounded before training:
    - "upper": min(f_ratio, 1), the attribute restriction is kept for any ratio below 1
    - "lower": max(f_ratio, 1), every ratio becomes 1 and members degenerate to gain ratio trees
    """
    def __init__(self,
                 n_trees: int = BT_DEFAULT_N_TREES,
                 f_ratio: float = BT_DEFAULT_FOREST_F_RATIO,
                 ratio_clamp: str = BT_DEFAULT_RATIO_CLAMP,
                 seed: Optional[int] = None,
                 n_jobs: Optional[int] = None):
        super().__init__(n_trees=n_trees, seed=seed, n_jobs=n_jobs)
        self.f_ratio = f_ratio
        self.ratio_clamp = ratio_clamp

    def _member_f_ratio(self) -> float:
        if self.ratio_clamp not in BT_RATIO_CLAMPS:
            raise ValueError(f"ratio_clamp must be one of {sorted(BT_RATIO_CLAMPS)}, got {self.ratio_clamp!r}")
        if self.f_ratio <= 0.0:
            raise ValueError(f"f_ratio must be positive, got {self.f_ratio}")

        if self.ratio_clamp == "lower":
            return max(self.f_ratio, BT_FULL_ATTRIBUTE_RATIO)
        return min(self.f_ratio, BT_FULL_ATTRIBUTE_RATIO)
