from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Union

import numpy as np

from bagtree.const import Label
from .dataset import Dataset


@dataclass
class LeafNode:
    """Terminal node, predicts the majority (or only) label of the records that reached it."""
    label: Label

    def query(self, values: Sequence[int]) -> Label:
        return self.label

    @property
    def depth(self) -> int:
        return 1

    @property
    def n_leaves(self) -> int:
        return 1


@dataclass
class InternalNode:
    """
    Decision node with one child per value of the split attribute observed during training.

    Values never observed during training fall back to the majority label of the node.
    """
    split_attribute: int
    value_to_child: Dict[int, int]
    label: Label
    children: List["Node"] = field(default_factory=list)

    def query(self, values: Sequence[int]) -> Label:
        child_index = self.value_to_child.get(values[self.split_attribute])
        if child_index is None:
            return self.label
        return self.children[child_index].query(values)

    @property
    def depth(self) -> int:
        return 1 + max(child.depth for child in self.children)

    @property
    def n_leaves(self) -> int:
        return sum(child.n_leaves for child in self.children)


Node = Union[LeafNode, InternalNode]


def grow(data: Dataset, rng: np.random.Generator) -> Node:
    """
    Recursively induces a decision tree from `data`.

    Growth stops at pure datasets and at datasets without any eligible split attribute,
    never at a depth bound. Children are grown from fresh datasets built with the same f_ratio.

    :param Dataset data: the records reaching the node to grow
    :param np.random.Generator rng: the random generator used by child datasets for attribute masking
    :return Node: the root of the induced subtree
    """
    if data.is_pure or data.split_attribute == -1:
        return LeafNode(label=data.label)

    partitions = data.split(data.split_attribute)
    node = InternalNode(split_attribute=data.split_attribute,
                        value_to_child=data.split_values,
                        label=data.label)
    node.children = [grow(Dataset(partition, f_ratio=data.f_ratio, rng=rng), rng) for partition in partitions]
    return node
