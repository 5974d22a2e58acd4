from bagtree.models.tree.dataset import Dataset
from bagtree.models.tree.tree import DecisionTree
from bagtree.models.tree.tree_graph import build_graph
from conftest import make_records


def test_graph_lists_split_and_leaves(separable_rows, tmp_path):
    tree = DecisionTree().fit_dataset(Dataset(make_records(separable_rows)))
    graph = build_graph(tree, filename="tree", path=str(tmp_path))
    source = graph.source

    assert "Split: X[0]" in source
    assert "Label: POSITIVE" in source
    assert "Label: NEGATIVE" in source
    assert "= 0" in source and "= 1" in source
