from graphviz import Digraph

from .node import InternalNode, Node
from .tree import DecisionTree


def build_graph(tree: DecisionTree, filename: str, path: str, view: bool = False):
    node_attr = [
        ('shape', 'box'),
        ('style', 'filled,rounded'),
        ('fontname', 'helvetica')
    ]

    graph = Digraph('DTree',
                    filename=filename,
                    directory=path,
                    format='png',
                    node_attr=node_attr)

    tree._check_fitted()
    _traverse_tree(graph, tree.root_)

    if view:
        graph.view()

    return graph


def _traverse_tree(graph: Digraph, node: Node):
    node_id = _node_id(node)
    graph.node(node_id, label=_format_node_label(node))

    if not isinstance(node, InternalNode):
        return

    # invert the value -> child index mapping to label the edges
    child_values = {index: value for value, index in node.value_to_child.items()}
    for index, child in enumerate(node.children):
        graph.edge(node_id, _node_id(child), label=f"= {child_values[index]}")
        _traverse_tree(graph, child)


def _node_id(node: Node):
    return str(id(node))


def _format_node_label(node: Node):
    if isinstance(node, InternalNode):
        return f"Split: X[{node.split_attribute}]\\nFallback: {node.label.name}"
    return f"Label: {node.label.name}"
