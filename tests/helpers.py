from cmdgraph.graph import Graph, Node


def assert_topological(graph: Graph, order: list[Node]) -> None:
    """Every recorded edge goes forward in `order`"""
    position = {node.id: i for i, node in enumerate(order)}
    for node in graph.nodes():
        for succ in node.successors:
            assert position[node.id] < position[succ], f"{node.id} -> {succ} violated in {list(position)}"


def ids(nodes: list[Node]) -> list[int]:
    return [n.id for n in nodes]
