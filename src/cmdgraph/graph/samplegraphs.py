from typing import Any, Callable

from cmdgraph.core import Operation

from .graph import Graph
from .nodes import Node


def recorder(name: str, log: list[str]) -> Operation:
    """Operation that appends `name` to `log` when run"""

    def operation(handler: Any) -> str:
        log.append(name)
        return name

    return operation


OperationFactory = Callable[[str], Operation]


def _factory(log: list[str] | None) -> OperationFactory:
    if log is None:
        log = []
    return lambda name: recorder(name, log)


def empty() -> Graph:
    """Empty graph"""
    return Graph()


def linear(nproc: int = 5, log: list[str] | None = None) -> tuple[Graph, list[Node]]:
    """Linear graph

    process-0 -> process-1 -> ... -> process-{nproc-1}
    """
    op = _factory(log)
    g = Graph()
    nodes: list[Node] = []
    for i in range(nproc):
        nodes.append(g.add_node(op(f"process-{i}"), deps=nodes[-1:]))
    return g, nodes


def disconnected(nchains: int = 3, nproc: int = 2, log: list[str] | None = None) -> tuple[Graph, list[list[Node]]]:
    """Disconnected graph

    process-0.0 -> ... -> process-0.{nproc-1}
    :
    process-{nchains-1}.0 -> ... -> process-{nchains-1}.{nproc-1}
    """
    op = _factory(log)
    g = Graph()
    chains: list[list[Node]] = []
    for i in range(nchains):
        chain: list[Node] = []
        for j in range(nproc):
            chain.append(g.add_node(op(f"process-{i}.{j}"), deps=chain[-1:]))
        chains.append(chain)
    return g, chains


def diamond(log: list[str] | None = None) -> tuple[Graph, dict[str, Node]]:
    """Diamond graph

    top -> left, right -> bottom
    """
    op = _factory(log)
    g = Graph()
    top = g.add_node(op("top"))
    left = g.add_node(op("left"), deps=[top])
    right = g.add_node(op("right"), deps=[top])
    bottom = g.add_node(op("bottom"), deps=[left, right])
    return g, {"top": top, "left": left, "right": right, "bottom": bottom}


def forwarding(log: list[str] | None = None) -> tuple[Graph, dict[str, Node]]:
    """Graph with an empty node in the middle

    a -> b
    a -> c (empty) -> d
    """
    op = _factory(log)
    g = Graph()
    a = g.add_node(op("a"))
    b = g.add_node(op("b"), deps=[a])
    c = g.add_node(deps=[a])
    d = g.add_node(op("d"), deps=[c])
    return g, {"a": a, "b": b, "c": c, "d": d}


def empty_chain(length: int = 3, log: list[str] | None = None) -> tuple[Graph, dict[str, Node]]:
    """Two active nodes joined by a chain of empty ones

    head -> join-0 -> ... -> join-{length-1} -> tail
    """
    op = _factory(log)
    g = Graph()
    head = g.add_node(op("head"))
    prev = head
    for _ in range(length):
        prev = g.add_node(deps=[prev])
    tail = g.add_node(op("tail"), deps=[prev])
    return g, {"head": head, "tail": tail}
