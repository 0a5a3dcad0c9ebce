import pytest

from cmdgraph.core import GraphStructureError, NodeKind
from cmdgraph.graph import Graph, Node
from cmdgraph.graph.samplegraphs import empty_chain, forwarding


def test_kind():
    g = Graph()
    empty = g.add_node()
    active = g.add_node(lambda h: None)
    assert empty.kind == NodeKind.empty
    assert empty.is_empty()
    assert active.kind == NodeKind.active
    assert not active.is_empty()


def test_ids_unique():
    g = Graph()
    nodes = [g.add_node() for _ in range(10)]
    assert len({n.id for n in nodes}) == 10
    assert all(g.get_node(n.id) is n for n in nodes)


def test_add_successor_both_sides():
    a = Node(0, 0)
    b = Node(0, 1)
    a.add_successor(b)
    assert a.successors == [1]
    assert b.predecessors == [0]
    assert a.predecessors == []
    assert b.successors == []


def test_duplicate_edges():
    a = Node(0, 0)
    b = Node(0, 1)
    a.add_successor(b)
    a.add_successor(b)
    assert a.successors == [1, 1]
    assert b.predecessors == [0, 0]


def test_wait_list_forwards_through_empty(backend):
    g, nodes = forwarding()
    g.execute(backend)
    arena = {n.id: n for n in g.nodes()}
    assert nodes["d"].wait_list(arena) == [nodes["a"].handle]
    assert nodes["c"].handle is None


def test_wait_list_long_empty_chain(backend):
    g, nodes = empty_chain(length=5000)
    g.execute(backend)
    arena = {n.id: n for n in g.nodes()}
    assert nodes["tail"].wait_list(arena) == [nodes["head"].handle]


def test_materialize_empty_submits_nothing(backend):
    g = Graph()
    node = g.add_node()
    assert node.materialize(backend, {node.id: node}) is None
    assert backend.submissions == []


def test_materialize_requires_materialized_predecessor(backend):
    g = Graph()
    a = g.add_node(lambda h: None)
    b = g.add_node(lambda h: None, deps=[a])
    with pytest.raises(GraphStructureError):
        b.materialize(backend, {a.id: a, b.id: b})
