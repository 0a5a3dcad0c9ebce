import pytest

from cmdgraph.core import CycleDetectedError
from cmdgraph.graph import Graph, find_cycle, topological_order
from cmdgraph.graph.samplegraphs import diamond, disconnected, forwarding, linear

from helpers import assert_topological, ids


def test_linear_exact_order():
    g, nodes = linear(5)
    order = g.schedule()
    assert ids(order) == ids(nodes)
    assert g.node_count() == 5


def test_schedule_cached():
    g, _ = linear(3)
    first = g.schedule()
    assert g.schedule() == first


@pytest.mark.parametrize("builder", [diamond, forwarding])
def test_topological(builder):
    g, nodes = builder()
    order = g.schedule()
    assert len(order) == len(nodes)
    assert_topological(g, order)


def test_forwarding_order():
    g, nodes = forwarding()
    position = {n.id: i for i, n in enumerate(g.schedule())}
    a, b, c, d = (position[nodes[k].id] for k in "abcd")
    assert a == 0
    assert a < b and a < c < d


def test_disconnected():
    g, chains = disconnected(nchains=3, nproc=4)
    order = g.schedule()
    assert len(order) == 12
    assert_topological(g, order)
    for chain in chains:
        positions = [order.index(n) for n in chain]
        assert positions == sorted(positions)


def test_wide_fan():
    g = Graph()
    top = g.add_node()
    middle = [g.add_node(deps=[top]) for _ in range(50)]
    bottom = g.add_node(deps=middle)
    order = g.schedule()
    assert order[0] is top
    assert order[-1] is bottom
    assert_topological(g, order)


def test_deep_chain_without_recursion():
    g, nodes = linear(20000)
    order = g.schedule()
    assert order[0] is nodes[0]
    assert order[-1] is nodes[-1]


def test_find_cycle():
    g = Graph()
    a = g.add_node()
    b = g.add_node(deps=[a])
    c = g.add_node(deps=[b])
    arena = {n.id: n for n in g.nodes()}
    assert find_cycle(arena) is None
    g.add_edge(c, b)
    assert sorted(find_cycle(arena)) == sorted([b.id, c.id])


def test_find_cycle_self_edge():
    g = Graph()
    a = g.add_node()
    g.add_edge(a, a)
    assert find_cycle({a.id: a}) == [a.id]


def test_cycle_raises(backend):
    g = Graph()
    a = g.add_node()
    b = g.add_node(deps=[a])
    g.add_edge(b, a)
    # no roots left, the cycle is still detected
    assert g.roots == []
    with pytest.raises(CycleDetectedError, match="cycle"):
        g.schedule()
    with pytest.raises(CycleDetectedError):
        g.instantiate(backend)
    assert backend.submissions == []


def test_topological_order_either():
    g, nodes = linear(3)
    arena = {n.id: n for n in g.nodes()}
    result = topological_order([nodes[0].id], arena)
    assert result.is_ok()
    assert result.get_or_raise() == ids(nodes)

    g.add_edge(nodes[2], nodes[0])
    result = topological_order([], arena)
    assert not result.is_ok()
    with pytest.raises(ValueError):
        result.get_or_raise()


def test_only_reachable_from_roots():
    g, nodes = linear(3)
    g.remove_root(nodes[0])
    assert g.schedule() == []
    g.add_root(nodes[1])
    assert ids(g.schedule()) == [nodes[1].id, nodes[2].id]
