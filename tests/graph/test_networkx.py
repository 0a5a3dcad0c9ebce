import networkx as nx

from cmdgraph.graph import to_networkx
from cmdgraph.graph.networkx import topological_layout
from cmdgraph.graph.samplegraphs import diamond, forwarding, linear


def test_export_diamond():
    g, nodes = diamond()
    nxg = to_networkx(g)
    assert nx.is_directed_acyclic_graph(nxg)
    assert nxg.number_of_nodes() == 4
    assert nxg.number_of_edges() == 4
    assert nxg.graph["roots"] == [nodes["top"].id]
    assert set(nxg.successors(nodes["top"].id)) == {nodes["left"].id, nodes["right"].id}


def test_export_kinds():
    g, nodes = forwarding()
    nxg = to_networkx(g)
    assert nxg.nodes[nodes["c"].id]["kind"] == "empty"
    assert nxg.nodes[nodes["a"].id]["kind"] == "active"
    assert nxg.nodes[nodes["a"].id]["node"] is nodes["a"]


def test_schedule_agrees_with_networkx():
    g, _ = diamond()
    nxg = to_networkx(g)
    order = [n.id for n in g.schedule()]
    generations = list(nx.topological_generations(nxg))
    assert order[0] in generations[0]
    assert order[-1] in generations[-1]


def test_layout():
    g, nodes = linear(3)
    pos = topological_layout(to_networkx(g))
    assert pos == {n.id: [0.0, -float(i)] for i, n in enumerate(nodes)}
