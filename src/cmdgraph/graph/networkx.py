import networkx as nx

from .graph import Graph


def to_networkx(graph: Graph) -> nx.DiGraph:
    """Export all recorded nodes and edges, for inspection and drawing

    Duplicate edges collapse into one
    """
    g = nx.DiGraph(uid=graph.uid, roots=[n.id for n in graph.roots])
    for node in graph.nodes():
        g.add_node(node.id, kind=node.kind.value, node=node)
    for node in graph.nodes():
        g.add_edges_from((node.id, succ) for succ in node.successors)
    return g


def topological_layout(g: nx.DiGraph) -> dict[int, list[float]]:
    pos = {}
    for i, gen in enumerate(nx.topological_generations(g)):
        for j, node in enumerate(sorted(gen)):
            pos[node] = [float(j), -float(i)]
    return pos
