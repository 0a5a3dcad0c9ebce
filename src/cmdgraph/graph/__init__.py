from .graph import Graph
from .networkx import to_networkx
from .nodes import Node
from .schedule import find_cycle, topological_order

__all__ = [
    "Graph",
    "Node",
    "find_cycle",
    "to_networkx",
    "topological_order",
]
