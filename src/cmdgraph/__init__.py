from .core import Backend, CycleDetectedError, GraphStructureError, GraphSummary, NodeKind
from .executable import ExecutableGraph
from .graph import Graph, Node
from .handler import Handler
from .version import __version__

__all__ = [
    "Backend",
    "CycleDetectedError",
    "ExecutableGraph",
    "Graph",
    "GraphStructureError",
    "GraphSummary",
    "Handler",
    "Node",
    "NodeKind",
    "__version__",
]
