"""
Executable graph: one execution pass of a recorded graph on a backend
"""

import itertools
import logging
from typing import TYPE_CHECKING

import randomname

from cmdgraph.core import Backend, CompletionHandle, NodeId

if TYPE_CHECKING:
    from cmdgraph.graph.graph import Graph

logger = logging.getLogger(__name__)

_tags = itertools.count()


class ExecutableGraph:
    """Binds a graph to a backend and submits one full pass on construction

    Submission is sequential in schedule order; concurrency among the submitted
    operations is up to the backend and is expressed solely through the
    wait-lists. Every instance is a new pass with new completion handles.

    Parameters
    ----------
    graph: Graph
        Recorded graph, scheduled on demand
    backend: Backend
        Receives the operations of the active nodes

    Attributes
    ----------
    tag: int
        Monotonic instance number, for diagnostics
    name: str
        Human readable name used in log lines
    """

    def __init__(self, graph: "Graph", backend: Backend) -> None:
        self.tag = next(_tags)
        self.name = f"{randomname.get_name()}-{self.tag}"
        self.backend = backend
        self._complete = False
        logger.debug(f"executable graph {self.name} starting a pass of graph {graph.uid}")
        self.handles: dict[NodeId, CompletionHandle] = graph.execute(backend)

    def wait(self) -> None:
        """Blocks until every operation of this pass completes

        Failures of the operations are raised as reported by the backend.
        Calling again after a successful wait does nothing
        """
        if self._complete:
            return
        for node_id, handle in self.handles.items():
            try:
                self.backend.block_until_complete(handle)
            except Exception:
                logger.exception(f"node {node_id} of {self.name} failed")
                raise
        self._complete = True
        logger.debug(f"executable graph {self.name} complete")

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name!r} with {len(self.handles)} submissions>"
