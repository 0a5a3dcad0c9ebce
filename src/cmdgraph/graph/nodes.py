import logging
from typing import Mapping

from cmdgraph.core import Backend, CompletionHandle, GraphStructureError, NodeId, NodeKind, Operation

logger = logging.getLogger(__name__)


class Node:
    """A recorded unit of work, or a pure synchronisation point

    Edges are kept as lists of node ids, resolved through the owning graph's
    arena. Both sides of an edge are always registered together, duplicates
    included.

    Parameters
    ----------
    owner: int
        Serial of the graph the node belongs to
    id: NodeId
        Identifier, unique within the owning graph
    operation: Operation | None
        Deferred callable taking a `Handler`. If None, the node is empty
    """

    owner: int
    id: NodeId
    operation: Operation | None
    handle: CompletionHandle | None
    successors: list[NodeId]
    predecessors: list[NodeId]

    def __init__(self, owner: int, id: NodeId, operation: Operation | None = None):
        self.owner = owner
        self.id = id
        self.operation = operation
        self.handle = None
        self.successors = []
        self.predecessors = []

    @property
    def kind(self) -> NodeKind:
        return NodeKind.empty if self.operation is None else NodeKind.active

    def is_empty(self) -> bool:
        return self.operation is None

    def add_successor(self, other: "Node") -> None:
        self.successors.append(other.id)
        other.predecessors.append(self.id)

    def wait_list(self, arena: Mapping[NodeId, "Node"]) -> list[CompletionHandle]:
        """Handles of the nearest active ancestors

        Empty predecessors are expanded into their own predecessors, so an empty
        node never contributes a handle of its own
        """
        rv: list[CompletionHandle] = []
        todo = list(self.predecessors)
        while todo:
            pred = arena[todo.pop()]
            if pred.is_empty():
                todo.extend(pred.predecessors)
            elif pred.handle is None:
                raise GraphStructureError(f"predecessor {pred.id} of {self.id} was not materialized")
            else:
                rv.append(pred.handle)
        return rv

    def materialize(self, backend: Backend, arena: Mapping[NodeId, "Node"]) -> CompletionHandle | None:
        if self.operation is None:
            logger.debug(f"node {self.id} is empty, nothing to submit")
            return None
        wait_list = self.wait_list(arena)
        logger.debug(f"submitting node {self.id} with {len(wait_list)} dependencies")
        self.handle = backend.submit(self.operation, wait_list)
        return self.handle

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.id} ({self.kind.value}) at {id(self):#x}>"
