"""
Core types shared by the graph and the executors -- prescribes most of the API
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Protocol, runtime_checkable

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from cmdgraph.handler import Handler

NodeId = int

# NOTE a completion handle is whatever the backend hands back from submit -- a
# concurrent.futures.Future, a dask Future, ... The graph never looks inside,
# it only passes handles back to the same backend
CompletionHandle = Any

Operation = Callable[["Handler"], Any]


class NodeKind(str, Enum):
    empty = "empty"
    active = "active"


class GraphStructureError(ValueError):
    """Caller violated the graph contract, eg used a node of another graph"""


class CycleDetectedError(GraphStructureError):
    """Recorded edges form a cycle, the graph cannot be scheduled"""


@runtime_checkable
class Backend(Protocol):
    def submit(self, operation: Operation, wait_list: list[CompletionHandle]) -> CompletionHandle:
        """Must return immediately, and must not start `operation` before every
        handle in `wait_list` is complete"""
        raise NotImplementedError

    def block_until_complete(self, handle: CompletionHandle) -> None:
        """Blocks until the work behind `handle` finishes. Re-raises its failure"""
        raise NotImplementedError


class GraphSummary(BaseModel):
    # NOTE edges and nodes are the partial counts, see Graph.node_count/edge_count
    uid: int
    nodes: int = Field(description="size of the last computed schedule, 0 if not scheduled")
    edges: int = Field(description="outgoing edges of the current roots only")
    roots: list[NodeId]
    recorded: int = Field(description="all nodes ever recorded in the graph")
