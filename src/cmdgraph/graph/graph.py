import itertools
import logging
from typing import Iterable, Sequence

from cmdgraph.core import Backend, CompletionHandle, CycleDetectedError, GraphStructureError, GraphSummary, NodeId, Operation
from cmdgraph.executable import ExecutableGraph
from cmdgraph.graph.nodes import Node
from cmdgraph.graph.schedule import topological_order
from cmdgraph.graph.shorthands import Shorthands

logger = logging.getLogger(__name__)


class Graph(Shorthands):
    """Graph builder

    Records nodes and the edges between them, and executes the recording as a
    whole against a backend, as many times as needed.

    The roots -- nodes added without dependencies -- seed the scheduling. Any
    change of the root membership drops the cached schedule. Note that
    `update_node` without dependencies makes the node a root again even if it
    has predecessors from before; its old edges stay in place.

    The graph is not thread safe, mutation from several threads must be
    serialised by the caller.
    """

    _serials = itertools.count()

    def __init__(self, uid: int = 0) -> None:
        self.uid = uid
        self._serial = next(Graph._serials)
        self._ids = itertools.count()
        self._nodes: dict[NodeId, Node] = {}
        self._roots: dict[NodeId, None] = {}
        self._schedule: list[NodeId] = []
        self._last_captured: Node | None = None

    def _check_owned(self, node: Node) -> None:
        if node.owner != self._serial or self._nodes.get(node.id) is not node:
            raise GraphStructureError(f"{node!r} does not belong to this graph")

    @property
    def roots(self) -> list[Node]:
        return [self._nodes[e] for e in self._roots]

    def is_root(self, node: Node) -> bool:
        return node.id in self._roots

    def add_root(self, node: Node) -> None:
        self._check_owned(node)
        self._roots[node.id] = None
        self._schedule.clear()

    def remove_root(self, node: Node) -> None:
        self._check_owned(node)
        self._roots.pop(node.id, None)
        self._schedule.clear()

    def add_edge(self, src: Node, dst: Node) -> None:
        """Records that `dst` depends on `src`. `dst` stops being a root"""
        self._check_owned(src)
        self._check_owned(dst)
        src.add_successor(dst)
        self.remove_root(dst)

    def _wire(self, node: Node, deps: Sequence[Node]) -> None:
        if deps:
            for dep in deps:
                self.add_edge(dep, node)
        else:
            self.add_root(node)

    def add_node(self, operation: Operation | None = None, deps: Sequence[Node] = (), capture: bool = False) -> Node:
        """Records a new node

        Parameters
        ----------
        operation: Operation | None
            Deferred callable taking a `Handler`. If None, the node is empty and
            only joins or fans out dependencies
        deps: Sequence[Node]
            Nodes the new one depends on. If empty, the new node becomes a root
        capture: bool
            If true, `deps` is ignored and the node is chained after the
            previously captured node instead

        Returns
        -------
        Node
        """
        for dep in deps:
            self._check_owned(dep)
        node = Node(self._serial, next(self._ids), operation)
        self._nodes[node.id] = node
        logger.debug(f"recorded {node!r}")
        if capture:
            if self._last_captured is None:
                self.add_root(node)
            else:
                self.add_edge(self._last_captured, node)
            self._last_captured = node
        else:
            self._wire(node, deps)
        return node

    def update_node(self, node: Node, operation: Operation | None = None, deps: Sequence[Node] = ()) -> None:
        """Replaces the operation of `node` in place, keeping its edges

        New `deps` are added on top of the existing edges. Without `deps`, the
        node is made a root even if it already has predecessors
        """
        self._check_owned(node)
        for dep in deps:
            self._check_owned(dep)
        node.operation = operation
        if not deps and node.predecessors:
            logger.warning(f"{node!r} re-rooted while it still has predecessors {node.predecessors}")
        self._wire(node, deps)

    def schedule(self) -> list[Node]:
        """Topological order of the graph, computed on demand and cached

        Raises `CycleDetectedError` if the recorded edges form a cycle
        """
        if not self._schedule:
            order = topological_order(self._roots, self._nodes).get_or_raise(CycleDetectedError)
            self._schedule.extend(order)
        return [self._nodes[e] for e in self._schedule]

    def execute(self, backend: Backend) -> dict[NodeId, CompletionHandle]:
        """Submits every node to `backend` in schedule order

        Returns the handles issued in this pass, keyed by node id. Empty nodes
        issue none. Does not block on the submitted work
        """
        schedule = self.schedule()
        for node in self._nodes.values():
            node.handle = None
        handles: dict[NodeId, CompletionHandle] = {}
        for node in schedule:
            handle = node.materialize(backend, self._nodes)
            if handle is not None:
                handles[node.id] = handle
        logger.debug(f"graph {self.uid} submitted {len(handles)} operations")
        return handles

    def exec_and_wait(self, backend: Backend) -> None:
        for handle in self.execute(backend).values():
            backend.block_until_complete(handle)

    def instantiate(self, backend: Backend) -> ExecutableGraph:
        """Binds the graph to `backend` and immediately runs one pass"""
        return ExecutableGraph(self, backend)

    def lookup_by_id(self, id: NodeId) -> Node | None:
        """Finds a node among the roots and their direct successors only

        Anything further away is reported as not found. Use `get_node` for a
        lookup over all recorded nodes
        """
        for root in self.roots:
            if root.id == id:
                return root
            for succ in root.successors:
                if succ == id:
                    return self._nodes[succ]
        return None

    def get_node(self, id: NodeId) -> Node:
        """Get a node by id

        Raises `KeyError` if not found.
        """
        return self._nodes[id]

    def nodes(self) -> Iterable[Node]:
        """All recorded nodes, in recording order"""
        return self._nodes.values()

    def node_count(self) -> int:
        """Size of the last computed schedule, 0 if not scheduled since the last change"""
        return len(self._schedule)

    def edge_count(self) -> int:
        """Outgoing edges of the current roots only -- an approximation for diagnostics"""
        return sum(len(root.successors) for root in self.roots)

    def summary(self) -> GraphSummary:
        return GraphSummary(
            uid=self.uid,
            nodes=self.node_count(),
            edges=self.edge_count(),
            roots=list(self._roots),
            recorded=len(self._nodes),
        )
