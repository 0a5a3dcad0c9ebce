"""
Topological ordering of a recorded graph

The order is the reverse post-order of a depth first traversal seeded from the
roots, successors explored in the order they were recorded. Every traversal
keeps its own visited set, so scheduling does not mutate the nodes
"""

import logging
from typing import Iterable, Iterator, Mapping

from cmdgraph.core import NodeId
from cmdgraph.func import Either
from cmdgraph.graph.nodes import Node

logger = logging.getLogger(__name__)


def _postorder(start: NodeId, arena: Mapping[NodeId, Node], visited: set[NodeId]) -> Iterator[NodeId]:
    visited.add(start)
    stack: list[tuple[NodeId, Iterator[NodeId]]] = [(start, iter(arena[start].successors))]
    while stack:
        node, successors = stack[-1]
        for succ in successors:
            if succ not in visited:
                visited.add(succ)
                stack.append((succ, iter(arena[succ].successors)))
                break
        else:
            stack.pop()
            yield node


def find_cycle(arena: Mapping[NodeId, Node]) -> list[NodeId] | None:
    """Returns the ids forming a cycle, if any exists among the recorded nodes

    Three colour traversal over the whole arena, not just what is reachable
    from the roots -- a cycle has no root to be reached from
    """
    done: set[NodeId] = set()
    for start in arena:
        if start in done:
            continue
        path: list[NodeId] = [start]
        on_path: set[NodeId] = {start}
        stack: list[Iterator[NodeId]] = [iter(arena[start].successors)]
        while stack:
            for succ in stack[-1]:
                if succ in on_path:
                    return path[path.index(succ) :]
                if succ not in done:
                    path.append(succ)
                    on_path.add(succ)
                    stack.append(iter(arena[succ].successors))
                    break
            else:
                stack.pop()
                finished = path.pop()
                on_path.remove(finished)
                done.add(finished)
    return None


def topological_order(roots: Iterable[NodeId], arena: Mapping[NodeId, Node]) -> Either[list[NodeId], str]:
    """Schedules everything reachable from `roots`

    For every edge A->B, A precedes B in the result. Errors if the graph
    contains a cycle
    """
    if (cycle := find_cycle(arena)) is not None:
        return Either.error(f"graph contains a cycle: {' -> '.join(str(e) for e in cycle + cycle[:1])}")

    visited: set[NodeId] = set()
    finished: list[NodeId] = []
    for root in roots:
        if root not in visited:
            finished.extend(_postorder(root, arena, visited))
    finished.reverse()
    logger.debug(f"scheduled {len(finished)} out of {len(arena)} recorded nodes")
    return Either.ok(finished)
