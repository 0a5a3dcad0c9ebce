"""
Shorthands recording the common operations as nodes

Each shorthand records a new node, or re-records an existing one if `node` is
given, with an operation calling the matching `Handler` method
"""

import abc
from typing import TYPE_CHECKING, Any, Callable, Sequence

import numpy as np

from cmdgraph.core import Operation

if TYPE_CHECKING:
    from cmdgraph.graph.nodes import Node


class Shorthands(abc.ABC):
    @abc.abstractmethod
    def add_node(self, operation: Operation | None = None, deps: Sequence["Node"] = (), capture: bool = False) -> "Node":
        raise NotImplementedError

    @abc.abstractmethod
    def update_node(self, node: "Node", operation: Operation | None = None, deps: Sequence["Node"] = ()) -> None:
        raise NotImplementedError

    def _record(self, operation: Operation, deps: Sequence["Node"], node: "Node | None") -> "Node":
        if node is None:
            return self.add_node(operation, deps)
        self.update_node(node, operation, deps)
        return node

    def fill(
        self, dest: np.ndarray, pattern: Any, count: int | None = None, deps: Sequence["Node"] = (), node: "Node | None" = None
    ) -> "Node":
        return self._record(lambda h: h.fill(dest, pattern, count), deps, node)

    def memset(self, dest: np.ndarray, value: int, count: int, deps: Sequence["Node"] = (), node: "Node | None" = None) -> "Node":
        return self._record(lambda h: h.memset(dest, value, count), deps, node)

    def memcpy(self, dest: np.ndarray, src: np.ndarray, count: int, deps: Sequence["Node"] = (), node: "Node | None" = None) -> "Node":
        return self._record(lambda h: h.memcpy(dest, src, count), deps, node)

    def copy(self, src: np.ndarray, dest: np.ndarray, count: int, deps: Sequence["Node"] = (), node: "Node | None" = None) -> "Node":
        return self._record(lambda h: h.copy(src, dest, count), deps, node)

    def mem_advise(
        self, ptr: np.ndarray, length: int, advice: int, deps: Sequence["Node"] = (), node: "Node | None" = None
    ) -> "Node":
        return self._record(lambda h: h.mem_advise(ptr, length, advice), deps, node)

    def prefetch(self, ptr: np.ndarray, count: int, deps: Sequence["Node"] = (), node: "Node | None" = None) -> "Node":
        return self._record(lambda h: h.prefetch(ptr, count), deps, node)

    def single_task(self, kernel: Callable[[], Any], deps: Sequence["Node"] = (), node: "Node | None" = None) -> "Node":
        return self._record(lambda h: h.single_task(kernel), deps, node)

    def parallel_for(
        self,
        num_work_items: int | tuple[int, ...],
        kernel: Callable[[tuple[int, ...]], Any],
        offset: tuple[int, ...] | None = None,
        deps: Sequence["Node"] = (),
        node: "Node | None" = None,
    ) -> "Node":
        return self._record(lambda h: h.parallel_for(num_work_items, kernel, offset), deps, node)
