"""
Submission context handed to every operation by the backends

Memory is host-simulated: "device pointers" are numpy arrays, and kernels are
plain python callables. Counts are in elements unless said otherwise
"""

import logging
from typing import Any, Callable

import numpy as np

from cmdgraph.core import CompletionHandle

logger = logging.getLogger(__name__)


def _as_range(num_work_items: int | tuple[int, ...]) -> tuple[int, ...]:
    if isinstance(num_work_items, int):
        num_work_items = (num_work_items,)
    if not 1 <= len(num_work_items) <= 3:
        raise ValueError(f"range must have 1 to 3 dimensions, got {num_work_items}")
    return tuple(num_work_items)


class Handler:
    """Records the wait-list of one submission and performs its operation

    Backends make sure every handle in `wait_list` is complete before the
    operation is invoked with this handler
    """

    def __init__(self, wait_list: list[CompletionHandle]) -> None:
        self.wait_list = list(wait_list)
        self.hints: list[tuple[str, Any]] = []

    def fill(self, dest: np.ndarray, pattern: Any, count: int | None = None) -> None:
        flat = dest.reshape(-1)
        flat[: flat.size if count is None else count] = pattern

    def memset(self, dest: np.ndarray, value: int, count: int) -> None:
        """Sets `count` bytes of `dest` to `value`"""
        dest.reshape(-1).view(np.uint8)[:count] = value & 0xFF

    def memcpy(self, dest: np.ndarray, src: np.ndarray, count: int) -> None:
        """Copies `count` bytes from `src` to `dest`"""
        dest.reshape(-1).view(np.uint8)[:count] = src.reshape(-1).view(np.uint8)[:count]

    def copy(self, src: np.ndarray, dest: np.ndarray, count: int) -> None:
        dest.reshape(-1)[:count] = src.reshape(-1)[:count]

    def mem_advise(self, ptr: np.ndarray, length: int, advice: int) -> None:
        logger.debug(f"mem_advise {advice=} on {length} bytes")
        self.hints.append(("mem_advise", (length, advice)))

    def prefetch(self, ptr: np.ndarray, count: int) -> None:
        logger.debug(f"prefetch of {count} bytes")
        self.hints.append(("prefetch", count))

    def single_task(self, kernel: Callable[[], Any]) -> Any:
        return kernel()

    def parallel_for(
        self,
        num_work_items: int | tuple[int, ...],
        kernel: Callable[[tuple[int, ...]], Any],
        offset: tuple[int, ...] | None = None,
    ) -> None:
        """Invokes `kernel` once per work item id, in row-major order"""
        shape = _as_range(num_work_items)
        if offset is None:
            offset = (0,) * len(shape)
        elif len(offset) != len(shape):
            raise ValueError(f"offset {offset} does not match range {shape}")
        for idx in np.ndindex(*shape):
            kernel(tuple(i + o for i, o in zip(idx, offset)))
