"""
Backend running operations on a pool of threads

Each operation occupies a worker while waiting for its dependencies. Since the
graph submits in topological order and the pool dequeues in submission order,
the oldest pending operation always has its dependencies completed, hence
waiting workers cannot starve the pool
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor

from cmdgraph.config import BackendConfig
from cmdgraph.core import Operation
from cmdgraph.handler import Handler

logger = logging.getLogger(__name__)


def _execute(operation: Operation, wait_list: list[Future]):
    for dependency in wait_list:
        # raises if the dependency failed, failing this operation too
        dependency.result()
    try:
        return operation(Handler(wait_list))
    except Exception:
        logger.exception("operation failed in execution")
        raise


class ThreadPoolBackend:
    def __init__(self, config: BackendConfig | None = None) -> None:
        if config is None:
            config = BackendConfig.from_env()
        self.config = config
        self.pool = ThreadPoolExecutor(
            max_workers=config.max_workers,
            thread_name_prefix=config.thread_name_prefix,
        )

    def submit(self, operation: Operation, wait_list: list[Future]) -> Future:
        return self.pool.submit(_execute, operation, list(wait_list))

    def block_until_complete(self, handle: Future) -> None:
        handle.result()

    def shutdown(self) -> None:
        self.pool.shutdown(wait=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()
