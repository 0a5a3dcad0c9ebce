"""
Backend submitting operations as Dask Futures

Caveats:
 - Dependency futures are passed as arguments of the submitted call, so the
   dask scheduler holds the operation back until they finish. Their results
   are ignored. The handler sees the dependency keys in its wait-list.
 - Operations are shipped to the workers by dask, which may serialise them.
   In-place effects on the caller's arrays are thus not guaranteed to be
   visible, prefer operations that return their results.
"""

import functools
import logging
from typing import Any

from dask.distributed import Client, Future

from cmdgraph.config import BackendConfig
from cmdgraph.core import Operation
from cmdgraph.handler import Handler

logger = logging.getLogger(__name__)


def _execute(operation: Operation, keys: list[str], *dependencies: Any) -> Any:
    logger.debug(f"executing operation after {keys}")
    try:
        return operation(Handler(keys))
    except Exception:
        logger.exception("operation failed in execution")
        raise


class DaskBackend:
    def __init__(self, config: BackendConfig | None = None, client: Client | None = None) -> None:
        if config is None:
            config = BackendConfig.from_env()
        self.config = config
        self._owns_client = client is None
        if client is not None:
            self.client = client
        elif config.dask_address:
            self.client = Client(config.dask_address)
        else:
            self.client = Client(processes=False, n_workers=1, threads_per_worker=config.max_workers or 4)
        logger.debug(f"dask backend on {self.client}")

    def submit(self, operation: Operation, wait_list: list[Future]) -> Future:
        # pure=False -- every pass must produce a fresh future, never a cached one
        keys = [f.key for f in wait_list]
        return self.client.submit(functools.partial(_execute, operation, keys), *wait_list, pure=False)

    def block_until_complete(self, handle: Future) -> None:
        handle.result()

    def shutdown(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()
