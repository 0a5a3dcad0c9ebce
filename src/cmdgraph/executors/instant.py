"""
Instant backend: every operation runs synchronously within `submit`

For tests and dry runs. Keeps a record of every submission
"""

import logging
from concurrent.futures import Future
from dataclasses import dataclass

from cmdgraph.core import Operation
from cmdgraph.handler import Handler

logger = logging.getLogger(__name__)


@dataclass
class Submission:
    operation: Operation
    wait_list: list[Future]
    handle: Future


def run_operation(operation: Operation, wait_list: list[Future]) -> Future:
    """Runs the operation right away, once every dependency is checked

    A failed dependency fails the operation with the same exception, without
    running it
    """
    rv: Future = Future()
    rv.set_running_or_notify_cancel()
    try:
        for dependency in wait_list:
            if not dependency.done():
                raise ValueError(f"dependency {dependency} not complete at submission")
            dependency.result()
        rv.set_result(operation(Handler(wait_list)))
    except Exception as e:
        logger.debug(f"operation failed with {e!r}")
        rv.set_exception(e)
    return rv


class InstantBackend:
    def __init__(self) -> None:
        self.submissions: list[Submission] = []

    def submit(self, operation: Operation, wait_list: list[Future]) -> Future:
        handle = run_operation(operation, wait_list)
        self.submissions.append(Submission(operation, list(wait_list), handle))
        return handle

    def block_until_complete(self, handle: Future) -> None:
        handle.result()

    def reset(self) -> None:
        self.submissions = []
