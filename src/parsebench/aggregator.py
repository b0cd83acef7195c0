"""Fan-in of worker results into a single report"""

import logging
from collections.abc import Callable, Iterable, Iterator

from parsebench.models import ResultRecord
from parsebench.queues import BoundedQueue

logger = logging.getLogger(__name__)


class ResultCollector:
    """Multi-producer result queue owned by one aggregator.

    Workers submit records concurrently; after the pool has joined, the
    collector is sealed and drained in arrival order.
    """

    def __init__(self, capacity: int):
        self._queue: BoundedQueue[ResultRecord] = BoundedQueue(max(capacity, 1))

    def submit(self, record: ResultRecord) -> None:
        self._queue.submit(record)

    def seal(self) -> None:
        self._queue.seal()

    def drain(self) -> Iterator[ResultRecord]:
        return self._queue.drain()


def report(records: Iterable[ResultRecord], echo: Callable[[str], None]) -> int:
    """Write one line per record. Returns the number of lines written."""
    lines = 0
    for record in records:
        echo(record.format_line())
        lines += 1
    return lines
