"""Bounded, sealable FIFO queues shared between workers

Producers submit items and then seal the queue. Consumers drain it until it
is both sealed and empty. A sealed queue never accepts new items but keeps
handing out whatever is still buffered.
"""

import logging
import threading
from collections import deque
from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

from parsebench.errors import QueueExhausted, QueueSealedError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class BoundedQueue(Generic[T]):
    """Thread-safe FIFO with a fixed capacity and a one-way seal.

    - submit() blocks while the queue is full
    - get() blocks while the queue is empty but not sealed
    - get() raises QueueExhausted once the queue is empty and sealed
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f'capacity must be >= 1, got {capacity}')
        self.capacity = capacity
        self._items: deque[T] = deque()
        self._sealed = False
        self._cond = threading.Condition()

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    @property
    def sealed(self) -> bool:
        with self._cond:
            return self._sealed

    def submit(self, item: T) -> None:
        """Append an item, waiting for free space if the queue is full.

        Raises:
            QueueSealedError: if the queue was sealed before or while waiting
        """
        with self._cond:
            while not self._sealed and len(self._items) >= self.capacity:
                self._cond.wait()
            if self._sealed:
                raise QueueSealedError('cannot submit to a sealed queue')
            self._items.append(item)
            self._cond.notify_all()

    def submit_all(self, items: Iterable[T]) -> int:
        """Submit items in order. Returns how many were submitted."""
        count = 0
        for item in items:
            self.submit(item)
            count += 1
        return count

    def seal(self) -> None:
        """Close the queue to further submissions. Idempotent."""
        with self._cond:
            self._sealed = True
            self._cond.notify_all()

    def get(self) -> T:
        """Remove and return the oldest item.

        Raises:
            QueueExhausted: if the queue is sealed and empty
        """
        with self._cond:
            while not self._items and not self._sealed:
                self._cond.wait()
            if not self._items:
                raise QueueExhausted()
            item = self._items.popleft()
            self._cond.notify_all()
            return item

    def drain(self) -> Iterator[T]:
        """Yield items until the queue is sealed and empty."""
        while True:
            try:
                yield self.get()
            except QueueExhausted:
                return


class WorkDispatcher(Generic[T]):
    """Loads a fixed batch of work items into a pre-sized queue and seals it.

    The queue exists from construction so consumers can attach to it before
    dispatch() loads the batch.
    """

    def __init__(self, items: Iterable[T]):
        self.items = list(items)
        # sized to the batch so loading never blocks
        self.queue: BoundedQueue[T] = BoundedQueue(max(len(self.items), 1))

    def dispatch(self) -> int:
        """Submit every item, then seal. Returns the number of items queued."""
        count = self.queue.submit_all(self.items)
        self.queue.seal()
        logger.debug(f'[DISPATCH] {count} tasks queued and sealed')
        return count
