"""Fixed-size pool of parse workers"""

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, wait

from parsebench.executor import ParseExecutor
from parsebench.models import PoolConfig
from parsebench.parser import TreeParser, TreeSitterParser
from parsebench.queues import BoundedQueue

logger = logging.getLogger(__name__)

ParserFactory = Callable[[str], TreeParser]


class WorkerPool:
    """
    Spawns config.worker_count workers that pull from a shared task queue.

    Every worker builds its own parser through parser_factory and runs a
    ParseExecutor loop until the task queue is sealed and exhausted. join()
    is the completion barrier.
    """

    def __init__(self, config: PoolConfig, parser_factory: ParserFactory = TreeSitterParser):
        self.config = config
        self.parser_factory = parser_factory
        self._executor: ThreadPoolExecutor | None = None
        self._futures: list[Future] = []

    @property
    def worker_count(self) -> int:
        return self.config.worker_count

    def start(self, tasks: BoundedQueue[str], results) -> None:
        """Start all workers. They block on the task queue until work arrives."""
        if self._executor is not None:
            raise RuntimeError('worker pool already started')

        self._executor = ThreadPoolExecutor(max_workers=self.worker_count, thread_name_prefix='ParseWorker')
        self._futures = [
            self._executor.submit(self._worker, tasks, results) for _ in range(self.worker_count)
        ]
        logger.debug(f'[POOL] started {self.worker_count} workers (language={self.config.language})')

    def _worker(self, tasks: BoundedQueue[str], results) -> int:
        executor = ParseExecutor(self.parser_factory(self.config.language))
        return executor.run(tasks, results)

    def join(self) -> int:
        """Block until every worker has finished.

        Returns:
            Total number of files attempted across workers

        Raises:
            Exception: the first unexpected worker crash, after all workers stopped
        """
        if self._executor is None:
            raise RuntimeError('worker pool not started')

        wait(self._futures)
        self._executor.shutdown(wait=True)

        attempted = 0
        for future in self._futures:
            # per-file errors never get here; this is a crash of the worker itself
            attempted += future.result()
        logger.debug(f'[POOL] all workers finished, {attempted} files attempted')
        return attempted
