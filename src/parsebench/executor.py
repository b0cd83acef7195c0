"""Per-worker parse loop: read, parse, count, emit"""

import logging
from time import perf_counter

from parsebench.errors import ParseError, ReadError
from parsebench.models import ResultRecord
from parsebench.parser import TreeParser, count_elements
from parsebench.queues import BoundedQueue

logger = logging.getLogger(__name__)


class ParseExecutor:
    """Runs the parse steps for each file a worker dequeues.

    Failures are contained per file: a read or parse error is logged and the
    file produces no record, the loop moves on to the next item.
    """

    def __init__(self, parser: TreeParser):
        self.parser = parser

    def read(self, path: str) -> bytes:
        try:
            with open(path, 'rb') as f:
                return f.read()
        except OSError as e:
            raise ReadError(f'{path}: {e}') from e

    def execute(self, path: str) -> ResultRecord | None:
        """Parse a single file.

        Args:
            path: File to parse

        Returns:
            ResultRecord on success, None if the file could not be read or parsed
        """
        try:
            content = self.read(path)
        except ReadError as e:
            logger.warning(f'Failed to read file {path}: {e.__cause__ or e}')
            return None

        start = perf_counter()
        try:
            tree = self.parser.parse(content)
        except ParseError as e:
            logger.warning(f'Failed to parse file {path}: {e}')
            return None
        duration = perf_counter() - start

        try:
            element_count = count_elements(tree.root_node)
        finally:
            self.parser.release(tree)
            del tree

        return ResultRecord(path=path, duration=duration, element_count=element_count)

    def run(self, tasks: BoundedQueue[str], results) -> int:
        """Drain the task queue, submitting each record to results.

        Args:
            tasks: Shared task queue, drained until sealed and empty
            results: Collector exposing submit(record)

        Returns:
            Number of files this worker attempted
        """
        attempted = 0
        for path in tasks.drain():
            attempted += 1
            record = self.execute(path)
            if record is not None:
                results.submit(record)
        logger.debug(f'[WORKER] exhausted task queue after {attempted} files')
        return attempted
