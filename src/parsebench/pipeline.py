"""End-to-end parse run: discover, dispatch, parse in parallel, report"""

import logging
from collections.abc import Callable, Iterable
from time import time

import click

from parsebench.aggregator import ResultCollector, report
from parsebench.discovery import discover_files
from parsebench.models import PoolConfig
from parsebench.parser import TreeSitterParser
from parsebench.pool import ParserFactory, WorkerPool
from parsebench.queues import WorkDispatcher

logger = logging.getLogger(__name__)


def run_pipeline(
    roots: Iterable[str],
    config: PoolConfig | None = None,
    parser_factory: ParserFactory | None = None,
    echo: Callable[[str], None] = click.echo,
) -> int:
    """
    Parse every matching file under roots and print one line per success.

    Workers are started before the task queue is loaded. Results are only
    drained once every worker has finished, so lines appear after the whole
    batch completed, in the order workers produced them.

    Args:
        roots: Directories to walk, in order; duplicates are walked again
        config: Pool configuration, defaults to PoolConfig()
        parser_factory: Builds one parser per worker from a language name
        echo: Line sink for the report

    Returns:
        Number of result lines written

    Raises:
        DiscoveryError: if walking any root fails, before any parsing starts
    """
    config = config or PoolConfig()
    parser_factory = parser_factory or TreeSitterParser
    start_time = time()

    files = discover_files(roots, config.extensions)
    logger.debug(f'[PIPELINE] discovered {len(files)} files, {config.worker_count} workers')

    dispatcher: WorkDispatcher[str] = WorkDispatcher(files)
    results = ResultCollector(len(files))
    pool = WorkerPool(config, parser_factory)

    pool.start(dispatcher.queue, results)
    dispatcher.dispatch()
    attempted = pool.join()
    results.seal()

    lines = report(results.drain(), echo)
    logger.debug(
        f'[PIPELINE] {lines} parsed, {attempted - lines} failed of {len(files)} files '
        f'in {time() - start_time:.2f}s'
    )
    return lines
